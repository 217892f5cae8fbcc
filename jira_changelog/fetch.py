import collections.abc
import dataclasses
import logging

import jira
import requests.exceptions

import gitutil
import jira_changelog.issues
import jira_changelog.markdown
import jira_changelog.model as cm
import jira_changelog.slack


logger = logging.getLogger(__name__)

IssueLookup = collections.abc.Callable[[str], cm.Ticket]


@dataclasses.dataclass(frozen=True)
class Changelog:
    issue_ids: frozenset[str]
    sections: tuple[cm.Section, ...]
    markdown: str
    slack_attachment: dict | None

    @property
    def is_empty(self) -> bool:
        return not self.sections


def commit_messages(
    git_helper: gitutil.GitHelper,
    tag_match_pattern: str='*',
) -> list[str]:
    '''
    returns the subjects of all commits since the last tag matching the given pattern

    @raises gitutil.ShallowCloneError if the underlying repository is a shallow clone
    @raises gitutil.NoMatchingTagError if there is no matching tag
    '''
    git_helper.ensure_not_shallow()
    tag = git_helper.last_tag(match_pattern=tag_match_pattern)
    return git_helper.commit_subjects_since(tag)


def jira_issue_lookup(jira_client: jira.JIRA) -> IssueLookup:
    def lookup(issue_id: str) -> cm.Ticket:
        return cm.Ticket.from_jira_issue(
            jira_client.issue(issue_id, fields='summary,issuetype'),
        )

    return lookup


def fetch_tickets(
    issue_ids: collections.abc.Iterable[str],
    issue_lookup: IssueLookup,
) -> list[cm.Ticket]:
    '''
    looks up the given issue IDs (in stable order). Issues that cannot be retrieved (e.g. because
    they were deleted, or due to missing permissions) are logged and omitted from the result.
    '''
    logger.info('Downloading issue details from Jira...')

    tickets = []
    for issue_id in sorted(issue_ids, key=jira_changelog.issues.issue_id_sort_key):
        try:
            tickets.append(issue_lookup(issue_id))
        except jira.JIRAError as je:
            logger.error(f'Failed to download issue {issue_id}: {je.status_code} {je.text}')
        except requests.exceptions.RequestException as e:
            logger.error(f'Failed to download issue {issue_id}: {e}')

    logger.info(f'Downloaded {len(tickets)} issues')
    return tickets


def create_changelog(
    commit_messages: collections.abc.Iterable[str],
    issue_lookup: IssueLookup,
) -> Changelog:
    issue_ids = jira_changelog.issues.extract_issue_ids(commit_messages)
    tickets = fetch_tickets(issue_ids=issue_ids, issue_lookup=issue_lookup)

    sections = cm.classify(tickets)

    return Changelog(
        issue_ids=frozenset(issue_ids),
        sections=tuple(sections),
        markdown=jira_changelog.markdown.render(sections),
        slack_attachment=jira_changelog.slack.render_attachment(sections),
    )

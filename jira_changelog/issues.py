import collections.abc
import logging
import re


logger = logging.getLogger(__name__)

# e.g. ABC-123; case-sensitive
issue_id_pattern = re.compile(r'[A-Z]+-\d+')


def extract_issue_ids(commit_messages: collections.abc.Iterable[str]) -> set[str]:
    '''
    returns the (deduplicated) issue IDs referenced in any of the given commit messages. A
    message may reference any number of issues.
    '''
    issue_ids = set()
    lines_count = 0

    for message in commit_messages:
        lines_count += 1
        issue_ids.update(issue_id_pattern.findall(message))

    logger.info(f'Detected {len(issue_ids)} issue IDs in {lines_count} commit messages')
    for issue_id in sorted(issue_ids, key=issue_id_sort_key):
        logger.info(f'- {issue_id}')

    return issue_ids


def issue_id_sort_key(issue_id: str) -> tuple[str, int]:
    '''
    sort key ordering issue IDs by project, then numerically (ABC-9 before ABC-10)
    '''
    project, _, number = issue_id.rpartition('-')
    return project, int(number)

#! /usr/bin/env python3
import argparse
import json
import logging
import sys

import git
import jira
import requests.exceptions

import ccc.jira
import ci.log
import ci.util
import gitutil
import jira_changelog.fetch
import model
import model.base
import slackutil


logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """ Parses CLI for changelog creation """
    parser = argparse.ArgumentParser(
        description='Combine Git commit messages with Jira into a changelog',
        epilog=(
            'Commit messages are scanned for issue IDs, which are then used to look up issue '
            'details on Jira. Jira- and Slack-settings may also be passed via --cfg-file, or '
            'via environment variables: ' + ', '.join(model.ENV_VARS)
        ),
    )
    parser.add_argument(
        '--repo-path',
        default='.',
        help='path to the git repository to create the changelog for',
    )
    parser.add_argument(
        '--cfg-file',
        help='YAML file containing jira-, slack- and changelog-configuration',
    )
    parser.add_argument(
        '--tag-match-pattern',
        help="pattern that tags are matched against when looking for the last tag (default: '*')",
    )
    parser.add_argument('--jira-url', help='the URL of your Jira installation')
    parser.add_argument('--jira-user', help='the username for authenticating against Jira')
    parser.add_argument('--jira-password', help='password for Jira')
    parser.add_argument(
        '--outfile', '-o',
        default='-',
        help="write changelog markdown to this file ('-' for stdout)",
    )
    parser.add_argument(
        '--attachment-outfile',
        help='write the changelog as Slack attachment (JSON) to this file',
    )
    parser.add_argument(
        '--slack-channel',
        help='if set, post the changelog as Slack attachment to this channel',
    )
    parser.add_argument('--slack-api-token', help='Slack API token used for posting')
    parser.add_argument('--verbose', '-v', action='store_true')

    return parser.parse_args(argv)


def cfg_overrides(args: argparse.Namespace) -> dict:
    return model.raw_dict_from_paths({
        ('jira', model.DEFAULT_CFG_NAME, 'base_url'): args.jira_url,
        ('jira', model.DEFAULT_CFG_NAME, 'credentials', 'username'): args.jira_user,
        ('jira', model.DEFAULT_CFG_NAME, 'credentials', 'password'): args.jira_password,
        ('slack', model.DEFAULT_CFG_NAME, 'api_token'): args.slack_api_token,
        (model.CHANGELOG_CFG_TYPE, 'tag_match_pattern'): args.tag_match_pattern,
    })


def write_outputs(
    changelog: jira_changelog.fetch.Changelog,
    outfile: str='-',
    attachment_outfile: str | None=None,
):
    if outfile == '-':
        sys.stdout.write(changelog.markdown + '\n')
    else:
        with open(outfile, 'w') as f:
            f.write(changelog.markdown)
        logger.info(f'changelog written to {outfile=}')

    if attachment_outfile:
        with open(attachment_outfile, 'w') as f:
            json.dump(changelog.slack_attachment, f, indent=2, ensure_ascii=False)
        logger.info(f'slack attachment written to {attachment_outfile=}')


def create_changelog(args: argparse.Namespace) -> jira_changelog.fetch.Changelog:
    cfg_factory = model.ConfigFactory.from_sources(
        cfg_file=args.cfg_file,
        overrides=cfg_overrides(args),
    )
    changelog_cfg = cfg_factory.changelog()
    jira_cfg = cfg_factory.jira(changelog_cfg.jira_cfg_name)

    commit_messages = jira_changelog.fetch.commit_messages(
        git_helper=gitutil.GitHelper(repo=args.repo_path),
        tag_match_pattern=changelog_cfg.tag_match_pattern,
    )

    changelog = jira_changelog.fetch.create_changelog(
        commit_messages=commit_messages,
        issue_lookup=jira_changelog.fetch.jira_issue_lookup(ccc.jira.from_cfg(jira_cfg)),
    )

    write_outputs(
        changelog=changelog,
        outfile=args.outfile,
        attachment_outfile=args.attachment_outfile,
    )

    if args.slack_channel:
        if changelog.slack_attachment is None:
            logger.info('changelog is empty - not posting to slack')
        else:
            slack_helper = slackutil.SlackHelper(
                slack_cfg=cfg_factory.slack(changelog_cfg.slack_cfg_name),
            )
            slack_helper.post_attachment(
                channel=args.slack_channel,
                attachment=changelog.slack_attachment,
            )

    return changelog


def main(argv=None):
    args = parse_args(argv)
    ci.log.configure_default_logging(
        stdout_level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        changelog = create_changelog(args)
    except (
        ci.util.Failure,
        git.InvalidGitRepositoryError,
        git.NoSuchPathError,
        gitutil.ShallowCloneError,
        gitutil.NoMatchingTagError,
        model.base.ModelValidationError,
        model.base.ConfigElementNotFoundError,
        jira.JIRAError,
        requests.exceptions.RequestException,
    ) as e:
        logger.error(e)
        sys.exit(1)

    if changelog.is_empty:
        logger.info('no issues found - changelog is empty')
    sys.exit(0)


if __name__ == '__main__':
    main()

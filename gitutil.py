# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import logging

import git

logger = logging.getLogger(__name__)


class ShallowCloneError(RuntimeError):
    pass


class NoMatchingTagError(RuntimeError):
    pass


class GitHelper:
    def __init__(
        self,
        repo,
    ):
        if repo is None:
            raise ValueError(repo)
        if isinstance(repo, str):
            repo = git.Repo(repo, search_parent_directories=True)
        if not isinstance(repo, git.Repo):
            raise ValueError(repo)

        self.repo = repo

    def is_shallow_clone(self) -> bool:
        # tags are typically absent from shallow clones
        return self.repo.git.rev_parse('--is-shallow-repository').strip() == 'true'

    def ensure_not_shallow(self):
        if self.is_shallow_clone():
            raise ShallowCloneError(
                'Your checkout is a shallow clone. Ensure that tags are pulled before creating '
                'the changelog.'
            )

    def last_tag(self, match_pattern: str='*') -> str:
        '''
        returns the name of the most recent tag reachable from HEAD that matches the given
        (glob) pattern

        @raises NoMatchingTagError if there is no such tag
        '''
        try:
            tag = self.repo.git.describe('--abbrev=0', '--tags', '--match', match_pattern)
        except git.GitCommandError as gce:
            logger.debug(f'git describe failed: {gce}')
            raise NoMatchingTagError(
                f"Unable to create changelog: No tag matches the pattern '{match_pattern}'."
            ) from gce

        tag = tag.strip()
        if not tag:
            raise NoMatchingTagError(
                f"Unable to create changelog: No tag matches the pattern '{match_pattern}'."
            )

        logger.info(f'Found last tag {tag=} matching {match_pattern=}')
        return tag

    def commit_subjects_since(self, tag: str) -> list[str]:
        '''
        returns the subject lines of all commits reachable from HEAD, but not from the given tag
        (newest first)
        '''
        log = self.repo.git.log(f'{tag}..HEAD', '--format=%s')

        commits = [line for line in log.split('\n') if line]

        logger.info(f'Found {len(commits)} commits')
        return commits

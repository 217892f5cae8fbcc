# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses


@dataclasses.dataclass(frozen=True)
class ChangelogCfg:
    '''
    tag_match_pattern: glob passed to `git describe --match` when looking up the last tag
    jira_cfg_name: name of the `jira` config element to look up issues with
    slack_cfg_name: name of the `slack` config element to post the attachment with
    '''
    tag_match_pattern: str = '*'
    jira_cfg_name: str = 'default'
    slack_cfg_name: str = 'default'

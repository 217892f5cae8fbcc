# SPDX-FileCopyrightText: 2019 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import jira

import model.jira


def from_cfg(
    jira_cfg: model.jira.JiraConfig,
    max_retries: int=0,
) -> jira.JIRA:
    credentials = jira_cfg.credentials()
    # no server round-trip here; connectivity errors surface per issue lookup
    return jira.JIRA(
        server=jira_cfg.base_url(),
        basic_auth=credentials.as_tuple(),
        max_retries=max_retries,
        get_server_info=False,
    )

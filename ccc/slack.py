# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import slack_sdk

import model.slack


def client(slack_cfg: model.slack.SlackConfig):
    return slack_sdk.WebClient(token=slack_cfg.api_token())

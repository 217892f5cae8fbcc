# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging
import time

import slack_sdk.errors

import ccc.slack
import model.slack


logger = logging.getLogger(__name__)


class SlackHelper:
    def __init__(
            self,
            slack_cfg: model.slack.SlackConfig,
            client=None,
    ):
        self.slack_cfg = slack_cfg
        self._client = client

    def client(self):
        if not self._client:
            self._client = ccc.slack.client(self.slack_cfg)
        return self._client

    def post_attachment(
        self,
        channel: str,
        attachment: dict,
        text: str | None=None,
        retries: int=3,
    ):
        '''
        posts a message w/ the given attachment to the given channel. `text` (shown in
        notifications) defaults to the attachment's fallback text.
        '''
        if not self.slack_cfg.api_token():
            raise RuntimeError("can't post to slack as there is no slack api token in config")

        if text is None:
            text = attachment.get('fallback', '')

        logger.info(f'posting changelog to slack {channel=} using {self.slack_cfg.name()}')
        # For contents of result see https://api.slack.com/methods/chat.postMessage
        response = self._post_with_retry(
            retries=retries,
            channel=channel,
            text=text,
            attachments=[attachment],
        )
        if not response['ok']:
            raise RuntimeError(f"failed to post to slack channel '{channel}': {response['error']}")
        return response

    def _post_with_retry(self, retries=3, **kwargs):
        try:
            return self.client().chat_postMessage(**kwargs)
        except slack_sdk.errors.SlackApiError as sae:
            error_code = sae.response.get('error')
            error_status = sae.response.status_code
            if retries < 1:
                raise # no retries left (or none requested)
            if error_code == 'ratelimited':
                retry_after = _retry_after_seconds(sae.response)
                logger.warning(
                    f'received {error_code} - retrying in {retry_after}s ({retries})'
                )
                time.sleep(retry_after)
            elif error_status == 503: # Service Unavailable
                logger.warning(
                    f"Slack responded with 'Service Unavailable' (503) - retrying ({retries})"
                )
            else:
                raise # only retry for known sporadic err
            return self._post_with_retry(retries=retries-1, **kwargs)


def _retry_after_seconds(response, default: int=1) -> int:
    '''
    returns the delay (in seconds) requested by slack via the `Retry-After` header of a
    rate-limited response, falling back to `default` if absent or malformed
    '''
    headers = getattr(response, 'headers', None) or {}
    for name, value in headers.items():
        if name.lower() != 'retry-after':
            continue
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            logger.debug(f'ignoring malformed Retry-After header: {value=}')
            break
    return default

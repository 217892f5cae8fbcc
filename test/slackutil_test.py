import unittest.mock

import pytest
import slack_sdk.errors

import model.slack
import slackutil


ATTACHMENT = {
    'fallback': '1 Bugs',
    'color': '#069d4f',
    'fields': [{'title': 'Bugs', 'value': '• Fix crash (ABC-2)', 'short': False}],
}


@pytest.fixture
def slack_cfg():
    return model.slack.SlackConfig(name='default', raw_dict={'api_token': 'xoxb-token'})


@pytest.fixture
def client():
    client = unittest.mock.MagicMock()
    client.chat_postMessage.return_value = {'ok': True}
    return client


@pytest.fixture(autouse=True)
def sleep(monkeypatch):
    sleep = unittest.mock.MagicMock()
    monkeypatch.setattr(slackutil.time, 'sleep', sleep)
    return sleep


def _slack_api_error(error: str, status_code: int, headers: dict | None=None):
    response = unittest.mock.MagicMock()
    response.headers = headers or {}
    response.get.side_effect = lambda key, default=None: {'error': error}.get(key, default)
    response.status_code = status_code
    return slack_sdk.errors.SlackApiError(message=error, response=response)


def test_post_attachment(slack_cfg, client):
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    client.chat_postMessage.assert_called_once_with(
        channel='releases',
        text='1 Bugs',
        attachments=[ATTACHMENT],
    )


def test_post_attachment_with_text(slack_cfg, client):
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    helper.post_attachment(channel='releases', attachment=ATTACHMENT, text='v1.2.3 released')

    assert client.chat_postMessage.call_args.kwargs['text'] == 'v1.2.3 released'


def test_post_attachment_requires_token(client):
    slack_cfg = model.slack.SlackConfig(name='default', raw_dict={})
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    with pytest.raises(RuntimeError):
        helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    client.chat_postMessage.assert_not_called()


def test_post_attachment_fails_on_error_response(slack_cfg, client):
    client.chat_postMessage.return_value = {'ok': False, 'error': 'channel_not_found'}
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    with pytest.raises(RuntimeError, match='channel_not_found'):
        helper.post_attachment(channel='releases', attachment=ATTACHMENT)


def test_post_attachment_retries_sporadic_errors(slack_cfg, client):
    client.chat_postMessage.side_effect = [
        _slack_api_error('ratelimited', 429),
        _slack_api_error('service_unavailable', 503),
        {'ok': True},
    ]
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    response = helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    assert response == {'ok': True}
    assert client.chat_postMessage.call_count == 3


def test_post_attachment_gives_up_after_retries(slack_cfg, client):
    client.chat_postMessage.side_effect = _slack_api_error('ratelimited', 429)
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    with pytest.raises(slack_sdk.errors.SlackApiError):
        helper.post_attachment(channel='releases', attachment=ATTACHMENT, retries=2)

    assert client.chat_postMessage.call_count == 3


def test_post_attachment_does_not_retry_other_errors(slack_cfg, client):
    client.chat_postMessage.side_effect = _slack_api_error('not_in_channel', 200)
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    with pytest.raises(slack_sdk.errors.SlackApiError):
        helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    assert client.chat_postMessage.call_count == 1


def test_post_attachment_waits_before_retrying_ratelimited(slack_cfg, client, sleep):
    client.chat_postMessage.side_effect = [
        _slack_api_error('ratelimited', 429, headers={'Retry-After': '7'}),
        {'ok': True},
    ]
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    sleep.assert_called_once_with(7)
    assert client.chat_postMessage.call_count == 2


def test_post_attachment_does_not_wait_on_service_unavailable(slack_cfg, client, sleep):
    client.chat_postMessage.side_effect = [
        _slack_api_error('service_unavailable', 503),
        {'ok': True},
    ]
    helper = slackutil.SlackHelper(slack_cfg=slack_cfg, client=client)

    helper.post_attachment(channel='releases', attachment=ATTACHMENT)

    sleep.assert_not_called()


@pytest.mark.parametrize('headers,expected', [
    ({'Retry-After': '30'}, 30),
    ({'retry-after': ['5']}, 5),
    ({'Retry-After': 'soon'}, 1),
    ({}, 1),
])
def test_retry_after_seconds(headers, expected):
    response = unittest.mock.MagicMock()
    response.headers = headers

    assert slackutil._retry_after_seconds(response) == expected

# SPDX-FileCopyrightText: 2019 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import pytest

import model.jira as examinee
from model.base import ModelValidationError


@pytest.fixture
def required_dict():
    return {
            'base_url': 'https://jira.example.com',
            'credentials': {
                'username': 'changelogbot',
                'password': 'secret',
            },
    }


def test_validation_fails_on_missing_required_key(required_dict):
    for key in required_dict.keys():
        test_dict = required_dict.copy()
        test_dict.pop(key)
        element = examinee.JiraConfig(name='foo', raw_dict=test_dict)
        with pytest.raises(ModelValidationError):
            element.validate()


def test_validation_fails_on_missing_credentials(required_dict):
    for key in ('username', 'password'):
        credentials = required_dict['credentials'].copy()
        credentials.pop(key)
        element = examinee.JiraConfig(
            name='foo',
            raw_dict={**required_dict, 'credentials': credentials},
        )
        with pytest.raises(ModelValidationError):
            element.validate()


def test_validation_fails_on_empty_values(required_dict):
    element = examinee.JiraConfig(name='foo', raw_dict={**required_dict, 'base_url': ''})
    with pytest.raises(ModelValidationError):
        element.validate()

    element = examinee.JiraConfig(
        name='foo',
        raw_dict={**required_dict, 'credentials': {'username': 'bot', 'password': ''}},
    )
    with pytest.raises(ModelValidationError):
        element.validate()


def test_validation_fails_on_non_dict_credentials(required_dict):
    element = examinee.JiraConfig(name='foo', raw_dict={**required_dict, 'credentials': 'foo'})
    with pytest.raises(ModelValidationError):
        element.validate()


def test_validation_succeeds_on_required_dict(required_dict):
    element = examinee.JiraConfig(name='foo', raw_dict=required_dict)
    element.validate()


def test_validation_succeeds_on_unknown_key(required_dict):
    test_dict = {**required_dict, **{'foo': 'bar'}}
    element = examinee.JiraConfig(name='foo', raw_dict=test_dict)
    element.validate()


def test_credentials(required_dict):
    element = examinee.JiraConfig(name='foo', raw_dict=required_dict)

    assert element.base_url() == 'https://jira.example.com'
    assert element.credentials().as_tuple() == ('changelogbot', 'secret')
    assert 'secret' not in repr(element.credentials())

# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging
import os

import dacite
import yaml

import model.changelog
import model.jira
import model.slack

from model.base import (
    ConfigElementNotFoundError,
    ModelValidationError,
    NamedModelElement,
)
from ci.util import (
    existing_file,
    merge_dicts,
    not_empty,
    not_none,
    parse_yaml_file,
)

logger = logging.getLogger(__name__)

'''
Configuration model and retrieval handling.

Users of this module will most likely want to create an instance of `ConfigFactory` (typically
through `ConfigFactory.from_sources`) and use its factory methods (`jira`, `slack`, `changelog`)
to retrieve configuration elements. Configuration objects should usually not be instantiated by
users of this module.

Configuration is organised in a two-level hierarchy: configuration type (`jira`, `slack`) and
configuration element name (`default` unless configured otherwise). The `changelog` type is
special in that it holds exactly one (unnamed) element.
'''

DEFAULT_CFG_NAME = 'default'
CHANGELOG_CFG_TYPE = 'changelog'

# cfg_type_name -> model element type
_cfg_types: dict[str, type[NamedModelElement]] = {
    'jira': model.jira.JiraConfig,
    'slack': model.slack.SlackConfig,
}

# env var name -> path into raw cfg dict
ENV_VARS = {
    'JIRACHANGELOG_JIRA_URL': ('jira', DEFAULT_CFG_NAME, 'base_url'),
    'JIRACHANGELOG_JIRA_USER': ('jira', DEFAULT_CFG_NAME, 'credentials', 'username'),
    'JIRACHANGELOG_JIRA_PASSWORD': ('jira', DEFAULT_CFG_NAME, 'credentials', 'password'),
    'JIRACHANGELOG_SLACK_API_TOKEN': ('slack', DEFAULT_CFG_NAME, 'api_token'),
    'JIRACHANGELOG_TAG_MATCH_PATTERN': (CHANGELOG_CFG_TYPE, 'tag_match_pattern'),
}


def _defaults() -> dict:
    return {
        CHANGELOG_CFG_TYPE: {
            'tag_match_pattern': '*',
        },
    }


def raw_dict_from_paths(values: dict[tuple[str, ...], str]) -> dict:
    '''
    builds a (nested) raw cfg dict from the given mapping of attribute paths to values. `None`
    values are omitted, so they never overwrite values from other sources when merged.
    '''
    raw = {}
    for path, value in values.items():
        if value is None:
            continue
        *parents, leaf = path
        node = raw
        for key in parents:
            node = node.setdefault(key, {})
        node[leaf] = value
    return raw


def raw_dict_from_env(environ=os.environ) -> dict:
    return raw_dict_from_paths({
        path: environ.get(name)
        for name, path in ENV_VARS.items()
    })


class ConfigFactory:
    '''Creates configuration model element instances from the underlying (merged) raw dict

    Configuration model elements may be retrieved through one of two methods:

        - via the generic `_cfg_element(cfg_type_name, cfg_name)`
        - via a factory method - example: `jira(cfg_name)`
    '''

    @staticmethod
    def from_dict(raw_dict: dict):
        raw = not_none(raw_dict)

        return ConfigFactory(raw_dict=raw)

    @staticmethod
    def from_cfg_file(cfg_file: str):
        existing_file(cfg_file)
        try:
            parsed = parse_yaml_file(cfg_file)
        except (yaml.YAMLError, ValueError) as e:
            # ValueError: YAML bomb mitigation
            raise ModelValidationError(f'{cfg_file=} is not a valid YAML document: {e}') from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ModelValidationError(f'{cfg_file=} must contain a mapping at top-level')

        return ConfigFactory(raw_dict=parsed)

    @staticmethod
    def from_sources(
        cfg_file: str | None=None,
        environ=os.environ,
        overrides: dict | None=None,
    ):
        '''
        creates a ConfigFactory from all available configuration sources. Later sources take
        precedence: defaults, cfg_file, environment variables, overrides (usually obtained from
        command line arguments).
        '''
        sources = [_defaults()]

        if cfg_file:
            logger.debug(f'reading configuration from {cfg_file=}')
            sources.append(ConfigFactory.from_cfg_file(cfg_file).raw)

        sources.append(raw_dict_from_env(environ=environ))

        if overrides:
            sources.append(overrides)

        return ConfigFactory(raw_dict=merge_dicts(*sources))

    def __init__(
        self,
        raw_dict: dict,
    ):
        self.raw = not_none(raw_dict)

    def _cfg_element(self, cfg_type_name: str, cfg_name: str):
        not_empty(cfg_type_name)
        if not (element_type := _cfg_types.get(cfg_type_name)):
            raise ValueError("Unknown config type '{c}'. Known types: {k}".format(
                c=cfg_type_name,
                k=', '.join(_cfg_types.keys()),
            ))

        configs = self.raw.get(cfg_type_name) or {}
        if cfg_name not in configs:
            known_cfg_names = ', '.join(configs.keys())

            raise ConfigElementNotFoundError(
                f'cfg-factory: no such cfg-element: {cfg_name=} {cfg_type_name=} '
                f'{known_cfg_names=}'
            )

        element_instance = element_type(name=cfg_name, raw_dict=configs[cfg_name])
        element_instance.validate()

        return element_instance

    def jira(self, cfg_name: str=DEFAULT_CFG_NAME) -> model.jira.JiraConfig:
        return self._cfg_element(cfg_type_name='jira', cfg_name=cfg_name)

    def slack(self, cfg_name: str=DEFAULT_CFG_NAME) -> model.slack.SlackConfig:
        return self._cfg_element(cfg_type_name='slack', cfg_name=cfg_name)

    def changelog(self) -> model.changelog.ChangelogCfg:
        try:
            return dacite.from_dict(
                data_class=model.changelog.ChangelogCfg,
                data=self.raw.get(CHANGELOG_CFG_TYPE) or {},
                config=dacite.Config(strict=True),
            )
        except dacite.DaciteError as de:
            raise ModelValidationError(f'invalid {CHANGELOG_CFG_TYPE} cfg: {de}') from de

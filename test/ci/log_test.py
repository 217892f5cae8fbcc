# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging
import types

import pytest

import ci.log as examinee


@pytest.fixture
def restore_root_logger():
    level = logging.root.level
    yield
    for handler in list(logging.root.handlers):
        if isinstance(handler.formatter, examinee.CCFormatter):
            logging.root.removeHandler(handler)
    logging.root.setLevel(level)


def test_configure_default_logging(restore_root_logger):
    examinee.configure_default_logging(stdout_level=logging.DEBUG)

    cc_handlers = [
        handler for handler in logging.root.handlers
        if isinstance(handler.formatter, examinee.CCFormatter)
    ]
    assert len(cc_handlers) == 1
    assert logging.root.level == logging.DEBUG
    assert logging.getLogger('urllib3').level == logging.WARNING
    assert logging.getLogger('jira').level == logging.WARNING


def test_configure_default_logging_is_idempotent(restore_root_logger):
    examinee.configure_default_logging()
    examinee.configure_default_logging()

    assert len(logging.root.handlers) == 1
    assert isinstance(logging.root.handlers[0].formatter, examinee.CCFormatter)
    assert logging.root.level == logging.INFO


def test_configure_default_logging_removes_all_handlers(restore_root_logger):
    for _ in range(3):
        logging.root.addHandler(logging.NullHandler())

    examinee.configure_default_logging()

    assert len(logging.root.handlers) == 1
    assert isinstance(logging.root.handlers[0].formatter, examinee.CCFormatter)


def test_formatter_without_tty(monkeypatch):
    monkeypatch.setattr(
        examinee,
        'sys',
        types.SimpleNamespace(stdout=types.SimpleNamespace(isatty=lambda: False)),
    )
    formatter = examinee.CCFormatter(fmt=examinee.default_fmt_string())
    record = logging.LogRecord(
        name='jira_changelog.fetch',
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg='Found %d commits',
        args=(3,),
        exc_info=None,
    )

    formatted = formatter.format(record)

    assert formatted.endswith('[WARNING] jira_changelog.fetch: Found 3 commits')


def test_color_level_name():
    formatter = examinee.CCFormatter()

    colored = formatter.color_level_name('ERROR', logging.ERROR)

    assert examinee.Bcolors.RED in colored
    assert colored.endswith(examinee.Bcolors.RESET_ALL)
    assert formatter.color_level_name('CUSTOM', 42) == 'CUSTOM'

# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import functools
import os
import pathlib

import yaml


class Failure(RuntimeError, ValueError):
    pass


def fail(msg=None):
    raise Failure(msg or 1)


def existing_file(path):
    if isinstance(path, pathlib.Path):
        is_file = path.is_file()
    else:
        is_file = os.path.isfile(path)
    if not is_file:
        fail('not an existing file: ' + str(path))
    return path


def not_empty(value):
    if not value or len(value) == 0:
        fail('passed value must not be empty')
    return value


def not_none(value):
    if value is None:
        fail('passed value must not be None')
    return value


def parse_yaml_file(path, max_elements_count=100000):
    with open(path) as f:
        parsed = yaml.load(f, Loader=yaml.SafeLoader)
        # mitigate yaml bomb
        _count_elements(parsed, max_elements_count=max_elements_count)
        return parsed


def _count_elements(value, count=0, max_elements_count=100000):
    if isinstance(value, dict):
        for k, v in value.items():
            count += 1
            count = _count_elements(v, count=count, max_elements_count=max_elements_count)
    elif isinstance(value, (list, tuple)):
        for v in value:
            count += 1
            count = _count_elements(v, count=count, max_elements_count=max_elements_count)
    else:
        count += 1

    if count > max_elements_count:
        raise ValueError(f'YAML document exceeds {max_elements_count=} (YAML bomb?)')

    return count


def merge_dicts(base: dict, *other: dict):
    '''
    merges copies of the given dict instances and returns the merge result.
    The arguments remain unmodified. However, it must be possible to copy them
    using `copy.deepcopy`.

    Merging is done using the `deepmerge` module. In case of merge conflicts, values from
    `other` overwrite values from `base`.

    Lists are merged as well. This results in deduplication retaining element order. The
    elements from `other` are appended to those from `base`.
    '''

    not_none(base)
    not_empty(other)

    from deepmerge import Merger

    strategy_cfg = [(list, ['append_unique']), (dict, ['merge'])]
    merger = Merger(strategy_cfg, ['override'], ['override'])

    from copy import deepcopy

    return functools.reduce(
        lambda b, o: merger.merge(b, deepcopy(o)),
        [base, *other],
        {},
    )

# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Test util the grab all module.
"""
import logging
import os

import pytest

import dicedist.util


def test_modformatter_record():
    record = logging.LogRecord('dicedist', logging.INFO, dicedist.util.rel_to_abs('dicedist', 'util.py'),
                               10, 'A message', None, None)
    msg = dicedist.util.ModFormatter('%(relmod)s | %(message)s').format(record)
    assert record.__dict__['relmod'] == os.path.join('dicedist', 'util')
    assert msg == os.path.join('dicedist', 'util') + ' | A message'


def test_repr_mixin():
    class Thing(dicedist.util.ReprMixin):
        _repr_keys = ['first', 'second']

        def __init__(self):
            self.first = 1
            self.second = 'two'

    assert repr(Thing()) == "Thing(first=1, second='two')"


def test_get_config():
    assert dicedist.util.get_config('paths', 'log_conf') == 'data/log.yml'
    with pytest.raises(KeyError):
        dicedist.util.get_config('zzzzz', 'not_there')


def test_get_config_limits():
    assert dicedist.util.get_config('limits', 'dice') == 100
    assert dicedist.util.get_config('limits', 'sides') == 1000
    assert dicedist.util.get_config('limits', 'combinations') == 1000000


def test_get_config_default():
    assert dicedist.util.get_config('zzzzz', 'not_there', default=True) is True


def test_rel_to_abs():
    expect = os.path.join(dicedist.util.ROOT_DIR, 'data', 'log.yml')
    assert dicedist.util.rel_to_abs('data', 'log.yml') == expect


def test_load_yaml_missing(tmpdir):
    assert dicedist.util.load_yaml(str(tmpdir.join('missing.yml'))) == {}


def test_load_yaml_log_conf():
    lconf = dicedist.util.load_yaml(dicedist.util.rel_to_abs('data', 'log.yml'))
    assert 'dicedist' in lconf['loggers']


def test_write_yaml(tmpdir):
    fname = str(tmpdir.join('dist.yml'))
    obj = {'2d6': {2: 1, 3: 2, 4: 3}}
    dicedist.util.write_yaml(fname, obj)

    assert dicedist.util.load_yaml(fname) == obj


def test_dump_yaml():
    text = dicedist.util.dump_yaml({'d4': {1: 1, 2: 1}})
    assert text.startswith('---')
    assert '  1: 1' in text

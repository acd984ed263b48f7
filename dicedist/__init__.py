"""
Exact probability distributions of dice expressions.

For main documentation consult dicedist/evaluate.py, the command line
front end lives in dicedist/cli.py.
"""
import sys

__version__ = '0.1.0'

try:
    assert sys.version_info[0:2] >= (3, 8)
except AssertionError:
    print('This entire program must be run with python >= 3.8')
    print('If unavailable on platform, see https://github.com/pyenv/pyenv')
    sys.exit(1)

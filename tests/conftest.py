# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Used for pytest fixtures and anything else test setup/teardown related.
"""
import argparse

import pytest

from dicedist.dist import Distribution
from dicedist.space import PossibilitySpace

TWO_D6 = {2: 1, 3: 2, 4: 3, 5: 4, 6: 5, 7: 6, 8: 5, 9: 4, 10: 3, 11: 2, 12: 1}


@pytest.fixture
def f_d6():
    yield PossibilitySpace.die(6)


@pytest.fixture
def f_2d6(f_d6):
    yield f_d6.multiply(2)


@pytest.fixture
def f_3d6(f_d6):
    yield f_d6.multiply(3)


@pytest.fixture
def f_dist_2d6():
    yield Distribution(TWO_D6)


@pytest.fixture
def f_args():
    """
    Namespace as produced by dicedist.parse.make_parser with defaults.
    """
    yield argparse.Namespace(spec=[], summary=False, yaml=False, width=10, output=None, limits=True)

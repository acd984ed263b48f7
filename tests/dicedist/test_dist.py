# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Tests for dicedist.dist
"""
import pytest

from dicedist.dist import Distribution
from dicedist.space import PossibilitySpace

THREE_D6 = {
    3: 1, 4: 3, 5: 6, 6: 10, 7: 15, 8: 21, 9: 25, 10: 27,
    11: 27, 12: 25, 13: 21, 14: 15, 15: 10, 16: 6, 17: 3, 18: 1,
}
TWO_D6 = {2: 1, 3: 2, 4: 3, 5: 4, 6: 5, 7: 6, 8: 5, 9: 4, 10: 3, 11: 2, 12: 1}

FIVE_D20_KH3 = {
    3: 1, 4: 5, 5: 15, 6: 41, 7: 90, 8: 170, 9: 301, 10: 495, 11: 765, 12: 1141,
    13: 1640, 14: 2280, 15: 3101, 16: 4125, 17: 5375, 18: 6901, 19: 8730, 20: 10890,
    21: 13441, 22: 16415, 23: 19840, 24: 23776, 25: 28220, 26: 33180, 27: 38656,
    28: 44640, 29: 51055, 30: 57921, 31: 65125, 32: 72625, 33: 80321, 34: 88155,
    35: 95940, 36: 103656, 37: 111080, 38: 118120, 39: 124576, 40: 130340,
    41: 135115, 42: 138841, 43: 141195, 44: 142095, 45: 141361, 46: 139015,
    47: 134890, 48: 129186, 49: 121820, 50: 113020, 51: 102866, 52: 91690,
    53: 79575, 54: 67041, 55: 54255, 56: 41755, 57: 29881, 58: 19275, 59: 10270,
    60: 3706,
}
THREE_D6_TWO_D8 = {
    5: 1, 6: 5, 7: 15, 8: 35, 9: 70, 10: 126, 11: 207, 12: 315, 13: 448, 14: 600,
    15: 761, 16: 917, 17: 1053, 18: 1153, 19: 1206, 20: 1206, 21: 1153, 22: 1053,
    23: 917, 24: 761, 25: 600, 26: 448, 27: 315, 28: 207, 29: 126, 30: 70, 31: 35,
    32: 15, 33: 5, 34: 1,
}


@pytest.fixture
def f_3d6_2d8():
    three_d6 = PossibilitySpace.die(6).multiply(3)
    two_d8 = PossibilitySpace.die(8).multiply(2)

    yield three_d6, two_d8


def test_dist_constant():
    assert Distribution.constant(-4) == {-4: 1}


def test_dist__repr__():
    assert repr(Distribution({1: 2})) == "Distribution(counts={1: 2})"


def test_dist_from_space(f_3d6):
    assert Distribution.from_space(f_3d6) == THREE_D6


def test_dist_from_space_5d20kh3():
    space = PossibilitySpace.die(20).multiply(5).keep_highest(3)
    dist = Distribution.from_space(space)
    assert dist == FIVE_D20_KH3
    assert dist[3] == 1
    assert dist[60] == 3706
    assert dist.total() == 20 ** 5


def test_dist_from_space_2d6kh1(f_2d6):
    dist = Distribution.from_space(f_2d6.keep_highest(1))
    assert dist == {1: 1, 2: 3, 3: 5, 4: 7, 5: 9, 6: 11}


def test_dist_from_space_combined_pools(f_3d6_2d8):
    three_d6, two_d8 = f_3d6_2d8
    assert Distribution.from_space(three_d6 + two_d8) == THREE_D6_TWO_D8


@pytest.mark.parametrize('count, faces', [(1, 6), (2, 6), (3, 4), (2, 10), (4, 3)])
def test_dist_from_space_mass(count, faces):
    dist = Distribution.from_space(PossibilitySpace.die(faces).multiply(count))
    assert dist.total() == faces ** count


def test_dist__add__(f_3d6_2d8):
    three_d6, two_d8 = [Distribution.from_space(space) for space in f_3d6_2d8]
    assert three_d6 + two_d8 == THREE_D6_TWO_D8


def test_dist__add__commutative(f_3d6_2d8):
    three_d6, two_d8 = [Distribution.from_space(space) for space in f_3d6_2d8]
    assert three_d6 + two_d8 == two_d8 + three_d6


def test_dist__add__empty_left_is_right(f_dist_2d6):
    assert (Distribution() + f_dist_2d6) is f_dist_2d6


def test_dist__add__empty_right_is_empty(f_dist_2d6):
    assert f_dist_2d6 + Distribution() == {}


def test_dist__sub__(f_d6):
    d6 = Distribution.from_space(f_d6)
    diff = d6 - d6
    assert diff[0] == 6
    assert diff[5] == 1
    assert diff[-5] == 1
    assert diff.total() == 36
    assert diff == diff.mutate(lambda x: -x)


def test_dist__sub__order(f_d6):
    d6 = Distribution.from_space(f_d6)
    diff = Distribution.constant(10) - d6
    assert diff == {4: 1, 5: 1, 6: 1, 7: 1, 8: 1, 9: 1}


def test_dist_mutate(f_dist_2d6):
    assert f_dist_2d6.mutate(lambda x: x + 1) == {key + 1: val for key, val in TWO_D6.items()}


def test_dist_mutate_merges(f_dist_2d6):
    halved = f_dist_2d6.mutate(lambda x: x // 6)
    assert halved == {0: 10, 1: 25, 2: 1}


def test_dist_to_dict():
    dist = Distribution({5: 1, -2: 3, 0: 2})
    assert list(dist.to_dict().items()) == [(-2, 3), (0, 2), (5, 1)]
    assert type(dist.to_dict()) is dict


def test_dist_min_max(f_dist_2d6):
    assert f_dist_2d6.min() == 2
    assert f_dist_2d6.max() == 12


def test_dist_probabilities(f_dist_2d6):
    probs = f_dist_2d6.probabilities()
    assert probs[7] == pytest.approx(1 / 6)
    assert sum(probs.values()) == pytest.approx(1.0)


def test_dist_stats(f_dist_2d6):
    assert f_dist_2d6.mean() == pytest.approx(7.0)
    assert f_dist_2d6.var() == pytest.approx(35 / 6)
    assert f_dist_2d6.stdev() == pytest.approx((35 / 6) ** 0.5)


def test_dist_stats_constant():
    dist = Distribution.constant(3)
    assert dist.mean() == pytest.approx(3.0)
    assert dist.stdev() == pytest.approx(0.0)


def test_dist_many_dice():
    dist = Distribution.from_space(PossibilitySpace.die(6).multiply(10))
    assert dist.total() == 6 ** 10
    assert dist[10] == 1
    assert dist[60] == 1
    assert dist.mean() == pytest.approx(35.0)

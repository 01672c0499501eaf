"""Tests for decimal rounding helpers."""

import logging

import numpy as np
import pytest

from scenetools.utils.numeric import round_to_decimals, round_vector


@pytest.mark.parametrize("value,decimals,expected", [
    (1.234, 2, 1.23),
    (1.235, 1, 1.2),
    (1.005, 2, 1.0),  # 1.005 * 100 == 100.49999999999999
    (2.5, 0, 3.0),
    (-2.5, 0, -2.0),
    (-1.25, 1, -1.2),
    (0.0, 2, 0.0),
    (123.456, 0, 123.0),
    (1e307, 2, 1e307),  # value * 100 overflows to inf
    (-1e307, 2, -1e307),
    (1.5e300, 10, 1.5e300),
])
def test_round_to_decimals(value, decimals, expected):
    assert round_to_decimals(value, decimals) == expected


def test_round_to_decimals_default_is_two_places():
    assert round_to_decimals(3.14159) == 3.14


@pytest.mark.parametrize("vector", [
    [1.234, 2.346, -3.456],
    (1.234, 2.346, -3.456),
    np.array([1.234, 2.346, -3.456]),
])
def test_round_vector(vector):
    result = round_vector(vector)
    np.testing.assert_array_equal(result, [1.23, 2.35, -3.46])
    assert result is not vector


def test_round_vector_decimals():
    np.testing.assert_array_equal(round_vector([0.123456, 1, 2], decimals=4), [0.1235, 1, 2])


@pytest.mark.parametrize("value", [None, [1.0, 2.0], "abc", [1, "2", 3], np.zeros(4)])
def test_round_vector_soft_failure(value, caplog):
    with caplog.at_level(logging.WARNING):
        assert round_vector(value) is value
    assert "not a 3-vector" in caplog.text

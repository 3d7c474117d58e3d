"""Shared drawings for the analog literal test suite."""

import pytest

import analog_literals as al


@pytest.fixture
def rect_2_by_3():
    return al.RECT_2_BY_3


@pytest.fixture
def cube_5_by_2_by_4():
    return al.CUBE_5_BY_2_BY_4

import math

import pytest

from spartie.values import divide, format_number, is_number, is_truthy, to_string, type_name, values_equal


@pytest.mark.parametrize('value', [None, False])
def test_falsy_values(value):
    assert is_truthy(value) is False


@pytest.mark.parametrize('value', [True, 0.0, 1.0, -1.0, '', 'text', math.nan])
def test_truthy_values(value):
    assert is_truthy(value) is True


def test_equality_rules():
    assert values_equal(None, None)
    assert not values_equal(None, 0.0)
    assert not values_equal(0.0, None)
    assert not values_equal('1', 1.0)
    assert not values_equal(True, 1.0)
    assert values_equal(2.0, 2)
    assert values_equal('ab', 'ab')
    assert not values_equal(math.nan, math.nan)


def test_type_names():
    assert type_name(None) == 'Null'
    assert type_name(True) == 'Boolean'
    assert type_name(1.5) == 'Number'
    assert type_name('s') == 'String'
    assert not is_number(True)


def test_to_string():
    assert to_string(None) == 'null'
    assert to_string(True) == 'true'
    assert to_string(False) == 'false'
    assert to_string(5.0) == '5.0'
    assert to_string(3) == '3.0'
    assert to_string('hi') == 'hi'


def test_format_number_two_decimals():
    assert format_number(2.5) == '2.50'
    assert format_number(-1) == '-1.00'


def test_divide_follows_ieee():
    assert divide(1.0, 4.0) == 0.25
    assert divide(1.0, 0.0) == math.inf
    assert divide(-1.0, 0.0) == -math.inf
    assert divide(1.0, -0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))

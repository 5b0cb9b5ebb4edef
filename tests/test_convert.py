import pytest
import skia

from affinestring.convert import (convert_style, format_value, is_float_literal, parse_float,
                                  parse_rectangle)


@pytest.mark.parametrize('s', ['0', '2', '-0.5', '+3', '.25', '1.', '3e-2', '1E5', '-1.5e+3'])
def test_float_literals(s):
    assert is_float_literal(s)
    assert parse_float(s) == float(s)


@pytest.mark.parametrize('s', ['', ' 1', '1 ', 'a', '1,5', 'nan', 'inf', '-inf', '1_000', '0x10', '.', '-', 'e5', '1e',
                               '1e400', '-1e999'])
def test_not_float_literals(s):
    assert not is_float_literal(s)
    with pytest.raises(ValueError):
        parse_float(s)


def test_parse_rectangle():
    assert parse_rectangle('-0.25 -0.25 0.25 0.25') == ((-0.25, -0.25), (0.25, 0.25))
    assert parse_rectangle('  1\t2   3\n4 ') == ((1, 2), (3, 4))


@pytest.mark.parametrize('s', ['', '1 2 3', '1 2 3 4 5', '1 2 x 4', '1,2,3,4', '0 0 1e400 1'])
def test_parse_rectangle_invalid(s):
    with pytest.raises(ValueError):
        parse_rectangle(s)


def test_format_value():
    assert format_value(1.0, None) == '1.0'
    assert format_value(0.8660254037844387, None) == '0.866025'
    assert format_value(-1e-17, None) == '0.0'
    assert format_value(3, None) == '3'
    assert format_value(0.5, '.2f') == '0.50'


def test_convert_style():
    assert convert_style('cap', 'round') == skia.Paint.kRound_Cap
    assert convert_style('style', 'stroke') == skia.Paint.kStroke_Style
    with pytest.raises(AssertionError):
        convert_style('font_weight', 'bold')


def test_parse_rectangle_merges_whitespace_runs():
    assert parse_rectangle('0  0 1 1') == ((0, 0), (1, 1))

import skia
import re
from math import ceil, isfinite


__converts = {'cap' :
                {
                'butt' : skia.Paint.kButt_Cap,
                'round' : skia.Paint.kRound_Cap,
                'square' : skia.Paint.kSquare_Cap
                },
            'join' :
                {
                'miter' : skia.Paint.kMiter_Join,
                'round' : skia.Paint.kRound_Join,
                'bevel' : skia.Paint.kBevel_Join
                },
            'style' :
                {
                'fill' : skia.Paint.kFill_Style,
                'stroke' : skia.Paint.kStroke_Style
                }
            }


# plain decimal literal, no locale, no 'nan'/'inf', no digit separators
_FLOAT_REGEX = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


def convert_style(conv_type: str, value: str):
    '''
    Converts a style-related value to its corresponding Skia enum value.

    Args:
        conv_type (str): The type of conversion. Must be one of: 'cap', 'join', 'style'.
        value (str): The value to convert (e.g. 'round' for 'cap').

    Returns:
        The corresponding Skia enum value (e.g., skia.Paint.kButt_Cap, skia.Paint.kMiter_Join, etc.)

    Raises:
        AssertionError: If the provided conversion type is not supported.
        KeyError: If the value is not known for the conversion type.
    '''
    assert conv_type in ['cap', 'join', 'style'], f'Wrong convert type {conv_type}!'
    return __converts[conv_type][value]


def is_float_literal(value: str) -> bool:
    '''
    Checks whether a string is a plain decimal floating-point literal such as
    '2', '-0.5', '.25', '1.' or '3e-2'.

    Args:
        value (str): The candidate string. Surrounding whitespace is not accepted.

    Returns:
        bool: True if the whole string is a floating-point literal of a finite value.
    '''
    # '1e400' matches but overflows to inf
    return _FLOAT_REGEX.fullmatch(value) is not None and isfinite(float(value))


def parse_float(value: str) -> float:
    '''
    Parses a plain decimal floating-point literal.

    Args:
        value (str): The string to parse.

    Returns:
        float: The parsed value.

    Raises:
        ValueError: If the string is not a floating-point literal or overflows to infinity.
    '''
    if not is_float_literal(value):
        raise ValueError(f'Invalid number: {value!r}')
    return float(value)


def parse_rectangle(value: str) -> tuple[tuple[float, float], tuple[float, float]]:
    '''
    Parses a rectangle given by two diagonally opposite corners written as four
    whitespace separated numbers.

    Args:
        value (str): A string like '-0.25 -0.25 0.25 0.25' (x1 y1 x2 y2).

    Returns:
        tuple: The corners ((x1, y1), (x2, y2)).

    Example:
        >>> parse_rectangle('-0.25 -0.25 0.25 0.25')
        ((-0.25, -0.25), (0.25, 0.25))

    Raises:
        ValueError: If the string does not hold exactly four numbers.
    '''
    parts = value.split()
    if len(parts) != 4 or not all(is_float_literal(p) for p in parts):
        raise ValueError(f'Rectangle needs exactly four numbers: {value!r}')
    x1, y1, x2, y2 = (float(p) for p in parts)
    return (x1, y1), (x2, y2)


def format_value(value, format_string) -> str:
    '''
    Formats a given value based on the provided format string.

    If no format string is provided and the value is a float, it is rounded to six
    decimal places and a negative zero is printed as zero.

    Args:
        value: The value to be formatted.
        format_string (str or None): The format specification string following Python's format syntax for
                                    usage in .format() function.

    Returns:
        str: The formatted value as a string.
    '''
    if format_string is None:
        if isinstance(value, float):
            return str(round(value, 6) + 0.0)
        return str(value)
    else:
        tmp = '{:'+format_string+'}'
        return tmp.format(value)


def int_ceil(v: float) -> int: return int(ceil(v))

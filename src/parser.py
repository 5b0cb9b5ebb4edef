'''
    Parser for transformation strings such as 'R(30)*T(0.5,0)*S(2,1)'.

    A transformation string is a '*'-separated list of terms. Each term is an
    operation code followed by its arguments in parentheses:

        S(sx, sy)   scale
        T(tx, ty)   translate
        R(degrees)  rotate (counter-clockwise)

    Whitespace is ignored everywhere. Terms are composed right to left, as in
    the mathematical reading of R*T*S applied to a column vector: the right-most
    term acts on the raw coordinates first and the left-most term last.
'''

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
from typing import Generic, TypeVar

from .convert import is_float_literal, parse_float
from .transform import AffineTransform, compose


log = logging.getLogger(__name__)

T = TypeVar('T')


class ParseError(Enum):
    '''
    Reasons a transformation string can be rejected.
    '''
    INCORRECT_ARGUMENT_COUNT = 'incorrect argument count'
    NOT_A_NUMBER = 'not a number'
    UNKNOWN_OPERATION = 'unknown operation'

    @property
    def message(self) -> str: return self.value


class TransformParseError(ValueError):
    '''
    Raised by Err.unwrap() for callers that prefer exceptions to result values.
    '''
    def __init__(self, error: ParseError, term: str):
        super().__init__(f'{error.message} in term {term!r}')
        self.error = error
        self.term = term


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool: return True
    def is_err(self) -> bool: return False
    def unwrap(self) -> T: return self.value


@dataclass(frozen=True)
class Err:
    '''
    A failed parse.

    Attributes:
        error (ParseError): The kind of failure.
        term (str): The whitespace-free term that failed.
    '''
    error: ParseError
    term: str = ''

    def is_ok(self) -> bool: return False
    def is_err(self) -> bool: return True

    def unwrap(self):
        raise TransformParseError(self.error, self.term)


@dataclass(frozen=True)
class Scale:
    sx: float
    sy: float

    def to_transform(self) -> AffineTransform:
        return AffineTransform.scaling(self.sx, self.sy)


@dataclass(frozen=True)
class Translate:
    tx: float
    ty: float

    def to_transform(self) -> AffineTransform:
        return AffineTransform.translation(self.tx, self.ty)


@dataclass(frozen=True)
class Rotate:
    degrees: float

    def to_transform(self) -> AffineTransform:
        return AffineTransform.rotation(self.degrees)


Operation = Scale | Translate | Rotate

# operation code -> (variant, number of arguments)
_OPERATIONS = {
    'S': (Scale, 2),
    'T': (Translate, 2),
    'R': (Rotate, 1),
}


def _strip_whitespace(s: str) -> str:
    return ''.join(ch for ch in s if not ch.isspace())


def _parse_term(term: str) -> Ok[Operation] | Err:
    '''
    Decodes a single whitespace-free term into an Operation.

    The first character selects the operation. Every '(' and ')' in the rest of the
    term is dropped, so 'S(1,2)' and 'S1,2' decode alike.

    Args:
        term (str): The term, e.g. 'T(1,0)'.

    Returns:
        Ok[Operation] | Err: The decoded operation or the reason it was rejected.
    '''
    if not term or term[0] not in _OPERATIONS:
        return Err(ParseError.UNKNOWN_OPERATION, term)
    variant, arity = _OPERATIONS[term[0]]

    payload = term[1:].replace('(', '').replace(')', '')
    args = payload.split(',')
    if len(args) != arity:
        return Err(ParseError.INCORRECT_ARGUMENT_COUNT, term)
    if not all(is_float_literal(a) for a in args):
        return Err(ParseError.NOT_A_NUMBER, term)
    return Ok(variant(*(parse_float(a) for a in args)))


def parse_operations(s: str) -> Ok[list[Operation]] | Err:
    '''
    Splits a transformation string into its terms and decodes each of them.

    Args:
        s (str): The transformation string.

    Returns:
        Ok[list[Operation]] | Err: The operations in textual order, or the first failure.
            An empty (or whitespace-only) string yields an empty list.
    '''
    stripped = _strip_whitespace(s)
    if not stripped:
        return Ok([])

    operations = []
    for term in stripped.split('*'):
        result = _parse_term(term)
        if result.is_err():
            log.debug('Rejected term %r of %r: %s', term, s, result.error.message)
            return result
        operations.append(result.value)
    return Ok(operations)


def compose_operations(operations: list[Operation]) -> AffineTransform:
    '''
    Composes operations given in textual order into one transformation.

    The fold runs over the reversed list, so the last operation is applied to points
    first and the first operation last.

    Args:
        operations (list[Operation]): Operations in the order they were written.

    Returns:
        AffineTransform: The composed transformation; identity for an empty list.
    '''
    return reduce(lambda acc, op: compose(acc, op.to_transform()),
                  reversed(operations),
                  AffineTransform.identity())


def parse(s: str) -> Ok[AffineTransform] | Err:
    '''
    Parses a transformation string into a single affine transformation.

    Args:
        s (str): The transformation string, e.g. 'R(30)*T(1,0)*S(2,2)'.

    Returns:
        Ok[AffineTransform] | Err: The composed transformation, or the error of the first
            failing term. Nothing is composed when any term fails.

    Example:
        >>> parse('T(2,3)').unwrap().apply(0, 0)
        (2.0, 3.0)
        >>> parse('S(a,b)').error
        <ParseError.NOT_A_NUMBER: 'not a number'>
    '''
    result = parse_operations(s)
    if result.is_err():
        return result
    return Ok(compose_operations(result.value))


@dataclass(frozen=True)
class TransformString:
    '''
    The raw text of a transformation. Parsing never modifies it.
    '''
    text: str = field(default='')

    def operations(self) -> Ok[list[Operation]] | Err:
        return parse_operations(self.text)

    def parse(self) -> Ok[AffineTransform] | Err:
        return parse(self.text)

    def __str__(self) -> str:
        return self.text

'''
affinestring

Parse transformation strings like 'R(30)*T(0.5,0)*S(2,1)' into affine transformations
and draw transformed shapes on a normalized canvas.
'''

from .affinestring import update, render, show, export, UpdateResult
from .canvas import NormalizedCanvas, CanvasParameters, PathInfo
from .parser import (parse, parse_operations, TransformString, ParseError, TransformParseError,
                     Ok, Err, Scale, Translate, Rotate)
from .transform import AffineTransform, compose, viewport_transform

__all__ = ['update', 'render', 'show', 'export', 'UpdateResult',
           'NormalizedCanvas', 'CanvasParameters', 'PathInfo',
           'parse', 'parse_operations', 'TransformString', 'ParseError', 'TransformParseError',
           'Ok', 'Err', 'Scale', 'Translate', 'Rotate',
           'AffineTransform', 'compose', 'viewport_transform']

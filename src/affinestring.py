import logging
import re
from dataclasses import dataclass
from io import BytesIO

import IPython.display
import numpy as np
import PIL.Image
import skia

from .canvas import NormalizedCanvas, CanvasParameters, PathInfo
from .convert import parse_rectangle
from .constants import (DEFAULT_RESOLUTION, DEFAULT_RECTANGLE, DEFAULT_TRANSFORMATION,
                        STATUS_INVALID_RECTANGLE, STATUS_INVALID_TRANSFORMATION)
from .parser import parse
from .transform import AffineTransform


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    '''
    Outcome of applying a transformation string and a rectangle string.

    Attributes:
        transform (AffineTransform): The transformation in effect after the update.
        paths (list[PathInfo]): The paths to draw; empty if the rectangle was invalid.
        status (str): Human-readable status: the transformation, or what was wrong with the input.
        ok (bool): False if either input string was rejected.
    '''
    transform: AffineTransform
    paths: list[PathInfo]
    status: str
    ok: bool


def update(transformation_string: str = DEFAULT_TRANSFORMATION,
           rectangle_string: str = DEFAULT_RECTANGLE,
           previous: AffineTransform | None = None) -> UpdateResult:
    '''
    Turn the two user-editable strings into something drawable.

    An invalid transformation string keeps the `previous` transformation; an invalid
    rectangle yields no paths. Error kinds are not distinguished in the status message.

    Args:
        transformation_string (str): E.g. 'R(30)*T(0.5,0)*S(2,1)'.
        rectangle_string (str): Four numbers 'x1 y1 x2 y2' naming opposite corners.
        previous (AffineTransform, optional): Transformation to keep on a parse failure. Defaults to identity.

    Returns:
        UpdateResult: The transformation, the rectangle path and the status message.

    Example:
        >>> r = update('T(0.5,0)', '-0.25 -0.25 0.25 0.25')
        >>> r.paths[0].transformed_points()[0]
        (0.25, -0.25)
    '''
    transform = previous if previous is not None else AffineTransform.identity()
    ok = True

    result = parse(transformation_string)
    if result.is_ok():
        transform = result.value
        status = str(transform)
    else:
        log.info('Invalid transformation string %r: %s', transformation_string, result.error.message)
        status = STATUS_INVALID_TRANSFORMATION
        ok = False

    try:
        p1, p2 = parse_rectangle(rectangle_string)
    except ValueError:
        log.info('Invalid rectangle %r', rectangle_string)
        return UpdateResult(transform, [], STATUS_INVALID_RECTANGLE, False)

    return UpdateResult(transform, [PathInfo.rectangle(p1, p2, transform)], status, ok)


def __to_pil(image: np.ndarray) -> PIL.Image.Image:
    return PIL.Image.fromarray(image)


def render(paths: list[PathInfo],
           resolution: tuple[int] | list[int] = DEFAULT_RESOLUTION,
           canvas_parameters: CanvasParameters | None = None,
           compress: str = 'pil') -> dict:
    '''
    Render paths on a normalized canvas.

    Args:
        paths (list[PathInfo]): The paths to draw, in drawing order.
        resolution (tuple[int] | list[int], optional): Size of the drawing area as (width, height).
        canvas_parameters (CanvasParameters, optional): Extra canvas configuration parameters.
        compress (str, optional): A string defining one or more output formats separated by `,`, `;`,
                                    or `|`. Supported values are 'pil', 'skia' and 'numpy'. Defaults to 'pil'.

    Returns:
        dict: A dictionary containing:
            - 'pil' (PIL.Image or None): The rendered image in PIL format (if requested).
            - 'skia' (skia.Image or None): The Skia snapshot (if requested).
            - 'numpy' (np.ndarray or None): The raw RGBA NumPy image array (if requested).

    Raises:
        ValueError: If an unknown output format is requested.
    '''
    compress_split = [v.lower() for v in re.split(r'[;,|]\s*', compress)]
    unknown = set(compress_split) - {'pil', 'skia', 'numpy'}
    if unknown:
        raise ValueError(f'Unknown output format(s): {", ".join(sorted(unknown))}')

    canvas = NormalizedCanvas(resolution, canvas_parameters)
    canvas.draw(paths)
    img = canvas.to_array().copy()
    return {'pil' : __to_pil(img) if 'pil' in compress_split else None,
            'skia' : canvas.image() if 'skia' in compress_split else None,
            'numpy' : img if 'numpy' in compress_split else None}


def show(paths: list[PathInfo],
         resolution: tuple[int] | list[int] = DEFAULT_RESOLUTION,
         canvas_parameters: CanvasParameters | None = None,
         show: bool = True) -> skia.Image | None:
    '''
    Display rendered paths in a notebook.

    Args:
        paths (list[PathInfo]): The paths to draw.
        resolution (tuple[int] | list[int], optional): Size of the drawing area as (width, height).
        canvas_parameters (CanvasParameters, optional): Extra canvas configuration parameters.
        show (bool, optional): If True, displays the rendered image using IPython; otherwise returns the image.

    Returns:
        skia.Image or None: The Skia image if `show` is False.
    '''
    image = render(paths, resolution, canvas_parameters, compress='skia')['skia']
    if show:
        IPython.display.display_png(image)
        return None
    return image


def export(paths: list[PathInfo],
           path: str | None = None,
           resolution: tuple[int] | list[int] = DEFAULT_RESOLUTION,
           canvas_parameters: CanvasParameters | None = None) -> BytesIO | None:
    '''
    Export rendered paths as a PNG image.

    Args:
        paths (list[PathInfo]): The paths to draw.
        path (str, optional): Destination file. If None, the PNG is returned as a BytesIO object.
        resolution (tuple[int] | list[int], optional): Size of the drawing area as (width, height).
        canvas_parameters (CanvasParameters, optional): Extra canvas configuration parameters.

    Returns:
        BytesIO or None: The PNG data if no path is given; otherwise writes the file and returns None.
    '''
    image = render(paths, resolution, canvas_parameters, compress='pil')
    data = BytesIO()
    image['pil'].save(data, format='PNG', compress_level=5)
    data.seek(0)
    if path is None:
        return data
    with open(f'{path}', 'wb') as f:
        f.write(data.getvalue())
    log.debug('Exported %d path(s) to %s', len(paths), path)
    return None

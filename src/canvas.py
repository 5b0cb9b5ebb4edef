import logging
from dataclasses import dataclass, field

import numpy as np
import skia
from colour import Color

from .convert import convert_style, int_ceil
from .constants import DEFAULT_PADDING, LINE_WIDTH, AXES_COLOR, PATH_COLOR, BACKGROUND_COLOR
from .transform import AffineTransform, compose, viewport_transform


log = logging.getLogger(__name__)

Point = tuple[float, float]
ColorSpec = list[int] | tuple[int] | list[float] | tuple[float] | str


def check_RGB() -> bool:
    '''
    Check if the system is using an RGB color model.

    Returns:
        bool: True if the system uses an RGB color model, False otherwise.
    '''
    surface = skia.Surface(3, 3)
    with surface as canvas:
        canvas.drawRect(skia.Rect(0, 0, 3, 3), skia.Paint(Color=skia.ColorRED, Style=skia.Paint.kFill_Style))
    image = surface.makeImageSnapshot()
    np_image = np.frombuffer(image.tobytes(), dtype=np.uint8).reshape(3, 3, 4)
    return np_image[1, 1, 0] != 0


_RGB = check_RGB()


class SColor():
    '''
    A class to convert different color representations into a Skia Color4f object.

    This class accepts a color as a string (e.g. "red", "#FF0000") or as a list/tuple of
    three or four numbers (floats between 0.0 and 1.0). If four values are provided,
    the fourth is interpreted as the alpha channel.
    '''
    def __init__(self, color: ColorSpec):
        '''
        Initialize an SColor instance with the given color.

        Args:
            color (list[int] | tuple[int] | list[float] | tuple[float] | str):
                The color value to be processed. If a list or tuple is provided, it must
                contain either three or four values (all <= 1.0). A string value is expected
                to be a valid color name or code that the underlying python Color class can parse.

        Raises:
            ValueError: If the color string is unknown or the color has an unsupported type.
            AssertionError: If numeric color values exceed 1.0 or do not have three or four parameters.
        '''
        self.__alpha = 1.0
        if isinstance(color, str):
            try:
                self.__cColor = Color(color)
            except ValueError as e:
                raise ValueError(f'Unknown color: {color}') from e
        elif isinstance(color, (list, tuple)):
            assert all(c <= 1.0 for c in color), f'All color values must be lower or equal to 1.0: {color}'
            assert len(color) == 3 or len(color) == 4, f'Color must have three or four parameters: {color}'
            self.__cColor = Color(rgb=color[:3])
            if len(color) == 4:
                self.__alpha = color[3]
        else:
            raise ValueError(f'Unsupported color type: {type(color).__name__}')

        self.sColor = skia.Color4f(self.__cColor.red, self.__cColor.green, self.__cColor.blue, self.__alpha)

    @property
    def color(self): return self.sColor


def create_paint(color: ColorSpec = 'black',
                width: float = LINE_WIDTH,
                style: str = 'stroke',
                linecap: str = 'butt',
                linejoin: str = 'miter') -> skia.Paint:
    '''
    Create a Skia Paint object with the specified styling options.

    Args:
        color (list[int] | tuple[int] | list[float] | tuple[float] | str, optional):
            The paint color; can be a string or a list/tuple of numeric values. Defaults to 'black'.
        width (float, optional):
            The stroke width in pixels. Defaults to LINE_WIDTH.
        style (str, optional):
            The paint style ('fill' or 'stroke'). Defaults to 'stroke'.
        linecap (str, optional):
            The style for line cap ('butt', 'round', 'square'). Defaults to 'butt'.
        linejoin (str, optional):
            The style for line join ('miter', 'round', 'bevel'). Defaults to 'miter'.

    Returns:
        skia.Paint: A configured Skia Paint object.
    '''
    return skia.Paint(Color=SColor(color).color,
                        StrokeWidth=width,
                        Style=convert_style('style', style),
                        StrokeCap=convert_style('cap', linecap),
                        StrokeJoin=convert_style('join', linejoin),
                        AntiAlias=True
                        )


@dataclass(frozen=True)
class PathInfo:
    '''
    A polyline in normalized coordinates together with the transformation and color
    used when drawing it. The polyline is closed only if its last point equals the first.
    '''
    points: tuple[Point, ...]
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    color: ColorSpec = PATH_COLOR

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple((float(x), float(y)) for x, y in self.points))


    @staticmethod
    def rectangle(p1: Point,
                  p2: Point,
                  transform: AffineTransform | None = None,
                  color: ColorSpec = PATH_COLOR) -> 'PathInfo':
        '''
        Create a PathInfo for an axis-aligned rectangle given by two diagonally opposite corners.

        Args:
            p1 (tuple[float, float]): One corner of the rectangle.
            p2 (tuple[float, float]): The diagonally opposite corner.
            transform (AffineTransform, optional): Transformation to apply when drawing. Defaults to identity.
            color (str | tuple, optional): Color to use when drawing. Defaults to PATH_COLOR.

        Returns:
            PathInfo: A closed five-point polyline.
        '''
        points = (p1, (p1[0], p2[1]), p2, (p2[0], p1[1]), p1)
        if transform is None:
            transform = AffineTransform.identity()
        return PathInfo(points, transform, color)


    def with_transform(self, transform: AffineTransform) -> 'PathInfo':
        return PathInfo(self.points, transform, self.color)


    def transformed_points(self, then: AffineTransform | None = None) -> list[Point]:
        '''
        Transform the points by the path's own transformation and then by `then`.

        Args:
            then (AffineTransform, optional): Applied after the path transformation,
                typically the viewport transformation.

        Returns:
            list[tuple[float, float]]: The transformed points.
        '''
        t = self.transform if then is None else compose(self.transform, then)
        return t.transform_points(self.points)


class CanvasParameters:
    '''
    A class to encapsulate configuration parameters for a canvas.

    This class stores the padding around the normalized drawing area, the background
    color, whether the axes are drawn and the stroke width.
    '''
    def __init__(self,
                padding: float = DEFAULT_PADDING,
                background_color: ColorSpec = BACKGROUND_COLOR,
                show_axes: bool = True,
                line_width: float = LINE_WIDTH,
                axes_color: ColorSpec = AXES_COLOR
                ):
        """
        Initialize a CanvasParameters instance with the specified styling options.

        Args:
            padding (float, optional): Empty border around the drawing area in pixels. Defaults to DEFAULT_PADDING.
            background_color (list[float] | tuple[float] | str, optional):
                The background color for the canvas. Defaults to 'white'.
            show_axes (bool, optional): Whether the x- and y-axis are drawn. Defaults to True.
            line_width (float, optional): Stroke width of paths and axes in pixels. Defaults to LINE_WIDTH.
            axes_color (list[float] | tuple[float] | str, optional): Color of the axes. Defaults to 'black'.

        Raises:
            ValueError: If padding is negative or line_width is not positive.
        """
        if padding < 0:
            raise ValueError(f'Padding must not be negative: {padding}')
        if line_width <= 0:
            raise ValueError(f'Line width must be positive: {line_width}')
        self._padding = padding
        self._background_color = background_color
        self._show_axes = show_axes
        self._line_width = line_width
        self._axes_color = axes_color

    @property
    def padding(self): return self._padding
    @property
    def background_color(self): return self._background_color
    @property
    def show_axes(self): return self._show_axes
    @property
    def line_width(self): return self._line_width
    @property
    def axes_color(self): return self._axes_color


class NormalizedCanvas:
    '''
    A drawing surface with normalized coordinates: (-1, -1) is the bottom-left corner
    and (1, 1) the top-right corner of the drawing area.

    Paths are drawn by transforming each point first by the path's own transformation
    and then by the viewport transformation into pixel coordinates.

    Attributes:
        surface (skia.Surface): The Skia surface used for drawing.
        canvas (skia.Canvas): The Skia canvas obtained from the surface.
    '''

    def __init__(self,
                resolution: list[float] | tuple[float],
                canvas_parameters: CanvasParameters | None = None
                ):
        '''
        Initializes the canvas.

        Args:
            resolution (list[float] | tuple[float]): Width and height of the drawing area in pixels.
                The surface is larger by the padding on every side.
            canvas_parameters (CanvasParameters, optional): Styling of the canvas.

        Raises:
            AssertionError: If the provided resolution does not contain exactly two positive values.

        Example:
            >>> c = NormalizedCanvas((600, 600))
            >>> c.draw([PathInfo.rectangle((-0.5, -0.5), (0.5, 0.5), AffineTransform.rotation(45))])
            >>> image = c.image()
        '''
        assert len(resolution) == 2, 'Resolution must contain exactly two values'
        assert all(v > 0 for v in resolution), f'Resolution must be positive: {resolution}'
        self._parameters = canvas_parameters if canvas_parameters is not None else CanvasParameters()
        self._width, self._height = resolution

        padding = self._parameters.padding
        self.surface = skia.Surface(int_ceil(self._width + 2 * padding), int_ceil(self._height + 2 * padding))
        self.canvas = self.surface.getCanvas()
        log.debug('Created %dx%d surface', self.surface.width(), self.surface.height())

        self._viewport = compose(viewport_transform(self._width, self._height),
                                 AffineTransform.translation(padding, padding))
        self.clear()


    @property
    def viewport(self) -> AffineTransform: return self._viewport
    @property
    def parameters(self) -> CanvasParameters: return self._parameters

    def get_resolution(self) -> tuple[float]:
        return (self._width, self._height)


    def clear(self) -> None:
        '''
        Clear the canvas to the background color and redraw the axes if enabled.
        '''
        self.canvas.clear(SColor(self._parameters.background_color).color)
        if self._parameters.show_axes:
            self.draw_axes()


    def _polyline(self, points: list[Point], paint: skia.Paint) -> None:
        if len(points) < 2:
            return
        path = skia.Path()
        path.moveTo(*points[0])
        for p in points[1:]:
            path.lineTo(*p)
        self.canvas.drawPath(path, paint)


    def draw_axes(self) -> None:
        '''
        Draw the x- and y-axis through the centre of the drawing area.
        '''
        paint = create_paint(self._parameters.axes_color, self._parameters.line_width)
        self._polyline(self._viewport.transform_points([(-1, 0), (1, 0)]), paint)
        self._polyline(self._viewport.transform_points([(0, -1), (0, 1)]), paint)


    def draw_path(self, path_info: PathInfo) -> None:
        '''
        Draw a single path.

        Args:
            path_info (PathInfo): The path with its transformation and color.
        '''
        paint = create_paint(path_info.color, self._parameters.line_width)
        self._polyline(path_info.transformed_points(self._viewport), paint)


    def draw(self, paths: list[PathInfo]) -> None:
        for path_info in paths:
            self.draw_path(path_info)


    def image(self) -> skia.Image:
        return self.surface.makeImageSnapshot()


    def to_array(self) -> np.ndarray:
        '''
        Snapshot the surface as an RGBA array of shape (height, width, 4).
        '''
        image = self.image()
        np_image = np.frombuffer(image.tobytes(), dtype=np.uint8).reshape(image.height(), image.width(), 4)
        return np_image[:, :, [2, 1, 0, 3]] if not _RGB else np_image

import pytest

from affinestring import AffineTransform, CanvasParameters, NormalizedCanvas, PathInfo, parse
from affinestring.canvas import SColor, create_paint


def is_dark(pixel):
    return pixel[:3].max() < 80


def is_white(pixel):
    return pixel[:3].min() > 200


@pytest.fixture
def params():
    return CanvasParameters(padding=0, show_axes=False, line_width=4)


@pytest.fixture
def square():
    return PathInfo.rectangle((-0.5, -0.5), (0.5, 0.5))


def test_rectangle_points():
    r = PathInfo.rectangle((0.25, -0.25), (0.75, 0.25))
    assert r.points == ((0.25, -0.25), (0.25, 0.25), (0.75, 0.25), (0.75, -0.25), (0.25, -0.25))
    assert r.transform == AffineTransform.identity()
    assert r.color == 'black'


def test_path_transformed_points():
    r = PathInfo.rectangle((0, 0), (1, 1), parse('T(1,0)').unwrap())
    assert r.transformed_points()[2] == pytest.approx((2, 1))
    # path transformation first, then the extra one
    assert r.transformed_points(AffineTransform.scaling(2))[2] == pytest.approx((4, 2))


def test_with_transform(square):
    moved = square.with_transform(AffineTransform.translation(1, 1))
    assert moved.points == square.points
    assert moved.transform == AffineTransform.translation(1, 1)


def test_canvas_size_includes_padding():
    c = NormalizedCanvas((600, 400), CanvasParameters(padding=100))
    assert c.surface.width() == 800
    assert c.surface.height() == 600
    assert c.get_resolution() == (600, 400)
    assert c.viewport.apply(-1, 1) == pytest.approx((100, 100))
    assert c.viewport.apply(1, -1) == pytest.approx((700, 500))


def test_invalid_resolution():
    with pytest.raises(AssertionError):
        NormalizedCanvas((100,))
    with pytest.raises(AssertionError):
        NormalizedCanvas((0, 100))


def test_invalid_parameters():
    with pytest.raises(ValueError):
        CanvasParameters(padding=-1)
    with pytest.raises(ValueError):
        CanvasParameters(line_width=0)


def test_blank_canvas_is_background(params):
    c = NormalizedCanvas((100, 100), params)
    pixels = c.to_array()
    assert pixels.shape == (100, 100, 4)
    assert (pixels[:, :, :3] == 255).all()


def test_axes_are_drawn():
    c = NormalizedCanvas((200, 200), CanvasParameters(padding=0, line_width=4))
    pixels = c.to_array()
    assert is_dark(pixels[100, 20])
    assert is_dark(pixels[20, 100])
    assert is_white(pixels[20, 20])


def test_draw_rectangle(params, square):
    c = NormalizedCanvas((200, 200), params)
    c.draw([square])
    pixels = c.to_array()
    # left edge at x = 50, top edge at y = 50
    assert is_dark(pixels[100, 50])
    assert is_dark(pixels[50, 100])
    assert is_white(pixels[100, 100])


def test_draw_transformed_rectangle(params, square):
    c = NormalizedCanvas((200, 200), params)
    c.draw_path(square.with_transform(parse('T(0.5,0)').unwrap()))
    pixels = c.to_array()
    assert is_dark(pixels[100, 100])
    assert is_white(pixels[100, 50])


def test_positive_y_is_up(params):
    c = NormalizedCanvas((200, 200), params)
    c.draw([PathInfo(((0, 0), (0, 1)))])
    pixels = c.to_array()
    assert is_dark(pixels[50, 100])
    assert is_white(pixels[150, 100])


def test_path_color(params, square):
    c = NormalizedCanvas((200, 200), params)
    c.draw([PathInfo(square.points, color='red')])
    r, g, b, _ = c.to_array()[100, 50]
    assert r > 200 and g < 80 and b < 80


def test_clear(params, square):
    c = NormalizedCanvas((100, 100), params)
    c.draw([square])
    c.clear()
    assert (c.to_array()[:, :, :3] == 255).all()


def test_scolor():
    c = SColor('red').color
    assert (c.fR, c.fG, c.fB, c.fA) == pytest.approx((1, 0, 0, 1))
    c = SColor((0, 0, 1, 0.5)).color
    assert (c.fR, c.fG, c.fB, c.fA) == pytest.approx((0, 0, 1, 0.5))


def test_scolor_invalid():
    with pytest.raises(ValueError):
        SColor('notacolor')
    with pytest.raises(ValueError):
        SColor(42)
    with pytest.raises(AssertionError):
        SColor((2, 0, 0))
    with pytest.raises(AssertionError):
        SColor((1, 0))


def test_create_paint():
    paint = create_paint('blue', 3)
    assert paint.getStrokeWidth() == 3
    assert paint.isAntiAlias()

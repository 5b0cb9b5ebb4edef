import numpy as np
import PIL.Image
import pytest

import affinestring as at
from affinestring import AffineTransform, CanvasParameters, PathInfo


@pytest.fixture
def small():
    return {'resolution': (100, 100), 'canvas_parameters': CanvasParameters(padding=10)}


def test_update_defaults():
    result = at.update()
    assert result.ok
    assert result.transform.isclose(AffineTransform.identity())
    assert result.paths[0].points[0] == (-0.25, -0.25)
    assert result.status == str(result.transform)


def test_update_transforms_rectangle():
    result = at.update('T(0.5,0)', '-0.25 -0.25 0.25 0.25')
    assert result.ok
    assert result.transform == AffineTransform.translation(0.5, 0)
    assert result.paths[0].transformed_points()[0] == pytest.approx((0.25, -0.25))
    assert result.status == 'a: 1.0, b: 0.0, c: 0.0, d: 1.0, e: 0.5, f: 0.0'


def test_update_invalid_transformation_keeps_previous():
    previous = AffineTransform.scaling(2)
    result = at.update('S(1,2,3)', '0 0 1 1', previous)
    assert not result.ok
    assert result.status == 'invalid transformation string'
    assert result.transform == previous
    assert result.paths[0].transform == previous


def test_update_invalid_transformation_defaults_to_identity():
    result = at.update('X(1,2)', '0 0 1 1')
    assert result.transform == AffineTransform.identity()


@pytest.mark.parametrize('rect', ['', '0 0 1', '0 0 1 1 1', '0 0 a 1'])
def test_update_invalid_rectangle(rect):
    result = at.update('S(2,2)', rect)
    assert not result.ok
    assert result.paths == []
    assert result.status == 'invalid four values for rectangle'
    assert result.transform == AffineTransform.scaling(2, 2)


def test_render_formats(small):
    out = at.render([PathInfo.rectangle((-0.5, -0.5), (0.5, 0.5))], compress='pil, numpy', **small)
    assert isinstance(out['pil'], PIL.Image.Image)
    assert out['pil'].size == (120, 120)
    assert isinstance(out['numpy'], np.ndarray)
    assert out['numpy'].shape == (120, 120, 4)
    assert out['skia'] is None


def test_render_unknown_format(small):
    with pytest.raises(ValueError):
        at.render([], compress='gif', **small)


def test_show_returns_image_when_not_shown(small):
    image = at.show([], show=False, **small)
    assert image.width() == 120


def test_export_returns_png(small):
    data = at.export(at.update('R(45)').paths, **small)
    assert data.getvalue()[:8] == b'\x89PNG\r\n\x1a\n'


def test_export_writes_file(tmp_path, small):
    target = tmp_path / 'square.png'
    assert at.export(at.update('R(45)').paths, str(target), **small) is None
    with PIL.Image.open(target) as img:
        assert img.size == (120, 120)

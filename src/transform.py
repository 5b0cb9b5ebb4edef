import numpy as np
import skia

from .convert import format_value


class AffineTransform:
    '''
    An immutable 2D affine transformation using a 3x3 homogeneous transformation matrix.

    The six coefficients (a, b, c, d, e, f) describe the map

        x' = a*x + c*y + e
        y' = b*x + d*y + f

    and are stored as the matrix [[a, c, e], [b, d, f], [0, 0, 1]] acting on column
    vectors [x, y, 1]. Every operation returns a new AffineTransform.

    Positive rotation angles turn counter-clockwise in a y-up coordinate system,
    so the point (1, 0) rotated by 90 degrees lands on (0, 1).
    '''
    def __init__(self, matrix: np.ndarray | None = None):
        '''
        Initializes the AffineTransform instance.

        Args:
            matrix (np.ndarray, optional): A 3x3 homogeneous matrix. The identity is used when omitted.

        Raises:
            ValueError: If the matrix is not 3x3 or its last row is not (0, 0, 1).
        '''
        if matrix is None:
            m = np.eye(3)
        else:
            m = np.array(matrix, dtype=float)
            if m.shape != (3, 3):
                raise ValueError(f'Affine matrix must be 3x3, got shape {m.shape}')
            if not np.array_equal(m[2], [0.0, 0.0, 1.0]):
                raise ValueError(f'Last row of an affine matrix must be (0, 0, 1): {m[2]}')
        m.setflags(write=False)
        self._matrix = m


    @staticmethod
    def identity() -> 'AffineTransform':
        return AffineTransform()


    @staticmethod
    def from_coefficients(a: float, b: float, c: float, d: float, e: float, f: float) -> 'AffineTransform':
        '''
        Creates a transformation from its six coefficients.

        Args:
            a, b, c, d (float): The linear part, in column order.
            e, f (float): The translation part.

        Returns:
            AffineTransform: The transformation x' = a*x + c*y + e, y' = b*x + d*y + f.
        '''
        return AffineTransform(np.array([
            [a, c, e],
            [b, d, f],
            [0, 0, 1]
        ], dtype=float))


    @staticmethod
    def translation(tx: float, ty: float) -> 'AffineTransform':
        return AffineTransform(np.array([
            [1, 0, tx],
            [0, 1, ty],
            [0, 0, 1]
        ], dtype=float))


    @staticmethod
    def rotation(degrees: float) -> 'AffineTransform':
        '''
        Creates a counter-clockwise rotation about the origin.

        Args:
            degrees (float): The angle in degrees. It is converted to radians here.

        Returns:
            AffineTransform: The rotation.
        '''
        radians = np.radians(degrees)
        cos_a = np.cos(radians)
        sin_a = np.sin(radians)
        return AffineTransform(np.array([
            [cos_a, -sin_a, 0],
            [sin_a, cos_a, 0],
            [0, 0, 1]
        ], dtype=float))


    @staticmethod
    def scaling(sx: float, sy: float | None = None) -> 'AffineTransform':
        '''
        Creates a scaling about the origin.

        Args:
            sx (float): Scaling factor for the x-axis.
            sy (float, optional): Scaling factor for the y-axis. Defaults to sx if not provided.

        Returns:
            AffineTransform: The scaling.
        '''
        if sy is None:
            sy = sx
        return AffineTransform(np.array([
            [sx, 0, 0],
            [0, sy, 0],
            [0, 0, 1]
        ], dtype=float))


    @property
    def matrix(self) -> np.ndarray: return self._matrix
    @property
    def a(self) -> float: return float(self._matrix[0, 0])
    @property
    def b(self) -> float: return float(self._matrix[1, 0])
    @property
    def c(self) -> float: return float(self._matrix[0, 1])
    @property
    def d(self) -> float: return float(self._matrix[1, 1])
    @property
    def e(self) -> float: return float(self._matrix[0, 2])
    @property
    def f(self) -> float: return float(self._matrix[1, 2])
    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)


    def __matmul__(self, other: 'AffineTransform') -> 'AffineTransform':
        '''
        Plain matrix product: `self @ other` applies `other` first, then `self`.
        '''
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return AffineTransform(self._matrix @ other._matrix)


    def concatenating(self, other: 'AffineTransform') -> 'AffineTransform':
        '''
        Returns the transformation that applies this one first and `other` afterwards.

        Args:
            other (AffineTransform): The transformation applied second.

        Returns:
            AffineTransform: The composed transformation.
        '''
        return other @ self


    def translate(self, tx: float, ty: float) -> 'AffineTransform':
        '''
        Returns a new AffineTransform with an additional translation applied to points
        before this transformation.

        Args:
            tx (float): The translation distance along the x-axis.
            ty (float): The translation distance along the y-axis.

        Returns:
            AffineTransform: A new AffineTransform instance with the translation applied.
        '''
        return self @ AffineTransform.translation(tx, ty)


    def rotate(self, degrees: float) -> 'AffineTransform':
        '''
        Returns a new AffineTransform with an additional rotation applied to points
        before this transformation.

        Args:
            degrees (float): The angle in degrees to rotate.

        Returns:
            AffineTransform: A new AffineTransform instance with the rotation applied.
        '''
        return self @ AffineTransform.rotation(degrees)


    def scale(self, sx: float, sy: float | None = None) -> 'AffineTransform':
        '''
        Returns a new AffineTransform with an additional scaling applied to points
        before this transformation.

        Args:
            sx (float): The scale factor for the x dimension.
            sy (float, optional): The scale factor for the y dimension. Defaults to sx.

        Returns:
            AffineTransform: A new AffineTransform instance with the scaling applied.
        '''
        return self @ AffineTransform.scaling(sx, sy)


    def apply(self, x: float, y: float) -> tuple[float, float]:
        point = self._matrix @ np.array([x, y, 1.0])
        return (float(point[0]), float(point[1]))


    def transform(self, point: tuple) -> tuple:
        '''
        Applies the transformation to a 2D point. The point is converted to homogeneous
        coordinates prior to the transformation.

        Args:
            point (tuple): A tuple (x, y) representing the point.

        Returns:
            tuple: The transformed point as a tuple (x', y').
        '''
        return self.apply(*point)


    def transform_points(self, points) -> list[tuple[float, float]]:
        '''
        Applies the transformation to an ordered sequence of 2D points.

        Args:
            points: A sequence of (x, y) pairs or an (N, 2) array.

        Returns:
            list[tuple[float, float]]: The transformed points, in the input order.
        '''
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        if len(pts) == 0:
            return []
        homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
        transformed = homogeneous @ self._matrix.T
        return [(float(x), float(y)) for x, y in transformed[:, :2]]


    def isclose(self, other: 'AffineTransform', tol: float = 1e-9) -> bool:
        return np.allclose(self._matrix, other._matrix, rtol=0.0, atol=tol)


    def to_skia(self) -> skia.Matrix:
        '''
        Converts the transformation to an equivalent Skia matrix.

        Returns:
            skia.Matrix: Matrix with scaleX=a, skewX=c, transX=e, skewY=b, scaleY=d, transY=f.
        '''
        a, b, c, d, e, f = self.coefficients
        return skia.Matrix.MakeAll(a, c, e, b, d, f, 0, 0, 1)


    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return np.array_equal(self._matrix, other._matrix)


    def __hash__(self) -> int:
        return hash(self.coefficients)


    def __repr__(self) -> str:
        return 'AffineTransform(a={}, b={}, c={}, d={}, e={}, f={})'.format(*self.coefficients)


    def __str__(self) -> str:
        names = ('a', 'b', 'c', 'd', 'e', 'f')
        return ', '.join(f'{n}: {format_value(v, None)}' for n, v in zip(names, self.coefficients))


def compose(first: AffineTransform, second: AffineTransform) -> AffineTransform:
    '''
    Composes two transformations into one that applies `first` and then `second`.

    Args:
        first (AffineTransform): The transformation applied to points first.
        second (AffineTransform): The transformation applied to points second.

    Returns:
        AffineTransform: The composed transformation (matrix `second @ first`).
    '''
    return first.concatenating(second)


def viewport_transform(width: float, height: float) -> AffineTransform:
    '''
    Maps the normalized square [-1, 1] x [-1, 1] with (-1, -1) at the bottom-left corner
    onto pixel coordinates with (0, 0) at the top-left and (width, height) at the bottom-right.

    Args:
        width (float): Width of the target area in pixels.
        height (float): Height of the target area in pixels.

    Returns:
        AffineTransform: The viewport transformation.
    '''
    half_width = width / 2.0
    half_height = height / 2.0
    # scale first, then move the origin to the centre
    return compose(AffineTransform.scaling(half_width, -half_height),
                   AffineTransform.translation(half_width, half_height))

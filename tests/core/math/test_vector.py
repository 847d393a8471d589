import pytest
import math

import numpy as np

from jnum.core.base.exceptions import ShapeError, ValidationError
from jnum.core.math import Vector2D, Vector3D


class TestVector2D:
    def test_polar(self):
        v = Vector2D.from_polar(2.0, math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-15)
        assert v.y == pytest.approx(2.0)
        assert v.length() == pytest.approx(2.0)
        assert v.angle() == pytest.approx(math.pi / 2)

    def test_null_angle(self):
        assert math.isnan(Vector2D().angle())

    def test_arithmetic(self):
        v = Vector2D(1.0, 2.0)
        v.add(Vector2D(1.0, 1.0))
        v.add_scaled(Vector2D(1.0, 0.0), 2.0)
        assert v == Vector2D(4.0, 3.0)
        assert v.abs() == 5.0
        v.flip()
        assert v == Vector2D(-4.0, -3.0)
        assert Vector2D(1, 2) + Vector2D(3, 4) == Vector2D(4, 6)
        assert 2 * Vector2D(1, 2) == Vector2D(2, 4)

    def test_rotate(self):
        v = Vector2D(1.0, 0.0)
        v.rotate(math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-15)
        assert v.y == pytest.approx(1.0)

    def test_dot(self):
        v = Vector2D(1.0, 2.0)
        assert v.dot(Vector2D(3.0, 4.0)) == 11.0
        assert v.dot([3.0, 4.0]) == 11.0
        with pytest.raises(ShapeError):
            v.dot([1.0, 2.0, 3.0])

    def test_normalize(self):
        v = Vector2D(3.0, 4.0)
        assert v.normalize() == 5.0
        assert v.length() == pytest.approx(1.0)
        with pytest.raises(ValidationError, match="null vector"):
            Vector2D().normalize()

    def test_project_and_reflect(self):
        v = Vector2D(2.0, 3.0)
        v.project_on(Vector2D(2.0, 0.0))
        assert v == Vector2D(2.0, 0.0)

        v = Vector2D(2.0, 3.0)
        v.reflect_on(Vector2D(5.0, 0.0))
        assert v == Vector2D(2.0, -3.0)

    def test_misc(self):
        v = Vector2D(1.0, 2.0)
        assert list(v) == [1.0, 2.0]
        np.testing.assert_array_equal(v.to_array(), [1.0, 2.0])
        assert v.distance_to(Vector2D(4.0, 6.0)) == 5.0
        v.math('/', 2.0)
        assert v == Vector2D(0.5, 1.0)
        with pytest.raises(ValidationError, match="Illegal operation"):
            v.math('*', Vector2D(1.0, 1.0))


class TestVector3D:
    def test_angles(self):
        v = Vector3D()
        v.set_unit_vector_at(math.pi / 3, math.pi / 4)
        assert v.length() == pytest.approx(1.0)
        assert v.theta() == pytest.approx(math.pi / 3)
        assert v.phi() == pytest.approx(math.pi / 4)

    def test_rotations(self):
        v = Vector3D(1.0, 0.0, 0.0)
        v.rotate_z(math.pi / 2)
        np.testing.assert_allclose(v.to_array(), [0.0, 1.0, 0.0], atol=1e-15)
        v.rotate_x(math.pi / 2)
        np.testing.assert_allclose(v.to_array(), [0.0, 0.0, 1.0], atol=1e-15)
        v.rotate_y(math.pi / 2)
        np.testing.assert_allclose(v.to_array(), [1.0, 0.0, 0.0], atol=1e-15)

    def test_cross(self):
        assert Vector3D(1, 0, 0).cross(Vector3D(0, 1, 0)) == Vector3D(0, 0, 1)

    def test_dot(self):
        v = Vector3D(1.0, 2.0, 3.0)
        assert v.dot(Vector3D(1.0, 1.0, 1.0)) == 6.0
        assert v.dot((0.0, 0.0, 2.0)) == 6.0
        with pytest.raises(ShapeError):
            v.dot((1.0, 2.0))

    def test_project_and_reflect(self):
        v = Vector3D(1.0, 2.0, 3.0)
        v.project_on(Vector3D(0.0, 0.0, 2.0))
        assert v == Vector3D(0.0, 0.0, 3.0)

        v = Vector3D(1.0, 2.0, 3.0)
        v.reflect_on(Vector3D(0.0, 0.0, 1.0))
        assert v == Vector3D(-1.0, -2.0, 3.0)

    def test_normalize(self):
        v = Vector3D(0.0, 3.0, 4.0)
        assert v.normalize() == 5.0
        with pytest.raises(ValidationError, match="null vector"):
            Vector3D().normalize()

    def test_distance(self):
        assert Vector3D(1, 2, 3).distance_to(Vector3D(1, 2, 5)) == 2.0
        assert Vector3D(1, 2, 3) - Vector3D(1, 1, 1) == Vector3D(0, 1, 2)


class TestErrors:
    def test_errors_are_value_errors(self):
        # Callers catching ValueError keep working
        with pytest.raises(ValueError):
            Vector3D().normalize()
        with pytest.raises(ValueError):
            Vector2D(1.0, 0.0).dot([1.0])

    def test_shape_details(self):
        with pytest.raises(ShapeError) as excinfo:
            Vector3D(1.0, 2.0, 3.0).dot([1.0, 2.0])
        assert excinfo.value.shape == (2,)
        assert excinfo.value.expected == (3,)

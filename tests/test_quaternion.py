#!/usr/bin/env python3
"""
test_quaternion.py - 자세 표현 타입 단위 테스트

Author: FurSys AI Team
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import numpy as np
import pytest

from mahony_ahrs.orientation.quaternion import (
    Quaternion,
    AxisAngle,
    EulerAngles
)


class TestQuaternion:
    """Quaternion 클래스 테스트"""

    def test_identity(self):
        q = Quaternion.identity()
        assert q.w == 1
        assert q.x == 0
        assert q.y == 0
        assert q.z == 0

    def test_array_order(self):
        q = Quaternion(w=0.9, x=0.1, y=0.2, z=0.3)
        np.testing.assert_array_equal(q.to_array(), [0.9, 0.1, 0.2, 0.3])
        np.testing.assert_array_equal(q.to_array_xyzw(), [0.1, 0.2, 0.3, 0.9])

    def test_from_array(self):
        q = Quaternion.from_array(np.array([0.5, 0.5, 0.5, 0.5]))
        assert q == Quaternion(w=0.5, x=0.5, y=0.5, z=0.5)

    def test_normalize(self):
        q = Quaternion(w=1, x=1, y=1, z=1)
        assert q.normalize().is_unit

    def test_normalize_zero(self):
        """영 쿼터니언은 항등 회전으로"""
        q = Quaternion(w=0, x=0, y=0, z=0).normalize()
        assert q == Quaternion.identity()

    def test_conjugate(self):
        q = Quaternion(w=0.9, x=0.1, y=0.2, z=0.3)
        q_conj = q.conjugate()
        assert q_conj.w == q.w
        assert q_conj.x == -q.x
        assert q_conj.y == -q.y
        assert q_conj.z == -q.z

    def test_multiplication_with_conjugate(self):
        """q * q^-1 = 항등"""
        q = Quaternion.from_axis_angle(np.array([1.0, 2.0, 3.0]), 0.7)
        result = q * q.conjugate()
        np.testing.assert_allclose(result.to_array(), [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    def test_multiplication_composes_rotations(self):
        """Z축 45도 두 번 = Z축 90도"""
        q45 = Quaternion.from_axis_angle(np.array([0, 0, 1]), np.pi / 4)
        q90 = Quaternion.from_axis_angle(np.array([0, 0, 1]), np.pi / 2)
        np.testing.assert_allclose((q45 * q45).to_array(), q90.to_array(), atol=1e-12)

    def test_angle_to(self):
        q1 = Quaternion.identity()
        q2 = Quaternion.from_axis_angle(np.array([0, 1, 0]), 0.5)
        assert q1.angle_to(q2) == pytest.approx(0.5, abs=1e-9)

    def test_rotation_matrix(self):
        """Z축 90도: x축 -> y축"""
        q = Quaternion.from_axis_angle(np.array([0, 0, 1]), np.pi / 2)
        R = q.to_rotation_matrix()
        np.testing.assert_allclose(R @ [1, 0, 0], [0, 1, 0], atol=1e-12)


class TestAxisAngleConversion:
    """축-각도 변환 테스트"""

    def test_identity_sentinel(self):
        """항등 회전 -> 유한한 센티널"""
        result = Quaternion.identity().to_axis_angle()
        assert result == AxisAngle(angle=0.0, x=0.0, y=0.0, z=0.0)
        assert result.is_identity

    def test_negative_identity_sentinel(self):
        """w = -1 (같은 항등 회전)도 센티널"""
        result = Quaternion(w=-1.0, x=0.0, y=0.0, z=0.0).to_axis_angle()
        assert result.is_identity

    def test_w_slightly_above_one(self):
        """|w| > 1 반올림 오차에서도 NaN 없음"""
        result = Quaternion(w=1.0 + 2e-16, x=0.0, y=0.0, z=0.0).to_axis_angle()
        assert np.isfinite(result.angle)
        assert np.all(np.isfinite(result.axis))

    def test_round_trip_axis(self):
        axis = np.array([1.0, -2.0, 0.5])
        q = Quaternion.from_axis_angle(axis, 1.2)
        result = q.to_axis_angle()

        assert result.angle == pytest.approx(1.2, abs=1e-12)
        np.testing.assert_allclose(result.axis, axis / np.linalg.norm(axis), atol=1e-12)
        assert not result.is_identity


class TestEulerConversion:
    """오일러 각도 변환 테스트"""

    def test_identity_euler(self):
        euler = Quaternion.identity().to_euler()
        np.testing.assert_allclose(euler.to_array(), [0, 0, 0], atol=1e-12)

    def test_yaw_only(self):
        q = Quaternion.from_axis_angle(np.array([0, 0, 1]), np.radians(30))
        euler = q.to_euler(degrees=True)

        assert isinstance(euler, EulerAngles)
        assert euler.yaw == pytest.approx(30.0, abs=1e-9)
        assert euler.roll == pytest.approx(0.0, abs=1e-9)
        assert euler.pitch == pytest.approx(0.0, abs=1e-9)

    def test_radians(self):
        q = Quaternion.from_axis_angle(np.array([1, 0, 0]), 0.25)
        euler = q.to_euler(degrees=False)
        assert euler.roll == pytest.approx(0.25, abs=1e-12)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

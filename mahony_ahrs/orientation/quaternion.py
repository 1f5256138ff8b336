"""
quaternion.py - 자세 표현 타입

필터가 외부에 제공하는 회전 표현:
- 쿼터니언 (w, x, y, z) - 필터 내부 상태와 동일한 순서
- 축-각도 (angle, x, y, z) - 라디안
- 오일러 각도 (Roll, Pitch, Yaw) - 표시용

설계 원칙:
1. 필터 상태: 쿼터니언 (w 우선 순서)
2. scipy 연동: [x, y, z, w] 배열로 변환 후 Rotation 사용
3. 축-각도 특이점(항등 회전)은 센티널 값으로 처리

Version: 1.0
Author: FurSys AI Team
"""

import numpy as np
from scipy.spatial.transform import Rotation
from dataclasses import dataclass


# sin(angle/2)가 이 값보다 작으면 회전축이 정의되지 않음
AXIS_ANGLE_EPSILON = 1e-12


@dataclass
class EulerAngles:
    """
    오일러 각도 (xyz 순서)

    Attributes:
        roll: X축 회전
        pitch: Y축 회전
        yaw: Z축 회전
    """
    roll: float
    pitch: float
    yaw: float

    def to_array(self) -> np.ndarray:
        """numpy 배열로 변환 [roll, pitch, yaw]"""
        return np.array([self.roll, self.pitch, self.yaw])

    def __repr__(self) -> str:
        return f"EulerAngles(R={self.roll:.2f}, P={self.pitch:.2f}, Y={self.yaw:.2f})"


@dataclass
class AxisAngle:
    """
    축-각도 표현

    angle은 라디안, (x, y, z)는 단위 회전축.
    항등 회전에서는 축이 정의되지 않으므로 (0, 0, 0, 0) 센티널을 사용합니다.
    """
    angle: float
    x: float
    y: float
    z: float

    @property
    def axis(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @property
    def is_identity(self) -> bool:
        """센티널(회전 없음) 여부"""
        return self.angle == 0.0 and self.x == 0.0 and self.y == 0.0 and self.z == 0.0


@dataclass
class Quaternion:
    """
    쿼터니언 (w, x, y, z)

    표현: q = w + xi + yj + zk
    단위 쿼터니언 조건: |q| = sqrt(w² + x² + y² + z²) = 1
    """
    w: float
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        """[w, x, y, z] 형식 (필터 상태 순서)"""
        return np.array([self.w, self.x, self.y, self.z])

    def to_array_xyzw(self) -> np.ndarray:
        """[x, y, z, w] 형식 (scipy 표준)"""
        return np.array([self.x, self.y, self.z, self.w])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Quaternion':
        """[w, x, y, z] 배열에서 생성"""
        return cls(w=float(arr[0]), x=float(arr[1]), y=float(arr[2]), z=float(arr[3]))

    def normalize(self) -> 'Quaternion':
        """단위 쿼터니언으로 정규화"""
        arr = self.to_array()
        norm = np.linalg.norm(arr)
        if norm < 1e-10:
            return Quaternion.identity()
        return Quaternion.from_array(arr / norm)

    def conjugate(self) -> 'Quaternion':
        """켤레 쿼터니언 (회전의 역)"""
        return Quaternion(w=self.w, x=-self.x, y=-self.y, z=-self.z)

    @property
    def norm(self) -> float:
        return float(np.linalg.norm(self.to_array()))

    @property
    def is_unit(self) -> bool:
        return abs(self.norm - 1.0) < 1e-9

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """해밀턴 곱 (회전 합성)"""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z

        return Quaternion(
            w=w1*w2 - x1*x2 - y1*y2 - z1*z2,
            x=w1*x2 + x1*w2 + y1*z2 - z1*y2,
            y=w1*y2 - x1*z2 + y1*w2 + z1*x2,
            z=w1*z2 + x1*y2 - y1*x2 + z1*w2
        )

    def dot(self, other: 'Quaternion') -> float:
        return float(np.dot(self.to_array(), other.to_array()))

    def angle_to(self, other: 'Quaternion') -> float:
        """다른 쿼터니언까지의 각도 (라디안)"""
        dot = np.clip(abs(self.dot(other)), -1.0, 1.0)
        return float(2 * np.arccos(dot))

    def to_axis_angle(self) -> AxisAngle:
        """
        축-각도로 변환

        angle = 2·acos(w), axis = (x, y, z) / sin(angle/2)

        sin(angle/2)가 0에 가까우면 (w = ±1, 항등 회전) 축을 나눌 수 없으므로
        AxisAngle(0, 0, 0, 0) 센티널을 반환합니다. 반환값은 항상 유한합니다.
        """
        # 재정규화 오차로 |w|가 1을 약간 넘을 수 있음
        w = float(np.clip(self.w, -1.0, 1.0))
        angle = 2.0 * np.arccos(w)
        sin_half = np.sin(angle / 2.0)

        if abs(sin_half) < AXIS_ANGLE_EPSILON:
            return AxisAngle(angle=0.0, x=0.0, y=0.0, z=0.0)

        return AxisAngle(
            angle=float(angle),
            x=float(self.x / sin_half),
            y=float(self.y / sin_half),
            z=float(self.z / sin_half)
        )

    def to_rotation_matrix(self) -> np.ndarray:
        """3x3 회전 행렬"""
        return Rotation.from_quat(self.to_array_xyzw()).as_matrix()

    def to_euler(self, degrees: bool = True) -> EulerAngles:
        """오일러 각도 (xyz 순서)로 변환"""
        euler_array = Rotation.from_quat(self.to_array_xyzw()).as_euler('xyz', degrees=degrees)
        return EulerAngles(
            roll=float(euler_array[0]),
            pitch=float(euler_array[1]),
            yaw=float(euler_array[2])
        )

    def __repr__(self) -> str:
        return f"Quaternion(w={self.w:.4f}, x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f})"

    @classmethod
    def identity(cls) -> 'Quaternion':
        """단위 쿼터니언 (회전 없음)"""
        return cls(w=1.0, x=0.0, y=0.0, z=0.0)

    @classmethod
    def from_axis_angle(cls, axis: np.ndarray, angle: float) -> 'Quaternion':
        """축-각도(라디안)에서 생성"""
        axis = np.asarray(axis, dtype=np.float64)
        axis = axis / np.linalg.norm(axis)
        sin_a = np.sin(angle / 2)
        return cls(
            w=float(np.cos(angle / 2)),
            x=float(axis[0] * sin_a),
            y=float(axis[1] * sin_a),
            z=float(axis[2] * sin_a)
        )

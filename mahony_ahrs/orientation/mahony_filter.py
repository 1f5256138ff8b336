"""
mahony_filter.py - Mahony 상보 필터 기반 자세 추정

자이로 적분에 PI 피드백 보정을 결합하여 센서 좌표계의 자세를
단위 쿼터니언으로 추정합니다.

두 가지 모드 (매 호출마다 입력으로 결정, 상태로 저장하지 않음):
1. IMU (6축): 자이로 + 가속도계
2. AHRS (9축): 자이로 + 가속도계 + 지자기계

보정 오차:
- 측정 벡터와 추정 벡터의 외적 합 (중력, AHRS 모드에서는 지자기 포함)
- 두 방향이 평행하면 오차 0

설계 원칙:
- 상태는 인스턴스가 단독 소유 (센서 스트림마다 인스턴스 하나)
- 매 호출마다 쿼터니언 재정규화 (1차 적분 드리프트 방지)
- 적분 게인 0이면 적분 피드백을 매 스텝 0으로 유지 (windup 방지)

Version: 1.0
Author: FurSys AI Team
"""

import numpy as np
from typing import Optional
from dataclasses import dataclass
from enum import Enum
import logging

from .quaternion import Quaternion, AxisAngle, EulerAngles
from ..config.filter_config import AhrsConfig, FilterConfig

logger = logging.getLogger(__name__)


class FilterMode(Enum):
    """업데이트 알고리즘 모드"""
    IMU = "imu"    # 자이로 + 가속도계
    AHRS = "ahrs"  # 자이로 + 가속도계 + 지자기계


@dataclass
class FilterState:
    """
    필터 상태 스냅샷

    Attributes:
        orientation: 현재 자세 쿼터니언 (w, x, y, z)
        integral_feedback: 적분 피드백 [x, y, z] rad/s
        proportional_gain: 2 * Kp
        integral_gain: 2 * Ki
        sample_period: 기본 샘플 주기 (초)
    """
    orientation: Quaternion
    integral_feedback: np.ndarray
    proportional_gain: float
    integral_gain: float
    sample_period: float

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            'orientation': {
                'w': self.orientation.w,
                'x': self.orientation.x,
                'y': self.orientation.y,
                'z': self.orientation.z
            },
            'integral_feedback': self.integral_feedback.tolist(),
            'proportional_gain': self.proportional_gain,
            'integral_gain': self.integral_gain,
            'sample_period': self.sample_period
        }


def _normalize(v: np.ndarray) -> np.ndarray:
    """|v|^-0.5 스케일링으로 단위 벡터화 (영벡터는 호출 전에 걸러야 함)"""
    return v * np.dot(v, v) ** -0.5


def _is_zero(x: float, y: float, z: float) -> bool:
    return x == 0.0 and y == 0.0 and z == 0.0


class MahonyFilter:
    """
    Mahony 상보 필터 (쿼터니언)

    Example:
        >>> ahrs = MahonyFilter(sample_interval_ms=10.0)
        >>> mode = ahrs.update(gx, gy, gz, ax, ay, az, mx, my, mz)
        >>> q = ahrs.get_quaternion()
        >>> print(f"w={q.w:.4f}, mode={mode.value}")

    스레드 안전하지 않습니다. 샘플은 시간 순서대로 공급해야 합니다.
    """

    def __init__(
        self,
        sample_interval_ms: float,
        proportional_gain: float = 1.0,
        integral_gain: float = 0.0
    ):
        """
        Args:
            sample_interval_ms: 샘플 주기 (ms, > 0)
            proportional_gain: 비례 게인 (2 * Kp)
            integral_gain: 적분 게인 (2 * Ki), 0이면 순수 비례 필터
        """
        if sample_interval_ms <= 0:
            raise ValueError(f"sample_interval_ms must be positive, got {sample_interval_ms}")

        self._sample_frequency = 1000.0 / sample_interval_ms
        self._sample_period = 1.0 / self._sample_frequency

        # 센서 좌표계 = 기준 좌표계 (항등 회전)
        self._q = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
        self._integral_feedback = np.zeros(3, dtype=np.float64)

        self.proportional_gain = proportional_gain
        self.integral_gain = integral_gain

        logger.info(
            f"MahonyFilter initialized: interval={sample_interval_ms}ms, "
            f"twoKp={self._proportional_gain}, twoKi={self._integral_gain}"
        )

    @classmethod
    def from_config(cls, config: AhrsConfig) -> 'MahonyFilter':
        """설정 객체에서 생성"""
        filter_config: FilterConfig = config.filter
        filter_config.validate()
        return cls(
            sample_interval_ms=filter_config.sample_interval_ms,
            proportional_gain=filter_config.proportional_gain,
            integral_gain=filter_config.integral_gain
        )

    def initialize(self, ax: float, ay: float, az: float):
        """
        가속도계 측정값으로 자세 초기화

        측정된 중력 방향 a를 기준 +Z축으로 회전시키는 쿼터니언을
        반각 구성으로 계산합니다:

            q ∝ (1 + a·ez, a × ez) = (1 + az, ay, -ax, 0)

        초기화 직후 추정 중력 방향이 측정 방향과 일치하므로 첫 업데이트의
        중력 보정 오차는 0입니다. Yaw는 중력으로 관측할 수 없으므로 0.

        Note:
            원래 알고리즘의 initialise는 회전 각도가 항상 0이어서 입력과 무관하게
            항등 회전으로 리셋되었습니다. 이 구현은 실제 시드를 계산합니다.
            영벡터 입력은 reset()과 같습니다.
        """
        if _is_zero(ax, ay, az):
            self.reset()
            return

        accel = _normalize(np.array([ax, ay, az], dtype=np.float64))
        half_norm_sq = 1.0 + accel[2]

        if half_norm_sq < 1e-12:
            # 뒤집힌 자세 (a = -ez): X축 기준 180도
            q = np.array([0.0, 1.0, 0.0, 0.0])
        else:
            q = _normalize(np.array([half_norm_sq, accel[1], -accel[0], 0.0]))

        self._q = q
        self._integral_feedback[:] = 0.0

        logger.debug(f"Filter seeded from accelerometer: q={self.get_quaternion()}")

    def update(
        self,
        gx: float, gy: float, gz: float,
        ax: float, ay: float, az: float,
        mx: float = 0.0, my: float = 0.0, mz: float = 0.0,
        delta_time: Optional[float] = None
    ) -> FilterMode:
        """
        센서 샘플 하나로 자세 갱신

        Args:
            gx, gy, gz: 자이로 각속도 (rad/s)
            ax, ay, az: 가속도계 (단위 무관, 방향만 사용)
            mx, my, mz: 지자기계 (단위 무관), 모두 0이면 IMU 모드
            delta_time: 경과 시간 (초). 0이 아니면 이번 호출에만 적용

        Returns:
            이번 호출에 사용된 모드
        """
        dt = delta_time if delta_time else self._sample_period

        if _is_zero(mx, my, mz):
            mode = FilterMode.IMU
        else:
            mode = FilterMode.AHRS

        gyro = np.array([gx, gy, gz], dtype=np.float64)

        # 가속도계가 영벡터면 보정 없이 자이로만 적분
        if not _is_zero(ax, ay, az):
            accel = _normalize(np.array([ax, ay, az], dtype=np.float64))

            if mode is FilterMode.AHRS:
                mag = _normalize(np.array([mx, my, mz], dtype=np.float64))
                half_error = self._ahrs_error(accel, mag)
            else:
                half_error = self._imu_error(accel)

            if self._integral_gain > 0.0:
                self._integral_feedback += self._integral_gain * half_error * dt
                gyro += self._integral_feedback
            else:
                self._integral_feedback[:] = 0.0

            gyro += self._proportional_gain * half_error

        self._integrate(gyro, dt)
        return mode

    def _imu_error(self, accel: np.ndarray) -> np.ndarray:
        """중력 방향 오차 (측정 × 추정)"""
        q0, q1, q2, q3 = self._q

        # 추정 중력 방향 (절반 크기)
        half_v = np.array([
            q1 * q3 - q0 * q2,
            q0 * q1 + q2 * q3,
            q0 * q0 - 0.5 + q3 * q3
        ])

        return np.cross(accel, half_v)

    def _ahrs_error(self, accel: np.ndarray, mag: np.ndarray) -> np.ndarray:
        """중력 + 지자기 방향 오차 (측정 × 추정의 합)"""
        q0, q1, q2, q3 = self._q
        mx, my, mz = mag

        q0q0 = q0 * q0
        q0q1 = q0 * q1
        q0q2 = q0 * q2
        q0q3 = q0 * q3
        q1q1 = q1 * q1
        q1q2 = q1 * q2
        q1q3 = q1 * q3
        q2q2 = q2 * q2
        q2q3 = q2 * q3
        q3q3 = q3 * q3

        # 측정 자기장을 기준 좌표계로 회전 -> 수평(bx), 수직(bz) 성분
        hx = 2.0 * (mx * (0.5 - q2q2 - q3q3) + my * (q1q2 - q0q3) + mz * (q1q3 + q0q2))
        hy = 2.0 * (mx * (q1q2 + q0q3) + my * (0.5 - q1q1 - q3q3) + mz * (q2q3 - q0q1))
        bx = np.sqrt(hx * hx + hy * hy)
        bz = 2.0 * (mx * (q1q3 - q0q2) + my * (q2q3 + q0q1) + mz * (0.5 - q1q1 - q2q2))

        # 추정 중력 및 자기장 방향 (절반 크기)
        half_v = np.array([
            q1q3 - q0q2,
            q0q1 + q2q3,
            q0q0 - 0.5 + q3q3
        ])
        half_w = np.array([
            bx * (0.5 - q2q2 - q3q3) + bz * (q1q3 - q0q2),
            bx * (q1q2 - q0q3) + bz * (q0q1 + q2q3),
            bx * (q0q2 + q1q3) + bz * (0.5 - q1q1 - q2q2)
        ])

        return np.cross(accel, half_v) + np.cross(mag, half_w)

    def _integrate(self, gyro: np.ndarray, dt: float):
        """쿼터니언 변화율 1차 적분 후 재정규화"""
        gx, gy, gz = gyro * (0.5 * dt)

        # 갱신 전 값만 사용
        qa, qb, qc, qd = self._q
        q = np.array([
            qa + (-qb * gx - qc * gy - qd * gz),
            qb + (qa * gx + qc * gz - qd * gy),
            qc + (qa * gy - qb * gz + qd * gx),
            qd + (qa * gz + qb * gy - qc * gx)
        ])

        self._q = _normalize(q)

    def process_sequence(
        self,
        gyro: np.ndarray,
        accel: np.ndarray,
        mag: Optional[np.ndarray] = None,
        delta_times: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """
        샘플 배열을 순서대로 처리

        Args:
            gyro: (N, 3) rad/s
            accel: (N, 3)
            mag: (N, 3) 또는 None (IMU 모드)
            delta_times: (N,) 초 또는 None (기본 샘플 주기)

        Returns:
            (N, 4) 각 샘플 처리 후 쿼터니언 [w, x, y, z]
        """
        gyro = np.asarray(gyro, dtype=np.float64)
        accel = np.asarray(accel, dtype=np.float64)
        num = gyro.shape[0]

        if mag is None:
            mag = np.zeros_like(gyro)
        mag = np.asarray(mag, dtype=np.float64)

        if gyro.shape != (num, 3) or accel.shape != (num, 3) or mag.shape != (num, 3):
            raise ValueError(
                f"Expected (N, 3) arrays, got gyro={gyro.shape}, accel={accel.shape}, mag={mag.shape}"
            )
        if delta_times is not None and len(delta_times) != num:
            raise ValueError(f"Expected {num} delta_times, got {len(delta_times)}")

        history = np.zeros((num, 4))
        for i in range(num):
            dt = None if delta_times is None else float(delta_times[i])
            self.update(*gyro[i], *accel[i], *mag[i], delta_time=dt)
            history[i] = self._q

        return history

    def get_quaternion(self) -> Quaternion:
        """현재 자세 쿼터니언 (w, x, y, z)"""
        return Quaternion.from_array(self._q)

    def to_axis_angle(self) -> AxisAngle:
        """
        현재 자세의 축-각도 표현

        항등 회전에서는 AxisAngle(0, 0, 0, 0) 센티널을 반환합니다.
        """
        return self.get_quaternion().to_axis_angle()

    def get_euler_angles(self, degrees: bool = True) -> EulerAngles:
        """현재 자세의 오일러 각도 (xyz)"""
        return self.get_quaternion().to_euler(degrees=degrees)

    def get_state(self) -> FilterState:
        """현재 상태 반환"""
        return FilterState(
            orientation=self.get_quaternion(),
            integral_feedback=self._integral_feedback.copy(),
            proportional_gain=self._proportional_gain,
            integral_gain=self._integral_gain,
            sample_period=self._sample_period
        )

    def reset(self):
        """필터 리셋 (항등 회전, 적분 피드백 0)"""
        self._q = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
        self._integral_feedback[:] = 0.0
        logger.debug("Filter reset")

    @property
    def proportional_gain(self) -> float:
        return self._proportional_gain

    @proportional_gain.setter
    def proportional_gain(self, value: float):
        if value < 0:
            raise ValueError(f"proportional_gain must be non-negative, got {value}")
        self._proportional_gain = float(value)
        logger.debug(f"twoKp set to {self._proportional_gain}")

    @property
    def integral_gain(self) -> float:
        return self._integral_gain

    @integral_gain.setter
    def integral_gain(self, value: float):
        if value < 0:
            raise ValueError(f"integral_gain must be non-negative, got {value}")
        self._integral_gain = float(value)
        if self._integral_gain == 0.0:
            self._integral_feedback[:] = 0.0
        logger.debug(f"twoKi set to {self._integral_gain}")

    @property
    def integral_feedback(self) -> np.ndarray:
        """적분 피드백 [x, y, z]"""
        return self._integral_feedback.copy()

    @property
    def sample_period(self) -> float:
        """기본 샘플 주기 (초)"""
        return self._sample_period

    @property
    def sample_frequency(self) -> float:
        """샘플 주파수 (Hz)"""
        return self._sample_frequency

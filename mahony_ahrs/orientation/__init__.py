"""
orientation 모듈 - Mahony 자세 추정

자이로/가속도계/지자기계 샘플을 융합하여 센서 자세를
단위 쿼터니언으로 추정합니다.

주요 기능:
- IMU (6축) / AHRS (9축) 자동 선택
- PI 피드백 보정 (적분 windup 방지)
- 쿼터니언 <-> 축-각도 <-> 오일러 각도 변환
"""

from .quaternion import (
    Quaternion,
    AxisAngle,
    EulerAngles
)

from .mahony_filter import (
    MahonyFilter,
    FilterState,
    FilterMode
)

__all__ = [
    'Quaternion',
    'AxisAngle',
    'EulerAngles',
    'MahonyFilter',
    'FilterState',
    'FilterMode',
]

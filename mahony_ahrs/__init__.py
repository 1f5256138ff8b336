"""
mahony_ahrs - Mahony 상보 필터 기반 자세 추정

주요 특징:
- 쿼터니언 기반 자세 추정 (자이로 + 가속도계 + 선택적 지자기계)
- 지자기계 입력이 없으면 IMU 모드로 자동 전환
- 가변 샘플 주기 지원
- YAML 설정

Version: 1.0
Author: FurSys AI Team
"""

__version__ = "1.0.0"
__author__ = "FurSys AI Team"

from .orientation.quaternion import (
    Quaternion,
    AxisAngle,
    EulerAngles
)

from .orientation.mahony_filter import (
    MahonyFilter,
    FilterState,
    FilterMode
)

from .config.filter_config import (
    AhrsConfig,
    FilterConfig,
    load_config
)

__all__ = [
    # Orientation
    'Quaternion',
    'AxisAngle',
    'EulerAngles',
    # Filter
    'MahonyFilter',
    'FilterState',
    'FilterMode',
    # Config
    'AhrsConfig',
    'FilterConfig',
    'load_config',
]

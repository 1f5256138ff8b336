"""
filter_config.py - 필터 설정 관리

Mahony 필터의 게인, 샘플 주기, 로깅 설정을 통합 관리합니다.

Version: 1.0
Author: FurSys AI Team
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class FilterConfig:
    """Mahony 필터 설정"""
    # 샘플 주기 (ms), 100 Hz 기본
    sample_interval_ms: float = 10.0

    # 게인 (각각 2 * Kp, 2 * Ki)
    proportional_gain: float = 1.0
    integral_gain: float = 0.0

    def validate(self):
        """설정값 검증"""
        if self.sample_interval_ms <= 0:
            raise ValueError(f"sample_interval_ms must be positive, got {self.sample_interval_ms}")
        if self.proportional_gain < 0:
            raise ValueError(f"proportional_gain must be non-negative, got {self.proportional_gain}")
        if self.integral_gain < 0:
            raise ValueError(f"integral_gain must be non-negative, got {self.integral_gain}")

    @property
    def sample_frequency(self) -> float:
        """샘플 주파수 (Hz)"""
        return 1000.0 / self.sample_interval_ms


@dataclass
class LoggingConfig:
    """로깅 설정"""
    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "mahony_ahrs.log"


@dataclass
class AhrsConfig:
    """mahony_ahrs 전체 설정"""
    filter: FilterConfig = field(default_factory=FilterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return asdict(self)

    def save(self, filepath: str):
        """설정을 YAML 파일로 저장"""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

        logger.info(f"Config saved to {filepath}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'AhrsConfig':
        """딕셔너리에서 설정 생성"""
        config = cls(
            filter=FilterConfig(**d.get('filter', {})),
            logging=LoggingConfig(**d.get('logging', {}))
        )
        config.filter.validate()
        return config


def load_config(filepath: str) -> AhrsConfig:
    """
    YAML 파일에서 설정 로드

    Args:
        filepath: 설정 파일 경로

    Returns:
        AhrsConfig: 로드된 설정 (파일이 없거나 비어 있으면 기본값)
    """
    path = Path(filepath)

    if not path.exists():
        logger.warning(f"Config file not found: {filepath}, using defaults")
        return AhrsConfig()

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return AhrsConfig()

    return AhrsConfig.from_dict(config_dict)


def create_default_config(save_path: Optional[str] = None) -> AhrsConfig:
    """
    기본 설정 생성

    Args:
        save_path: 저장 경로 (None이면 저장 안함)
    """
    config = AhrsConfig()

    if save_path:
        config.save(save_path)

    return config


def configure_logging(config: LoggingConfig):
    """로깅 설정 적용 (애플리케이션 진입점에서 한 번 호출)"""
    handlers = [logging.StreamHandler()]
    if config.log_to_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers
    )

"""
config 모듈 - 설정 관리
"""

from .filter_config import (
    AhrsConfig,
    FilterConfig,
    LoggingConfig,
    load_config,
    create_default_config,
    configure_logging
)

__all__ = [
    'AhrsConfig',
    'FilterConfig',
    'LoggingConfig',
    'load_config',
    'create_default_config',
    'configure_logging',
]

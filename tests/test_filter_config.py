"""
필터 설정 단위 테스트
"""

import logging
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import pytest
import yaml

from mahony_ahrs.config.filter_config import (
    AhrsConfig,
    FilterConfig,
    LoggingConfig,
    load_config,
    create_default_config,
    configure_logging
)


class TestFilterConfig:
    """FilterConfig 테스트"""

    def test_defaults(self):
        config = FilterConfig()
        assert config.sample_interval_ms == 10.0
        assert config.proportional_gain == 1.0
        assert config.integral_gain == 0.0
        assert config.sample_frequency == pytest.approx(100.0)

    @pytest.mark.parametrize("kwargs", [
        {'sample_interval_ms': 0.0},
        {'sample_interval_ms': -1.0},
        {'proportional_gain': -0.5},
        {'integral_gain': -0.1},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            FilterConfig(**kwargs).validate()


class TestLoadConfig:
    """YAML 설정 로드 테스트"""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "ahrs.yaml"
        config = AhrsConfig(
            filter=FilterConfig(sample_interval_ms=5.0, proportional_gain=2.0, integral_gain=0.05),
            logging=LoggingConfig(log_level="DEBUG")
        )
        config.save(str(path))

        loaded = load_config(str(path))
        assert loaded == config

    def test_partial_file(self, tmp_path):
        """누락된 항목은 기본값"""
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({'filter': {'integral_gain': 0.2}}))

        loaded = load_config(str(path))
        assert loaded.filter.integral_gain == 0.2
        assert loaded.filter.sample_interval_ms == 10.0
        assert loaded.logging.log_level == "INFO"

    def test_missing_file(self, tmp_path, caplog):
        """파일이 없으면 경고 후 기본값"""
        with caplog.at_level(logging.WARNING):
            loaded = load_config(str(tmp_path / "missing.yaml"))

        assert loaded == AhrsConfig()
        assert "Config file not found" in caplog.text

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == AhrsConfig()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({'filter': {'sample_interval_ms': 0}}))
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "unknown.yaml"
        path.write_text(yaml.dump({'filter': {'beta': 0.1}}))
        with pytest.raises(TypeError):
            load_config(str(path))

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "default.yaml"
        config = create_default_config(str(path))

        assert path.exists()
        assert yaml.safe_load(path.read_text())['filter']['proportional_gain'] == 1.0
        assert config == AhrsConfig()


class TestConfigureLogging:
    """로깅 설정 테스트"""

    def test_file_handler(self, tmp_path, monkeypatch):
        captured = {}

        def fake_basic_config(**kwargs):
            captured.update(kwargs)

        monkeypatch.setattr(logging, 'basicConfig', fake_basic_config)
        configure_logging(LoggingConfig(log_level="debug", log_to_file=True,
                                        log_file=str(tmp_path / "ahrs.log")))

        assert captured['level'] == logging.DEBUG
        assert len(captured['handlers']) == 2

        for handler in captured['handlers']:
            handler.close()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
시스템 설정 테스트
"""

import yaml

from head_attitude.config.system_config import (
    SystemConfig,
    StreamConfig,
    load_config,
    create_default_config
)


class TestSystemConfig:
    """SystemConfig 테스트"""

    def test_defaults(self):
        config = SystemConfig()

        assert config.stream.capabilities is None
        assert config.stream.reference_frame is None
        assert config.stream.channel_size == 64
        assert config.engine.warn_gimbal_lock is True
        assert config.engine.gimbal_lock_threshold_deg == 85.0
        assert config.output.output_format == 'csv'

    def test_to_dict(self):
        d = SystemConfig().to_dict()
        assert set(d) == {'stream', 'engine', 'output'}
        assert d['stream']['poll_interval'] == 0.05

    def test_save_and_load(self, tmp_path):
        config = SystemConfig(stream=StreamConfig(capabilities=0b0111, reference_frame=4))
        config.output.output_format = 'json'
        path = tmp_path / 'config.yaml'

        config.save(str(path))
        loaded = load_config(str(path))

        assert loaded == config

    def test_partial_dict(self):
        config = SystemConfig.from_dict({'engine': {'warn_gimbal_lock': False}, 'output': None})

        assert config.engine.warn_gimbal_lock is False
        assert config.engine.gimbal_lock_threshold_deg == 85.0
        assert config.output.save_results is True


class TestLoadConfig:
    """load_config 테스트"""

    def test_missing_file(self, tmp_path):
        config = load_config(str(tmp_path / 'missing.yaml'))
        assert config == SystemConfig()

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')

        assert load_config(str(path)) == SystemConfig()

    def test_yaml_values(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.dump({'stream': {'capabilities': 5, 'channel_size': 8}}))

        config = load_config(str(path))

        assert config.stream.capabilities == 5
        assert config.stream.channel_size == 8

    def test_create_default_config(self, tmp_path):
        path = tmp_path / 'default.yaml'
        config = create_default_config(str(path))

        assert path.exists()
        assert load_config(str(path)) == config

"""
system_config.py - 시스템 설정 관리

head_attitude 시스템의 모든 설정을 통합 관리합니다.

Version: 1.0
Author: FurSys AI Team
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class StreamConfig:
    """모션 스트림 설정"""
    # 기기 기능 비트마스크 (None이면 조회 불가로 간주)
    capabilities: Optional[int] = None

    # 활성화할 기준 좌표계 비트 (None이면 기기 기본값)
    reference_frame: Optional[int] = None

    # 디스패처 채널
    channel_size: int = 64
    poll_interval: float = 0.05  # 초


@dataclass
class EngineConfig:
    """상대 자세 엔진 설정"""
    warn_gimbal_lock: bool = True
    gimbal_lock_threshold_deg: float = 85.0  # 도 (±90°에서 ±5° 이내)


@dataclass
class OutputConfig:
    """출력 설정"""
    # 저장 옵션
    save_results: bool = True
    output_dir: str = "output"
    output_format: str = "csv"  # "csv" or "json"

    # 로깅
    log_level: str = "INFO"
    log_to_file: bool = False


@dataclass
class SystemConfig:
    """head_attitude 시스템 전체 설정"""
    stream: StreamConfig = field(default_factory=StreamConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stream': dict(self.stream.__dict__),
            'engine': dict(self.engine.__dict__),
            'output': dict(self.output.__dict__)
        }

    def save(self, filepath: str):
        """설정을 YAML 파일로 저장"""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

        logger.info(f"Config saved to {filepath}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SystemConfig':
        """딕셔너리에서 설정 생성"""
        return cls(
            stream=StreamConfig(**(d.get('stream') or {})),
            engine=EngineConfig(**(d.get('engine') or {})),
            output=OutputConfig(**(d.get('output') or {}))
        )


def load_config(filepath: str) -> SystemConfig:
    """
    YAML 파일에서 설정 로드

    Args:
        filepath: 설정 파일 경로

    Returns:
        SystemConfig: 로드된 설정 (파일이 없으면 기본값)
    """
    path = Path(filepath)

    if not path.exists():
        logger.warning(f"Config file not found: {filepath}, using defaults")
        return SystemConfig()

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return SystemConfig()

    return SystemConfig.from_dict(config_dict)


def create_default_config(save_path: Optional[str] = None) -> SystemConfig:
    """
    기본 설정 생성

    Args:
        save_path: 저장 경로 (None이면 저장 안함)

    Returns:
        SystemConfig: 기본 설정
    """
    config = SystemConfig()

    if save_path:
        config.save(save_path)

    return config

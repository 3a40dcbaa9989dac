"""
engine 모듈 - 상대 자세 계산

두 모션 소스의 최신 샘플을 결합(latest-value join)하여
상대 자세를 계산하고, 두 입력 채널을 단일 소비자로 직렬화합니다.
"""

from .relative_attitude_engine import (
    RelativeAttitudeEngine,
    RelativeAttitude,
    ResultListener
)
from .dispatcher import MotionDispatcher

__all__ = [
    'RelativeAttitudeEngine',
    'RelativeAttitude',
    'ResultListener',
    'MotionDispatcher',
]

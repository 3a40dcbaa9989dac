"""
input 모듈 - 텔레메트리 입력 처리

전송 계층 레코드 디코딩 및 기록된 텔레메트리 재생을 지원합니다.
"""

from .decoder import (
    MalformedSampleError,
    DecodeResult,
    decode_motion_sample,
    try_decode
)
from .telemetry_loader import TelemetryLoader, TelemetryEvent

__all__ = [
    'MalformedSampleError',
    'DecodeResult',
    'decode_motion_sample',
    'try_decode',
    'TelemetryLoader',
    'TelemetryEvent',
]

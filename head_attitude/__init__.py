"""
head_attitude - 헤드폰/휴대 기기 상대 자세 계산 시스템

주요 특징:
- 두 모션 소스의 원시 텔레메트리 디코딩 및 검증
- 쿼터니언 기반 상대 자세 (오일러 각도 동시 제공)
- 기준 좌표계 비트마스크 조회 및 대체 규칙
- 두 입력 채널 -> 단일 소비자 디스패처

Version: 1.0
Author: FurSys AI Team
"""

__version__ = "1.0.0"
__author__ = "FurSys AI Team"

from .measurement.quaternion import (
    Quaternion,
    EulerAngles,
    conjugate,
    multiply,
    to_euler,
    compute_relative
)

from .measurement.motion_sample import (
    MotionSample,
    Attitude,
    SensorLocation
)

from .frames.reference_frame import (
    ReferenceFrame,
    UnsupportedFrameRequest,
    is_available,
    names_of
)

from .input.decoder import (
    MalformedSampleError,
    decode_motion_sample,
    try_decode
)

from .engine.relative_attitude_engine import (
    RelativeAttitudeEngine,
    RelativeAttitude
)

from .engine.dispatcher import MotionDispatcher

__all__ = [
    # Quaternion Algebra
    'Quaternion',
    'EulerAngles',
    'conjugate',
    'multiply',
    'to_euler',
    'compute_relative',
    # Motion Sample
    'MotionSample',
    'Attitude',
    'SensorLocation',
    # Reference Frames
    'ReferenceFrame',
    'UnsupportedFrameRequest',
    'is_available',
    'names_of',
    # Decoder
    'MalformedSampleError',
    'decode_motion_sample',
    'try_decode',
    # Engine
    'RelativeAttitudeEngine',
    'RelativeAttitude',
    'MotionDispatcher',
]

"""
measurement 모듈 - 쿼터니언 대수 및 모션 샘플 모델

주요 기능:
- 켤레 / 해밀턴 곱 / 오일러 변환
- 상대 자세 계산 (primary * conjugate(secondary))
- 짐벌 락 경계 처리
- 불변 모션 샘플 값 타입
"""

from .quaternion import (
    Quaternion,
    EulerAngles,
    conjugate,
    multiply,
    to_euler,
    compute_relative,
    is_near_gimbal_lock
)

from .motion_sample import (
    MotionSample,
    Attitude,
    Vector3,
    MagneticField,
    SensorLocation,
    PRIMARY,
    SECONDARY,
    SOURCES
)

__all__ = [
    'Quaternion',
    'EulerAngles',
    'conjugate',
    'multiply',
    'to_euler',
    'compute_relative',
    'is_near_gimbal_lock',
    'MotionSample',
    'Attitude',
    'Vector3',
    'MagneticField',
    'SensorLocation',
    'PRIMARY',
    'SECONDARY',
    'SOURCES',
]

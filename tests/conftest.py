"""
공용 테스트 픽스처
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import pytest

from head_attitude.measurement.quaternion import Quaternion, to_euler


def build_record(quaternion: Quaternion = None, **overrides) -> dict:
    """전송 계층이 보내는 형식의 완전한 텔레메트리 레코드"""
    q = quaternion or Quaternion.identity()
    euler = to_euler(q)
    record = {
        'quaternionX': q.x,
        'quaternionY': q.y,
        'quaternionZ': q.z,
        'quaternionW': q.w,
        'pitch': euler.pitch,
        'roll': euler.roll,
        'yaw': euler.yaw,
        'gravityX': 0.0,
        'gravityY': 0.0,
        'gravityZ': -1.0,
        'accelerationX': 0.01,
        'accelerationY': -0.02,
        'accelerationZ': 0.03,
        'rotationRateX': 0.1,
        'rotationRateY': 0.2,
        'rotationRateZ': 0.3,
        'magneticFieldX': 20.5,
        'magneticFieldY': -3.25,
        'magneticFieldZ': 41.0,
        'magneticFieldAccuracy': 2,
        'heading': 123.5,
        'sensorLocation': 0,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record():
    return build_record

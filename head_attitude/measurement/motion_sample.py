"""
motion_sample.py - 모션 샘플 데이터 모델

헤드폰/휴대 기기 모션 센서에서 디코딩된 단일 샘플을 표현합니다.
모든 타입은 불변 값 타입이며 복사로 자유롭게 공유됩니다.

Version: 1.0
Author: FurSys AI Team
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

from .quaternion import Quaternion, EulerAngles

# 모션 소스 이름
PRIMARY = 'primary'      # 헤드폰 (머리 착용 센서)
SECONDARY = 'secondary'  # 휴대 기기
SOURCES = (PRIMARY, SECONDARY)


class SensorLocation(Enum):
    """샘플을 만든 물리 센서의 위치 (CMDeviceMotionSensorLocation 값과 동일)"""
    DEFAULT = 0          # 위치를 지정하지 않는 기기
    HEADPHONE_LEFT = 1   # 왼쪽 이어버드/이어컵
    HEADPHONE_RIGHT = 2  # 오른쪽 이어버드/이어컵

    @property
    def description(self) -> str:
        return _LOCATION_DESCRIPTIONS[self]

    @classmethod
    def from_value(cls, value: int) -> 'SensorLocation':
        """
        정수 코드에서 생성

        알 수 없는 코드는 실패 대신 DEFAULT로 매핑합니다 (신규 기기 호환).
        """
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


_LOCATION_DESCRIPTIONS = {
    SensorLocation.DEFAULT: 'Default',
    SensorLocation.HEADPHONE_LEFT: 'Left AirPod',
    SensorLocation.HEADPHONE_RIGHT: 'Right AirPod',
}


@dataclass(frozen=True)
class Vector3:
    """3축 벡터 (단위는 필드에 따라 다름)"""
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class MagneticField:
    """
    자기장 (µT) 및 보정 정확도

    accuracy < 0 은 오류가 아닌 "미보정" 신호입니다.
    """
    field: Vector3
    accuracy: float

    @property
    def is_calibrated(self) -> bool:
        return self.accuracy >= 0


@dataclass(frozen=True)
class Attitude:
    """
    자세 (radians) 및 원본 쿼터니언

    pitch/roll/yaw는 편의용 투영이며 quaternion이 기준값입니다.
    """
    pitch: float
    roll: float
    yaw: float
    quaternion: Quaternion

    @property
    def euler(self) -> EulerAngles:
        return EulerAngles(roll=self.roll, pitch=self.pitch, yaw=self.yaw)


@dataclass(frozen=True)
class MotionSample:
    """
    디코딩된 모션 샘플

    Attributes:
        attitude: 자세 (쿼터니언 + 오일러)
        gravity: 중력 벡터 (g)
        user_acceleration: 사용자 가속도 (g, 중력 제외)
        rotation_rate: 회전 속도 (rad/s)
        magnetic_field: 자기장 (µT) + 보정 정확도
        heading: 방위 (도, 0~360, 절대 기준 좌표계에서만 의미 있음)
        sensor_location: 샘플을 만든 센서 위치
    """
    attitude: Attitude
    gravity: Vector3
    user_acceleration: Vector3
    rotation_rate: Vector3
    magnetic_field: MagneticField
    heading: float
    sensor_location: SensorLocation

    @property
    def quaternion(self) -> Quaternion:
        return self.attitude.quaternion

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (텔레메트리 필드명 사용)"""
        q = self.attitude.quaternion
        return {
            'quaternionX': q.x,
            'quaternionY': q.y,
            'quaternionZ': q.z,
            'quaternionW': q.w,
            'pitch': self.attitude.pitch,
            'roll': self.attitude.roll,
            'yaw': self.attitude.yaw,
            'gravityX': self.gravity.x,
            'gravityY': self.gravity.y,
            'gravityZ': self.gravity.z,
            'accelerationX': self.user_acceleration.x,
            'accelerationY': self.user_acceleration.y,
            'accelerationZ': self.user_acceleration.z,
            'rotationRateX': self.rotation_rate.x,
            'rotationRateY': self.rotation_rate.y,
            'rotationRateZ': self.rotation_rate.z,
            'magneticFieldX': self.magnetic_field.field.x,
            'magneticFieldY': self.magnetic_field.field.y,
            'magneticFieldZ': self.magnetic_field.field.z,
            'magneticFieldAccuracy': self.magnetic_field.accuracy,
            'heading': self.heading,
            'sensorLocation': self.sensor_location.value,
        }

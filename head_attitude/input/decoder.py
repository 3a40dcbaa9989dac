"""
decoder.py - 모션 샘플 디코더

전송 계층이 넘겨주는 타입 없는 레코드(필드명 -> 숫자/문자열)를
검증된 MotionSample로 변환합니다.

- 모든 숫자 필드는 float로 파싱 (반올림/클램핑/단위 변환 없음)
- 필수 필드(쿼터니언 4성분, pitch/roll/yaw) 누락 시 MalformedSampleError
- sensorLocation 미지정 코드는 DEFAULT로 대체
- try_decode는 디코드 경계 밖으로 예외를 던지지 않음

Version: 1.0
Author: FurSys AI Team
"""

import json
from collections.abc import Mapping
from typing import Any, Union
import logging

from ..measurement.quaternion import Quaternion
from ..measurement.motion_sample import (
    MotionSample,
    Attitude,
    Vector3,
    MagneticField,
    SensorLocation
)

logger = logging.getLogger(__name__)

QUATERNION_FIELDS = ('quaternionX', 'quaternionY', 'quaternionZ', 'quaternionW')
ANGLE_FIELDS = ('pitch', 'roll', 'yaw')
REQUIRED_FIELDS = QUATERNION_FIELDS + ANGLE_FIELDS

# magneticFieldAccuracy 미지정 시 "미보정"
UNCALIBRATED_ACCURACY = -1.0

_REQUIRED = object()


class MalformedSampleError(ValueError):
    """
    레코드를 MotionSample로 디코딩할 수 없음

    Attributes:
        field: 문제가 된 필드명
        reason: 실패 사유
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed motion sample: '{field}' {reason}")


DecodeResult = Union[MotionSample, MalformedSampleError]


def _parse_float(record: Mapping[str, Any], field: str, default: Any = _REQUIRED) -> float:
    value = record.get(field)
    if value is None:
        if default is _REQUIRED:
            raise MalformedSampleError(field, "is missing")
        return default

    # bool은 int의 하위 타입이지만 숫자 값으로 취급하지 않음
    if isinstance(value, bool):
        raise MalformedSampleError(field, f"is not numeric ({value!r})")

    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        raise MalformedSampleError(field, f"is not numeric ({value!r})") from None


def _parse_vector(record: Mapping[str, Any], prefix: str) -> Vector3:
    return Vector3(
        x=_parse_float(record, f"{prefix}X", 0.0),
        y=_parse_float(record, f"{prefix}Y", 0.0),
        z=_parse_float(record, f"{prefix}Z", 0.0)
    )


def _parse_sensor_location(record: Mapping[str, Any]) -> SensorLocation:
    try:
        code = _parse_float(record, 'sensorLocation', 0.0)
    except MalformedSampleError:
        return SensorLocation.DEFAULT
    if not code.is_integer():
        return SensorLocation.DEFAULT
    return SensorLocation.from_value(int(code))


def _as_mapping(record: Any) -> Mapping[str, Any]:
    """JSON 텍스트 또는 매핑을 매핑으로 변환"""
    if isinstance(record, (str, bytes, bytearray)):
        try:
            record = json.loads(record)
        except ValueError as e:
            raise MalformedSampleError('<record>', f"is not valid JSON ({e})") from None

    if not isinstance(record, Mapping):
        raise MalformedSampleError('<record>', f"is not a mapping ({type(record).__name__})")

    return record


def decode_motion_sample(record: Any) -> MotionSample:
    """
    레코드를 MotionSample로 디코딩

    Args:
        record: 필드명 -> 값 매핑 (또는 같은 내용의 JSON 텍스트)

    Returns:
        MotionSample

    Raises:
        MalformedSampleError: 필수 필드 누락, 숫자가 아닌 값, 영 쿼터니언
    """
    record = _as_mapping(record)

    quaternion = Quaternion(
        x=_parse_float(record, 'quaternionX'),
        y=_parse_float(record, 'quaternionY'),
        z=_parse_float(record, 'quaternionZ'),
        w=_parse_float(record, 'quaternionW')
    )
    if quaternion.is_zero:
        raise MalformedSampleError('quaternion', "has zero magnitude")

    attitude = Attitude(
        pitch=_parse_float(record, 'pitch'),
        roll=_parse_float(record, 'roll'),
        yaw=_parse_float(record, 'yaw'),
        quaternion=quaternion
    )

    magnetic_field = MagneticField(
        field=_parse_vector(record, 'magneticField'),
        accuracy=_parse_float(record, 'magneticFieldAccuracy', UNCALIBRATED_ACCURACY)
    )

    return MotionSample(
        attitude=attitude,
        gravity=_parse_vector(record, 'gravity'),
        user_acceleration=_parse_vector(record, 'acceleration'),
        rotation_rate=_parse_vector(record, 'rotationRate'),
        magnetic_field=magnetic_field,
        heading=_parse_float(record, 'heading', 0.0),
        sensor_location=_parse_sensor_location(record)
    )


def try_decode(record: Any) -> DecodeResult:
    """
    디코드 경계 함수

    실패해도 예외를 던지지 않고 MalformedSampleError 인스턴스를 반환합니다.

    Example:
        >>> result = try_decode(event)
        >>> if isinstance(result, MalformedSampleError):
        ...     report(result)
    """
    try:
        return decode_motion_sample(record)
    except MalformedSampleError as e:
        logger.debug(f"Decode failed: {e}")
        return e

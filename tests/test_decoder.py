"""
모션 샘플 디코더 테스트
"""

import json

import numpy as np
import pytest

from head_attitude.input.decoder import (
    MalformedSampleError,
    decode_motion_sample,
    try_decode
)
from head_attitude.measurement.motion_sample import MotionSample, SensorLocation
from head_attitude.measurement.quaternion import Quaternion


class TestDecodeMotionSample:
    """정상 레코드 디코딩 테스트"""

    def test_full_record(self, make_record):
        q = Quaternion.from_euler(roll=0.1, pitch=0.2, yaw=0.3)
        sample = decode_motion_sample(make_record(q))

        assert isinstance(sample, MotionSample)
        assert sample.quaternion == q
        assert sample.attitude.roll == pytest.approx(0.1)
        assert sample.attitude.pitch == pytest.approx(0.2)
        assert sample.attitude.yaw == pytest.approx(0.3)
        np.testing.assert_array_equal(sample.gravity.to_array(), [0.0, 0.0, -1.0])
        np.testing.assert_array_equal(sample.user_acceleration.to_array(), [0.01, -0.02, 0.03])
        np.testing.assert_array_equal(sample.rotation_rate.to_array(), [0.1, 0.2, 0.3])
        np.testing.assert_array_equal(sample.magnetic_field.field.to_array(), [20.5, -3.25, 41.0])
        assert sample.magnetic_field.accuracy == 2.0
        assert sample.magnetic_field.is_calibrated
        assert sample.heading == 123.5
        assert sample.sensor_location is SensorLocation.DEFAULT

    def test_values_not_rounded(self, make_record):
        sample = decode_motion_sample(make_record(heading=359.123456789012345, gravityX=1e-12))
        assert sample.heading == 359.123456789012345
        assert sample.gravity.x == 1e-12

    def test_numeric_strings(self, make_record):
        sample = decode_motion_sample(make_record(quaternionW='1.0', heading='42'))
        assert sample.quaternion.w == 1.0
        assert sample.heading == 42.0

    def test_json_text(self, make_record):
        text = json.dumps(make_record(sensorLocation=2))
        sample = decode_motion_sample(text)
        assert sample.sensor_location is SensorLocation.HEADPHONE_RIGHT

    def test_optional_fields_default(self):
        record = {
            'quaternionX': 0.0, 'quaternionY': 0.0, 'quaternionZ': 0.0, 'quaternionW': 1.0,
            'pitch': 0.0, 'roll': 0.0, 'yaw': 0.0,
        }
        sample = decode_motion_sample(record)

        np.testing.assert_array_equal(sample.gravity.to_array(), [0.0, 0.0, 0.0])
        assert sample.magnetic_field.accuracy == -1.0
        assert not sample.magnetic_field.is_calibrated
        assert sample.heading == 0.0
        assert sample.sensor_location is SensorLocation.DEFAULT

    def test_to_dict_uses_wire_names(self, make_record):
        record = make_record(sensorLocation=1)
        sample = decode_motion_sample(record)
        assert sample.to_dict() == pytest.approx({k: float(v) for k, v in record.items()})


class TestSensorLocation:
    """센서 위치 매핑 테스트"""

    @pytest.mark.parametrize('code, expected', [
        (0, SensorLocation.DEFAULT),
        (1, SensorLocation.HEADPHONE_LEFT),
        (2, SensorLocation.HEADPHONE_RIGHT),
        (2.0, SensorLocation.HEADPHONE_RIGHT),
    ])
    def test_known_codes(self, make_record, code, expected):
        assert decode_motion_sample(make_record(sensorLocation=code)).sensor_location is expected

    def test_unknown_code_maps_to_default(self, make_record):
        sample = decode_motion_sample(make_record(sensorLocation=99))
        assert sample.sensor_location is SensorLocation.DEFAULT

    def test_fractional_code_maps_to_default(self, make_record):
        sample = decode_motion_sample(make_record(sensorLocation=1.5))
        assert sample.sensor_location is SensorLocation.DEFAULT

    @pytest.mark.parametrize('code', ['left', True, [1]])
    def test_non_numeric_code_maps_to_default(self, make_record, code):
        sample = decode_motion_sample(make_record(sensorLocation=code))
        assert sample.sensor_location is SensorLocation.DEFAULT

    def test_description(self):
        assert SensorLocation.HEADPHONE_LEFT.description == 'Left AirPod'
        assert SensorLocation.from_value(-3) is SensorLocation.DEFAULT


class TestMalformed:
    """잘못된 레코드 테스트"""

    def test_missing_quaternion_w(self, make_record):
        record = make_record()
        del record['quaternionW']

        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(record)

        assert exc_info.value.field == 'quaternionW'
        assert 'quaternionW' in str(exc_info.value)

    @pytest.mark.parametrize('field', ['quaternionX', 'pitch', 'roll', 'yaw'])
    def test_missing_required(self, make_record, field):
        record = make_record()
        del record[field]

        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(record)

        assert exc_info.value.field == field

    def test_null_required(self, make_record):
        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(make_record(yaw=None))
        assert exc_info.value.field == 'yaw'

    def test_non_numeric(self, make_record):
        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(make_record(gravityX='abc'))
        assert exc_info.value.field == 'gravityX'

    def test_bool_is_not_numeric(self, make_record):
        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(make_record(heading=True))
        assert exc_info.value.field == 'heading'

    def test_zero_quaternion(self, make_record):
        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample(make_record(Quaternion(x=0, y=0, z=0, w=0)))
        assert exc_info.value.field == 'quaternion'

    def test_negative_accuracy_is_valid(self, make_record):
        sample = decode_motion_sample(make_record(magneticFieldAccuracy=-1))
        assert sample.magnetic_field.accuracy == -1.0
        assert not sample.magnetic_field.is_calibrated

    def test_invalid_json(self):
        with pytest.raises(MalformedSampleError) as exc_info:
            decode_motion_sample('{not json')
        assert exc_info.value.field == '<record>'

    def test_not_a_mapping(self):
        with pytest.raises(MalformedSampleError):
            decode_motion_sample([1, 2, 3])

    def test_is_value_error(self):
        assert issubclass(MalformedSampleError, ValueError)


class TestTryDecode:
    """디코드 경계 테스트"""

    def test_returns_sample(self, make_record):
        assert isinstance(try_decode(make_record()), MotionSample)

    def test_returns_error_instead_of_raising(self, make_record):
        record = make_record()
        del record['quaternionW']

        result = try_decode(record)

        assert isinstance(result, MalformedSampleError)
        assert result.field == 'quaternionW'

    def test_out_of_range_number_in_json(self, make_record):
        text = json.dumps(make_record()).replace('"heading": 123.5', '"heading": ' + '9' * 400)

        result = try_decode(text)

        assert isinstance(result, MalformedSampleError)
        assert result.field == 'heading'

    def test_out_of_range_integer(self, make_record):
        result = try_decode(make_record(quaternionX=10 ** 400))

        assert isinstance(result, MalformedSampleError)
        assert result.field == 'quaternionX'

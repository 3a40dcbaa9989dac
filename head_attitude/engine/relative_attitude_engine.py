"""
relative_attitude_engine.py - 상대 자세 엔진

두 모션 소스(primary: 헤드폰, secondary: 휴대 기기)의 최신 샘플을 보관하고,
어느 한쪽이 갱신될 때마다 상대 자세를 다시 계산합니다 (latest-value join).

    relative = primary.q * conjugate(secondary.q)

즉 "secondary 좌표계에서 본 primary의 자세"입니다.

호출자 계약:
    두 소스는 같은 기준 좌표계(ReferenceFrame)에 대해 자세를 보고해야 합니다.
    엔진은 이를 검증하지 않으며, 좌표계가 다르면 수치적으로는 유효하지만
    물리적으로 의미 없는 결과가 나옵니다.

Version: 1.0
Author: FurSys AI Team
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

from ..measurement.quaternion import (
    Quaternion,
    EulerAngles,
    compute_relative,
    to_euler,
    is_near_gimbal_lock
)
from ..measurement.motion_sample import MotionSample, SensorLocation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelativeAttitude:
    """
    상대 자세 계산 결과

    Attributes:
        quaternion: 상대 쿼터니언 (기준값)
        euler: 상대 오일러 각도 (radians)
        sequence: 엔진이 내보낸 순번 (1부터)
        primary_location: primary 샘플의 센서 위치
        secondary_location: secondary 샘플의 센서 위치
        gimbal_lock_warning: 상대 pitch가 짐벌 락에 근접
    """
    quaternion: Quaternion
    euler: EulerAngles
    sequence: int
    primary_location: SensorLocation
    secondary_location: SensorLocation
    gimbal_lock_warning: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'sequence': self.sequence,
            'quaternion': {
                'x': self.quaternion.x,
                'y': self.quaternion.y,
                'z': self.quaternion.z,
                'w': self.quaternion.w
            },
            'euler': {
                'roll': self.euler.roll,
                'pitch': self.euler.pitch,
                'yaw': self.euler.yaw
            },
            'angle_deg': self.quaternion.rotation_angle,
            'primary_location': self.primary_location.name,
            'secondary_location': self.secondary_location.name,
            'gimbal_lock_warning': self.gimbal_lock_warning
        }


ResultListener = Callable[[RelativeAttitude], None]


class RelativeAttitudeEngine:
    """
    상대 자세 엔진

    두 슬롯(latest_primary, latest_secondary)은 update_* 메서드로만 변경됩니다.
    "슬롯 쓰기 + 재계산 + 결과 전달"은 하나의 락 안에서 수행되므로
    두 소스가 서로 다른 스레드에서 호출해도 겹치지 않습니다.
    리스너는 락 안에서 호출되므로 같은 엔진을 다시 호출하면 안 됩니다.

    Example:
        >>> engine = RelativeAttitudeEngine()
        >>> engine.add_listener(lambda r: print(r.euler))
        >>> engine.update_primary(airpods_sample)    # 출력 없음
        >>> engine.update_secondary(phone_sample)    # 상대 자세 1회 출력
    """

    def __init__(
        self,
        warn_gimbal_lock: bool = True,
        gimbal_lock_threshold_deg: float = 85.0
    ):
        """
        Args:
            warn_gimbal_lock: 상대 pitch 짐벌 락 근접 경고 활성화
            gimbal_lock_threshold_deg: 경고 기준 |pitch| (도)
        """
        self.warn_gimbal_lock = warn_gimbal_lock
        self.gimbal_lock_threshold_deg = gimbal_lock_threshold_deg

        self._lock = threading.Lock()
        self._latest_primary: Optional[MotionSample] = None
        self._latest_secondary: Optional[MotionSample] = None
        self._listeners: List[ResultListener] = []
        self._sequence = 0

    def add_listener(self, listener: ResultListener):
        """결과 리스너 등록"""
        self._listeners.append(listener)

    def remove_listener(self, listener: ResultListener):
        self._listeners.remove(listener)

    def update_primary(self, sample: MotionSample) -> Optional[RelativeAttitude]:
        """primary 슬롯 교체 후 재계산"""
        with self._lock:
            self._latest_primary = sample
            return self._recompute_locked()

    def update_secondary(self, sample: MotionSample) -> Optional[RelativeAttitude]:
        """secondary 슬롯 교체 후 재계산"""
        with self._lock:
            self._latest_secondary = sample
            return self._recompute_locked()

    def recompute(self) -> Optional[RelativeAttitude]:
        """
        현재 슬롯으로 상대 자세 계산

        한쪽 슬롯이라도 비어 있으면 아무것도 내보내지 않습니다 (오류 아님).

        Returns:
            내보낸 RelativeAttitude, 출력이 없으면 None
        """
        with self._lock:
            return self._recompute_locked()

    def _recompute_locked(self) -> Optional[RelativeAttitude]:
        primary = self._latest_primary
        secondary = self._latest_secondary

        if primary is None or secondary is None:
            return None

        relative = compute_relative(primary.quaternion, secondary.quaternion)
        euler = to_euler(relative)

        gimbal_lock = False
        if self.warn_gimbal_lock and is_near_gimbal_lock(euler.pitch, self.gimbal_lock_threshold_deg):
            gimbal_lock = True
            logger.warning(f"Relative attitude approaching gimbal lock (pitch={euler.pitch:.4f} rad)")

        self._sequence += 1
        result = RelativeAttitude(
            quaternion=relative,
            euler=euler,
            sequence=self._sequence,
            primary_location=primary.sensor_location,
            secondary_location=secondary.sensor_location,
            gimbal_lock_warning=gimbal_lock
        )

        for listener in list(self._listeners):
            listener(result)

        return result

    def reset(self):
        """두 슬롯 비우기"""
        with self._lock:
            self._latest_primary = None
            self._latest_secondary = None

        logger.info("RelativeAttitudeEngine reset")

    @property
    def latest_primary(self) -> Optional[MotionSample]:
        return self._latest_primary

    @property
    def latest_secondary(self) -> Optional[MotionSample]:
        return self._latest_secondary

    @property
    def is_ready(self) -> bool:
        """두 슬롯이 모두 채워졌는지"""
        return self._latest_primary is not None and self._latest_secondary is not None

    @property
    def emitted_count(self) -> int:
        return self._sequence

"""
reference_frame.py - 자세 기준 좌표계 카탈로그

기기가 지원하는 기준 좌표계를 비트 플래그 집합으로 표현합니다.
값은 Apple CoreMotion의 CMAttitudeReferenceFrame과 동일합니다.

- 기능 비트마스크: 기기가 지원하는 좌표계 집합 (조회 시점에 고정, 읽기 전용)
- 스트림 요청: 활성화할 좌표계 하나 (없으면 기기 기본값)

Version: 1.0
Author: FurSys AI Team
"""

from enum import IntFlag
from typing import Dict, List, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)


class ReferenceFrame(IntFlag):
    """자세 기준 좌표계 (비트 하나당 좌표계 하나)"""
    # Z축 수직, X축은 수평면의 임의 방향
    X_ARBITRARY_Z_VERTICAL = 1 << 0
    # 위와 같되 자력계로 장기 yaw 정확도 보정
    X_ARBITRARY_CORRECTED_Z_VERTICAL = 1 << 1
    # Z축 수직, X축은 자북
    X_MAGNETIC_NORTH_Z_VERTICAL = 1 << 2
    # Z축 수직, X축은 진북
    X_TRUE_NORTH_Z_VERTICAL = 1 << 3


# 이름 나열 순서
CANONICAL_ORDER: Tuple[Tuple[ReferenceFrame, str], ...] = (
    (ReferenceFrame.X_ARBITRARY_Z_VERTICAL, 'xArbitraryZVertical'),
    (ReferenceFrame.X_ARBITRARY_CORRECTED_Z_VERTICAL, 'xArbitraryCorrectedZVertical'),
    (ReferenceFrame.X_MAGNETIC_NORTH_Z_VERTICAL, 'xMagneticNorthZVertical'),
    (ReferenceFrame.X_TRUE_NORTH_Z_VERTICAL, 'xTrueNorthZVertical'),
)

# 알려진 모든 좌표계 비트
ALL_FRAMES = sum(int(frame) for frame, _ in CANONICAL_ORDER)

# 기본 선택 우선순위: 자북 > 보정된 임의 방향 > 임의 방향
PREFERENCE_ORDER: Tuple[ReferenceFrame, ...] = (
    ReferenceFrame.X_MAGNETIC_NORTH_Z_VERTICAL,
    ReferenceFrame.X_ARBITRARY_CORRECTED_Z_VERTICAL,
    ReferenceFrame.X_ARBITRARY_Z_VERTICAL,
)


class UnsupportedFrameRequest(ValueError):
    """요청한 좌표계가 기능 비트마스크에 없음"""

    def __init__(self, bitmask: int, frame: int):
        self.bitmask = bitmask
        self.frame = frame
        super().__init__(
            f"Reference frame {frame} is not available in bitmask {bitmask:#06b}"
        )


def is_available(bitmask: int, frame: Union[int, ReferenceFrame]) -> bool:
    """frame의 비트가 bitmask에 설정되어 있으면 True"""
    return (int(bitmask) & int(frame)) != 0


def names_of(bitmask: int) -> List[str]:
    """
    비트마스크에 포함된 좌표계 이름 목록

    CANONICAL_ORDER 순서로 나열하며, 알 수 없는 비트는 무시합니다.

    Example:
        >>> names_of(0b0101)
        ['xArbitraryZVertical', 'xMagneticNorthZVertical']
    """
    return [name for frame, name in CANONICAL_ORDER if is_available(bitmask, frame)]


def frame_name(frame: Union[int, ReferenceFrame]) -> str:
    """단일 좌표계의 이름"""
    for known, name in CANONICAL_ORDER:
        if int(known) == int(frame):
            return name
    raise ValueError(f"Unknown reference frame: {frame}")


def require_frame(bitmask: int, frame: int) -> ReferenceFrame:
    """
    스트림 요청 검증

    요청은 알려진 비트 정확히 하나여야 하며 bitmask에 포함되어야 합니다.

    Raises:
        UnsupportedFrameRequest: 요청을 만족할 수 없을 때
    """
    known = {int(f) for f, _ in CANONICAL_ORDER}
    if int(frame) not in known or not is_available(bitmask, frame):
        raise UnsupportedFrameRequest(int(bitmask), int(frame))
    return ReferenceFrame(int(frame))


def resolve_reference_frame(
    bitmask: int,
    requested: Optional[int] = None
) -> Optional[ReferenceFrame]:
    """
    활성화할 좌표계 결정

    지원되지 않는 요청은 스트림을 실패시키지 않고 기기 기본값(None)으로 대체합니다.

    Args:
        bitmask: 기기 기능 비트마스크
        requested: 요청 좌표계 비트 (None이면 기기 기본값)

    Returns:
        활성화할 ReferenceFrame, 기기 기본값이면 None
    """
    if requested is None:
        return None

    try:
        return require_frame(bitmask, requested)
    except UnsupportedFrameRequest as e:
        logger.warning(f"{e}; falling back to device default frame")
        return None


def preferred_frame(bitmask: int) -> Optional[ReferenceFrame]:
    """PREFERENCE_ORDER에서 사용 가능한 첫 번째 좌표계 (없으면 None)"""
    for frame in PREFERENCE_ORDER:
        if is_available(bitmask, frame):
            return frame
    return None


def build_stream_arguments(frame: Optional[int]) -> Optional[Dict[str, int]]:
    """스트림 활성화 요청 인자 ({'referenceFrame': int}, 기본값이면 None)"""
    if frame is None:
        return None
    return {'referenceFrame': int(frame)}

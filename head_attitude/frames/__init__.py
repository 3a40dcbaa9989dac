"""
frames 모듈 - 자세 기준 좌표계 카탈로그
"""

from .reference_frame import (
    ReferenceFrame,
    UnsupportedFrameRequest,
    CANONICAL_ORDER,
    ALL_FRAMES,
    is_available,
    names_of,
    frame_name,
    require_frame,
    resolve_reference_frame,
    preferred_frame,
    build_stream_arguments
)

__all__ = [
    'ReferenceFrame',
    'UnsupportedFrameRequest',
    'CANONICAL_ORDER',
    'ALL_FRAMES',
    'is_available',
    'names_of',
    'frame_name',
    'require_frame',
    'resolve_reference_frame',
    'preferred_frame',
    'build_stream_arguments',
]

"""
telemetry_loader.py - 기록된 텔레메트리 로더

두 모션 소스의 이벤트를 기록한 파일(CSV / JSONL / JSON)을 읽어
시간 순서의 이벤트 스트림으로 재생합니다.

파일 형식:
- source 컬럼: 'primary' (헤드폰) 또는 'secondary' (휴대 기기)
- timestamp 컬럼 (선택): 없으면 행 순서를 그대로 사용
- 나머지 컬럼: 텔레메트리 필드 (quaternionX, pitch, gravityX, ...)

Version: 1.0
Author: FurSys AI Team
"""

import pandas as pd
from dataclasses import dataclass
from typing import Any, Dict, Iterator
from pathlib import Path
import logging

from ..measurement.motion_sample import PRIMARY, SECONDARY, SOURCES

logger = logging.getLogger(__name__)

_META_COLUMNS = ('source', 'timestamp')


@dataclass(frozen=True)
class TelemetryEvent:
    """기록된 단일 텔레메트리 이벤트"""
    source: str
    timestamp: float
    record: Dict[str, Any]


class TelemetryLoader:
    """
    기록된 텔레메트리 재생 로더

    Example:
        >>> loader = TelemetryLoader("recordings/session_01.csv")
        >>> for event in loader:
        ...     system.process_event(event.source, event.record)
    """

    def __init__(self, path: str):
        self.path = Path(path)

        if not self.path.exists():
            raise FileNotFoundError(f"Telemetry file not found: {path}")

        self._df = self._read_frame()
        self._normalize()

        logger.info(
            f"TelemetryLoader: {len(self)} events "
            f"(primary={self.source_counts.get(PRIMARY, 0)}, "
            f"secondary={self.source_counts.get(SECONDARY, 0)})"
        )

    def _read_frame(self) -> pd.DataFrame:
        """확장자에 따라 파일 읽기"""
        suffix = self.path.suffix.lower()

        if suffix == '.csv':
            return pd.read_csv(self.path)
        if suffix in ('.jsonl', '.ndjson'):
            return pd.read_json(self.path, lines=True)
        if suffix == '.json':
            return pd.read_json(self.path)

        raise ValueError(f"Unsupported telemetry format: {self.path.suffix}")

    def _normalize(self):
        """소스 검증, 타임스탬프 정렬"""
        df = self._df

        if 'source' not in df.columns:
            raise ValueError(f"Telemetry file has no 'source' column: {self.path}")

        df['source'] = df['source'].astype(str).str.strip().str.lower()
        unknown = ~df['source'].isin(SOURCES)
        if unknown.any():
            logger.warning(f"Skipping {int(unknown.sum())} events with unknown source")
            df = df[~unknown]

        if 'timestamp' in df.columns:
            df = df.sort_values('timestamp', kind='stable')
        else:
            df = df.assign(timestamp=range(len(df)))

        self._df = df.reset_index(drop=True)

    @property
    def source_counts(self) -> Dict[str, int]:
        return {str(k): int(v) for k, v in self._df['source'].value_counts().items()}

    def __len__(self) -> int:
        return len(self._df)

    def __getitem__(self, idx: int) -> TelemetryEvent:
        return self.load_event(idx)

    def __iter__(self) -> Iterator[TelemetryEvent]:
        for idx in range(len(self)):
            yield self.load_event(idx)

    def load_event(self, idx: int) -> TelemetryEvent:
        """이벤트 로드 (비어 있는 셀은 레코드에서 제외되어 디코더가 누락으로 처리)"""
        if idx < 0 or idx >= len(self):
            raise IndexError(f"Event index {idx} out of range")

        row = self._df.iloc[idx]
        record = {
            key: value
            for key, value in row.items()
            if key not in _META_COLUMNS and not pd.isna(value)
        }

        return TelemetryEvent(
            source=row['source'],
            timestamp=float(row['timestamp']),
            record=record
        )

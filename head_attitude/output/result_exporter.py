"""
result_exporter.py - 상대 자세 결과 내보내기

엔진이 내보낸 RelativeAttitude 결과를 모아 CSV 또는 JSON으로 저장합니다.
엔진/디스패처 리스너로 등록해 사용합니다.

Version: 1.0
Author: FurSys AI Team
"""

import json
import threading
import time
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from ..engine.relative_attitude_engine import RelativeAttitude

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('csv', 'json')


class ResultExporter:
    """
    상대 자세 결과 수집 및 저장

    Example:
        >>> exporter = ResultExporter("output", output_format="csv")
        >>> system.add_result_listener(exporter.add_result)
        >>> ...
        >>> path = exporter.save()
    """

    def __init__(
        self,
        output_dir: str,
        output_format: str = 'csv',
        prefix: str = 'relative_attitude'
    ):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format}")

        self.output_dir = Path(output_dir)
        self.output_format = output_format
        self.prefix = prefix

        self._results: List[RelativeAttitude] = []
        self._lock = threading.Lock()

    def add_result(self, result: RelativeAttitude):
        """결과 추가 (디스패처 스레드에서 호출될 수 있음)"""
        with self._lock:
            self._results.append(result)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def to_dataframe(self) -> pd.DataFrame:
        """결과를 평탄화된 DataFrame으로 변환 (각도는 radians + degrees)"""
        with self._lock:
            results = list(self._results)

        rows = []
        for r in results:
            euler_deg = r.euler.to_degrees()
            rows.append({
                'sequence': r.sequence,
                'qx': r.quaternion.x,
                'qy': r.quaternion.y,
                'qz': r.quaternion.z,
                'qw': r.quaternion.w,
                'roll': r.euler.roll,
                'pitch': r.euler.pitch,
                'yaw': r.euler.yaw,
                'roll_deg': euler_deg.roll,
                'pitch_deg': euler_deg.pitch,
                'yaw_deg': euler_deg.yaw,
                'angle_deg': r.quaternion.rotation_angle,
                'primary_location': r.primary_location.name,
                'secondary_location': r.secondary_location.name,
                'gimbal_lock_warning': r.gimbal_lock_warning,
            })

        return pd.DataFrame(rows)

    def save(self, filename: Optional[str] = None) -> Path:
        """
        결과 저장

        Args:
            filename: 파일명 (None이면 타임스탬프 기반)

        Returns:
            저장된 파일 경로
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if filename is None:
            ts = time.strftime('%Y%m%d_%H%M%S')
            filename = f"{self.prefix}_{ts}.{self.output_format}"

        filepath = self.output_dir / filename

        if self.output_format == 'csv':
            self.to_dataframe().to_csv(filepath, index=False)
        else:
            with self._lock:
                payload = [r.to_dict() for r in self._results]
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)

        logger.info(f"Saved {len(self)} results to {filepath}")
        return filepath

    def get_summary(self) -> Dict[str, Any]:
        """결과 요약 (각도는 도 단위)"""
        df = self.to_dataframe()
        if df.empty:
            return {'count': 0}

        summary: Dict[str, Any] = {
            'count': int(len(df)),
            'gimbal_lock_warnings': int(df['gimbal_lock_warning'].sum()),
        }
        for column in ('roll_deg', 'pitch_deg', 'yaw_deg', 'angle_deg'):
            values = df[column].to_numpy()
            summary[column] = {
                'mean': float(np.mean(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
            }

        return summary

    def clear(self):
        with self._lock:
            self._results.clear()

"""
dispatcher.py - 두 소스 이벤트 디스패처

두 개의 제한된 입력 채널(primary, secondary)을 단일 소비자 스레드가 처리합니다.
소비자 스레드만 엔진 상태에 접근하므로 공유 가변 상태가 없습니다.

- 채널이 가득 차면 가장 오래된 이벤트를 버림 (최신 값 우선)
- 디코딩/재계산/결과 전달은 소비자 스레드에서 동기적으로 수행
- stop() 외의 정리 작업 불필요 (모든 상태는 값 데이터)

Version: 1.0
Author: FurSys AI Team
"""

import threading
from collections import deque
from typing import Any, Deque, Dict, Optional, Tuple
import logging

from ..measurement.motion_sample import PRIMARY, SECONDARY, SOURCES

logger = logging.getLogger(__name__)


class MotionDispatcher:
    """
    두 채널 -> 단일 소비자 디스패처

    processor는 process_event(source, raw)를 제공해야 합니다
    (RelativeAttitudeSystem).

    Example:
        >>> dispatcher = MotionDispatcher(system, channel_size=64)
        >>> dispatcher.start()
        >>> dispatcher.submit('primary', airpods_event)
        >>> dispatcher.submit('secondary', phone_event)
        >>> dispatcher.stop()
    """

    def __init__(
        self,
        processor: Any,
        channel_size: int = 64,
        poll_interval: float = 0.05
    ):
        """
        Args:
            processor: 이벤트 처리기 (process_event(source, raw))
            channel_size: 채널당 최대 대기 이벤트 수
            poll_interval: 정지 신호 확인 주기 (초)
        """
        if channel_size < 1:
            raise ValueError(f"channel_size must be >= 1, got {channel_size}")

        self.processor = processor
        self.channel_size = channel_size
        self.poll_interval = poll_interval

        self._cond = threading.Condition()
        self._channels: Dict[str, Deque[Any]] = {
            source: deque(maxlen=channel_size) for source in SOURCES
        }
        self._turn = 0
        self._stop_event = threading.Event()
        self._drain = True
        self._thread: Optional[threading.Thread] = None

        self._submitted_count = 0
        self._processed_count = 0
        self._dropped_count = 0

    def start(self):
        """
        소비자 스레드 시작

        Raises:
            RuntimeError: 시간 초과로 정지되지 않은 이전 소비자 스레드가 남아 있을 때
        """
        if self._thread is not None and self._thread.is_alive():
            if self._stop_event.is_set():
                raise RuntimeError("Previous MotionDispatcher consumer is still running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._consume_loop,
            name='MotionDispatcher',
            daemon=True
        )
        self._thread.start()
        logger.info(f"MotionDispatcher started: channel_size={self.channel_size}")

    def stop(self, drain: bool = True, timeout: Optional[float] = None):
        """
        소비자 스레드 정지

        Args:
            drain: True면 대기 중인 이벤트를 모두 처리한 후 정지
            timeout: 스레드 join 대기 시간 (초). 시간 초과 시 스레드는 계속 실행 중으로 남음
        """
        with self._cond:
            self._drain = drain
            self._stop_event.set()
            self._cond.notify_all()

        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning(f"MotionDispatcher consumer did not stop within {timeout}s")
                return
            self._thread = None

        logger.info(
            f"MotionDispatcher stopped: processed={self._processed_count}, "
            f"dropped={self._dropped_count}"
        )

    def submit(self, source: str, raw: Any) -> bool:
        """
        이벤트를 소스 채널에 넣기

        Returns:
            채널이 가득 차서 오래된 이벤트를 버렸으면 False
        """
        if source not in self._channels:
            raise ValueError(f"Unknown motion source: {source}")

        with self._cond:
            channel = self._channels[source]
            accepted = len(channel) < self.channel_size
            if not accepted:
                self._dropped_count += 1
                logger.warning(f"{source} channel full, dropping oldest event")

            channel.append(raw)
            self._submitted_count += 1
            self._cond.notify()

        return accepted

    def submit_primary(self, raw: Any) -> bool:
        return self.submit(PRIMARY, raw)

    def submit_secondary(self, raw: Any) -> bool:
        return self.submit(SECONDARY, raw)

    def _next_event(self) -> Optional[Tuple[str, Any]]:
        """다음 이벤트 (정지 시 None), 두 채널을 번갈아 확인"""
        with self._cond:
            while True:
                if not self._stop_event.is_set() or self._drain:
                    for offset in range(len(SOURCES)):
                        source = SOURCES[(self._turn + offset) % len(SOURCES)]
                        channel = self._channels[source]
                        if channel:
                            self._turn = (self._turn + offset + 1) % len(SOURCES)
                            return source, channel.popleft()

                if self._stop_event.is_set():
                    return None

                self._cond.wait(self.poll_interval)

    def _consume_loop(self):
        """소비자 루프 (백그라운드 스레드)"""
        while True:
            item = self._next_event()
            if item is None:
                break

            source, raw = item
            try:
                self.processor.process_event(source, raw)
            except Exception as e:
                logger.exception(f"Failed to process {source} event: {e}")
            finally:
                self._processed_count += 1

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def pending_count(self) -> int:
        with self._cond:
            return sum(len(channel) for channel in self._channels.values())

    @property
    def submitted_count(self) -> int:
        return self._submitted_count

    @property
    def processed_count(self) -> int:
        return self._processed_count

    @property
    def dropped_count(self) -> int:
        return self._dropped_count

    def __enter__(self) -> 'MotionDispatcher':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

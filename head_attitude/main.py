"""
main.py - head_attitude 통합 시스템

디코더 + 상대 자세 엔진을 통합하여 두 모션 소스의 원시 이벤트로부터
상대 자세를 계산합니다.

파이프라인:
1. 원시 이벤트 디코딩 (MotionSample 또는 MalformedSampleError)
2. 잘못된 이벤트는 버리고 오류 리스너에 전달 (스트림은 계속)
3. 소스별 최신 샘플 갱신 후 상대 자세 재계산
4. 결과 리스너에 RelativeAttitude 전달

Version: 1.0
Author: FurSys AI Team
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .config.system_config import SystemConfig, load_config, create_default_config
from .engine.dispatcher import MotionDispatcher
from .engine.relative_attitude_engine import (
    RelativeAttitudeEngine, RelativeAttitude, ResultListener
)
from .frames.reference_frame import (
    ALL_FRAMES, names_of, frame_name,
    resolve_reference_frame, preferred_frame, build_stream_arguments
)
from .input.decoder import MalformedSampleError, try_decode
from .input.telemetry_loader import TelemetryLoader
from .measurement.motion_sample import PRIMARY, SECONDARY
from .output.result_exporter import ResultExporter

logger = logging.getLogger(__name__)

ErrorListener = Callable[[str, MalformedSampleError], None]


class RelativeAttitudeSystem:
    """
    head_attitude 통합 시스템

    두 소스의 원시 이벤트를 받아 디코딩하고 상대 자세 엔진에 전달합니다.
    process_event는 엔진의 유일한 변경 경로입니다.

    Example:
        >>> system = RelativeAttitudeSystem.from_config(load_config("config.yaml"))
        >>> system.add_result_listener(lambda r: print(r.euler.to_degrees()))
        >>> system.process_event('primary', airpods_json)
        >>> system.process_event('secondary', phone_json)
    """

    def __init__(
        self,
        capabilities: Optional[int] = None,
        reference_frame: Optional[int] = None,
        warn_gimbal_lock: bool = True,
        gimbal_lock_threshold_deg: float = 85.0
    ):
        """
        Args:
            capabilities: 기기 기능 비트마스크 (None이면 알려진 모든 좌표계 허용)
            reference_frame: 요청 좌표계 비트 (None이면 기기 기본값)
            warn_gimbal_lock: 짐벌 락 근접 경고
            gimbal_lock_threshold_deg: 경고 기준 |pitch| (도)
        """
        self.capabilities = capabilities
        self.active_frame = resolve_reference_frame(
            ALL_FRAMES if capabilities is None else capabilities,
            reference_frame
        )

        self.engine = RelativeAttitudeEngine(
            warn_gimbal_lock=warn_gimbal_lock,
            gimbal_lock_threshold_deg=gimbal_lock_threshold_deg
        )

        self._error_listeners: List[ErrorListener] = []
        self._decoded_count = 0
        self._malformed_count = 0

        logger.info(
            f"RelativeAttitudeSystem initialized: frame="
            f"{frame_name(self.active_frame) if self.active_frame else 'device default'}"
        )

    @property
    def stream_arguments(self) -> Optional[Dict[str, int]]:
        """두 소스에 보낼 스트림 활성화 인자"""
        return build_stream_arguments(self.active_frame)

    def add_result_listener(self, listener: ResultListener):
        self.engine.add_listener(listener)

    def add_error_listener(self, listener: ErrorListener):
        self._error_listeners.append(listener)

    def process_event(self, source: str, raw: Any) -> Optional[RelativeAttitude]:
        """
        원시 이벤트 처리

        Args:
            source: 'primary' 또는 'secondary'
            raw: 필드 매핑 또는 JSON 텍스트

        Returns:
            새로 계산된 RelativeAttitude (출력이 없거나 이벤트가 잘못되면 None)
        """
        if source not in (PRIMARY, SECONDARY):
            raise ValueError(f"Unknown motion source: {source}")

        result = try_decode(raw)

        if isinstance(result, MalformedSampleError):
            self._malformed_count += 1
            logger.warning(f"Dropping malformed {source} event: {result}")
            for listener in list(self._error_listeners):
                listener(source, result)
            return None

        self._decoded_count += 1

        if source == PRIMARY:
            return self.engine.update_primary(result)
        return self.engine.update_secondary(result)

    def replay(
        self,
        loader: TelemetryLoader,
        max_events: Optional[int] = None
    ) -> List[RelativeAttitude]:
        """
        기록된 텔레메트리를 순서대로 재생

        Returns:
            계산된 상대 자세 리스트
        """
        total = len(loader) if max_events is None else min(max_events, len(loader))
        results = []

        for i in range(total):
            event = loader.load_event(i)
            result = self.process_event(event.source, event.record)
            if result is not None:
                results.append(result)

        return results

    def reset(self):
        """시스템 리셋"""
        self.engine.reset()
        self._decoded_count = 0
        self._malformed_count = 0

    @property
    def decoded_count(self) -> int:
        return self._decoded_count

    @property
    def malformed_count(self) -> int:
        return self._malformed_count

    @classmethod
    def from_config(cls, config: SystemConfig) -> 'RelativeAttitudeSystem':
        """
        설정에서 시스템 생성

        Args:
            config: SystemConfig

        Returns:
            RelativeAttitudeSystem
        """
        return cls(
            capabilities=config.stream.capabilities,
            reference_frame=config.stream.reference_frame,
            warn_gimbal_lock=config.engine.warn_gimbal_lock,
            gimbal_lock_threshold_deg=config.engine.gimbal_lock_threshold_deg
        )


def _parse_int(value: str) -> int:
    """10진/16진/2진 정수 (예: 5, 0x5, 0b0101)"""
    return int(value, 0)


def _parse_frame_request(value: str):
    """'auto' 또는 좌표계 비트 정수"""
    if value == 'auto':
        return value
    try:
        return _parse_int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid reference frame: {value!r}") from None


def _setup_logging(config: SystemConfig):
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.output.log_to_file:
        log_dir = Path(config.output.output_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / 'head_attitude.log'))

    logging.basicConfig(
        level=getattr(logging, config.output.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def _replay_threaded(
    system: RelativeAttitudeSystem,
    loader: TelemetryLoader,
    config: SystemConfig,
    max_events: Optional[int]
):
    """디스패처를 통한 재생 (두 채널 -> 단일 소비자)"""
    total = len(loader) if max_events is None else min(max_events, len(loader))

    with MotionDispatcher(
        system,
        channel_size=config.stream.channel_size,
        poll_interval=config.stream.poll_interval
    ) as dispatcher:
        for i in range(total):
            event = loader.load_event(i)
            dispatcher.submit(event.source, event.record)

    logger.info(
        f"Dispatcher replay: submitted={dispatcher.submitted_count}, "
        f"dropped={dispatcher.dropped_count}"
    )


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='Run head_attitude relative attitude measurement')

    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='기록된 텔레메트리 파일 (CSV / JSONL / JSON)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='설정 파일 경로'
    )
    parser.add_argument(
        '--output_dir',
        type=str,
        default=None,
        help='출력 디렉토리 (설정값 대체)'
    )
    parser.add_argument(
        '--capabilities',
        type=_parse_int,
        default=None,
        help='기기 기능 비트마스크 (예: 0b0111)'
    )
    parser.add_argument(
        '--reference_frame',
        type=_parse_frame_request,
        default=None,
        help="요청 좌표계 비트 또는 'auto'"
    )
    parser.add_argument(
        '--max_events',
        type=int,
        default=None,
        help='최대 처리 이벤트 수'
    )
    parser.add_argument(
        '--threaded',
        action='store_true',
        help='디스패처(두 채널 -> 단일 소비자)로 재생'
    )
    parser.add_argument(
        '--save_config',
        type=str,
        default=None,
        help='기본 설정을 YAML로 저장하고 종료'
    )

    args = parser.parse_args(argv)

    if args.save_config:
        create_default_config(args.save_config)
        return 0

    # 설정 로드
    config = load_config(args.config) if args.config else SystemConfig()
    if args.output_dir:
        config.output.output_dir = args.output_dir
    if args.capabilities is not None:
        config.stream.capabilities = args.capabilities

    _setup_logging(config)

    capabilities = config.stream.capabilities
    if capabilities is not None:
        logger.info(f"Capabilities {capabilities:#06b}: {names_of(capabilities)}")

    if args.reference_frame == 'auto':
        frame = preferred_frame(ALL_FRAMES if capabilities is None else capabilities)
        config.stream.reference_frame = int(frame) if frame is not None else None
    elif args.reference_frame is not None:
        config.stream.reference_frame = args.reference_frame

    system = RelativeAttitudeSystem.from_config(config)
    logger.info(f"Stream arguments: {system.stream_arguments}")

    if args.input is None:
        return 0

    loader = TelemetryLoader(args.input)
    exporter = ResultExporter(config.output.output_dir, config.output.output_format)
    system.add_result_listener(exporter.add_result)

    logger.info(f"Processing {len(loader)} events...")

    if args.threaded:
        _replay_threaded(system, loader, config, args.max_events)
    else:
        system.replay(loader, max_events=args.max_events)

    logger.info(
        f"Decoded={system.decoded_count}, malformed={system.malformed_count}, "
        f"emitted={system.engine.emitted_count}"
    )

    if config.output.save_results:
        filepath = exporter.save()
        logger.info(f"Results saved to {filepath}")

    logger.info(f"Summary: {exporter.get_summary()}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())

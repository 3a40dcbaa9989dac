"""
텔레메트리 로더 테스트
"""

import json
import logging

import pandas as pd
import pytest

from head_attitude.input.telemetry_loader import TelemetryLoader, TelemetryEvent


def write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


class TestTelemetryLoader:
    """파일 로드 테스트"""

    def test_csv_sorted_by_timestamp(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [
            {'source': 'secondary', 'timestamp': 0.2, **make_record()},
            {'source': 'primary', 'timestamp': 0.1, **make_record()},
            {'source': 'primary', 'timestamp': 0.3, **make_record()},
        ])

        loader = TelemetryLoader(str(path))

        assert len(loader) == 3
        assert [e.timestamp for e in loader] == [0.1, 0.2, 0.3]
        assert [e.source for e in loader] == ['primary', 'secondary', 'primary']
        assert loader.source_counts == {'primary': 2, 'secondary': 1}

    def test_record_excludes_meta_columns(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [
            {'source': 'primary', 'timestamp': 0.0, **make_record()},
        ])

        event = TelemetryLoader(str(path))[0]

        assert isinstance(event, TelemetryEvent)
        assert 'source' not in event.record
        assert 'timestamp' not in event.record
        assert event.record['heading'] == 123.5

    def test_empty_cells_dropped(self, tmp_path, make_record):
        full = make_record()
        partial = make_record()
        del partial['quaternionW']
        path = write_csv(tmp_path / 'session.csv', [
            {'source': 'primary', 'timestamp': 0.0, **full},
            {'source': 'secondary', 'timestamp': 1.0, **partial},
        ])

        loader = TelemetryLoader(str(path))

        assert 'quaternionW' in loader[0].record
        assert 'quaternionW' not in loader[1].record

    def test_source_normalized(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [
            {'source': ' Primary ', **make_record()},
        ])

        assert TelemetryLoader(str(path))[0].source == 'primary'

    def test_unknown_source_skipped(self, tmp_path, make_record, caplog):
        path = write_csv(tmp_path / 'session.csv', [
            {'source': 'primary', **make_record()},
            {'source': 'watch', **make_record()},
        ])

        with caplog.at_level(logging.WARNING):
            loader = TelemetryLoader(str(path))

        assert len(loader) == 1
        assert 'unknown source' in caplog.text

    def test_no_timestamp_uses_row_order(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [
            {'source': 'secondary', **make_record()},
            {'source': 'primary', **make_record()},
        ])

        loader = TelemetryLoader(str(path))

        assert [e.source for e in loader] == ['secondary', 'primary']
        assert [e.timestamp for e in loader] == [0.0, 1.0]

    def test_jsonl(self, tmp_path, make_record):
        path = tmp_path / 'session.jsonl'
        lines = [
            json.dumps({'source': 'primary', 'timestamp': 1, **make_record()}),
            json.dumps({'source': 'secondary', 'timestamp': 2, **make_record(sensorLocation=1)}),
        ]
        path.write_text('\n'.join(lines) + '\n')

        loader = TelemetryLoader(str(path))

        assert len(loader) == 2
        assert loader[1].record['sensorLocation'] == 1

    def test_index_out_of_range(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [{'source': 'primary', **make_record()}])
        loader = TelemetryLoader(str(path))

        with pytest.raises(IndexError):
            loader.load_event(1)


class TestTelemetryLoaderErrors:
    """로드 오류 테스트"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TelemetryLoader(str(tmp_path / 'missing.csv'))

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / 'session.txt'
        path.write_text('source\nprimary\n')

        with pytest.raises(ValueError):
            TelemetryLoader(str(path))

    def test_no_source_column(self, tmp_path, make_record):
        path = write_csv(tmp_path / 'session.csv', [make_record()])

        with pytest.raises(ValueError, match='source'):
            TelemetryLoader(str(path))

"""
Tests for record ingestion.
"""

import json

import pytest

from statuskit.ingest import ingest_record, ingest_records
from statuskit.logger import get_logger
from statuskit.records import StoreError, diff_dict, load_records, save_records
from statuskit.status import StatusResolver


class TestIngestRecord:
    """Test single-record normalization."""

    def test_status_replaced_and_raw_kept(self):
        record = {"id": 1, "title": "task", "status": "  In_Progress "}
        result = ingest_record(record)

        assert result["status"] == "active"
        assert result["raw_status"] == "  In_Progress "
        assert result["status_rank"] == 0
        # Input untouched
        assert record["status"] == "  In_Progress "

    def test_missing_status(self):
        result = ingest_record({"id": 1, "title": "task"})
        assert result["status"] == "unknown"
        assert result["raw_status"] is None
        assert result["status_rank"] == 1

    def test_metrics_recorded(self):
        ingest_record({"id": 1, "title": "task", "status": "Blocked"})
        ingest_record({"id": 2, "title": "task", "status": "done"})

        metrics = get_logger().get_metrics()
        assert metrics["normalized"] == 2
        assert metrics["unrecognized"] == {"blocked": 1}

    def test_custom_resolver(self):
        resolver = StatusResolver().with_aliases({"blocked": "pending"})
        result = ingest_record({"id": 1, "title": "task", "status": "Blocked"}, resolver)
        assert result["status"] == "pending"


class TestIngestRecords:
    """Test batch ingestion."""

    def test_report_counts(self, sample_records, invalid_record):
        normalized, report = ingest_records(sample_records + [invalid_record])

        assert report["total"] == 7
        assert report["ingested"] == 6
        assert report["recognized"] == 4
        assert report["unrecognized"] == 2
        assert report["invalid"] == 1
        assert report["errors"][0]["index"] == 6
        assert [r["id"] for r in normalized] == [1, 2, 3, 4, 5, 6]
        assert [r["status"] for r in normalized] == [
            "completed", "active", "pending", "archived", "unknown", "unknown",
        ]

    def test_invalid_records_counted_in_metrics(self, invalid_record):
        ingest_records([invalid_record, "not a record"])
        assert get_logger().get_metrics()["records_invalid"] == 2

    def test_empty_batch(self):
        normalized, report = ingest_records([])
        assert normalized == []
        assert report["total"] == 0


class TestRecordFiles:
    """Test JSON record file helpers."""

    def test_round_trip(self, tmp_path, sample_records):
        path = tmp_path / "nested" / "out.json"
        save_records(path, sample_records)
        assert load_records(path) == sample_records

    def test_single_object_file(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps({"id": 1, "title": "task"}))
        assert load_records(path) == [{"id": 1, "title": "task"}]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("  \n")
        assert load_records(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreError, match="not found"):
            load_records(tmp_path / "nope.json")

    @pytest.mark.parametrize("content", ["{not json", "42", '"done"'])
    def test_malformed_file(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(StoreError):
            load_records(path)

    def test_non_utf8_file(self, tmp_path):
        """Bytes that are not UTF-8 surface as StoreError, not UnicodeDecodeError."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"id": 1, "title": "t", "status": "\xff"}]')
        with pytest.raises(StoreError, match="Could not read"):
            load_records(path)

    def test_diff_dict(self):
        changes = diff_dict({"status": "Done", "id": 1}, {"status": "completed", "id": 1, "raw_status": "Done"})
        assert changes == {
            "status": {"old": "Done", "new": "completed"},
            "raw_status": {"old": None, "new": "Done"},
        }

"""
Unit tests for the command line entry point.
"""

import json

import pytest

from driving_school import cli


@pytest.fixture
def data_file(tmp_path, monkeypatch, students, instructors, vehicles, lessons):
    """Snapshot file plus an isolated output directory."""
    for name in (
        "SCHOOL_NAME",
        "SCHOOL_DATA_FILE",
        "LOG_FILE",
        "LOG_LEVEL",
        "DEFAULT_LESSON_DURATION",
        "STORE_FAILURE_THRESHOLD",
        "STORE_RETRY_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))

    path = tmp_path / "school.json"
    path.write_text(json.dumps({
        "students": students,
        "instructors": instructors,
        "vehicles": vehicles,
        "lessons": lessons,
    }), encoding="utf-8")
    return path


def read_lessons(path):
    return json.loads(path.read_text(encoding="utf-8"))["lessons"]


class TestCli:
    """Test cases for cli.main."""

    def test_slots(self, data_file, capsys):
        """Test listing an instructor's free slots."""
        code = cli.main([
            "--data", str(data_file),
            "slots", "--instructor", "instructor_1", "--date", "2025-10-15",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "08:00" in out
        assert "09:00" not in out

    def test_slots_non_working_day(self, data_file, capsys):
        code = cli.main([
            "--data", str(data_file),
            "slots", "--instructor", "instructor_1", "--date", "2025-10-18",
        ])

        assert code == 0
        assert "No free slots" in capsys.readouterr().out

    def test_slots_export_csv(self, data_file, tmp_path):
        """Test exporting slots to the output directory."""
        code = cli.main([
            "--data", str(data_file),
            "slots", "--instructor", "instructor_1", "--date", "2025-10-15",
            "--export", "csv",
        ])

        assert code == 0
        exports = list((tmp_path / "output" / "exports").glob("slots_instructor_1_*.csv"))
        assert len(exports) == 1

    def test_validate_inline_request(self, data_file, capsys):
        """Test validation of an inline JSON request."""
        request = {"student_id": "student_1", "type": "theoretical"}

        code = cli.main([
            "--data", str(data_file), "validate", "--request", json.dumps(request),
        ])

        out = capsys.readouterr().out
        assert code == 1
        assert "Select an instructor" in out
        assert "Location is required" in out

    def test_book_writes_snapshot(self, data_file, booking_request, capsys):
        """Test booking persists the lesson to the snapshot file."""
        code = cli.main([
            "--data", str(data_file), "book", "--request", json.dumps(booking_request),
        ])

        assert code == 0
        assert "scheduled" in capsys.readouterr().out
        scheduled = [l for l in read_lessons(data_file) if l["status"] == "scheduled"]
        assert sorted(l["time"] for l in scheduled) == ["08:00", "09:00"]

    def test_book_from_request_file(self, data_file, booking_request, tmp_path):
        """Test a request given as a JSON file."""
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps(booking_request), encoding="utf-8")

        code = cli.main(["--data", str(data_file), "book", "--request", str(request_file)])

        assert code == 0
        assert len(read_lessons(data_file)) == 3

    def test_book_dry_run(self, data_file, booking_request):
        """Test a dry run leaves the snapshot untouched."""
        before = data_file.read_text(encoding="utf-8")

        code = cli.main([
            "--data", str(data_file), "book", "--request", json.dumps(booking_request),
            "--dry-run",
        ])

        assert code == 0
        assert data_file.read_text(encoding="utf-8") == before

    def test_book_taken_slot(self, data_file, booking_request, capsys):
        """Test booking an occupied slot fails without writing."""
        booking_request["time"] = "09:00"

        code = cli.main([
            "--data", str(data_file), "book", "--request", json.dumps(booking_request),
        ])

        assert code == 1
        assert "Time slot is not available" in capsys.readouterr().out
        assert len(read_lessons(data_file)) == 2

    def test_week(self, data_file, capsys):
        """Test printing a weekly grid."""
        code = cli.main([
            "--data", str(data_file),
            "week", "--instructor", "instructor_1", "--date", "2025-10-15",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "Week of 2025-10-12" in out
        assert "lesson_1" in out

    def test_week_shows_school_name(self, data_file, tmp_path, monkeypatch, capsys):
        """Test the grid heading carries the configured school name."""
        monkeypatch.setenv("SCHOOL_NAME", "Autoescola Central")

        code = cli.main([
            "--data", str(data_file),
            "week", "--instructor", "instructor_1", "--date", "2025-10-15",
        ])

        assert code == 0
        assert "Autoescola Central: Week of 2025-10-12" in capsys.readouterr().out
        assert (tmp_path / "output" / "logs").is_dir()

    def test_week_export_csv(self, data_file, tmp_path):
        """Test exporting the weekly grid with its time index."""
        code = cli.main([
            "--data", str(data_file),
            "week", "--instructor", "instructor_1", "--date", "2025-10-15",
            "--export", "csv",
        ])

        assert code == 0
        exports = list((tmp_path / "output" / "exports").glob("week_instructor_1_*.csv"))
        assert len(exports) == 1
        header = exports[0].read_text(encoding="utf-8").splitlines()[0]
        assert header.startswith("time,")

    def test_week_export_failure(self, data_file, monkeypatch, capsys):
        """Test a failed export is reported with a non-zero exit."""
        monkeypatch.setattr(cli, "save_csv", lambda *args, **kwargs: False)

        code = cli.main([
            "--data", str(data_file),
            "week", "--instructor", "instructor_1", "--date", "2025-10-15",
            "--export", "csv",
        ])

        assert code == 1
        assert "Failed to export" in capsys.readouterr().out

    def test_non_integer_setting(self, data_file, monkeypatch, capsys):
        """Test a malformed numeric setting is reported, not raised."""
        monkeypatch.setenv("DEFAULT_LESSON_DURATION", "fifty")

        code = cli.main([
            "--data", str(data_file),
            "slots", "--instructor", "instructor_1", "--date", "2025-10-15",
        ])

        out = capsys.readouterr().out
        assert code == 1
        assert "ERROR" in out
        assert "DEFAULT_LESSON_DURATION must be an integer" in out

    def test_missing_data_file(self, data_file, tmp_path, capsys):
        code = cli.main([
            "--data", str(tmp_path / "missing.json"),
            "slots", "--instructor", "instructor_1", "--date", "2025-10-15",
        ])

        assert code == 1
        assert "Could not load data file" in capsys.readouterr().out

    def test_invalid_request(self, data_file, capsys):
        """Test a request that is not JSON."""
        code = cli.main(["--data", str(data_file), "validate", "--request", "not json"])

        assert code == 1
        assert "ERROR" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

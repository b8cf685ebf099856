"""Tests for event record loading."""

import io
from datetime import datetime

import pytest

from conftest import HEADER, make_record

from eventchain.config import FieldLayout
from eventchain.exceptions import HeaderError, InvalidDelimiterError, SourceAccessError
from eventchain.markov.loader import load_events, parse_records


def lines_of(*records, header=HEADER):
    return io.StringIO("\n".join([header, *records]) + "\n")


class TestParseRecords:
    """Test parse_records function."""

    def test_groups_by_category(self):
        result = parse_records(
            lines_of(
                make_record("open", 10, 1, "2022-05-10 08:00:00"),
                make_record("click", 10, 1, "2022-05-10 08:00:05"),
                make_record("open", 11, 2, "2022-05-11 09:30:00"),
            )
        )

        assert result.categories() == [1, 2]
        assert [e.name for e in result.events_by_category[1]] == ["open", "click"]
        event = result.events_by_category[2][0]
        assert event.run_id == 11
        assert event.category_id == 2
        assert event.timestamp == datetime(2022, 5, 11, 9, 30, 0)
        assert result.records_read == 3
        assert result.skipped == []

    def test_empty_timestamp_skipped_silently(self):
        result = parse_records(
            lines_of(
                make_record("open", 10, 1, ""),
                make_record("open", 10, 1, "   "),
                make_record("click", 10, 1, "2022-05-10 08:00:00"),
            )
        )
        assert result.total_events == 1
        assert result.skipped == []

    def test_invalid_timestamp_reported(self):
        result = parse_records(lines_of(make_record("open", 10, 1, "10/05/2022 08:00")))

        assert result.total_events == 0
        assert len(result.skipped) == 1
        skipped = result.skipped[0]
        assert skipped.reason == "invalid timestamp"
        assert skipped.value == "10/05/2022 08:00"
        assert skipped.line == 2
        assert skipped.category == "skipped-malformed-record"

    def test_unpadded_timestamp_reported(self):
        layout = FieldLayout(name=0, run_id=1, category_id=2, timestamp=3)
        result = parse_records(
            io.StringIO("n;r;c;t\nA;1;3;2024-1-2 3:4:5\nB;1;3; 2024-01-02 03:04:05\n"),
            layout=layout,
        )

        assert [e.name for e in result.events_by_category[3]] == ["B"]
        assert len(result.skipped) == 1
        assert result.skipped[0].reason == "invalid timestamp"
        assert result.skipped[0].value == "2024-1-2 3:4:5"

    def test_custom_timestamp_format(self):
        result = parse_records(
            lines_of(make_record("open", 1, 1, "10/05/2022 08:00")),
            timestamp_format="%d/%m/%Y %H:%M",
        )
        assert result.events_by_category[1][0].timestamp == datetime(2022, 5, 10, 8, 0)

    @pytest.mark.parametrize("raw", ["1_000", "１２", "1.0", "+", ""])
    def test_non_ascii_integer_forms_rejected(self, raw):
        result = parse_records(lines_of(make_record("open", 1, raw, "2022-05-10 08:00:00")))
        assert [s.reason for s in result.skipped] == ["invalid category id"]

    def test_signed_integers_accepted(self):
        result = parse_records(lines_of(make_record("open", "-4", "+7", "2022-05-10 08:00:00")))
        assert result.events_by_category[7][0].run_id == -4

    def test_invalid_category_reported(self):
        result = parse_records(lines_of(make_record("open", 10, "kind", "2022-05-10 08:00:00")))
        assert [s.reason for s in result.skipped] == ["invalid category id"]

    def test_invalid_run_id_reported(self):
        result = parse_records(lines_of(make_record("open", "abc", 1, "2022-05-10 08:00:00")))
        assert [s.reason for s in result.skipped] == ["invalid run id"]

    def test_one_diagnostic_per_bad_record(self):
        """A row with several bad fields is still reported once."""
        result = parse_records(
            lines_of(
                make_record("a", "x", "y", "2022-05-10 08:00:00"),
                make_record("b", 1, 1, "2022-05-10 08:00:00"),
                make_record("c", 1, "z", "nope"),
            )
        )
        assert [s.line for s in result.skipped] == [2, 4]
        assert result.total_events == 1

    def test_short_record_reported(self):
        layout = FieldLayout(name=0, run_id=3, category_id=2, timestamp=1)
        result = parse_records(
            lines_of("open;2022-05-10 08:00:00;1", header="name;sent_at;kind_id;run_id"),
            layout=layout,
        )
        assert [s.reason for s in result.skipped] == ["missing run id"]

    def test_leading_spaces_trimmed(self):
        result = parse_records(lines_of(make_record("open", " 10", " 1", " 2022-05-10 08:00:00")))
        event = result.events_by_category[1][0]
        assert event.run_id == 10
        assert event.name == "open"

    def test_custom_layout_and_delimiter(self):
        layout = FieldLayout(name=0, run_id=1, category_id=2, timestamp=3)
        result = parse_records(
            io.StringIO("name,run,kind,at\nopen,1,4,2022-05-10 08:00:00\n"),
            layout=layout,
            delimiter=",",
        )
        assert result.events_by_category[4][0].name == "open"

    def test_comment_lines_ignored(self):
        result = parse_records(
            io.StringIO(
                "# exported 2022-05-10\n"
                + HEADER
                + "\n# partial export\n"
                + make_record("open", 1, 1, "2022-05-10 08:00:00")
                + "\n"
            ),
            comment="#",
        )
        assert result.records_read == 1
        assert result.total_events == 1

    def test_blank_lines_ignored(self):
        result = parse_records(lines_of("", make_record("open", 1, 1, "2022-05-10 08:00:00"), ""))
        assert result.records_read == 1

    def test_header_only(self):
        result = parse_records(lines_of())
        assert result.events_by_category == {}
        assert result.records_read == 0

    def test_missing_header_is_fatal(self):
        with pytest.raises(HeaderError):
            parse_records(io.StringIO(""))

    def test_delimiter_must_be_one_character(self):
        with pytest.raises(InvalidDelimiterError):
            parse_records(lines_of(), delimiter=";;")
        with pytest.raises(InvalidDelimiterError):
            parse_records(lines_of(), delimiter="")

    def test_each_call_is_independent(self):
        source = [HEADER, make_record("open", 1, 1, "2022-05-10 08:00:00")]
        first = parse_records(iter(source))
        second = parse_records(iter(source))
        assert first is not second
        assert first.events_by_category == second.events_by_category
        first.events_by_category[1].clear()
        assert second.total_events == 1


class TestLoadEvents:
    """Test load_events function."""

    def test_reads_file(self, record_file):
        path = record_file(
            [
                make_record("open", 1, 3, "2022-05-10 08:00:00"),
                make_record("close", 1, 3, "2022-05-10 08:01:00"),
                make_record("open", 2, 3, "bad date"),
            ]
        )
        result = load_events(path)
        assert result.total_events == 2
        assert len(result.skipped) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceAccessError) as exc_info:
            load_events(tmp_path / "nope.csv")
        assert "nope.csv" in str(exc_info.value)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(HeaderError):
            load_events(path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.csv"
        path.write_bytes(b"\xff\xfe\xfa header\n")
        with pytest.raises(SourceAccessError):
            load_events(path)

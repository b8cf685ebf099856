"""Tests for the count table renderer."""

import csv
import io

import pytest

from eventchain.exceptions import HeaderError, InvalidDelimiterError, SourceAccessError
from eventchain.markov.models import TransitionMatrix
from eventchain.markov.table import format_table, read_table, table_rows, write_table


def rendered_rows(nested, delimiter=","):
    buf = io.StringIO()
    write_table(TransitionMatrix.from_dict(nested), buf, delimiter)
    buf.seek(0)
    return list(csv.reader(buf, delimiter=delimiter))


class TestWriteTable:
    """Test write_table function."""

    def test_empty_matrix(self):
        assert rendered_rows({}) == [["From/To"]]

    def test_destination_only_name_gets_zero_row(self):
        assert rendered_rows({"E1": {"E2": 1}}) == [
            ["From/To", "E1", "E2"],
            ["E1", "0", "1"],
            ["E2", "0", "0"],
        ]

    def test_single_transition(self):
        assert rendered_rows(
            {
                "start": {"Event1": 1},
                "Event1": {"Event2": 1},
                "Event2": {"stop": 1},
            }
        ) == [
            ["From/To", "Event1", "Event2", "start", "stop"],
            ["Event1", "0", "1", "0", "0"],
            ["Event2", "0", "0", "0", "1"],
            ["start", "1", "0", "0", "0"],
            ["stop", "0", "0", "0", "0"],
        ]

    def test_multiple_transitions(self):
        assert rendered_rows(
            {
                "start": {"Event1": 1},
                "Event1": {"Event2": 2, "Event3": 3},
                "Event2": {"Event1": 1},
                "Event3": {"stop": 1},
            }
        ) == [
            ["From/To", "Event1", "Event2", "Event3", "start", "stop"],
            ["Event1", "0", "2", "3", "0", "0"],
            ["Event2", "1", "0", "0", "0", "0"],
            ["Event3", "0", "0", "0", "0", "1"],
            ["start", "1", "0", "0", "0", "0"],
            ["stop", "0", "0", "0", "0", "0"],
        ]

    def test_exact_bytes(self):
        matrix = TransitionMatrix.from_dict({"E1": {"E2": 1000}})
        assert format_table(matrix) == "From/To,E1,E2\nE1,0,1000\nE2,0,0\n"

    def test_custom_delimiter(self):
        matrix = TransitionMatrix.from_dict({"E1": {"E2": 1}})
        assert format_table(matrix, ";") == "From/To;E1;E2\nE1;0;1\nE2;0;0\n"

    def test_names_containing_delimiter_are_quoted(self):
        rows = rendered_rows({"a,b": {"c": 1}})
        assert rows[0] == ["From/To", "a,b", "c"]

    def test_invalid_delimiter(self):
        with pytest.raises(InvalidDelimiterError):
            write_table(TransitionMatrix(), io.StringIO(), ", ")

    def test_rendering_is_idempotent(self):
        matrix = TransitionMatrix.from_dict({"b": {"a": 2}, "a": {"b": 1, "a": 4}})
        assert format_table(matrix) == format_table(matrix)
        assert table_rows(matrix) == table_rows(matrix)


class TestReadTable:
    """Test read_table function."""

    def test_round_trip(self, tmp_path):
        matrix = TransitionMatrix.from_dict({"E1": {"E2": 2}, "E2": {"E1": 1}})
        path = tmp_path / "matrix.csv"
        path.write_text(format_table(matrix), encoding="utf-8")
        assert read_table(path) == table_rows(matrix)

    def test_comment_lines_ignored(self, tmp_path):
        path = tmp_path / "matrix.csv"
        path.write_text("# category 3\nFrom/To,E1\nE1,4\n", encoding="utf-8")
        assert read_table(path) == [["From/To", "E1"], ["E1", "4"]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceAccessError):
            read_table(tmp_path / "missing.csv")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("\n", encoding="utf-8")
        with pytest.raises(HeaderError):
            read_table(path)

"""
CSV parsing and forward-fill normalisation.
"""

import pytest

from graphvis.csv_normalize import normalize_rows, normalize_value, parse_csv_text
from graphvis.errors import MalformedInput


class TestParseCsvText:

    def test_rows_keyed_by_header(self, companies_csv):
        rows = parse_csv_text(companies_csv)
        assert len(rows) == 8
        assert rows[0] == {"Company": "Acme", "other_node": "Bob", "other_node_type": "Person"}
        assert rows[1]["Company"] == ""

    def test_short_rows_padded_and_surplus_dropped(self):
        rows = parse_csv_text("A,other_node,other_node_type\nx,y\np,q,r,extra\n")
        assert rows[0] == {"A": "x", "other_node": "y", "other_node_type": ""}
        assert rows[1] == {"A": "p", "other_node": "q", "other_node_type": "r"}

    def test_byte_order_mark_stripped(self):
        rows = parse_csv_text("\ufeffA,other_node,other_node_type\n1,2,3\n")
        assert list(rows[0].keys()) == ["A", "other_node", "other_node_type"]

    def test_header_only(self):
        assert parse_csv_text("A,other_node,other_node_type\n") == []

    def test_quoted_cells(self):
        rows = parse_csv_text('A,other_node,other_node_type\n"Smith, J",b,c\n')
        assert rows[0]["A"] == "Smith, J"


class TestNormalizeRows:

    def test_blank_cells_repeat_previous_row(self, acme_rows):
        out = normalize_rows(acme_rows)
        assert [r["Company"] for r in out] == ["Acme", "Acme"]
        assert out[1]["other_node"] == "Carol"

    def test_fill_chains_through_several_rows(self):
        rows = [
            {"A": "x", "B": "1"},
            {"A": "", "B": "2"},
            {"A": "", "B": ""},
            {"A": "y", "B": ""},
        ]
        out = normalize_rows(rows)
        assert out == [
            {"A": "x", "B": "1"},
            {"A": "x", "B": "2"},
            {"A": "x", "B": "2"},
            {"A": "y", "B": "2"},
        ]

    def test_values_trimmed_and_whitespace_collapsed(self):
        out = normalize_rows([{"A": "  New \t  York\n ", "B": "b"}])
        assert out[0]["A"] == "New York"

    def test_filled_value_is_the_normalised_one(self):
        out = normalize_rows([{"A": "  a   b ", "B": "1"}, {"A": "", "B": "2"}])
        assert out[1]["A"] == "a b"

    def test_whitespace_only_cell_counts_as_blank(self):
        out = normalize_rows([{"A": "x", "B": "1"}, {"A": " \t ", "B": "2"}])
        assert out[1]["A"] == "x"

    def test_whitespace_only_in_first_row_is_malformed(self):
        with pytest.raises(MalformedInput) as exc:
            normalize_rows([{"A": "   ", "B": "x"}])
        assert exc.value.details["column"] == "A"

    def test_blank_in_first_row_is_malformed(self):
        with pytest.raises(MalformedInput) as exc:
            normalize_rows([{"A": "", "B": "x"}])
        assert exc.value.details["column"] == "A"
        assert exc.value.error_code == "malformed_input"

    def test_input_rows_not_mutated(self, acme_rows):
        before = [dict(r) for r in acme_rows]
        normalize_rows(acme_rows)
        assert acme_rows == before

    def test_empty_input(self):
        assert normalize_rows([]) == []


def test_normalize_value():
    assert normalize_value(" a  b ") == "a b"
    assert normalize_value("   ") == ""

import re

import pytest

from graphvis.colors import assign_colors, brighter, interpolate_rainbow, to_hex
from graphvis.labels import label_offsets, max_line_length, wrap_label


class TestColors:

    def test_rainbow_endpoints_match_d3(self):
        assert interpolate_rainbow(0.0) == (110, 64, 170)
        assert interpolate_rainbow(0.5) == (175, 240, 91)
        assert interpolate_rainbow(1.0) == interpolate_rainbow(0.0)

    def test_rainbow_is_cyclic(self):
        assert interpolate_rainbow(1.25) == interpolate_rainbow(0.25)
        assert interpolate_rainbow(-0.75) == interpolate_rainbow(0.25)

    def test_brighter_scales_and_clamps(self):
        assert brighter((110, 64, 170)) == (157, 91, 243)
        assert brighter((175, 240, 91)) == (250, 255, 130)
        assert brighter((0, 0, 0)) == (0, 0, 0)

    def test_to_hex(self):
        assert to_hex((157, 91, 243)) == "#9d5bf3"

    def test_assign_sorted_types(self):
        assert assign_colors({"B", "A"}) == {"A": "#9d5bf3", "B": "#faff82"}

    def test_sort_is_ordinal_not_case_folded(self):
        colors = assign_colors(["b", "B"])
        assert colors["B"] == "#9d5bf3"  # "B" < "b"

    def test_deterministic_and_well_formed(self):
        types = ["Person", "Company", "City", "Country", "Role"]
        first = assign_colors(types)
        assert first == assign_colors(list(reversed(types)))
        assert all(re.fullmatch(r"#[0-9a-f]{6}", c) for c in first.values())
        assert len(set(first.values())) == len(types)

    def test_growth_reshuffles_hues(self):
        before = assign_colors(["A", "B"])
        after = assign_colors(["A", "B", "C"])
        assert before["A"] == after["A"]  # i = 0 stays at the start of the scale
        assert before["B"] != after["B"]

    def test_empty(self):
        assert assign_colors([]) == {}


class TestLabels:

    def test_empty_name_gives_one_empty_line(self):
        assert wrap_label("") == [""]

    def test_short_name_single_line(self):
        assert wrap_label("Acme") == ["Acme"]

    def test_greedy_packing(self):
        assert wrap_label("Department of Health and Social Care") == [
            "Department of",
            "Health and",
            "Social Care",
        ]

    def test_hyphen_allows_break(self):
        name = "Stratford-upon-Avon District Council Offices"
        lines = wrap_label(name)
        assert lines[0] == "Stratford-"
        assert all(len(l) <= max_line_length(name) for l in lines)

    def test_unsplittable_token_gets_its_own_line(self):
        word = "Supercalifragilisticexpialidocious"
        assert wrap_label(f"a {word} b") == ["a", word, "b"]

    @pytest.mark.parametrize(
        "length,expected",
        [(0, 15), (30, 15), (60, 20), (90, 30), (300, 30)],
    )
    def test_max_line_length_clamped(self, length, expected):
        assert max_line_length("x" * length) == expected

    def test_label_offsets_centre_block(self):
        assert label_offsets(["a"]) == [0.0]
        assert label_offsets(["a", "b", "c"]) == pytest.approx([-14.4, 0.0, 14.4])

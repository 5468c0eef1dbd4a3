"""Tests for selector and media condition canonicalization."""

import pytest

from styletrack.css.keys import normalize_condition, normalize_selector


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class TestNormalizeSelector:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (".a", ".a"),
            ("  .a   .b  ", ".a .b"),
            ("div>p", "div > p"),
            ("div   >   p", "div > p"),
            ("h1+h2~h3", "h1 + h2 ~ h3"),
            ("h1,h2", "h1, h2"),
            ("a:HOVER", "a:hover"),
            ("p::Before", "p::before"),
            ("input[type='text']", 'input[type="text"]'),
            ("input[ type = text ]", 'input[type="text"]'),
            ("a[href$='.pdf' i]", 'a[href$=".pdf" i]'),
            ("[DISABLED]", "[disabled]"),
            ("li:NTH-CHILD( 2N+1 )", "li:nth-child(2n+1)"),
            (".a:not( .b , .c )", ".a:not(.b, .c)"),
            ("#Main .Title", "#Main .Title"),
            ("A:HOVER>b", "a:hover > b"),
            ("DIV.Foo", "div.Foo"),
            ("UL LI.Item:First-Child", "ul li.Item:first-child"),
        ],
    )
    def test_canonical_forms(self, raw: str, expected: str) -> None:
        assert normalize_selector(raw) == expected

    def test_equivalent_selectors_compare_equal(self) -> None:
        assert normalize_selector("ul>li.item") == normalize_selector("ul > li.item")

    def test_idempotent(self) -> None:
        once = normalize_selector("ul>li:Hover,  a[x='y']")
        assert normalize_selector(once) == once


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestNormalizeCondition:
    def test_none_stays_none(self) -> None:
        assert normalize_condition(None) is None

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("(max-width:600px)", "(max-width: 600px)"),
            ("(MAX-WIDTH: 600PX)", "(max-width: 600px)"),
            ("screen and (min-width: 600px)", "screen and (min-width: 600px)"),
            ("SCREEN  AND  (min-width:600px)", "screen and (min-width: 600px)"),
            ("only screen and (orientation: landscape)", "only screen and (orientation: landscape)"),
            ("not print", "not print"),
            ("print, screen", "print, screen"),
            ("(hover)", "(hover)"),
            ("(width>=600px)", "(width >= 600px)"),
            ("(400px <= width <= 700px)", "(400px <= width <= 700px)"),
            ("(min-width: 600px) and (max-width: 900px)", "(min-width: 600px) and (max-width: 900px)"),
            ("(hover) or (pointer: fine)", "(hover) or (pointer: fine)"),
            ("not (color)", "not (color)"),
            ("(aspect-ratio: 16 / 9)", "(aspect-ratio: 16/9)"),
        ],
    )
    def test_canonical_forms(self, raw: str, expected: str) -> None:
        assert normalize_condition(raw) == expected

    def test_unparseable_condition_returned_unchanged(self) -> None:
        assert normalize_condition("@supports (display: grid)") == "@supports (display: grid)"

    def test_garbage_never_raises(self) -> None:
        assert normalize_condition("((") == "(("

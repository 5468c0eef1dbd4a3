"""Tests for style-sheet canonicalization: flattening, nesting, and rendering."""

import pytest

from styletrack.css.normalize import canonicalize
from styletrack.errors import ParseError
from styletrack.model.snapshot import Declaration


def _rules(text: str) -> list[tuple[str, str | None, list[str]]]:
    snapshot = canonicalize(text)
    return [(r.selector, r.condition, [d.render() for d in r.declarations]) for r in snapshot.rules]


# ---------------------------------------------------------------------------
# Flat style sheets
# ---------------------------------------------------------------------------


class TestFlatRules:
    def test_single_rule(self) -> None:
        snapshot = canonicalize(".a{color:red}")
        assert snapshot.canonical_text == ".a {\n  color: red;\n}\n"
        assert len(snapshot) == 1

    def test_one_declaration_per_line(self) -> None:
        snapshot = canonicalize(".a { color: red; margin: 0 auto }")
        assert snapshot.canonical_text.splitlines() == [
            ".a {",
            "  color: red;",
            "  margin: 0 auto;",
            "}",
        ]

    def test_whitespace_in_values_collapses(self) -> None:
        snapshot = canonicalize(".a {\n  border:   1px\n   solid   red ;\n}")
        assert snapshot.rules[0].declarations[0] == Declaration("border", "1px solid red")

    def test_property_names_lowercased(self) -> None:
        rule = canonicalize(".a { COLOR: red }").rules[0]
        assert rule.declarations[0].property == "color"

    def test_custom_property_case_kept(self) -> None:
        rule = canonicalize(":root { --Brand-Color: #fff }").rules[0]
        assert rule.declarations[0].property == "--Brand-Color"

    def test_important_flag(self) -> None:
        rule = canonicalize(".a { color: red !important }").rules[0]
        assert rule.declarations[0].important is True
        assert str(rule.declarations[0]) == "color: red !important;"

    def test_selector_list_kept_together(self) -> None:
        assert _rules("h1,  h2 { margin: 0 }") == [("h1, h2", None, ["margin: 0;"])]

    def test_empty_input(self) -> None:
        snapshot = canonicalize("")
        assert snapshot.canonical_text == ""
        assert snapshot.rules == ()

    def test_empty_rule_is_kept(self) -> None:
        assert _rules(".a {}") == [(".a", None, [])]

    def test_top_level_comments_ignored(self) -> None:
        assert _rules("/* header */ .a { color: red }") == [(".a", None, ["color: red;"])]

    def test_raw_text_preserved(self) -> None:
        text = ".a{color:red}"
        assert canonicalize(text).raw_text == text

    def test_canonical_text_is_a_fixed_point(self) -> None:
        once = canonicalize(".a { color: red; & .b { margin: 0 } } @media (min-width: 1px) { .c { top: 0 } }")
        twice = canonicalize(once.canonical_text)
        assert twice.canonical_text == once.canonical_text
        assert twice.rules == once.rules


# ---------------------------------------------------------------------------
# Disabled markers
# ---------------------------------------------------------------------------


class TestDisabledMarkers:
    def test_commented_declaration_is_disabled(self) -> None:
        rule = canonicalize(".a { color: red; /* margin: 0; */ }").rules[0]
        assert rule.declarations[1] == Declaration("margin", "0", disabled=True)
        assert rule.live_declarations == (Declaration("color", "red"),)

    def test_disabled_marker_rendered_as_comment(self) -> None:
        snapshot = canonicalize(".a { /* color: red; */ }")
        assert "  /* color: red; */" in snapshot.canonical_text.splitlines()

    def test_plain_comment_is_not_a_marker(self) -> None:
        rule = canonicalize(".a { /* remember to fix this */ color: red }").rules[0]
        assert rule.declarations == (Declaration("color", "red"),)

    def test_marker_requires_trailing_semicolon(self) -> None:
        rule = canonicalize(".a { /* color: red */ }").rules[0]
        assert rule.declarations == ()


# ---------------------------------------------------------------------------
# Nesting
# ---------------------------------------------------------------------------


class TestNesting:
    def test_ampersand_resolves_to_parent(self) -> None:
        assert _rules(".card { color: red; &:hover { color: blue } }") == [
            (".card", None, ["color: red;"]),
            (".card:hover", None, ["color: blue;"]),
        ]

    def test_nested_without_ampersand_is_descendant(self) -> None:
        assert _rules(".card { .title { margin: 0 } }") == [(".card .title", None, ["margin: 0;"])]

    def test_parent_without_declarations_is_dropped(self) -> None:
        assert [r[0] for r in _rules(".card { .title { margin: 0 } }")] == [".card .title"]

    def test_parent_list_crosses_child_list(self) -> None:
        selectors = [r[0] for r in _rules(".a, .b { & > p, & + p { top: 0 } }")]
        assert selectors == [".a > p, .a + p, .b > p, .b + p"]

    def test_ampersand_inside_pseudo_function(self) -> None:
        assert _rules(".a { :not(&) { top: 0 } }")[0][0] == ":not(.a)"

    def test_parent_declarations_after_children_stay_with_parent(self) -> None:
        rules = _rules(".a { color: red; & .b { top: 0 } margin: 0; }")
        assert rules[0] == (".a", None, ["color: red;", "margin: 0;"])
        assert rules[1] == (".a .b", None, ["top: 0;"])

    def test_deep_nesting(self) -> None:
        assert _rules(".a { .b { .c { top: 0 } } }") == [(".a .b .c", None, ["top: 0;"])]


# ---------------------------------------------------------------------------
# Conditional groups
# ---------------------------------------------------------------------------


class TestConditions:
    def test_media_condition_is_the_query(self) -> None:
        assert _rules("@media (max-width: 600px) { .a { color: blue } }") == [
            (".a", "(max-width: 600px)", ["color: blue;"]),
        ]

    def test_media_rendering(self) -> None:
        snapshot = canonicalize("@media (max-width: 600px) { .a { color: blue } .b { top: 0 } }")
        assert snapshot.canonical_text.splitlines() == [
            "@media (max-width: 600px) {",
            "  .a {",
            "    color: blue;",
            "  }",
            "  .b {",
            "    top: 0;",
            "  }",
            "}",
        ]

    def test_media_nested_in_rule_bubbles_out(self) -> None:
        snapshot = canonicalize(".card { color: red; @media (max-width: 600px) { color: blue } }")
        assert snapshot.canonical_text.splitlines() == [
            ".card {",
            "  color: red;",
            "}",
            "@media (max-width: 600px) {",
            "  .card {",
            "    color: blue;",
            "  }",
            "}",
        ]

    def test_nested_media_merged_with_and(self) -> None:
        rules = _rules("@media screen { @media (min-width: 600px) { .a { top: 0 } } }")
        assert rules == [(".a", "screen and (min-width: 600px)", ["top: 0;"])]

    def test_supports_condition_keeps_its_keyword(self) -> None:
        rules = _rules("@supports (display: grid) { .a { display: grid } }")
        assert rules == [(".a", "@supports (display: grid)", ["display: grid;"])]

    def test_innermost_group_is_the_condition(self) -> None:
        rules = _rules("@media print { @supports (display: grid) { .a { top: 0 } } }")
        assert rules[0][1] == "@supports (display: grid)"

    def test_keyframes_steps_keyed_by_animation(self) -> None:
        rules = _rules("@keyframes spin { from { opacity: 0 } to { opacity: 1 } }")
        assert rules == [
            ("from", "@keyframes spin", ["opacity: 0;"]),
            ("to", "@keyframes spin", ["opacity: 1;"]),
        ]

    def test_font_face_keyed_by_header(self) -> None:
        rules = _rules("@font-face { font-family: Inter; }")
        assert rules == [("@font-face", None, ["font-family: Inter;"])]

    def test_statement_at_rules_rendered_not_indexed(self) -> None:
        snapshot = canonicalize('@import url("a.css");\n.a { top: 0 }')
        assert snapshot.canonical_text.splitlines()[0] == '@import url("a.css");'
        assert [r.selector for r in snapshot.rules] == [".a"]


# ---------------------------------------------------------------------------
# Legacy and sloppy forms
# ---------------------------------------------------------------------------


class TestLegacyForms:
    def test_star_property_hack_is_a_declaration(self) -> None:
        rules = _rules(".a { *zoom: 1; color: red }")
        assert rules == [(".a", None, ["*zoom: 1;", "color: red;"])]

    def test_star_hack_in_nested_media(self) -> None:
        rules = _rules("@media print { .a { *display: inline } }")
        assert rules == [(".a", "print", ["*display: inline;"])]

    def test_universal_nested_selector_untouched(self) -> None:
        rules = _rules(".a { color: red; * { top: 0 } }")
        assert [r[0] for r in rules] == [".a", ".a *"]

    def test_stray_semicolon_between_rules(self) -> None:
        rules = _rules(".a{color:red};.b{top:0}")
        assert [r[0] for r in rules] == [".a", ".b"]

    def test_leading_and_doubled_semicolons(self) -> None:
        snapshot = canonicalize(';;@import url("a.css");;\n.a { top: 0 }')
        assert snapshot.canonical_text.splitlines()[0] == '@import url("a.css");'
        assert [r.selector for r in snapshot.rules] == [".a"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_invalid_declaration_reports_position(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            canonicalize(".a {\n  color red;\n}")
        assert exc_info.value.line == 2
        assert exc_info.value.column is not None

    def test_stray_closing_brace(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            canonicalize(".a { color: red }\n}")
        assert exc_info.value.line == 2

    def test_declaration_outside_rule(self) -> None:
        with pytest.raises(ParseError, match="outside of a style rule"):
            canonicalize("@media print { color: red; }")

    def test_attach_source_renders_excerpt(self) -> None:
        text = ".a {\n  color red;\n}"
        with pytest.raises(ParseError) as exc_info:
            canonicalize(text)
        error = exc_info.value.attach_source(text)
        rendered = str(error)
        assert "(line 2" in rendered
        assert ">  2 |   color red;" in rendered or "> 2 |   color red;" in rendered

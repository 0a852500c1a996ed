"""Unit tests for opacity modifier extraction."""

from design_sync.theme.opacity import (
    extract_opacity_modifiers,
    extract_opacity_modifiers_from_sources,
)


class TestExtractOpacityModifiers:
    """Tests for extract_opacity_modifiers."""

    def test_finds_modifiers_in_order(self):
        source = 'cn("bg-kumo-brand/70 hover:text-kumo-danger/50", "ring-kumo-ring/30")'
        modifiers = extract_opacity_modifiers(source)
        assert [(m.utility, m.token, m.opacity) for m in modifiers] == [
            ("bg", "kumo-brand", 70),
            ("text", "kumo-danger", 50),
            ("ring", "kumo-ring", 30),
        ]

    def test_duplicates_are_collapsed(self):
        source = "bg-kumo-brand/70 hover:bg-kumo-brand/70 focus:bg-kumo-brand/70"
        assert len(extract_opacity_modifiers(source)) == 1

    def test_same_token_different_utilities_share_a_variable(self):
        modifiers = extract_opacity_modifiers("bg-kumo-line/40 border-kumo-line/40")
        assert [m.variable_name for m in modifiers] == ["opacity-kumo-line-40"]

    def test_out_of_range_and_fractions_are_skipped(self):
        source = "bg-kumo-brand/200 w-1/2 text-kumo-muted/5.5"
        assert extract_opacity_modifiers(source) == []

    def test_to_dict(self):
        (modifier,) = extract_opacity_modifiers("border-kumo-line/60")
        assert modifier.to_dict() == {
            "token": "kumo-line",
            "opacity": 60,
            "utility": "border",
            "variableName": "opacity-kumo-line-60",
        }


class TestExtractFromSources:
    """Tests for merging modifiers across several sources."""

    def test_merged_and_sorted(self):
        sources = [
            "text-kumo-muted/80 bg-kumo-brand/70",
            "bg-kumo-brand/20 text-kumo-muted/80",
        ]
        modifiers = extract_opacity_modifiers_from_sources(sources)
        assert [m.variable_name for m in modifiers] == [
            "opacity-kumo-brand-20",
            "opacity-kumo-brand-70",
            "opacity-kumo-muted-80",
        ]

    def test_no_sources(self):
        assert extract_opacity_modifiers_from_sources([]) == []

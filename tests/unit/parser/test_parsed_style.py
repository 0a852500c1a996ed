"""Unit tests for ParsedStyle accessors and serialization."""

from design_sync.parser import ParsedStyle


class TestResolvedCornerRadii:
    """Corner beats side beats all-corners."""

    def test_uniform(self, parser):
        style = parser.parse("rounded-lg")
        assert set(style.resolved_corner_radii().values()) == {8.0}
        assert style.has_uniform_radius()

    def test_precedence(self, parser):
        style = parser.parse("rounded-lg rounded-t-sm rounded-bl-none")
        radii = style.resolved_corner_radii()
        assert radii == {
            "top_left": 4.0,
            "top_right": 4.0,
            "bottom_right": 8.0,
            "bottom_left": 0.0,
        }
        assert not style.has_uniform_radius()

    def test_top_bottom_side_beats_left_right(self, parser):
        radii = parser.parse("rounded-l-lg rounded-t-md").resolved_corner_radii()
        assert radii["top_left"] == 6.0
        assert radii["bottom_left"] == 8.0
        assert radii["top_right"] == 6.0
        assert radii["bottom_right"] is None

    def test_token_order_does_not_change_precedence(self, parser):
        first = parser.parse("rounded-tl-xl rounded-lg").resolved_corner_radii()
        second = parser.parse("rounded-lg rounded-tl-xl").resolved_corner_radii()
        assert first == second
        assert first["top_left"] == 12.0


class TestResolvedBox:
    """Single side beats axis beats all-sides."""

    def test_all_levels(self, parser):
        padding = parser.parse("p-1 py-2 pt-3").resolved_padding()
        assert padding == {"top": 12.0, "right": 4.0, "bottom": 8.0, "left": 4.0}

    def test_margin(self, parser):
        margin = parser.parse("mx-2 ml-0").resolved_margin()
        assert margin == {"top": None, "right": 8.0, "bottom": None, "left": 0.0}

    def test_unset(self):
        assert set(ParsedStyle().resolved_padding().values()) == {None}


class TestToDict:
    """Tests for ParsedStyle.to_dict."""

    def test_only_set_fields_in_camel_case(self, parser):
        data = parser.parse("bg-kumo-brand px-3 h-9").to_dict()
        assert data == {"fillVariable": "color-kumo-brand", "paddingX": 12.0, "height": 36.0}

    def test_states_and_shadow_layers(self, parser):
        data = parser.parse("shadow-xs hover:bg-kumo-tint").to_dict()
        assert data["shadow"] == "xs"
        assert data["shadowLayers"][0]["offsetY"] == 1.0
        assert data["states"] == {"hover": {"fillVariable": "color-kumo-tint"}}

    def test_empty(self):
        assert ParsedStyle().is_empty
        assert ParsedStyle().to_dict() == {}

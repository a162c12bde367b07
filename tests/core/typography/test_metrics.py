import pytest

from typeset.core.typography.metrics import (
    horizontal_scale_strategy,
    justification_to_css,
    letter_spacing_css,
    tracking_to_em,
)


class TestTracking:
    @pytest.mark.parametrize("raw,expected", [
        (141, 1.41),
        (50, 0.05),
        (100, 0.1),
        (-20, -0.02),
        (0, 0),
    ])
    def test_tracking_to_em(self, raw, expected):
        assert tracking_to_em(raw) == pytest.approx(expected)

    def test_boundary_100_is_thousandths(self):
        """100 no supera el umbral: milésimas de em."""
        assert tracking_to_em(100) == pytest.approx(0.10)
        assert tracking_to_em(101) == pytest.approx(1.01)

    def test_css_value(self):
        assert letter_spacing_css(50) == "0.05em"
        assert letter_spacing_css(141) == "1.41em"
        assert letter_spacing_css(-20) == "-0.02em"
        assert letter_spacing_css(0) == "normal"
        assert letter_spacing_css(None) == "normal"


class TestHorizontalScale:
    def test_calibration_value_is_extra_expanded(self):
        strategy = horizontal_scale_strategy(141)
        assert strategy.font_stretch == "extra-expanded"
        assert strategy.scale_x is None
        assert strategy.transform is None

    def test_extreme_values_use_transform(self):
        wide = horizontal_scale_strategy(200)
        assert wide.scale_x == pytest.approx(2.0)
        assert wide.font_stretch is None
        assert wide.transform == "scaleX(2)"

        narrow = horizontal_scale_strategy(30)
        assert narrow.scale_x == pytest.approx(0.3)
        assert narrow.transform == "scaleX(0.3)"

    @pytest.mark.parametrize("scale,keyword", [
        (50, "ultra-condensed"),
        (62.5, "extra-condensed"),
        (80, "condensed"),
        (90, "semi-condensed"),
        (93.75, None),
        (100, None),
        (106.25, "semi-expanded"),
        (112.5, "expanded"),
        (125, "extra-expanded"),
        (150, "ultra-expanded"),
    ])
    def test_half_open_ranges(self, scale, keyword):
        strategy = horizontal_scale_strategy(scale)
        assert strategy.font_stretch == keyword
        assert strategy.scale_x is None

    def test_missing_scale(self):
        strategy = horizontal_scale_strategy(None)
        assert strategy.font_stretch is None
        assert strategy.scale_x is None


class TestJustification:
    def test_known_values(self):
        assert justification_to_css("CenterAlign") == ("center", None)
        assert justification_to_css("LeftJustified") == ("justify", "left")
        assert justification_to_css("FullyJustified") == ("justify", "justify")
        assert justification_to_css("AwayFromBindingSide") == ("right", None)

    def test_unknown_value_is_ignored(self):
        assert justification_to_css("SomethingElse") is None
        assert justification_to_css(None) is None

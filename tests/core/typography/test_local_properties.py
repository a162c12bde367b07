import pytest

from typeset.core.typography.local_properties import (
    extract_local_paragraph_properties,
    leading_to_line_height,
)


class TestLocalParagraphProperties:
    def test_spacing_and_indents(self):
        local = extract_local_paragraph_properties({
            "SpaceBefore": "12",
            "SpaceAfter": "18",
            "FirstLineIndent": "24",
            "LeftIndent": "36",
            "RightIndent": "48",
            "Leading": "15",
            "PointSize": "12",
        })
        assert local.margin_top == 12
        assert local.margin_bottom == 18
        assert local.text_indent == 24
        assert local.left_indent == 36
        assert local.right_indent == 48
        assert local.line_height == pytest.approx(1.25)

    def test_auto_leading_produces_no_line_height(self):
        local = extract_local_paragraph_properties({"Leading": "Auto", "PointSize": "12", "SpaceBefore": "4"})
        assert local.line_height is None
        assert local.margin_top == 4

    def test_point_size_defaults_to_12(self):
        assert leading_to_line_height("18") == pytest.approx(1.5)

    def test_absent_fields_stay_unset(self):
        local = extract_local_paragraph_properties({"SpaceAfter": "6"})
        assert local.margin_bottom == 6
        assert local.margin_top is None
        assert local.text_indent is None
        assert not local.is_empty()

    def test_empty_and_invalid_values(self):
        local = extract_local_paragraph_properties({"SpaceBefore": "abc", "LeftIndent": ""})
        assert local.is_empty()

    def test_justification(self):
        local = extract_local_paragraph_properties({"Justification": "RightJustified"})
        assert local.text_align == "justify"
        assert local.text_align_last == "right"

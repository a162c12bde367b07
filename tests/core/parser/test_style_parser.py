import pytest
from lxml import etree

from typeset.core.parser.style_parser import StyleParser


class TestStyleParser:
    @pytest.fixture
    def parser(self):
        return StyleParser()

    @pytest.fixture
    def styles_root(self, styles_xml):
        return etree.fromstring(styles_xml)

    def test_character_styles_at_any_depth(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_character_styles(styles_root)}
        assert set(styles) == {
            "CharacterStyle/$ID/[No character style]",
            "CharacterStyle/Style château",
            "CharacterStyle/Accents%3aGras",
        }

    def test_character_style_fields(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_character_styles(styles_root)}
        chateau = styles["CharacterStyle/Style château"]
        assert chateau.font_family == "Sue Ellen Francisco"
        assert chateau.font_size == 42
        assert chateau.fill_color == "Color/u144"
        assert chateau.text_transform == "uppercase"
        assert chateau.horizontal_scale == 141
        assert chateau.tracking == 50
        assert chateau.stroke_color == "Color/u145"
        assert chateau.stroke_weight is None
        assert chateau.font_weight == "normal"
        assert chateau.based_on == "$ID/[No character style]"

    def test_font_style_and_decoration(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_character_styles(styles_root)}
        gras = styles["CharacterStyle/Accents%3aGras"]
        assert gras.font_weight == "bold"
        assert gras.font_style == "italic"
        assert gras.text_decoration == "underline"

    def test_sentinel_style_has_no_fields(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_character_styles(styles_root)}
        sentinel = styles["CharacterStyle/$ID/[No character style]"]
        assert sentinel.font_size is None
        assert sentinel.font_weight is None

    def test_paragraph_styles(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_paragraph_styles(styles_root)}
        titre = styles["ParagraphStyle/Titre livre"]
        assert titre.font_family == "Minion Pro"
        assert titre.font_size == 18
        assert titre.leading == 24
        assert titre.text_align == "center"
        assert titre.text_align_last is None
        assert titre.margin_top == 6
        assert titre.based_on == "ParagraphStyle/$ID/NormalParagraphStyle"

    def test_auto_leading_and_justified_alignment(self, parser, styles_root):
        styles = {s.style_id: s for s in parser.parse_paragraph_styles(styles_root)}
        corps = styles["ParagraphStyle/Corps"]
        assert corps.leading == "Auto"
        assert corps.text_align == "justify"
        assert corps.text_align_last == "left"
        assert corps.based_on == "ParagraphStyle/Titre livre"

    def test_swatches(self, parser, graphic_xml):
        swatches = parser.parse_swatches(etree.fromstring(graphic_xml))
        assert set(swatches) == {"Color/u144", "Color/u145", "Color/Black", "Color/Paper", "Color/Rouge"}
        violet = swatches["Color/u144"]
        assert violet.space == "CMYK"
        assert violet.components == (65.0, 100.0, 0.0, 13.0)
        assert violet.name == "Violet"

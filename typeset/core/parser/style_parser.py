import logging
from typing import Dict, List, Optional

from lxml import etree

from typeset.core.constants import LEADING_AUTO
from typeset.core.parser.style_models import CharacterStyle, ColorSwatch, ParagraphStyle
from typeset.core.typography.metrics import justification_to_css

logger = logging.getLogger(__name__)


def _float_attr(node: etree._Element, name: str) -> Optional[float]:
    raw = node.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        logger.debug(f"Atributo {name}={raw!r} no numérico en {node.get('Self')}")
        return None


def _property(node: etree._Element, name: str) -> Optional[str]:
    """Valor de <Properties><name>...</name></Properties>."""
    prop = node.find(f"Properties/{name}")
    if prop is None or prop.text is None:
        return None
    return prop.text.strip()


class StyleParser:
    """Extrae estilos de carácter/párrafo (Styles.xml) y swatches (Graphic.xml)."""

    def _font_fields(self, node: etree._Element) -> dict:
        font_style = (node.get("FontStyle") or "").lower()
        weight = None
        slant = None
        if font_style:
            weight = "bold" if "bold" in font_style or "black" in font_style else "normal"
            slant = "italic" if "italic" in font_style or "oblique" in font_style else "normal"

        decoration = None
        if node.get("Underline") == "true":
            decoration = "underline"
        elif node.get("StrikeThru") == "true":
            decoration = "line-through"

        transform = None
        capitalization = node.get("Capitalization")
        if capitalization in ("AllCaps", "SmallCaps"):
            transform = "uppercase"
        elif capitalization == "Normal":
            transform = "none"

        return {
            "font_family": _property(node, "AppliedFont") or node.get("FontFamily"),
            "font_size": _float_attr(node, "PointSize"),
            "font_weight": weight,
            "font_style": slant,
            "fill_color": node.get("FillColor"),
            "tracking": _float_attr(node, "Tracking"),
            "baseline_shift": _float_attr(node, "BaselineShift"),
            "text_decoration": decoration,
            "text_transform": transform,
            "horizontal_scale": _float_attr(node, "HorizontalScale"),
            "stroke_color": node.get("StrokeColor"),
            "stroke_weight": _float_attr(node, "StrokeWeight"),
        }

    def parse_character_styles(self, root: etree._Element) -> List[CharacterStyle]:
        styles = []
        # Los grupos de estilos pueden anidarse: se recorre a cualquier profundidad
        for node in root.iter("CharacterStyle"):
            style_id = node.get("Self")
            if not style_id:
                continue
            styles.append(CharacterStyle(
                style_id=style_id,
                name=node.get("Name"),
                based_on=_property(node, "BasedOn"),
                **self._font_fields(node),
            ))
        return styles

    def parse_paragraph_styles(self, root: etree._Element) -> List[ParagraphStyle]:
        styles = []
        for node in root.iter("ParagraphStyle"):
            style_id = node.get("Self")
            if not style_id:
                continue

            leading_raw = _property(node, "Leading") or node.get("Leading")
            leading = None
            if leading_raw == LEADING_AUTO:
                leading = LEADING_AUTO
            elif leading_raw:
                try:
                    leading = float(leading_raw)
                except ValueError:
                    logger.debug(f"Leading inválido en {style_id}: {leading_raw!r}")

            text_align = text_align_last = None
            alignment = justification_to_css(node.get("Justification"))
            if alignment is not None:
                text_align, text_align_last = alignment

            styles.append(ParagraphStyle(
                style_id=style_id,
                name=node.get("Name"),
                based_on=_property(node, "BasedOn"),
                text_align=text_align,
                text_align_last=text_align_last,
                leading=leading,
                margin_top=_float_attr(node, "SpaceBefore"),
                margin_bottom=_float_attr(node, "SpaceAfter"),
                text_indent=_float_attr(node, "FirstLineIndent"),
                left_indent=_float_attr(node, "LeftIndent"),
                right_indent=_float_attr(node, "RightIndent"),
                **self._font_fields(node),
            ))
        return styles

    def parse_swatches(self, root: etree._Element) -> Dict[str, ColorSwatch]:
        swatches = {}
        for node in root.iter("Color"):
            swatch_id = node.get("Self")
            color_value = node.get("ColorValue")
            if not swatch_id or not color_value:
                continue
            try:
                components = tuple(float(v) for v in color_value.split())
            except ValueError:
                logger.warning(f"ColorValue inválido en {swatch_id}: {color_value!r}")
                continue
            swatches[swatch_id] = ColorSwatch(
                swatch_id=swatch_id,
                space=node.get("Space", ""),
                components=components,
                name=node.get("Name"),
            )
        return swatches

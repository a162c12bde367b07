from typing import Dict

from pydantic import BaseModel, ConfigDict


def _pt(value: float) -> str:
    return f"{value:g}pt"


class EffectiveStyle(BaseModel):
    """Estilo totalmente resuelto: ningún campo queda sin valor."""
    model_config = ConfigDict(frozen=True)

    font_family: str
    font_size: float
    font_weight: str
    font_style: str
    color: str
    letter_spacing: str
    letter_spacing_em: float
    baseline_shift: float
    text_decoration: str
    text_transform: str
    horizontal_scale: float
    font_stretch: str
    transform: str
    stroke_color: str
    stroke_weight: float

    text_align: str
    text_align_last: str
    line_height: float
    margin_top: float
    margin_bottom: float
    text_indent: float
    left_indent: float
    right_indent: float

    def to_css(self) -> Dict[str, str]:
        """Proyección a propiedades CSS para el renderer."""
        css = {
            "font-family": self.font_family,
            "font-size": _pt(self.font_size),
            "font-weight": self.font_weight,
            "font-style": self.font_style,
            "color": self.color,
            "letter-spacing": self.letter_spacing,
            "line-height": f"{self.line_height:g}",
            "text-align": self.text_align,
            "text-decoration": self.text_decoration,
            "text-transform": self.text_transform,
        }
        if self.text_align_last != "auto":
            css["text-align-last"] = self.text_align_last
        if self.font_stretch != "normal":
            css["font-stretch"] = self.font_stretch
        if self.transform != "none":
            css["transform"] = self.transform
            css["transform-origin"] = "left top"
        if self.baseline_shift:
            css["vertical-align"] = _pt(self.baseline_shift)
        if self.stroke_color != "none" and self.stroke_weight > 0:
            css["-webkit-text-stroke"] = f"{_pt(self.stroke_weight)} {self.stroke_color}"

        for prop, value in (
            ("margin-top", self.margin_top),
            ("margin-bottom", self.margin_bottom),
            ("margin-left", self.left_indent),
            ("margin-right", self.right_indent),
            ("text-indent", self.text_indent),
        ):
            if value:
                css[prop] = _pt(value)
        return css

import logging
from typing import Any, Mapping, Optional

from typeset.core.constants import DEFAULT_POINT_SIZE, LEADING_AUTO
from typeset.core.parser.style_models import LocalStyleOverride
from typeset.core.typography.metrics import justification_to_css

logger = logging.getLogger(__name__)

# Atributo IDML del rango -> campo del override
SPACING_ATTRIBUTES = {
    "SpaceBefore": "margin_top",
    "SpaceAfter": "margin_bottom",
    "FirstLineIndent": "text_indent",
    "LeftIndent": "left_indent",
    "RightIndent": "right_indent",
}


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Valor numérico inválido ignorado: {value!r}")
        return None


def leading_to_line_height(leading: Any, point_size: Any = None) -> Optional[float]:
    """Leading / PointSize. 'Auto' no produce line-height."""
    if leading is None or leading == LEADING_AUTO:
        return None
    leading_value = _to_float(leading)
    if leading_value is None:
        return None
    size = _to_float(point_size) or DEFAULT_POINT_SIZE
    return leading_value / size


def extract_local_paragraph_properties(attributes: Mapping[str, Any]) -> LocalStyleOverride:
    """
    Extrae las propiedades definidas directamente sobre un ParagraphStyleRange.
    Solo se rellenan los campos presentes; el resto cae al estilo nombrado.
    """
    values = {}
    for attr_name, field_name in SPACING_ATTRIBUTES.items():
        number = _to_float(attributes.get(attr_name))
        if number is not None:
            values[field_name] = number

    line_height = leading_to_line_height(attributes.get("Leading"), attributes.get("PointSize"))
    if line_height is not None:
        values["line_height"] = line_height

    alignment = justification_to_css(attributes.get("Justification"))
    if alignment is not None:
        values["text_align"], text_align_last = alignment
        if text_align_last is not None:
            values["text_align_last"] = text_align_last

    return LocalStyleOverride(**values)

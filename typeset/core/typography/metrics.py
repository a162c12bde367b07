"""
Traducción de métricas de impresión (tracking, escala horizontal,
justificación) a valores web equivalentes.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Por encima de este valor el tracking se interpreta como porcentaje
TRACKING_PERCENT_THRESHOLD = 100

# Fuera de [50, 150] los keywords de font-stretch no reproducen la distorsión
SCALE_TRANSFORM_MIN = 50
SCALE_TRANSFORM_MAX = 150

# (límite superior exclusivo, keyword). None = sin font-stretch
FONT_STRETCH_RANGES = (
    (62.5, "ultra-condensed"),
    (75.0, "extra-condensed"),
    (87.5, "condensed"),
    (93.75, "semi-condensed"),
    (106.25, None),
    (112.5, "semi-expanded"),
    (125.0, "expanded"),
    (150.0, "extra-expanded"),
)

JUSTIFICATION_MAP = {
    "LeftAlign": ("left", None),
    "CenterAlign": ("center", None),
    "RightAlign": ("right", None),
    "LeftJustified": ("justify", "left"),
    "RightJustified": ("justify", "right"),
    "CenterJustified": ("justify", "center"),
    "FullyJustified": ("justify", "justify"),
    "Justify": ("justify", "justify"),
    "ToBindingSide": ("left", None),
    "AwayFromBindingSide": ("right", None),
}


@dataclass(frozen=True)
class WidthStrategy:
    """Exactamente uno de los dos campos aplica (o ninguno si la escala es ~100%)."""
    font_stretch: Optional[str] = None
    scale_x: Optional[float] = None

    @property
    def transform(self) -> Optional[str]:
        if self.scale_x is None:
            return None
        return f"scaleX({self.scale_x:g})"


def tracking_to_em(tracking: float) -> float:
    """141 -> 1.41em (porcentaje); 50 -> 0.05em, 100 -> 0.1em, -20 -> -0.02em (milésimas)."""
    if tracking > TRACKING_PERCENT_THRESHOLD:
        return tracking / 100
    return tracking / 1000


def letter_spacing_css(tracking: Optional[float]) -> str:
    if not tracking:
        return "normal"
    return f"{tracking_to_em(tracking):g}em"


def horizontal_scale_strategy(scale: Optional[float]) -> WidthStrategy:
    if scale is None:
        return WidthStrategy()

    if scale > SCALE_TRANSFORM_MAX or scale < SCALE_TRANSFORM_MIN:
        return WidthStrategy(scale_x=scale / 100)

    for upper, keyword in FONT_STRETCH_RANGES:
        if scale < upper:
            return WidthStrategy(font_stretch=keyword)

    # Exactamente 150: último valor expresable con keyword
    return WidthStrategy(font_stretch="ultra-expanded")


def justification_to_css(justification: Optional[str]) -> Optional[Tuple[str, Optional[str]]]:
    """Devuelve (text-align, text-align-last) o None si el valor no se reconoce."""
    if not justification:
        return None
    mapped = JUSTIFICATION_MAP.get(justification)
    if mapped is None:
        logger.warning(f"Justificación desconocida ignorada: {justification}")
    return mapped

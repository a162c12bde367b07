"""
Motor de ajuste de texto: reduce el cuerpo hasta que el bloque cabe en su contenedor.

Medición analítica y pesimista, sin backend de render. Búsqueda lineal
descendente con verificación de cada candidato.
"""
import logging
import math
from typing import Optional

from typeset.config import Settings, get_settings
from typeset.schemas.fitting import FitOptions, FitResult

logger = logging.getLogger(__name__)

# Ancho por carácter = cuerpo * factor
CHAR_WIDTH_FACTOR = 1.8


def estimate_word_width(word: str, font_size: float) -> float:
    # La palabra incluye su espacio final
    return (len(word) + 1) * font_size * CHAR_WIDTH_FACTOR


def estimate_line_count(text: str, font_size: float, container_width: float, first_line_indent: float = 0.0) -> int:
    total = 0
    for paragraph in text.split("\n"):
        words = [w for w in paragraph.split(" ") if w]
        if not words:
            total += 1
            continue

        lines = 1
        current = 0.0
        available = container_width - first_line_indent
        for word in words:
            width = estimate_word_width(word, font_size)
            if current > 0 and current + width > available:
                lines += 1
                current = width
                available = container_width
            else:
                current += width
        total += lines
    return total


def estimate_block_height(text: str, font_size: float, options: FitOptions) -> float:
    lines = estimate_line_count(text, font_size, options.container_width, options.first_line_indent)
    return lines * font_size * options.line_height_multiplier


def _is_degenerate(text: str, options: FitOptions) -> bool:
    if math.isnan(options.container_width) or math.isnan(options.container_height):
        return True
    return not text or not text.strip() or options.container_width <= 0 or options.container_height <= 0


def fit_text(text: str, options: FitOptions, settings: Optional[Settings] = None) -> FitResult:
    cfg = settings or get_settings()
    original = options.original_font_size

    if _is_degenerate(text, options):
        return FitResult(
            font_size=original,
            original_font_size=original,
            line_count=0,
            block_height=0.0,
            fitted=True,
            reduced=False,
        )

    floor = cfg.FIT_MIN_FONT_SIZE
    target_height = options.container_height * (1 - cfg.FIT_SAFETY_MARGIN)

    # Un cuerpo no finito va directo al mínimo
    size = original
    while math.isfinite(size) and size > floor:
        height = estimate_block_height(text, size, options)
        if height <= target_height:
            return FitResult(
                font_size=size,
                original_font_size=original,
                line_count=estimate_line_count(text, size, options.container_width, options.first_line_indent),
                block_height=height,
                fitted=True,
                reduced=size < original,
            )
        # Redondeo para no acumular error con cuerpos no múltiplos del paso
        size = round(size - cfg.FIT_STEP, 6)

    height = estimate_block_height(text, floor, options)
    fitted = height <= target_height
    if not fitted:
        logger.warning(
            f"El texto no cabe ni al cuerpo mínimo ({floor}pt): "
            f"{height:.1f}pt de alto para {target_height:.1f}pt disponibles"
        )
    return FitResult(
        font_size=floor,
        original_font_size=original,
        line_count=estimate_line_count(text, floor, options.container_width, options.first_line_indent),
        block_height=height,
        fitted=fitted,
        reduced=floor < original,
    )


def fit_font_size(text: str, options: FitOptions, settings: Optional[Settings] = None) -> float:
    return fit_text(text, options, settings).font_size

"""
Validación del orden de lectura de los frames de una página:
orden de maquetación (layout_order) vs. orden visual (arriba-abajo, izquierda-derecha).
"""
import functools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from typeset.core.parser.style_models import TextFrame

logger = logging.getLogger(__name__)

DEFAULT_Y_TOLERANCE = 10.0
MAX_REPORTED_CONFLICTS = 5
# Se asumen como máximo 3 columnas por página
MAX_COLUMNS = 3


@dataclass
class ReadingOrderReport:
    valid: bool
    warnings: List[str] = field(default_factory=list)
    # Índices (en la lista de entrada) en orden visual; solo si hay discrepancia
    corrected_order: Optional[List[int]] = None


def _positioned(frames: Sequence[TextFrame]) -> List[TextFrame]:
    return [f for f in frames if f.position is not None]


def _visual_key(tolerance: float):
    def compare(a: TextFrame, b: TextFrame) -> float:
        y_diff = a.position.y - b.position.y
        if abs(y_diff) > tolerance:
            return y_diff
        return a.position.x - b.position.x

    return functools.cmp_to_key(lambda a, b: (compare(a, b) > 0) - (compare(a, b) < 0))


def validate_reading_order(frames: Sequence[TextFrame], page_index: int, tolerance: float = DEFAULT_Y_TOLERANCE) -> ReadingOrderReport:
    input_index = {id(f): i for i, f in enumerate(frames)}
    frames = _positioned(frames)
    if not frames:
        return ReadingOrderReport(valid=True)

    visual = sorted(frames, key=_visual_key(tolerance))
    layout = sorted(frames, key=lambda f: f.layout_order)

    conflicts = [
        f"Position {i}: visual={v.frame_id}, layout={l.frame_id}"
        for i, (v, l) in enumerate(zip(visual, layout))
        if v.frame_id != l.frame_id
    ]
    if not conflicts:
        return ReadingOrderReport(valid=True)

    warnings = [
        f"Page {page_index}: Reading order discrepancy detected. "
        f"Visual order differs from layout order."
    ]
    if len(conflicts) <= MAX_REPORTED_CONFLICTS:
        warnings.append(f"Conflicts: {'; '.join(conflicts)}")

    logger.warning(warnings[0])
    return ReadingOrderReport(
        valid=False,
        warnings=warnings,
        corrected_order=[input_index[id(f)] for f in visual],
    )


def detect_multi_column_layout(frames: Sequence[TextFrame], page_width: float) -> bool:
    frames = _positioned(frames)
    if len(frames) < 2 or page_width <= 0:
        return False
    column_width = page_width / MAX_COLUMNS
    columns = {int(f.position.x // column_width) for f in frames}
    return len(columns) >= 2


def suggest_reading_order(frames: Sequence[TextFrame], page_width: float, tolerance: float = DEFAULT_Y_TOLERANCE) -> List[TextFrame]:
    positioned = _positioned(frames)
    if not detect_multi_column_layout(positioned, page_width):
        return sorted(positioned, key=_visual_key(tolerance))

    gap = page_width / 4

    def by_column(a: TextFrame, b: TextFrame) -> int:
        x_diff = a.position.x - b.position.x
        diff = x_diff if abs(x_diff) > gap else a.position.y - b.position.y
        return (diff > 0) - (diff < 0)

    return sorted(positioned, key=functools.cmp_to_key(by_column))

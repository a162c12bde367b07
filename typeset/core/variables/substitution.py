import logging
from typing import Callable, Iterable, List, Mapping, Optional

from typeset.core.parser.style_models import VARIABLE_PATTERN, ConditionalSegment
from typeset.core.variables.mapper import document_to_wizard_variable

logger = logging.getLogger(__name__)


def extract_variables(text: str) -> List[str]:
    """Tokens {..} del texto, sin llaves, únicos y en orden de aparición."""
    found: List[str] = []
    for match in VARIABLE_PATTERN.findall(text or ""):
        token = match.strip()
        if token and token not in found:
            found.append(token)
    return found


def assemble_segments(
    segments: Iterable[ConditionalSegment],
    is_active: Optional[Callable[[str], bool]] = None,
) -> str:
    """
    Concatena los segmentos incluidos. Un segmento sin condición siempre entra;
    uno condicionado entra solo si el predicado externo lo acepta.
    La semántica de la etiqueta de condición no se interpreta aquí.
    """
    parts = []
    for segment in segments:
        if segment.condition and (is_active is None or not is_active(segment.condition)):
            continue
        parts.append(segment.text)
    return "".join(parts)


def substitute_variables(text: str, values: Mapping[str, str]) -> str:
    """
    Sustituye cada {atributo_heroe} por el valor del wizard 'heroe_atributo'.
    Los placeholders sin valor (o no parseables) quedan intactos.
    """
    if not text or not values:
        return text

    def _replace(match) -> str:
        wizard_name = document_to_wizard_variable(match.group(1).strip())
        value = values.get(wizard_name)
        if value is None:
            logger.debug(f"Sin valor para '{wizard_name}', se conserva el placeholder")
            return match.group(0)
        return str(value)

    return VARIABLE_PATTERN.sub(_replace, text)


def has_conditional_text(segments: Optional[Iterable[ConditionalSegment]]) -> bool:
    return any(segment.condition for segment in segments or ())


def extract_unique_conditions(segments: Iterable[ConditionalSegment]) -> List[str]:
    """Etiquetas de condición distintas, ordenadas; opacas para este módulo."""
    return sorted({segment.condition for segment in segments if segment.condition})

"""
Herencia BasedOn entre estilos.

Los estilos se direccionan por identificador en un mapa plano; la detección
de ciclos es un recorrido con conjunto de visitados sobre identificadores.
"""
import logging
from dataclasses import fields, replace
from typing import Dict, List, Mapping, Optional, TypeVar

from typeset.core.constants import (
    CHARACTER_STYLE_PREFIX,
    PARAGRAPH_STYLE_PREFIX,
    ROOT_STYLE_IDS,
    STYLE_KIND_CHARACTER,
    STYLE_KIND_PARAGRAPH,
)
from typeset.core.exceptions import InheritanceCycleError, StyleNotFoundError

logger = logging.getLogger(__name__)

S = TypeVar("S")

# Campos de identidad que nunca se heredan
IDENTITY_FIELDS = ("style_id", "name", "based_on")


def _prefix_for(kind: str) -> str:
    return CHARACTER_STYLE_PREFIX if kind == STYLE_KIND_CHARACTER else PARAGRAPH_STYLE_PREFIX


def is_root_style(style_id: Optional[str]) -> bool:
    return not style_id or style_id in ROOT_STYLE_IDS


def normalize_style_id(style_id: str, dictionary: Mapping[str, S], kind: str) -> Optional[str]:
    """
    Encuentra la clave real del estilo tolerando el prefijo de namespace:
    tal cual, sin prefijo, o con prefijo añadido.
    """
    if style_id in dictionary:
        return style_id
    prefix = _prefix_for(kind)
    if style_id.startswith(prefix):
        candidate = style_id[len(prefix):]
    else:
        candidate = prefix + style_id
    return candidate if candidate in dictionary else None


def resolve_chain(style_id: str, dictionary: Mapping[str, S], kind: str) -> List[S]:
    """
    Devuelve la cadena [estilo, padre, abuelo, ...] hasta una raíz.
    Lanza StyleNotFoundError si un eslabón no existe e InheritanceCycleError
    si la cadena se revisita.
    """
    chain: List[S] = []
    path: List[str] = []
    current: Optional[str] = style_id

    while current and not (path and is_root_style(current)):
        key = normalize_style_id(current, dictionary, kind)
        if key is None:
            raise StyleNotFoundError(current, kind)
        if key in path:
            raise InheritanceCycleError(key, path[path.index(key):])
        path.append(key)
        style = dictionary[key]
        chain.append(style)
        current = getattr(style, "based_on", None)

    return chain


def merge_chain(chain: List[S]) -> S:
    """Aplana la cadena: los campos definidos del hijo ganan sobre los del padre."""
    if not chain:
        raise ValueError("merge_chain requiere al menos un estilo")
    child = chain[0]
    merged = {}
    for f in fields(child):
        if f.name in IDENTITY_FIELDS:
            continue
        for style in chain:
            value = getattr(style, f.name, None)
            if value is not None:
                merged[f.name] = value
                break
    return replace(child, **merged)


def resolve_style(style_id: str, dictionary: Mapping[str, S], kind: str) -> S:
    chain = resolve_chain(style_id, dictionary, kind)
    if len(chain) > 1:
        logger.debug(f"{kind} style '{style_id}' hereda de {len(chain) - 1} ancestro(s)")
    return merge_chain(chain)


def detect_style_cycles(dictionary: Mapping[str, S], kind: str = STYLE_KIND_PARAGRAPH) -> List[List[str]]:
    """
    Lista todos los ciclos BasedOn del diccionario (DFS con pila de recursión).
    Cada ciclo se devuelve cerrado: ['A', 'B', 'A'].
    """
    cycles: List[List[str]] = []
    visited = set()

    for start in dictionary:
        if start in visited:
            continue
        stack: List[str] = []
        on_stack = set()
        current: Optional[str] = start

        while current is not None:
            if current in on_stack:
                cycles.append(stack[stack.index(current):] + [current])
                break
            if current in visited:
                break
            visited.add(current)
            stack.append(current)
            on_stack.add(current)

            parent = getattr(dictionary[current], "based_on", None)
            if is_root_style(parent):
                break
            current = normalize_style_id(parent, dictionary, kind)

    return cycles


def build_inheritance_tree(style_id: str, dictionary: Mapping[str, S], kind: str = STYLE_KIND_PARAGRAPH) -> str:
    """Representación indentada de la cadena, para depuración."""
    lines = []
    try:
        chain = resolve_chain(style_id, dictionary, kind)
    except (InheritanceCycleError, StyleNotFoundError) as e:
        return f"{style_id} (error: {e})"

    for depth, style in enumerate(reversed(chain)):
        label = getattr(style, "name", None) or style.style_id
        lines.append(f"{'  ' * depth}└─ {label}")
    return "\n".join(lines)


def index_by_id(styles: List[S]) -> Dict[str, S]:
    return {style.style_id: style for style in styles}

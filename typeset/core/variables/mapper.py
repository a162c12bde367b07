"""
Traducción entre variables IDML ({name_child}) y atributos del wizard (child_name).

El orden de los campos se invierte entre ambas convenciones:
    IDML   -> {atributo_heroe}
    Wizard -> heroe_atributo
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from typeset.schemas.variables import VariableMapping, WizardOption

logger = logging.getLogger(__name__)

KNOWN_HEROES = frozenset({
    "child", "father", "mother", "boy", "girl", "grandpa", "grandma", "baby", "teen",
})

KNOWN_ATTRIBUTES = frozenset({
    "name", "hero", "skin", "hair", "eyes", "gender", "outfit", "accessory", "age",
})

TEXT_ATTRIBUTE = "name"


@dataclass(frozen=True)
class ParsedVariable:
    hero_id: str
    attribute_id: str


def _strip(variable: str) -> str:
    return variable.strip().strip("{}").strip()


def parse_variable(variable: str) -> Optional[ParsedVariable]:
    """
    Descompone una variable IDML en (héroe, atributo).
    Devuelve None si no hay exactamente dos partes separadas por '_'.
    """
    parts = _strip(variable).split("_")
    if len(parts) != 2:
        return None
    first, second = parts

    # Orden de resolución:
    #   1. parte 1 es héroe conocido
    #   2. parte 2 es héroe conocido
    #   3. parte 1 es atributo conocido -> parte 2 es el héroe
    #   4. parte 2 es atributo conocido -> parte 1 es el héroe
    #   5. por defecto: parte 1 atributo, parte 2 héroe
    if first in KNOWN_HEROES:
        return ParsedVariable(hero_id=first, attribute_id=second)
    if second in KNOWN_HEROES:
        return ParsedVariable(hero_id=second, attribute_id=first)
    if first in KNOWN_ATTRIBUTES:
        return ParsedVariable(hero_id=second, attribute_id=first)
    if second in KNOWN_ATTRIBUTES:
        return ParsedVariable(hero_id=first, attribute_id=second)

    # Caso ambiguo: ningún token reconocido. Se conserva el fallback literal.
    logger.debug(f"Variable '{variable}' sin tokens conocidos, fallback atributo_heroe")
    return ParsedVariable(hero_id=second, attribute_id=first)


def to_wizard_name(parsed: ParsedVariable) -> str:
    return f"{parsed.hero_id}_{parsed.attribute_id}"


def to_document_variable(wizard_name: str) -> str:
    """'child_name' -> '{name_child}'. Si no tiene dos partes se envuelve tal cual."""
    parts = wizard_name.split("_")
    if len(parts) != 2:
        return f"{{{wizard_name}}}"
    hero_id, attribute_id = parts
    return f"{{{attribute_id}_{hero_id}}}"


def document_to_wizard_variable(variable: str) -> str:
    """Variable IDML -> nombre wizard; sin cambios si no es parseable."""
    parsed = parse_variable(variable)
    if parsed is None:
        return variable
    return to_wizard_name(parsed)


def map_variables(variables: Iterable[str]) -> List[VariableMapping]:
    mappings = []
    for variable in variables:
        parsed = parse_variable(variable)
        if parsed is None:
            # No parseable: se mantiene como texto literal opaco
            mappings.append(VariableMapping(
                idml_variable=variable,
                wizard_attribute=variable,
                type='text',
            ))
            continue
        mappings.append(VariableMapping(
            idml_variable=variable,
            wizard_attribute=to_wizard_name(parsed),
            hero_id=parsed.hero_id,
            attribute_id=parsed.attribute_id,
            type='text' if parsed.attribute_id == TEXT_ATTRIBUTE else 'characteristic',
        ))
    return mappings


def group_by_subject(mappings: Iterable[VariableMapping]) -> Dict[str, List[VariableMapping]]:
    """Agrupa por héroe conservando el orden de aparición. Las opacas se omiten."""
    groups: Dict[str, List[VariableMapping]] = {}
    for mapping in mappings:
        if not mapping.hero_id:
            continue
        groups.setdefault(mapping.hero_id, []).append(mapping)
    return groups


def create_wizard_options(variables: Iterable[str]) -> List[WizardOption]:
    """
    Opciones del wizard: 'name' -> campo de texto libre, el resto -> selector.
    Variables repetidas producen una sola opción.
    """
    options = []
    seen = set()
    for hero_id, group in group_by_subject(map_variables(variables)).items():
        for mapping in group:
            if mapping.wizard_attribute in seen:
                continue
            seen.add(mapping.wizard_attribute)
            options.append(WizardOption(
                id=mapping.wizard_attribute,
                label=f"{mapping.attribute_id} ({hero_id})",
                type='text' if mapping.type == 'text' else 'options',
            ))
    return options

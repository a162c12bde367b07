import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

# Placeholders de variable embebidos en el contenido: {name_child}
VARIABLE_PATTERN = re.compile(r"\{([^}]+)\}")


@dataclass(frozen=True)
class CharacterStyle:
    """Estilo de carácter tal como se declara en Resources/Styles.xml."""
    style_id: str
    name: Optional[str] = None
    based_on: Optional[str] = None

    font_family: Optional[str] = None
    font_size: Optional[float] = None       # pt
    font_weight: Optional[str] = None       # 'normal' | 'bold'
    font_style: Optional[str] = None        # 'normal' | 'italic'
    fill_color: Optional[str] = None        # referencia a swatch (Color/u144) o hex
    tracking: Optional[float] = None        # valor crudo InDesign
    baseline_shift: Optional[float] = None  # pt
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    horizontal_scale: Optional[float] = None  # porcentaje (100 = normal)
    stroke_color: Optional[str] = None
    stroke_weight: Optional[float] = None


@dataclass(frozen=True)
class ParagraphStyle:
    """Estilo de párrafo: campos tipográficos por defecto + maquetación del bloque."""
    style_id: str
    name: Optional[str] = None
    based_on: Optional[str] = None

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    fill_color: Optional[str] = None
    tracking: Optional[float] = None
    baseline_shift: Optional[float] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    horizontal_scale: Optional[float] = None
    stroke_color: Optional[str] = None
    stroke_weight: Optional[float] = None

    text_align: Optional[str] = None
    text_align_last: Optional[str] = None
    # Leading crudo: número en pt o el sentinela "Auto"
    leading: Optional[Union[float, str]] = None
    line_height: Optional[float] = None     # ratio ya calculado
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None
    text_indent: Optional[float] = None
    left_indent: Optional[float] = None
    right_indent: Optional[float] = None


@dataclass(frozen=True)
class LocalStyleOverride:
    """
    Override disperso aplicado directamente sobre un rango.
    Un campo None significa 'no definido': cae al estilo nombrado.
    """
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    fill_color: Optional[str] = None
    tracking: Optional[float] = None
    baseline_shift: Optional[float] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    horizontal_scale: Optional[float] = None
    stroke_color: Optional[str] = None
    stroke_weight: Optional[float] = None

    text_align: Optional[str] = None
    text_align_last: Optional[str] = None
    line_height: Optional[float] = None
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None
    text_indent: Optional[float] = None
    left_indent: Optional[float] = None
    right_indent: Optional[float] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


@dataclass(frozen=True)
class ConditionalSegment:
    """Run de texto dentro de un frame (CharacterStyleRange)."""
    text: str
    applied_character_style: Optional[str] = None
    fill_color: Optional[str] = None   # override inline de color
    condition: Optional[str] = None    # etiqueta opaca (AppliedConditions)

    @property
    def variables(self) -> List[str]:
        return [m.strip() for m in VARIABLE_PATTERN.findall(self.text)]


@dataclass(frozen=True)
class FramePosition:
    x: float
    y: float
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class TextFrame:
    frame_id: str
    paragraph_style: Optional[str]
    character_style: Optional[str] = None
    content: str = ""
    segments: List[ConditionalSegment] = field(default_factory=list)
    page_index: int = 0
    layout_order: int = 0
    parent_story: Optional[str] = None
    local_override: Optional[LocalStyleOverride] = None
    position: Optional[FramePosition] = None
    name: Optional[str] = None

    @property
    def variables(self) -> List[str]:
        found = []
        for match in VARIABLE_PATTERN.findall(self.content):
            token = match.strip()
            if token not in found:
                found.append(token)
        return found


@dataclass(frozen=True)
class ColorSwatch:
    """Swatch de Resources/Graphic.xml. El hex se calcula bajo demanda."""
    swatch_id: str
    space: str                          # 'CMYK' | 'RGB'
    components: Tuple[float, ...]
    name: Optional[str] = None


@dataclass
class StyleDocument:
    """Salida del decodificador: diccionarios de estilos, swatches y frames."""
    character_styles: Dict[str, CharacterStyle] = field(default_factory=dict)
    paragraph_styles: Dict[str, ParagraphStyle] = field(default_factory=dict)
    swatches: Dict[str, ColorSwatch] = field(default_factory=dict)
    frames: List[TextFrame] = field(default_factory=list)

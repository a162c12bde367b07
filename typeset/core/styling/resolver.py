"""
Resolución de la cascada de estilos de un TextFrame.

Orden de capas (la última gana, campo a campo):
    1. ParagraphStyle (base)
    2. CharacterStyle nominal del frame
    3. LocalStyleOverride
    4. CharacterStyle del segmento dominante (+ su FillColor inline)
Después los colores pasan por el motor de calibración y tracking/escala por
el traductor de métricas. Los campos sin valor toman los defaults de config.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from typeset.config import Settings, get_settings
from typeset.core.color.converter import to_hex
from typeset.core.constants import (
    COLOR_PREFIX,
    NO_CHARACTER_STYLE,
    ROOT_STYLE_IDS,
    STYLE_KIND_CHARACTER,
    STYLE_KIND_PARAGRAPH,
    SWATCH_NONE,
)
from typeset.core.exceptions import ParseError, TypesetError
from typeset.core.parser.style_models import (
    CharacterStyle,
    ColorSwatch,
    ConditionalSegment,
    ParagraphStyle,
    TextFrame,
)
from typeset.core.styling.inheritance import normalize_style_id, resolve_style
from typeset.core.typography.local_properties import leading_to_line_height
from typeset.core.typography.metrics import (
    horizontal_scale_strategy,
    letter_spacing_css,
    tracking_to_em,
)
from typeset.schemas.conversion import FrameFailure
from typeset.schemas.style import EffectiveStyle

logger = logging.getLogger(__name__)

FONT_FIELDS = (
    "font_family",
    "font_size",
    "font_weight",
    "font_style",
    "fill_color",
    "tracking",
    "baseline_shift",
    "text_decoration",
    "text_transform",
    "horizontal_scale",
    "stroke_color",
    "stroke_weight",
)

PARAGRAPH_FIELDS = (
    "text_align",
    "text_align_last",
    "line_height",
    "margin_top",
    "margin_bottom",
    "text_indent",
    "left_indent",
    "right_indent",
)


def _overlay(layers: dict, source, field_names: Sequence[str]) -> None:
    """Copia los campos definidos (no None) de source sobre layers."""
    if source is None:
        return
    for name in field_names:
        value = getattr(source, name, None)
        if value is not None:
            layers[name] = value


def select_dominant_segment(segments: Sequence[ConditionalSegment]) -> Optional[ConditionalSegment]:
    """
    Heurística de autoría: el primer segmento con texto visible y un estilo de
    carácter real define el aspecto de todo el frame.
    """
    for segment in segments:
        if not segment.text.strip():
            continue
        style_ref = segment.applied_character_style
        if not style_ref or style_ref == NO_CHARACTER_STYLE or style_ref in ROOT_STYLE_IDS:
            continue
        return segment
    return None


class StyleResolver:
    def __init__(
        self,
        character_styles: Mapping[str, CharacterStyle],
        paragraph_styles: Mapping[str, ParagraphStyle],
        swatches: Optional[Mapping[str, ColorSwatch]] = None,
        settings: Optional[Settings] = None,
    ):
        self.character_styles = character_styles
        self.paragraph_styles = paragraph_styles
        self.swatches = swatches or {}
        self.settings = settings or get_settings()
        self._swatches_by_name = {s.name: s for s in self.swatches.values() if s.name}

    # ------------------------------------------------------------------
    # Lookup de estilos
    # ------------------------------------------------------------------

    def _character_style(self, style_id: Optional[str]) -> Optional[CharacterStyle]:
        if not style_id:
            return None
        if style_id in ROOT_STYLE_IDS and normalize_style_id(style_id, self.character_styles, STYLE_KIND_CHARACTER) is None:
            return None
        return resolve_style(style_id, self.character_styles, STYLE_KIND_CHARACTER)

    def _paragraph_style(self, style_id: str) -> Optional[ParagraphStyle]:
        if style_id in ROOT_STYLE_IDS and normalize_style_id(style_id, self.paragraph_styles, STYLE_KIND_PARAGRAPH) is None:
            return None
        return resolve_style(style_id, self.paragraph_styles, STYLE_KIND_PARAGRAPH)

    # ------------------------------------------------------------------
    # Color
    # ------------------------------------------------------------------

    def resolve_color(self, reference: Optional[str], default: str) -> str:
        """Referencia de swatch (o hex literal) -> hex calibrado."""
        if not reference:
            return default
        if reference == SWATCH_NONE:
            return "transparent"
        if reference.startswith("#"):
            return reference.lower()

        swatch = self.swatches.get(reference)
        if swatch is None and not reference.startswith(COLOR_PREFIX):
            swatch = self.swatches.get(COLOR_PREFIX + reference)
        if swatch is None:
            swatch = self._swatches_by_name.get(reference.replace(COLOR_PREFIX, "", 1))
        if swatch is None:
            logger.warning(f"Swatch '{reference}' no encontrado, usando {default}")
            return default
        return to_hex(swatch.space, swatch.components)

    # ------------------------------------------------------------------
    # Cascada
    # ------------------------------------------------------------------

    def _base_layers(self, frame: TextFrame) -> dict:
        """Capas 1-3: párrafo, carácter nominal, override local."""
        if not frame.paragraph_style:
            raise ParseError(f"El frame '{frame.frame_id}' no tiene ParagraphStyleRange")

        layers: dict = {}
        paragraph = self._paragraph_style(frame.paragraph_style)
        if paragraph is not None:
            _overlay(layers, paragraph, FONT_FIELDS + PARAGRAPH_FIELDS)
            if paragraph.line_height is None:
                line_height = leading_to_line_height(paragraph.leading, paragraph.font_size)
                if line_height is not None:
                    layers["line_height"] = line_height

        _overlay(layers, self._character_style(frame.character_style), FONT_FIELDS)
        _overlay(layers, frame.local_override, FONT_FIELDS + PARAGRAPH_FIELDS)
        return layers

    def _segment_overlay(self, layers: dict, segment: ConditionalSegment) -> None:
        _overlay(layers, self._character_style(segment.applied_character_style), FONT_FIELDS)
        if segment.fill_color:
            layers["fill_color"] = segment.fill_color

    def resolve_frame(self, frame: TextFrame) -> EffectiveStyle:
        layers = self._base_layers(frame)

        dominant = select_dominant_segment(frame.segments)
        if dominant is not None:
            logger.debug(
                f"Frame {frame.frame_id}: segmento dominante con estilo '{dominant.applied_character_style}'"
            )
            self._segment_overlay(layers, dominant)

        return self._finalize(layers)

    def resolve_segment(self, frame: TextFrame, segment: ConditionalSegment) -> EffectiveStyle:
        """Estilo de un segmento concreto: capas 1-3 del frame + el segmento."""
        layers = self._base_layers(frame)
        self._segment_overlay(layers, segment)
        return self._finalize(layers)

    def resolve_all(self, frames: Sequence[TextFrame]) -> Tuple[Dict[str, EffectiveStyle], List[FrameFailure]]:
        """
        Resuelve todos los frames. Un fallo se registra y el lote continúa
        (éxito parcial del documento).
        """
        resolved: Dict[str, EffectiveStyle] = {}
        failures: List[FrameFailure] = []
        for frame in frames:
            try:
                resolved[frame.frame_id] = self.resolve_frame(frame)
            except TypesetError as e:
                logger.warning(f"Frame {frame.frame_id} omitido: {e}")
                failures.append(FrameFailure(
                    frame_id=frame.frame_id,
                    error_type=type(e).__name__,
                    message=str(e),
                ))
            except Exception as e:
                # Errores no previstos tampoco detienen el lote
                logger.error(f"Error inesperado en frame {frame.frame_id}: {e}")
                failures.append(FrameFailure(
                    frame_id=frame.frame_id,
                    error_type=type(e).__name__,
                    message=str(e),
                ))
        logger.info(f"Estilos resueltos: {len(resolved)} OK, {len(failures)} fallidos")
        return resolved, failures

    def _finalize(self, layers: dict) -> EffectiveStyle:
        cfg = self.settings
        tracking = layers.get("tracking") or 0.0
        width = horizontal_scale_strategy(layers.get("horizontal_scale"))

        stroke_color = "none"
        stroke_weight = 0.0
        if layers.get("stroke_color") and layers["stroke_color"] != SWATCH_NONE:
            stroke_color = self.resolve_color(layers["stroke_color"], cfg.DEFAULT_COLOR)
            stroke_weight = layers.get("stroke_weight") or cfg.DEFAULT_STROKE_WEIGHT

        return EffectiveStyle(
            font_family=layers.get("font_family") or cfg.DEFAULT_FONT_FAMILY,
            font_size=layers.get("font_size") or cfg.DEFAULT_FONT_SIZE,
            font_weight=layers.get("font_weight") or "normal",
            font_style=layers.get("font_style") or "normal",
            color=self.resolve_color(layers.get("fill_color"), cfg.DEFAULT_COLOR),
            letter_spacing=letter_spacing_css(tracking),
            letter_spacing_em=tracking_to_em(tracking),
            baseline_shift=layers.get("baseline_shift") or 0.0,
            text_decoration=layers.get("text_decoration") or "none",
            text_transform=layers.get("text_transform") or "none",
            horizontal_scale=layers.get("horizontal_scale") or 100.0,
            font_stretch=width.font_stretch or "normal",
            transform=width.transform or "none",
            stroke_color=stroke_color,
            stroke_weight=stroke_weight,
            text_align=layers.get("text_align") or "left",
            text_align_last=layers.get("text_align_last") or "auto",
            line_height=layers.get("line_height") or cfg.DEFAULT_LINE_HEIGHT,
            margin_top=layers.get("margin_top") or 0.0,
            margin_bottom=layers.get("margin_bottom") or 0.0,
            text_indent=layers.get("text_indent") or 0.0,
            left_indent=layers.get("left_indent") or 0.0,
            right_indent=layers.get("right_indent") or 0.0,
        )

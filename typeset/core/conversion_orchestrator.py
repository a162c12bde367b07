import logging
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from typeset.config import Settings, get_settings
from typeset.core.cache.style_cache import StyleCache, fingerprint
from typeset.core.fitting.text_fitter import fit_text
from typeset.core.parser.style_models import StyleDocument, TextFrame
from typeset.core.styling.resolver import StyleResolver
from typeset.core.variables.mapper import create_wizard_options, map_variables
from typeset.core.variables.substitution import (
    assemble_segments,
    extract_unique_conditions,
    extract_variables,
    has_conditional_text,
    substitute_variables,
)
from typeset.schemas.conversion import ConversionResult, FrameDescriptor, FrameFailure
from typeset.schemas.fitting import FitOptions
from typeset.schemas.style import EffectiveStyle

logger = logging.getLogger(__name__)

ConditionPredicate = Callable[[str], bool]

# Versión de las reglas de resolución; forma parte de la clave de caché
RESOLUTION_VERSION = "1"


class ConversionOrchestrator:
    """
    Pasada completa sobre un documento decodificado:
    estilos -> texto final -> cuerpo ajustado, con aislamiento de fallos por frame.
    """

    def __init__(self, settings: Optional[Settings] = None, cache: Optional[StyleCache] = None):
        self.settings = settings or get_settings()
        if cache is None and self.settings.STYLE_CACHE_ENABLED:
            cache = StyleCache(settings=self.settings)
        self.cache = cache

    def _cache_key(self, document: StyleDocument) -> str:
        cfg = self.settings
        params = {
            "version": RESOLUTION_VERSION,
            "font_family": cfg.DEFAULT_FONT_FAMILY,
            "font_size": cfg.DEFAULT_FONT_SIZE,
            "line_height": cfg.DEFAULT_LINE_HEIGHT,
            "color": cfg.DEFAULT_COLOR,
            "stroke_weight": cfg.DEFAULT_STROKE_WEIGHT,
        }
        return fingerprint(document, params)

    def resolve_styles(self, document: StyleDocument) -> Tuple[Dict[str, EffectiveStyle], List[FrameFailure], bool]:
        """Resuelve (o recupera de caché) los estilos de todos los frames."""
        key = self._cache_key(document) if self.cache is not None else None
        if key is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Estilos recuperados de caché ({key[:12]})")
                styles, failures = cached
                return dict(styles), list(failures), True

        resolver = StyleResolver(
            document.character_styles,
            document.paragraph_styles,
            document.swatches,
            settings=self.settings,
        )
        styles, failures = resolver.resolve_all(document.frames)
        if key is not None:
            self.cache.set(key, (styles, failures))
        return styles, failures, False

    def _render_text(
        self,
        frame: TextFrame,
        wizard_values: Optional[Mapping[str, str]],
        is_condition_active: Optional[ConditionPredicate],
    ) -> str:
        if is_condition_active is None and has_conditional_text(frame.segments):
            logger.debug(f"Frame {frame.frame_id}: sin predicado, se omiten los segmentos condicionados")
        text = assemble_segments(frame.segments, is_condition_active) if frame.segments else frame.content
        if wizard_values:
            text = substitute_variables(text, wizard_values)
        return text

    def _fit(self, frame: TextFrame, style: EffectiveStyle, text: str) -> Tuple[float, bool]:
        position = frame.position
        if position is None or not position.width or not position.height:
            return style.font_size, False
        result = fit_text(
            text,
            FitOptions(
                original_font_size=style.font_size,
                line_height_multiplier=style.line_height,
                first_line_indent=style.text_indent,
                container_width=position.width,
                container_height=position.height,
            ),
            settings=self.settings,
        )
        if result.reduced:
            logger.debug(f"Frame {frame.frame_id}: {style.font_size}pt -> {result.font_size}pt")
        return result.font_size, True

    def convert(
        self,
        document: StyleDocument,
        wizard_values: Optional[Mapping[str, str]] = None,
        is_condition_active: Optional[ConditionPredicate] = None,
    ) -> ConversionResult:
        """
        :param wizard_values: valores del wizard por nombre 'heroe_atributo'
        :param is_condition_active: predicado externo sobre etiquetas de condición
        """
        styles, failures, cache_hit = self.resolve_styles(document)

        descriptors = []
        all_variables: List[str] = []
        for frame in document.frames:
            style = styles.get(frame.frame_id)
            if style is None:
                continue
            rendered = self._render_text(frame, wizard_values, is_condition_active)
            font_size, fit_applied = self._fit(frame, style, rendered)

            variables = extract_variables(frame.content)
            for variable in variables:
                if variable not in all_variables:
                    all_variables.append(variable)

            descriptors.append(FrameDescriptor(
                frame_id=frame.frame_id,
                page_index=frame.page_index,
                layout_order=frame.layout_order,
                content=frame.content,
                rendered_text=rendered,
                variables=variables,
                conditions=extract_unique_conditions(frame.segments),
                style=style,
                font_size=font_size,
                fit_applied=fit_applied,
            ))

        descriptors.sort(key=lambda d: (d.page_index, d.layout_order))
        logger.info(
            f"Conversión completada: {len(descriptors)} frames, {len(failures)} fallidos, "
            f"{len(all_variables)} variables"
        )
        return ConversionResult(
            frames=descriptors,
            failures=failures,
            variable_mappings=map_variables(all_variables),
            wizard_options=create_wizard_options(all_variables),
            cache_hit=cache_hit,
        )

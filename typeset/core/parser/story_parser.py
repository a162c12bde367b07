import logging
from typing import List, Optional

from lxml import etree

from typeset.core.exceptions import ParseError
from typeset.core.parser.style_models import ConditionalSegment, TextFrame
from typeset.core.typography.local_properties import extract_local_paragraph_properties

logger = logging.getLogger(__name__)


def _range_text(char_range: etree._Element) -> str:
    """Texto de un CharacterStyleRange: <Content> tal cual, <Br/> como salto."""
    parts = []
    for child in char_range:
        if child.tag == "Content":
            parts.append(child.text or "")
        elif child.tag == "Br":
            parts.append("\n")
    return "".join(parts)


def _paragraph_attributes(paragraph_range: etree._Element) -> dict:
    attributes = dict(paragraph_range.attrib)
    # El Leading puede venir como atributo o dentro de <Properties>
    leading = paragraph_range.find("Properties/Leading")
    if leading is not None and leading.text:
        attributes["Leading"] = leading.text.strip()
    return attributes


class StoryParser:
    """Convierte un Story IDML en un TextFrame con sus segmentos ordenados."""

    def parse_story(self, root: etree._Element, source: Optional[str] = None) -> TextFrame:
        story = root if root.tag == "Story" else root.find(".//Story")
        if story is None:
            raise ParseError("No se encontró el elemento <Story>", source)

        story_id = story.get("Self") or source or "unknown"
        paragraph_ranges = story.findall(".//ParagraphStyleRange")
        if not paragraph_ranges:
            raise ParseError(f"El story '{story_id}' no tiene ParagraphStyleRange", source)

        segments: List[ConditionalSegment] = []
        nominal_character_style = None
        for paragraph_range in paragraph_ranges:
            for char_range in paragraph_range.findall("CharacterStyleRange"):
                style_ref = char_range.get("AppliedCharacterStyle")
                # Estilo nominal del frame: el del último rango que declara uno
                if style_ref:
                    nominal_character_style = style_ref
                segments.append(ConditionalSegment(
                    text=_range_text(char_range),
                    applied_character_style=style_ref,
                    fill_color=char_range.get("FillColor"),
                    condition=char_range.get("AppliedConditions") or None,
                ))

        first = paragraph_ranges[0]
        local = extract_local_paragraph_properties(_paragraph_attributes(first))

        frame = TextFrame(
            frame_id=story_id,
            paragraph_style=first.get("AppliedParagraphStyle"),
            character_style=nominal_character_style,
            content="".join(s.text for s in segments),
            segments=segments,
            parent_story=story_id,
            local_override=None if local.is_empty() else local,
        )
        logger.debug(f"Story {story_id}: {len(segments)} segmento(s), {len(frame.content)} caracteres")
        return frame

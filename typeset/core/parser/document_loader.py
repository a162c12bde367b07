import logging
from dataclasses import replace
from typing import Iterable, Mapping, Optional, Tuple

from lxml import etree

from typeset.core.exceptions import InvalidXmlError, ParseError
from typeset.core.parser.spread_parser import SpreadParser
from typeset.core.parser.story_parser import StoryParser
from typeset.core.parser.style_models import StyleDocument
from typeset.core.parser.style_parser import StyleParser
from typeset.core.styling.inheritance import index_by_id

logger = logging.getLogger(__name__)


class IdmlDocumentLoader:
    """
    Construye un StyleDocument a partir de las partes XML ya extraídas del
    paquete IDML (la descompresión y validación del ZIP son externas).
    """

    def __init__(self):
        # Configuración de Seguridad del Parser XML
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            huge_tree=False,
            recover=False
        )
        self.style_parser = StyleParser()
        self.story_parser = StoryParser()
        self.spread_parser = SpreadParser()

    def parse_xml(self, xml_bytes: bytes, xml_path: str) -> etree._Element:
        try:
            return etree.fromstring(xml_bytes, parser=self._parser)
        except etree.XMLSyntaxError as e:
            raise InvalidXmlError(xml_path, str(e))

    def load(
        self,
        styles_xml: bytes,
        stories: Mapping[str, bytes],
        graphic_xml: Optional[bytes] = None,
        spreads: Iterable[Tuple[str, bytes]] = (),
        skip_invalid_stories: bool = True,
    ) -> StyleDocument:
        """
        :param stories: ruta -> bytes de cada Stories/Story_*.xml
        :param spreads: pares (ruta, bytes) en orden de páginas
        """
        styles_root = self.parse_xml(styles_xml, "Resources/Styles.xml")
        document = StyleDocument(
            character_styles=index_by_id(self.style_parser.parse_character_styles(styles_root)),
            paragraph_styles=index_by_id(self.style_parser.parse_paragraph_styles(styles_root)),
        )
        if graphic_xml is not None:
            document.swatches = self.style_parser.parse_swatches(
                self.parse_xml(graphic_xml, "Resources/Graphic.xml")
            )

        frames_by_story = {}
        for path, xml_bytes in stories.items():
            try:
                frame = self.story_parser.parse_story(self.parse_xml(xml_bytes, path), path)
            except (ParseError, InvalidXmlError) as e:
                if not skip_invalid_stories:
                    raise
                logger.warning(f"Story omitido '{path}': {e}")
                continue
            if not frame.content.strip():
                logger.debug(f"Story {frame.frame_id} vacío, omitido")
                continue
            frames_by_story[frame.parent_story] = frame

        layout_order = 0
        placed = set()
        for spread_index, (path, xml_bytes) in enumerate(spreads):
            for placement in self.spread_parser.parse_spread(self.parse_xml(xml_bytes, path), spread_index):
                frame = frames_by_story.get(placement.parent_story)
                # Un story enlazado en varios frames toma la primera colocación
                if frame is None or placement.parent_story in placed:
                    continue
                placed.add(placement.parent_story)
                frames_by_story[placement.parent_story] = replace(
                    frame,
                    page_index=placement.page_index,
                    layout_order=layout_order,
                    position=placement.position,
                    name=placement.name,
                )
                layout_order += 1

        document.frames = list(frames_by_story.values())
        logger.info(
            f"Documento cargado: {len(document.character_styles)} estilos de carácter, "
            f"{len(document.paragraph_styles)} de párrafo, {len(document.swatches)} swatches, "
            f"{len(document.frames)} frames"
        )
        return document

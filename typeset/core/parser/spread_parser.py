import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from lxml import etree

from typeset.core.parser.style_models import FramePosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FramePlacement:
    frame_id: str
    parent_story: str
    page_index: int
    position: Optional[FramePosition] = None
    name: Optional[str] = None


def _floats(raw: Optional[str]) -> List[float]:
    if not raw:
        return []
    try:
        return [float(v) for v in raw.split()]
    except ValueError:
        return []


def _bounds_from_geometric(raw: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    # Formato "top left bottom right"
    values = _floats(raw)
    if len(values) != 4:
        return None
    top, left, bottom, right = values
    return left, top, right - left, bottom - top


def _bounds_from_path(frame: etree._Element) -> Optional[Tuple[float, float, float, float]]:
    anchors = [_floats(p.get("Anchor")) for p in frame.iter("PathPointType")]
    anchors = [a for a in anchors if len(a) == 2]
    if not anchors:
        return None
    xs = [a[0] for a in anchors]
    ys = [a[1] for a in anchors]

    # ItemTransform = "a b c d tx ty"; solo se aplica la traslación
    transform = _floats(frame.get("ItemTransform"))
    tx, ty = (transform[4], transform[5]) if len(transform) == 6 else (0.0, 0.0)
    return tx + min(xs), ty + min(ys), max(xs) - min(xs), max(ys) - min(ys)


class SpreadParser:
    """Extrae la posición y página de cada TextFrame de un Spread."""

    def parse_spread(self, root: etree._Element, page_index: int = 0) -> List[FramePlacement]:
        placements = []
        for frame in root.iter("TextFrame"):
            parent_story = frame.get("ParentStory")
            if not parent_story:
                continue

            bounds = _bounds_from_geometric(frame.get("GeometricBounds")) or _bounds_from_path(frame)
            position = FramePosition(*bounds) if bounds else None

            frame_page = page_index
            parent = frame.getparent()
            if parent is not None and parent.tag == "Page":
                page_attr = parent.get("PageIndex") or parent.get("Name")
                if page_attr and page_attr.isdigit():
                    frame_page = int(page_attr)

            placements.append(FramePlacement(
                frame_id=frame.get("Self") or parent_story,
                parent_story=parent_story,
                page_index=frame_page,
                position=position,
                name=frame.get("Name"),
            ))
        logger.debug(f"Spread: {len(placements)} TextFrame(s) en página {page_index}")
        return placements

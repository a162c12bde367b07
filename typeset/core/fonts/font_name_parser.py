import re
from dataclasses import dataclass

FONT_EXTENSION = re.compile(r"\.(ttf|otf|woff2?|eot)$", re.IGNORECASE)

_BOLD = r"(bold|black|heavy|extrabold|semibold)"
_ITALIC = r"(italic|oblique|it)"
_ANY_WEIGHT = r"(bold|black|heavy|extrabold|semibold|light|thin|ultralight|extralight|medium|regular|normal|book|roman)"

COMBINED_BOLD_ITALIC = re.compile(_BOLD + _ITALIC, re.IGNORECASE)
COMBINED_ITALIC_BOLD = re.compile(_ITALIC + _BOLD, re.IGNORECASE)
SINGLE_BOLD = re.compile(r"(?:^|[-_\s])" + _BOLD + r"(?:[-_\s]|$)", re.IGNORECASE)
SINGLE_ITALIC = re.compile(r"(?:^|[-_\s])" + _ITALIC + r"(?:[-_\s]|$)", re.IGNORECASE)

STRIP_WEIGHT_ITALIC = re.compile(_ANY_WEIGHT + _ITALIC, re.IGNORECASE)
STRIP_ITALIC_BOLD = re.compile(_ITALIC + _BOLD, re.IGNORECASE)
STRIP_KEYWORD = re.compile(r"[-_\s]*(bold|black|heavy|extrabold|semibold|light|thin|ultralight|extralight|medium|regular|normal|book|roman|italic|oblique|it)[-_\s]*", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedFontName:
    font_family: str
    font_weight: str = "normal"
    font_style: str = "normal"


def _split_camel_case(name: str) -> str:
    if re.search(r"\s", name):
        return name
    name = re.sub(r"([a-z])([A-Z])", r"\1 \2", name)
    return re.sub(r"([a-zA-Z])(\d)", r"\1 \2", name)


def parse_font_file_name(filename: str) -> ParsedFontName:
    """
    'MinionPro-Regular.otf'    -> Minion Pro / normal / normal
    'MinionPro-BoldItalic.otf' -> Minion Pro / bold / italic
    """
    base = FONT_EXTENSION.sub("", filename)

    weight, style = "normal", "normal"
    if COMBINED_BOLD_ITALIC.search(base) or COMBINED_ITALIC_BOLD.search(base):
        weight, style = "bold", "italic"
    else:
        if SINGLE_BOLD.search(base):
            weight = "bold"
        if SINGLE_ITALIC.search(base):
            style = "italic"

    family = STRIP_WEIGHT_ITALIC.sub("", base)
    family = STRIP_ITALIC_BOLD.sub("", family)
    family = STRIP_KEYWORD.sub("", family)
    family = re.sub(r"[-_\s]+", " ", family).strip()

    return ParsedFontName(font_family=_split_camel_case(family), font_weight=weight, font_style=style)

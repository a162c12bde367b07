"""
Preflight de fuentes: compara las variantes (familia/peso/estilo) que usan los
estilos resueltos con las @font-face disponibles para el renderer.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from typeset.core.exceptions import MissingFontError
from typeset.core.fonts.font_name_parser import parse_font_file_name
from typeset.schemas.style import EffectiveStyle

logger = logging.getLogger(__name__)

# Familias disponibles en el renderer sin @font-face
NATIVE_FONTS = frozenset({
    # Genéricas CSS
    "serif", "sans-serif", "monospace", "cursive", "fantasy",
    "system-ui", "ui-serif", "ui-sans-serif", "ui-monospace", "ui-rounded",
    "liberation sans", "liberation serif", "liberation mono",
    "dejavu sans", "dejavu serif", "dejavu sans mono", "dejavu sans condensed",
    "noto sans", "noto serif", "noto mono", "noto color emoji",
    "freesans", "freeserif", "freemono",
    "ubuntu", "ubuntu mono", "ubuntu condensed",
    "droid sans", "droid serif", "droid sans mono",
    "roboto", "roboto mono", "roboto condensed", "roboto slab",
    "open sans", "lato", "source sans pro", "source serif pro", "source code pro",
})

MISSING_FAMILY = "missing_family"
MISSING_VARIANT = "missing_variant"
NON_LOCAL_SRC = "non_local_src"
NO_FONT_DEFINED = "no_font_defined"

FONT_FACE_BLOCK = re.compile(r"@font-face\s*\{[\s\S]*?\}", re.IGNORECASE)
FONT_FAMILY_DECL = re.compile(r"font-family\s*:\s*([^;]+);", re.IGNORECASE)
FONT_WEIGHT_DECL = re.compile(r"font-weight\s*:\s*([^;]+);", re.IGNORECASE)
FONT_STYLE_DECL = re.compile(r"font-style\s*:\s*([^;]+);", re.IGNORECASE)
SRC_URL = re.compile(r"url\([\"']?([^\"')]+)[\"']?\)", re.IGNORECASE)

VariantKey = Tuple[str, str, str]


@dataclass(frozen=True)
class FontFace:
    font_family: str
    font_weight: str
    font_style: str
    local: bool
    src: Optional[str] = None


@dataclass
class FontRequirement:
    font_family: str
    font_weight: str
    font_style: str
    count: int = 0


@dataclass
class FontIssue:
    font_family: str
    font_weight: str
    font_style: str
    reason: str
    message: str


@dataclass
class FontPreflightReport:
    required: List[FontRequirement] = field(default_factory=list)
    issues: List[FontIssue] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "error" if self.issues else "ok"

    @property
    def used_families(self) -> int:
        return len({r.font_family for r in self.required})


def normalize_font_family(raw: Optional[str]) -> str:
    """Familia primaria (antes de los fallbacks), sin comillas, en minúsculas."""
    if not raw:
        return ""
    primary = raw.split(",")[0]
    return primary.replace('"', "").replace("'", "").strip().lower()


def normalize_font_weight(raw) -> str:
    text = str(raw if raw is not None else "normal").strip().lower()
    if text in ("bold", "bolder"):
        return "bold"
    try:
        return "bold" if float(text) >= 600 else "normal"
    except ValueError:
        return "bold" if "bold" in text or "black" in text else "normal"


def normalize_font_style(raw) -> str:
    text = str(raw if raw is not None else "normal").strip().lower()
    return "italic" if "italic" in text or "oblique" in text else "normal"


def extract_font_faces(css: str) -> List[FontFace]:
    faces = []
    for block in FONT_FACE_BLOCK.findall(css or ""):
        family_match = FONT_FAMILY_DECL.search(block)
        family = normalize_font_family(family_match.group(1) if family_match else "")
        if not family:
            continue
        weight_match = FONT_WEIGHT_DECL.search(block)
        style_match = FONT_STYLE_DECL.search(block)
        src_match = SRC_URL.search(block)
        src = src_match.group(1) if src_match else None
        faces.append(FontFace(
            font_family=family,
            font_weight=normalize_font_weight(weight_match.group(1) if weight_match else "normal"),
            font_style=normalize_font_style(style_match.group(1) if style_match else "normal"),
            local=bool(src) and (src.startswith("data:") or src.startswith("/assets/")),
            src=src,
        ))
    return faces


def faces_from_font_files(filenames: Iterable[str]) -> List[FontFace]:
    """Fuentes empaquetadas con el documento (Document fonts): siempre locales."""
    faces = []
    for filename in filenames:
        parsed = parse_font_file_name(filename)
        family = normalize_font_family(parsed.font_family)
        if not family:
            logger.debug(f"Nombre de fichero de fuente sin familia: {filename}")
            continue
        faces.append(FontFace(family, parsed.font_weight, parsed.font_style, local=True, src=filename))
    return faces


def compute_font_preflight(styles: Iterable[EffectiveStyle], css_content: str = "", font_files: Iterable[str] = ()) -> FontPreflightReport:
    requirements: Dict[VariantKey, FontRequirement] = {}
    without_font = 0

    for style in styles:
        family = normalize_font_family(style.font_family)
        if not family:
            without_font += 1
            continue
        key = (family, normalize_font_weight(style.font_weight), normalize_font_style(style.font_style))
        requirement = requirements.setdefault(key, FontRequirement(*key))
        requirement.count += 1

    faces = extract_font_faces(css_content) + faces_from_font_files(font_files)
    local_variants = {(f.font_family, f.font_weight, f.font_style) for f in faces if f.local}
    declared_families = {f.font_family for f in faces}
    local_families = {f.font_family for f in faces if f.local}

    report = FontPreflightReport(required=[requirements[k] for k in sorted(requirements)])

    if without_font:
        report.issues.append(FontIssue(
            font_family="(undefined)", font_weight="normal", font_style="normal",
            reason=NO_FONT_DEFINED,
            message=f"{without_font} texto(s) sin fuente definida",
        ))

    for req in report.required:
        key = (req.font_family, req.font_weight, req.font_style)
        if req.font_family in NATIVE_FONTS or key in local_variants:
            continue
        if req.font_family in local_families:
            reason = MISSING_VARIANT
            message = f"Variante ausente para '{req.font_family}' ({req.font_weight}/{req.font_style})"
        elif req.font_family in declared_families:
            reason = NON_LOCAL_SRC
            message = f"'{req.font_family}' está declarada pero sus fuentes no son locales (data:/assets)"
        else:
            reason = MISSING_FAMILY
            message = f"Fuente '{req.font_family}' sin @font-face local"
        report.issues.append(FontIssue(req.font_family, req.font_weight, req.font_style, reason, message))

    if report.issues:
        logger.warning(f"Preflight de fuentes: {len(report.issues)} problema(s)")
    return report


def ensure_fonts_available(report: FontPreflightReport) -> None:
    """Señala MissingFontError para la primera familia sin ninguna fuente."""
    for issue in report.issues:
        if issue.reason == MISSING_FAMILY:
            raise MissingFontError(issue.font_family, context=issue.message)

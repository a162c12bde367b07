import pytest

from typeset.core.exceptions import MissingFontError
from typeset.core.fonts.preflight import (
    MISSING_FAMILY,
    MISSING_VARIANT,
    NON_LOCAL_SRC,
    compute_font_preflight,
    ensure_fonts_available,
    extract_font_faces,
    faces_from_font_files,
    normalize_font_family,
    normalize_font_weight,
)
from typeset.schemas.style import EffectiveStyle

CSS = """
@font-face { font-family: "Sue Ellen Francisco"; font-weight: 400; font-style: normal; src: url("data:font/ttf;base64,AAAA"); }
@font-face { font-family: 'Minion Pro'; src: url(https://cdn.example.com/minion.woff2); }
"""


def _style(family, weight="normal", slant="normal"):
    return EffectiveStyle(
        font_family=family, font_size=12, font_weight=weight, font_style=slant, color="#000000",
        letter_spacing="normal", letter_spacing_em=0, baseline_shift=0, text_decoration="none",
        text_transform="none", horizontal_scale=100, font_stretch="normal", transform="none",
        stroke_color="none", stroke_weight=0, text_align="left", text_align_last="auto",
        line_height=1.3, margin_top=0, margin_bottom=0, text_indent=0, left_indent=0, right_indent=0,
    )


class TestNormalization:
    def test_family(self):
        assert normalize_font_family('"Minion Pro", serif') == "minion pro"
        assert normalize_font_family(None) == ""

    @pytest.mark.parametrize("raw,expected", [
        ("bold", "bold"), ("700", "bold"), ("400", "normal"), ("Black", "bold"), (None, "normal"),
    ])
    def test_weight(self, raw, expected):
        assert normalize_font_weight(raw) == expected


class TestFontFaces:
    def test_extract(self):
        faces = extract_font_faces(CSS)
        assert [f.font_family for f in faces] == ["sue ellen francisco", "minion pro"]
        assert faces[0].local
        assert not faces[1].local


class TestPreflight:
    def test_native_and_local_fonts_are_ok(self):
        report = compute_font_preflight([_style("serif"), _style("Sue Ellen Francisco")], CSS)
        assert report.status == "ok"
        assert report.used_families == 2

    def test_issues(self):
        styles = [
            _style("Sue Ellen Francisco", weight="bold"),
            _style("Minion Pro"),
            _style("Garamond"),
            _style("Garamond"),
        ]
        report = compute_font_preflight(styles, CSS)
        reasons = {issue.font_family: issue.reason for issue in report.issues}
        assert report.status == "error"
        assert reasons == {
            "sue ellen francisco": MISSING_VARIANT,
            "minion pro": NON_LOCAL_SRC,
            "garamond": MISSING_FAMILY,
        }
        garamond = next(r for r in report.required if r.font_family == "garamond")
        assert garamond.count == 2

    def test_missing_family_raises(self):
        report = compute_font_preflight([_style("Garamond")], "")
        with pytest.raises(MissingFontError) as excinfo:
            ensure_fonts_available(report)
        assert excinfo.value.font_family == "garamond"

    def test_nothing_missing_does_not_raise(self):
        ensure_fonts_available(compute_font_preflight([_style("serif")], ""))


class TestDocumentFonts:
    def test_font_files_become_local_faces(self):
        faces = faces_from_font_files(["MinionPro-BoldItalic.otf", "SueEllenFrancisco.ttf"])
        assert [(f.font_family, f.font_weight, f.font_style, f.local) for f in faces] == [
            ("minion pro", "bold", "italic", True),
            ("sue ellen francisco", "normal", "normal", True),
        ]

    def test_document_fonts_satisfy_requirements(self):
        styles = [_style("Minion Pro", weight="bold", slant="italic"), _style("Minion Pro")]
        report = compute_font_preflight(styles, CSS, font_files=["MinionPro-BoldItalic.otf"])
        assert [(i.font_weight, i.font_style, i.reason) for i in report.issues] == [
            ("normal", "normal", MISSING_VARIANT),
        ]

import pytest

from typeset.config import Settings
from typeset.core.constants import NO_CHARACTER_STYLE
from typeset.core.parser.style_models import (
    CharacterStyle,
    ColorSwatch,
    ConditionalSegment,
    ParagraphStyle,
    TextFrame,
)

IDPKG_NS = "http://ns.adobe.com/AdobeInDesign/idml/1.0/packaging"

STYLES_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<idPkg:Styles xmlns:idPkg="{IDPKG_NS}" DOMVersion="18.0">
  <RootCharacterStyleGroup Self="u79">
    <CharacterStyle Self="CharacterStyle/$ID/[No character style]" Name="$ID/[No character style]"/>
    <CharacterStyle Self="CharacterStyle/Style château" Name="Style château" PointSize="42" FillColor="Color/u144"
        Capitalization="AllCaps" HorizontalScale="141" StrokeColor="Color/u145" Tracking="50" FontStyle="Regular">
      <Properties>
        <BasedOn type="string">$ID/[No character style]</BasedOn>
        <AppliedFont type="string">Sue Ellen Francisco</AppliedFont>
      </Properties>
    </CharacterStyle>
    <CharacterStyleGroup Self="CharacterStyleGroup/Accents" Name="Accents">
      <CharacterStyle Self="CharacterStyle/Accents%3aGras" Name="Accents:Gras" FontStyle="Bold Italic" Underline="true"/>
    </CharacterStyleGroup>
  </RootCharacterStyleGroup>
  <RootParagraphStyleGroup Self="u78">
    <ParagraphStyle Self="ParagraphStyle/$ID/NormalParagraphStyle" Name="$ID/NormalParagraphStyle" PointSize="12"/>
    <ParagraphStyle Self="ParagraphStyle/Titre livre" Name="Titre livre" PointSize="18" Justification="CenterAlign"
        SpaceBefore="6" FillColor="Color/Black">
      <Properties>
        <BasedOn type="object">ParagraphStyle/$ID/NormalParagraphStyle</BasedOn>
        <Leading type="unit">24</Leading>
        <AppliedFont type="string">Minion Pro</AppliedFont>
      </Properties>
    </ParagraphStyle>
    <ParagraphStyle Self="ParagraphStyle/Corps" Name="Corps" Justification="LeftJustified">
      <Properties>
        <BasedOn type="object">ParagraphStyle/Titre livre</BasedOn>
        <Leading type="enumeration">Auto</Leading>
      </Properties>
    </ParagraphStyle>
  </RootParagraphStyleGroup>
</idPkg:Styles>
""".encode("utf-8")

GRAPHIC_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<idPkg:Graphic xmlns:idPkg="{IDPKG_NS}" DOMVersion="18.0">
  <Color Self="Color/u144" Model="Process" Space="CMYK" ColorValue="65 100 0 13" Name="Violet"/>
  <Color Self="Color/u145" Model="Process" Space="CMYK" ColorValue="55 100 0 13" Name="Violet clair"/>
  <Color Self="Color/Black" Model="Process" Space="CMYK" ColorValue="0 0 0 100" Name="Black"/>
  <Color Self="Color/Paper" Model="Process" Space="CMYK" ColorValue="0 0 0 0" Name="Paper"/>
  <Color Self="Color/Rouge" Model="Process" Space="RGB" ColorValue="255 0 0" Name="Rouge"/>
  <Swatch Self="Swatch/None" Name="None"/>
</idPkg:Graphic>
""".encode("utf-8")

STORY_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<idPkg:Story xmlns:idPkg="{IDPKG_NS}" DOMVersion="18.0">
  <Story Self="u116" AppliedTOCStyle="n">
    <ParagraphStyleRange AppliedParagraphStyle="ParagraphStyle/Titre livre" SpaceBefore="12" SpaceAfter="18"
        FirstLineIndent="24" LeftIndent="36" RightIndent="48" PointSize="12">
      <Properties>
        <Leading type="unit">15</Leading>
      </Properties>
      <CharacterStyleRange AppliedCharacterStyle="CharacterStyle/Style château" FillColor="Color/u144">
        <Content>Le château</Content>
        <Br/>
      </CharacterStyleRange>
      <CharacterStyleRange AppliedCharacterStyle="CharacterStyle/$ID/[No character style]"
          AppliedConditions="Condition/TXTCOND_hero-child_gender-girl">
        <Content>Elle s'appelle {{name_child}}.</Content>
      </CharacterStyleRange>
      <CharacterStyleRange AppliedCharacterStyle="CharacterStyle/$ID/[No character style]"
          AppliedConditions="Condition/TXTCOND_hero-child_gender-boy">
        <Content>Il s'appelle {{name_child}}.</Content>
      </CharacterStyleRange>
    </ParagraphStyleRange>
  </Story>
</idPkg:Story>
""".encode("utf-8")

SPREAD_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<idPkg:Spread xmlns:idPkg="{IDPKG_NS}" DOMVersion="18.0">
  <Spread Self="ub6">
    <Page Self="ubb" Name="1" GeometricBounds="0 0 600 400"/>
    <TextFrame Self="u11a" ParentStory="u116" ItemTransform="1 0 0 1 50 80">
      <Properties>
        <PathGeometry>
          <GeometryPathType PathOpen="false">
            <PathPointArray>
              <PathPointType Anchor="0 0" LeftDirection="0 0" RightDirection="0 0"/>
              <PathPointType Anchor="0 120" LeftDirection="0 120" RightDirection="0 120"/>
              <PathPointType Anchor="300 120" LeftDirection="300 120" RightDirection="300 120"/>
              <PathPointType Anchor="300 0" LeftDirection="300 0" RightDirection="300 0"/>
            </PathPointArray>
          </GeometryPathType>
        </PathGeometry>
      </Properties>
    </TextFrame>
  </Spread>
</idPkg:Spread>
""".encode("utf-8")


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def swatches():
    return {
        "Color/u144": ColorSwatch("Color/u144", "CMYK", (65, 100, 0, 13), name="Violet"),
        "Color/u145": ColorSwatch("Color/u145", "CMYK", (55, 100, 0, 13), name="Violet clair"),
        "Color/Rouge": ColorSwatch("Color/Rouge", "RGB", (255, 0, 0), name="Rouge"),
    }


@pytest.fixture
def character_styles():
    return {
        "CharacterStyle/Style château": CharacterStyle(
            style_id="CharacterStyle/Style château",
            name="Style château",
            based_on="$ID/[No character style]",
            font_family="Sue Ellen Francisco",
            font_size=42.0,
            fill_color="Color/u144",
            tracking=50.0,
            text_transform="uppercase",
            horizontal_scale=141.0,
            stroke_color="Color/u145",
        ),
        "CharacterStyle/Gras": CharacterStyle(
            style_id="CharacterStyle/Gras",
            name="Gras",
            font_weight="bold",
        ),
    }


@pytest.fixture
def paragraph_styles():
    return {
        "ParagraphStyle/Titre livre": ParagraphStyle(
            style_id="ParagraphStyle/Titre livre",
            name="Titre livre",
            based_on="ParagraphStyle/$ID/NormalParagraphStyle",
            font_family="Minion Pro",
            font_size=18.0,
            fill_color="Color/Black",
            text_align="center",
            leading=24.0,
            margin_top=6.0,
            margin_bottom=10.0,
        ),
    }


@pytest.fixture
def chateau_frame():
    """Frame con estilo nominal 'sin estilo' y un primer segmento estilizado."""
    return TextFrame(
        frame_id="u116",
        paragraph_style="ParagraphStyle/Titre livre",
        character_style=NO_CHARACTER_STYLE,
        content="Le château\nElle s'appelle {name_child}.Il s'appelle {name_child}.",
        segments=[
            ConditionalSegment("Le château\n", "CharacterStyle/Style château", fill_color="Color/u144"),
            ConditionalSegment(
                "Elle s'appelle {name_child}.",
                NO_CHARACTER_STYLE,
                condition="Condition/TXTCOND_hero-child_gender-girl",
            ),
            ConditionalSegment(
                "Il s'appelle {name_child}.",
                NO_CHARACTER_STYLE,
                condition="Condition/TXTCOND_hero-child_gender-boy",
            ),
        ],
    )


@pytest.fixture
def styles_xml():
    return STYLES_XML


@pytest.fixture
def graphic_xml():
    return GRAPHIC_XML


@pytest.fixture
def story_xml():
    return STORY_XML


@pytest.fixture
def spread_xml():
    return SPREAD_XML

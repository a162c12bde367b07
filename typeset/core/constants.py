"""
Constantes del formato IDML.
Referencia: Adobe IDML File Format Specification.
"""

# Prefijos de identificadores de estilo
CHARACTER_STYLE_PREFIX = "CharacterStyle/"
PARAGRAPH_STYLE_PREFIX = "ParagraphStyle/"

# Sentinelas "sin estilo": equivalen a ausencia de estilo, nunca a un estilo real
NO_CHARACTER_STYLE = "CharacterStyle/$ID/[No character style]"
NO_PARAGRAPH_STYLE = "ParagraphStyle/$ID/[No paragraph style]"
NORMAL_PARAGRAPH_STYLE = "ParagraphStyle/$ID/NormalParagraphStyle"

# Raíces de cadenas BasedOn (con y sin prefijo)
ROOT_STYLE_IDS = frozenset({
    "$ID/[No character style]",
    "$ID/[No paragraph style]",
    "$ID/NormalParagraphStyle",
    NO_CHARACTER_STYLE,
    NO_PARAGRAPH_STYLE,
    NORMAL_PARAGRAPH_STYLE,
})

# Swatches especiales
SWATCH_NONE = "Swatch/None"
COLOR_PREFIX = "Color/"

# Valor de interlineado automático
LEADING_AUTO = "Auto"

# Tamaño de cuerpo asumido cuando un rango no declara PointSize
DEFAULT_POINT_SIZE = 12.0

# Tipos de estilo (para mensajes de error)
STYLE_KIND_CHARACTER = "Character"
STYLE_KIND_PARAGRAPH = "Paragraph"

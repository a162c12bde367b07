"""
Motor de calibración de color: CMYK/RGB -> hex.

Las constantes CMYK son ajustes empíricos contra exportaciones de referencia
InDesign -> EPUB del mismo documento (fixtures CMYK(65,100,0,13) -> #6f1d76 y
CMYK(55,100,0,13) -> #801a76). No se derivan de un perfil ICC: no simplificar.
"""
import logging
import math
from typing import Sequence, Union

logger = logging.getLogger(__name__)

WHITE_HEX = "#ffffff"
FALLBACK_HEX = "#000000"

# Rojo: absorción no lineal del cian, corrección lineal sobre C en [0,100]
RED_BASE_FACTOR = 0.468
RED_CYAN_SLOPE = 0.0148

# Verde: verde residual visible con magenta saturado (M >= 95%)
GREEN_MAGENTA_THRESHOLD = 0.95
GREEN_OFFSET_BASE = 9.5
GREEN_OFFSET_CYAN_SLOPE = 0.3

# Azul: factor fijo medido sobre la exportación de referencia
BLUE_FACTOR = 0.532

Components = Union[str, Sequence[float]]


def _round_channel(value: float) -> int:
    # Redondeo "half up" (no bancario) y recorte a [0, 255]
    return max(0, min(255, int(math.floor(value + 0.5))))


def _channels_to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{_round_channel(c):02x}" for c in (r, g, b))


def parse_components(components: Components) -> list:
    """Acepta '65 100 0 13' (ColorValue crudo) o una secuencia numérica."""
    if isinstance(components, str):
        return [float(part) for part in components.split()]
    return [float(part) for part in components]


def cmyk_to_hex(c_raw: float, m_raw: float, y_raw: float, k_raw: float) -> str:
    if c_raw == 0 and m_raw == 0 and y_raw == 0 and k_raw == 0:
        return WHITE_HEX

    c, m, y, k = (v / 100.0 for v in (c_raw, m_raw, y_raw, k_raw))

    r_factor = RED_BASE_FACTOR + RED_CYAN_SLOPE * c_raw
    g_offset = GREEN_OFFSET_BASE + GREEN_OFFSET_CYAN_SLOPE * c_raw if m >= GREEN_MAGENTA_THRESHOLD else 0.0

    r = 255 * (1 - c) * (1 - k) * r_factor
    g = 255 * (1 - m) * (1 - k) + g_offset
    b = 255 * (1 - y) * (1 - k) * BLUE_FACTOR
    return _channels_to_hex(r, g, b)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return _channels_to_hex(r, g, b)


def to_hex(space: str, components: Components) -> str:
    """
    Convierte un color a hex '#rrggbb'. Función total: cualquier entrada
    no soportada (espacio desconocido, componentes faltantes o no finitos)
    devuelve negro.
    """
    normalized_space = (space or "").strip().upper()
    try:
        values = parse_components(components)
    except (TypeError, ValueError):
        logger.warning(f"Componentes de color inválidos para {space}: {components!r}")
        return FALLBACK_HEX
    if not all(math.isfinite(v) for v in values):
        logger.warning(f"Componentes de color no finitos para {space}: {values}")
        return FALLBACK_HEX

    if normalized_space == "CMYK" and len(values) >= 4:
        return cmyk_to_hex(*values[:4])
    if normalized_space == "RGB" and len(values) >= 3:
        return rgb_to_hex(*values[:3])

    logger.warning(f"Espacio de color no soportado o incompleto: {space} {values}")
    return FALLBACK_HEX

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Valores por defecto de la cascada (cuando ninguna capa define el campo) ---
    DEFAULT_FONT_FAMILY: str = "serif"
    DEFAULT_FONT_SIZE: float = 12.0
    DEFAULT_LINE_HEIGHT: float = 1.3
    DEFAULT_COLOR: str = "#000000"
    DEFAULT_STROKE_WEIGHT: float = 1.0

    # --- Text Fitting ---
    # Tamaño mínimo absoluto que el motor de ajuste puede devolver (pt)
    FIT_MIN_FONT_SIZE: float = 1.0
    # Paso de decremento de la búsqueda lineal
    FIT_STEP: float = 0.5
    # Margen reservado sobre la altura del contenedor (0.05 = 5%)
    FIT_SAFETY_MARGIN: float = 0.05

    # --- Style Cache ---
    STYLE_CACHE_ENABLED: bool = True
    # Capacidad en bytes estimados (100 MB)
    STYLE_CACHE_MAX_WEIGHT: int = 100 * 1024 * 1024
    # Tiempo de vida de una entrada (30 min)
    STYLE_CACHE_TTL_SECONDS: float = 1800.0

    class Config:
        env_file = ".env"
        extra = "ignore"

    @model_validator(mode='after')
    def check_coherence(self) -> 'Settings':
        if self.FIT_MIN_FONT_SIZE <= 0:
            raise ValueError("FIT_MIN_FONT_SIZE debe ser mayor que 0")
        if self.FIT_STEP <= 0:
            raise ValueError("FIT_STEP debe ser mayor que 0")
        if not 0 <= self.FIT_SAFETY_MARGIN < 1:
            raise ValueError("FIT_SAFETY_MARGIN debe estar en [0, 1)")
        if self.STYLE_CACHE_MAX_WEIGHT <= 0:
            raise ValueError("STYLE_CACHE_MAX_WEIGHT debe ser positivo")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

from pydantic import BaseModel, Field


class FitOptions(BaseModel):
    original_font_size: float
    line_height_multiplier: float = 1.2
    first_line_indent: float = 0.0
    container_width: float
    container_height: float


class FitResult(BaseModel):
    font_size: float
    original_font_size: float
    line_count: int = Field(ge=0)
    block_height: float
    fitted: bool   # False si se alcanzó el piso sin encajar
    reduced: bool  # True si el tamaño final es menor al original

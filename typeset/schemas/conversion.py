from typing import List, Optional

from pydantic import BaseModel, Field

from typeset.schemas.style import EffectiveStyle
from typeset.schemas.variables import VariableMapping, WizardOption


class FrameFailure(BaseModel):
    frame_id: str
    error_type: str
    message: str


class FrameDescriptor(BaseModel):
    frame_id: str
    page_index: int
    layout_order: int
    content: str
    rendered_text: str
    variables: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    style: EffectiveStyle
    # Tamaño final a aplicar en render; sustituye al nominal del estilo
    font_size: float
    fit_applied: bool = False


class ConversionResult(BaseModel):
    frames: List[FrameDescriptor] = Field(default_factory=list)
    failures: List[FrameFailure] = Field(default_factory=list)
    variable_mappings: List[VariableMapping] = Field(default_factory=list)
    wizard_options: List[WizardOption] = Field(default_factory=list)
    cache_hit: bool = False

    @property
    def is_partial(self) -> bool:
        return bool(self.failures)

    def get_frame(self, frame_id: str) -> Optional[FrameDescriptor]:
        return next((f for f in self.frames if f.frame_id == frame_id), None)

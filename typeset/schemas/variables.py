from typing import Literal, Optional

from pydantic import BaseModel


class VariableMapping(BaseModel):
    idml_variable: str
    wizard_attribute: str
    hero_id: Optional[str] = None
    attribute_id: Optional[str] = None
    type: Literal['text', 'characteristic']


class WizardOption(BaseModel):
    id: str
    label: str
    type: Literal['text', 'options']

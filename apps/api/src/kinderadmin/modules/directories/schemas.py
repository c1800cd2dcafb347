"""
Directory Schemas
"""

from pydantic import BaseModel, ConfigDict


class GradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str


class GuardianTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str
    description: str = ""


class BloodTypeResponse(BaseModel):
    """A blood type option; `value` is what the intake form submits."""

    name: str
    value: str

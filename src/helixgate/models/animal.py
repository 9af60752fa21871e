"""Animal models for the zoo registry."""

from pydantic import BaseModel, Field


class AnimalBase(BaseModel):
    """Fields a caller supplies for an animal."""

    type: str = Field(..., description="Kind of animal, e.g. Dog")
    name: str = Field(..., description="Animal name")


class AnimalCreate(AnimalBase):
    """Create payload. Any client-supplied id is ignored."""


class Animal(AnimalBase):
    """Registered animal."""

    id: int = Field(..., description="Registry-assigned identifier")

"""Pydantic schemas for the default environment catalog.

The catalog file lists the event classes and attribute classes that every
newly provisioned environment starts with, keyed by environment type.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.team import MembershipRole


class EnvironmentType(str, Enum):
    """Deployment environments every product gets."""
    PRODUCTION = "production"
    DEVELOPMENT = "development"


class EventClassType(str, Enum):
    """How an event class is fired."""
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    CODE = "code"
    NO_CODE = "noCode"


class AttributeClassType(str, Enum):
    """How an attribute class is populated."""
    AUTOMATIC = "automatic"
    CODE = "code"


class EventClassDefinition(BaseModel):
    """A default event class."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: EventClassType = EventClassType.AUTOMATIC


class AttributeClassDefinition(BaseModel):
    """A default attribute class."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: AttributeClassType = AttributeClassType.AUTOMATIC


class EnvironmentDefinition(BaseModel):
    """Reference data seeded into one environment.

    Attributes:
        type: Environment type this definition applies to
        event_classes: Event classes created in the environment
        attribute_classes: Attribute classes created in the environment
    """
    type: EnvironmentType
    event_classes: list[EventClassDefinition] = Field(default_factory=list)
    attribute_classes: list[AttributeClassDefinition] = Field(default_factory=list)

    @field_validator("event_classes", "attribute_classes")
    @classmethod
    def names_must_be_unique(cls, v):
        """Ensure no name appears twice within one environment."""
        names = [item.name for item in v]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate names in environment: {sorted(duplicates)}")
        return v


class ProvisioningCatalog(BaseModel):
    """Complete default setup for a new team.

    Attributes:
        product_name: Name of the product created with the team
        owner_role: Role given to the creating user
        environments: One definition per environment type
    """
    product_name: str = Field(..., min_length=1)
    owner_role: MembershipRole = Field(default=MembershipRole.OWNER)
    environments: list[EnvironmentDefinition] = Field(..., min_length=1)

    @model_validator(mode="after")
    def environment_types_unique(self):
        """Ensure each environment type is defined at most once."""
        types = [env.type for env in self.environments]
        if len(types) != len(set(types)):
            raise ValueError("Each environment type may only be defined once")
        return self

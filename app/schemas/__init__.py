"""Pydantic schemas for data validation.

This package contains the API request/response models and the default
environment catalog schema.
"""

from app.schemas.catalog import (
    EnvironmentType,
    EventClassType,
    AttributeClassType,
    EventClassDefinition,
    AttributeClassDefinition,
    EnvironmentDefinition,
    ProvisioningCatalog,
)
from app.schemas.survey import (
    SurveyStatus,
    FilterCondition,
    TriggerRead,
    AttributeFilterRead,
    SurveyRead,
    CopySurveyRequest,
)
from app.schemas.team import (
    MembershipRole,
    CreateTeamRequest,
    MembershipRead,
    TeamRead,
)

__all__ = [
    "EnvironmentType",
    "EventClassType",
    "AttributeClassType",
    "EventClassDefinition",
    "AttributeClassDefinition",
    "EnvironmentDefinition",
    "ProvisioningCatalog",
    "SurveyStatus",
    "FilterCondition",
    "TriggerRead",
    "AttributeFilterRead",
    "SurveyRead",
    "CopySurveyRequest",
    "MembershipRole",
    "CreateTeamRequest",
    "MembershipRead",
    "TeamRead",
]

"""Pydantic schemas for surveys and their targeting rows.

These models shape API responses and the few request bodies that are
validated. The survey creation payload itself is passed through unvalidated.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SurveyStatus(str, Enum):
    """Lifecycle states of a survey."""
    DRAFT = "draft"
    IN_PROGRESS = "inProgress"
    PAUSED = "paused"
    COMPLETED = "completed"


class FilterCondition(str, Enum):
    """Comparison applied by an attribute filter."""
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"


class TriggerRead(BaseModel):
    """A trigger as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_class_id: str


class AttributeFilterRead(BaseModel):
    """An attribute filter as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    attribute_class_id: str
    condition: FilterCondition
    value: str


class SurveyRead(BaseModel):
    """A survey as returned by the API.

    Attributes:
        id: Survey identifier
        name: Survey name
        type: Delivery channel
        status: Lifecycle state
        questions: Question documents
        thank_you_card: Thank-you card document
        survey_closed_message: Closed message document, if any
        environment_id: Environment the survey lives in
        triggers: Event classes that open the survey
        attribute_filters: Targeting rules in order
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: str
    status: str
    questions: list[Any] = Field(default_factory=list)
    thank_you_card: dict[str, Any] = Field(default_factory=dict)
    survey_closed_message: Optional[dict[str, Any]] = None
    display_option: str
    recontact_days: Optional[int] = None
    auto_close: Optional[int] = None
    delay: int = 0
    auto_complete: Optional[int] = None
    close_on_date: Optional[datetime] = None
    environment_id: str
    triggers: list[TriggerRead] = Field(default_factory=list)
    attribute_filters: list[AttributeFilterRead] = Field(default_factory=list)


class CopySurveyRequest(BaseModel):
    """Body of a copy-to-other-environment request."""
    target_environment_id: str = Field(
        ...,
        min_length=1,
        description="Environment that receives the copy"
    )

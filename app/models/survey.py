"""Survey, Trigger and AttributeFilter models.

This module defines the survey row together with the two association tables
that target it: triggers (which event classes open the survey) and
attribute filters (which people see it).
"""

from datetime import datetime, timezone
from typing import Optional, Any

from sqlalchemy import (
    String,
    Text,
    Integer,
    DateTime,
    ForeignKey,
    JSON,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base, generate_id


class Survey(Base):
    """Model for a survey and its content.

    Questions, the thank-you card and the closed message are stored as
    JSON documents and are never shared between rows.

    Attributes:
        id: Primary key
        name: Survey name shown in the dashboard
        type: web, link, email or mobile
        status: draft, inProgress, paused or completed
        questions: Ordered list of question documents
        thank_you_card: Thank-you card document
        survey_closed_message: Message shown once the survey is closed
        display_option: displayOnce, displayMultiple or respondMultiple
        recontact_days: Overrides the product recontact wait when set
        auto_close: Seconds until the widget closes itself
        delay: Seconds to wait before showing the survey
        auto_complete: Number of responses that completes the survey
        close_on_date: Date after which the survey stops collecting
        environment_id: Foreign key to owning environment
        triggers: Event classes that open the survey
        attribute_filters: Targeting rules on person attributes
    """

    __tablename__ = "surveys"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="web",
        comment="web, link, email or mobile"
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="draft",
        comment="draft, inProgress, paused or completed"
    )

    # Content
    questions: Mapped[list[Any]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of question documents"
    )
    thank_you_card: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: {"enabled": False},
        comment="Thank-you card document"
    )
    survey_closed_message: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Heading/subheading shown once the survey is closed"
    )

    # Display settings
    display_option: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="displayOnce",
    )
    recontact_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    auto_close: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    delay: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_complete: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    close_on_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    environment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("environments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    environment: Mapped["Environment"] = relationship(
        "Environment", back_populates="surveys"
    )
    triggers: Mapped[list["Trigger"]] = relationship(
        "Trigger",
        back_populates="survey",
        cascade="all, delete-orphan",
    )
    attribute_filters: Mapped[list["AttributeFilter"]] = relationship(
        "AttributeFilter",
        back_populates="survey",
        cascade="all, delete-orphan",
        order_by="AttributeFilter.position",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Survey(id={self.id}, name={self.name}, "
            f"status={self.status}, environment_id={self.environment_id})>"
        )


class Trigger(Base):
    """Association between a survey and an event class that opens it."""

    __tablename__ = "triggers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    survey_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_class_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("event_classes.id", ondelete="CASCADE"),
        nullable=False,
    )

    survey: Mapped["Survey"] = relationship("Survey", back_populates="triggers")
    event_class: Mapped["EventClass"] = relationship("EventClass")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Trigger(survey_id={self.survey_id}, event_class_id={self.event_class_id})>"


class AttributeFilter(Base):
    """Targeting rule: show the survey only when an attribute matches.

    Attributes:
        survey_id: Foreign key to the filtered survey
        attribute_class_id: Foreign key to the attribute being compared
        condition: equals or notEquals
        value: Value the attribute is compared against
        position: Order of the filter within the survey
    """

    __tablename__ = "attribute_filters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    survey_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_class_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("attribute_classes.id", ondelete="CASCADE"),
        nullable=False,
    )
    condition: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="equals or notEquals"
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    survey: Mapped["Survey"] = relationship("Survey", back_populates="attribute_filters")
    attribute_class: Mapped["AttributeClass"] = relationship("AttributeClass")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AttributeFilter(survey_id={self.survey_id}, "
            f"attribute_class_id={self.attribute_class_id}, "
            f"condition={self.condition}, value={self.value})>"
        )

"""Environment model and the reference data scoped to it.

An environment (production or development) owns its own event classes and
attribute classes. Surveys reference these rows through triggers and
attribute filters, so a survey can only target reference data of the
environment it lives in.
"""

from datetime import datetime
from typing import Optional, Any

from sqlalchemy import (
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
    select,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, Session

from app.models.database import Base, generate_id


class Environment(Base):
    """Model for a deployment environment of a product.

    Attributes:
        id: Primary key
        type: "production" or "development"
        product_id: Foreign key to owning product
        widget_setup_completed: Whether the in-app widget has reported in
        event_classes: Event classes defined in this environment
        attribute_classes: Attribute classes defined in this environment
        surveys: Surveys living in this environment
    """

    __tablename__ = "environments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="production or development"
    )
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    widget_setup_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    product: Mapped["Product"] = relationship("Product", back_populates="environments")
    event_classes: Mapped[list["EventClass"]] = relationship(
        "EventClass",
        back_populates="environment",
        cascade="all, delete-orphan",
    )
    attribute_classes: Mapped[list["AttributeClass"]] = relationship(
        "AttributeClass",
        back_populates="environment",
        cascade="all, delete-orphan",
    )
    surveys: Mapped[list["Survey"]] = relationship(
        "Survey",
        back_populates="environment",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Environment(id={self.id}, type={self.type}, product_id={self.product_id})>"


class EventClass(Base):
    """Model for a named event that can trigger surveys.

    Names are unique within an environment.

    Attributes:
        id: Primary key
        name: Event name (e.g., "New Session")
        description: Human-readable description
        type: automatic, manual, code or noCode
        no_code_config: Page/click matching rules for noCode events
        environment_id: Foreign key to owning environment
    """

    __tablename__ = "event_classes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="automatic, manual, code or noCode"
    )
    no_code_config: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Matching rules for events configured without code"
    )
    environment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("environments.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    environment: Mapped["Environment"] = relationship(
        "Environment", back_populates="event_classes"
    )

    __table_args__ = (
        UniqueConstraint("environment_id", "name", name="uq_event_class_env_name"),
    )

    @classmethod
    def find_by_name(
        cls,
        db: Session,
        environment_id: str,
        name: str
    ) -> Optional["EventClass"]:
        """Find the event class with this name in an environment.

        Args:
            db: Database session
            environment_id: Environment to search in
            name: Event class name

        Returns:
            EventClass or None if the environment has no such event
        """
        return db.execute(
            select(cls).where(
                cls.environment_id == environment_id,
                cls.name == name,
            )
        ).scalars().first()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<EventClass(id={self.id}, name={self.name}, "
            f"environment_id={self.environment_id})>"
        )


class AttributeClass(Base):
    """Model for a named person attribute that surveys can filter on.

    Names are unique within an environment.

    Attributes:
        id: Primary key
        name: Attribute key (e.g., "email")
        description: Human-readable description
        type: automatic or code
        archived: Hidden from pickers when True
        environment_id: Foreign key to owning environment
    """

    __tablename__ = "attribute_classes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="automatic or code"
    )
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    environment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("environments.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    environment: Mapped["Environment"] = relationship(
        "Environment", back_populates="attribute_classes"
    )

    __table_args__ = (
        UniqueConstraint("environment_id", "name", name="uq_attribute_class_env_name"),
    )

    @classmethod
    def find_by_name(
        cls,
        db: Session,
        environment_id: str,
        name: str
    ) -> Optional["AttributeClass"]:
        """Find the attribute class with this name in an environment."""
        return db.execute(
            select(cls).where(
                cls.environment_id == environment_id,
                cls.name == name,
            )
        ).scalars().first()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<AttributeClass(id={self.id}, name={self.name}, "
            f"environment_id={self.environment_id})>"
        )

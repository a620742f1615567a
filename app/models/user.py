"""User model for people who can belong to teams."""

from datetime import datetime

from sqlalchemy import String, DateTime, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base, generate_id


class User(Base):
    """Model for an application user.

    Users are created by the authentication layer; this service only
    references them when provisioning team memberships.

    Attributes:
        id: Primary key
        name: Display name
        email: Unique login email
        created_at: When the user signed up
        memberships: Team memberships held by this user
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Display name"
    )
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Login email address"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email})>"

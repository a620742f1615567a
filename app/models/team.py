"""Team and Membership models.

A team is the top-level tenant. Users join teams through memberships, and
each team owns one or more products.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    String,
    Boolean,
    DateTime,
    ForeignKey,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base, generate_id


class Team(Base):
    """Model for an organizational team.

    Attributes:
        id: Primary key
        name: Team name (not required to be unique)
        created_at: When the team was created
        updated_at: Last update timestamp
        memberships: Users belonging to the team
        products: Products owned by the team
    """

    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Team display name"
    )

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

    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="team",
        cascade="all, delete-orphan",
    )
    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="team",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Team(id={self.id}, name={self.name})>"


class Membership(Base):
    """Model linking a user to a team with a role.

    Attributes:
        team_id: Foreign key to teams (part of composite key)
        user_id: Foreign key to users (part of composite key)
        role: owner, admin, editor, developer or viewer
        accepted: Whether the invitation has been accepted
    """

    __tablename__ = "memberships"

    team_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("teams.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Membership role within the team"
    )
    accepted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the user accepted the invitation"
    )

    team: Mapped["Team"] = relationship("Team", back_populates="memberships")
    user: Mapped["User"] = relationship("User", back_populates="memberships")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Membership(team_id={self.team_id}, user_id={self.user_id}, "
            f"role={self.role}, accepted={self.accepted})>"
        )

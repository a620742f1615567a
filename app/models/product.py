"""Product model. Each product is deployed to one or more environments."""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base, generate_id


class Product(Base):
    """Model for a product owned by a team.

    Attributes:
        id: Primary key
        name: Product name
        team_id: Foreign key to owning team
        environments: Production/development environments of the product
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    team_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    team: Mapped["Team"] = relationship("Team", back_populates="products")
    environments: Mapped[list["Environment"]] = relationship(
        "Environment",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Product(id={self.id}, name={self.name}, team_id={self.team_id})>"

"""Team provisioning service.

Creates a new team together with everything a team needs to start working:
the owner's membership, a default product, and one environment per catalog
entry seeded with the default event and attribute classes.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.environment import Environment, EventClass, AttributeClass
from app.models.product import Product
from app.models.team import Team, Membership
from app.schemas.catalog import EnvironmentDefinition
from app.services.catalog_loader import get_catalog_loader
from app.logging_config import get_logger

logger = get_logger(__name__)


class TeamProvisioningService:
    """Service that provisions new teams from the default catalog."""

    def __init__(self, db: Session):
        """Initialize provisioning service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.loader = get_catalog_loader()

    def create_team(self, team_name: str, owner_user_id: str) -> Team:
        """Create a team with its owner membership and default resources.

        Neither the team name nor the owner are validated here; an unknown
        owner surfaces as a foreign key violation from the database.

        Args:
            team_name: Name of the new team
            owner_user_id: User who becomes the accepted owner

        Returns:
            Team: The created team with memberships loaded

        Raises:
            CatalogNotFoundError: If the configured catalog is missing
            CatalogValidationError: If the configured catalog is invalid
            SQLAlchemyError: If the database rejects the inserts
        """
        catalog = self.loader.load_catalog(get_settings().provisioning_catalog)

        team = Team(name=team_name)
        team.memberships.append(
            Membership(
                user_id=owner_user_id,
                role=catalog.owner_role.value,
                accepted=True,
            )
        )

        product = Product(name=catalog.product_name)
        for definition in catalog.environments:
            product.environments.append(self._build_environment(definition))
        team.products.append(product)

        try:
            self.db.add(team)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create team '{team_name}': {e}")
            self.db.rollback()
            raise

        logger.info(
            f"Created team '{team_name}' with {len(product.environments)} environments",
            extra={"team_id": team.id},
        )
        return team

    @staticmethod
    def _build_environment(definition: EnvironmentDefinition) -> Environment:
        """Build an unsaved environment with its default reference data."""
        environment = Environment(type=definition.type.value)
        environment.event_classes = [
            EventClass(
                name=event_class.name,
                description=event_class.description,
                type=event_class.type.value,
            )
            for event_class in definition.event_classes
        ]
        environment.attribute_classes = [
            AttributeClass(
                name=attribute_class.name,
                description=attribute_class.description,
                type=attribute_class.type.value,
            )
            for attribute_class in definition.attribute_classes
        ]
        return environment

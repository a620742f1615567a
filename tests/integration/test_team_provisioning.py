"""Integration tests for team provisioning.

These tests verify that a new team receives its owner membership, the
default product, and both environments seeded from the default catalog.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.models import Environment, EventClass, Membership, Product, Team
from app.services.team_provisioning import TeamProvisioningService


def environments_by_type(team: Team) -> dict:
    """Map environment type to environment for the team's only product."""
    assert len(team.products) == 1
    return {env.type: env for env in team.products[0].environments}


class TestCreateTeam:
    """Tests for TeamProvisioningService.create_team."""

    def test_creates_team_with_owner_membership(self, db_session, owner):
        """The creator becomes the accepted owner."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        assert team.id is not None
        assert team.name == "Acme"
        assert len(team.memberships) == 1
        membership = team.memberships[0]
        assert membership.user_id == owner.id
        assert membership.role == "owner"
        assert membership.accepted is True

    def test_creates_default_product(self, db_session, owner):
        """A single product named "My Product" is created."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        products = db_session.execute(
            select(Product).where(Product.team_id == team.id)
        ).scalars().all()
        assert [p.name for p in products] == ["My Product"]

    def test_creates_production_and_development(self, db_session, owner):
        """Exactly two environments are created."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        environments = environments_by_type(team)
        assert set(environments) == {"production", "development"}
        assert db_session.execute(
            select(func.count()).select_from(Environment)
        ).scalar_one() == 2

    def test_production_catalog(self, db_session, owner):
        """Production gets three event classes and two attribute classes."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        production = environments_by_type(team)["production"]
        assert [e.name for e in production.event_classes] == [
            "New Session",
            "Exit Intent (Desktop)",
            "50% Scroll",
        ]
        assert [a.name for a in production.attribute_classes] == ["userId", "email"]
        assert all(e.type == "automatic" for e in production.event_classes)
        assert all(a.type == "automatic" for a in production.attribute_classes)

    def test_development_catalog(self, db_session, owner):
        """Development gets one event class and two attribute classes."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        development = environments_by_type(team)["development"]
        assert [e.name for e in development.event_classes] == ["New Session"]
        assert [a.name for a in development.attribute_classes] == ["userId", "email"]

    def test_catalog_descriptions(self, db_session, owner):
        """Default reference rows carry their fixed descriptions."""
        team = TeamProvisioningService(db_session).create_team("Acme", owner.id)

        development = environments_by_type(team)["development"]
        new_session = EventClass.find_by_name(db_session, development.id, "New Session")
        assert new_session.description == "Gets fired when a new session is created"
        assert {a.name: a.description for a in development.attribute_classes} == {
            "userId": "The internal ID of the person",
            "email": "The email of the person",
        }

    def test_team_names_are_not_unique(self, db_session, owner):
        """Creating two teams with the same name is allowed."""
        service = TeamProvisioningService(db_session)
        first = service.create_team("Acme", owner.id)
        second = service.create_team("Acme", owner.id)

        assert first.id != second.id
        assert db_session.execute(
            select(func.count()).select_from(EventClass)
        ).scalar_one() == 8

    def test_unknown_owner_raises_and_rolls_back(self, db_session):
        """An unknown owner surfaces as a constraint error and nothing is kept."""
        with pytest.raises(IntegrityError):
            TeamProvisioningService(db_session).create_team("Acme", "no-such-user")

        assert db_session.execute(select(func.count()).select_from(Team)).scalar_one() == 0
        assert db_session.execute(
            select(func.count()).select_from(Membership)
        ).scalar_one() == 0

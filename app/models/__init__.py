"""Database models and session management.

This package contains all SQLAlchemy ORM models and database utilities.
"""

from app.models.database import Base, engine, SessionLocal, get_db
from app.models.user import User
from app.models.team import Team, Membership
from app.models.product import Product
from app.models.environment import Environment, EventClass, AttributeClass
from app.models.survey import Survey, Trigger, AttributeFilter

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "User",
    "Team",
    "Membership",
    "Product",
    "Environment",
    "EventClass",
    "AttributeClass",
    "Survey",
    "Trigger",
    "AttributeFilter",
]

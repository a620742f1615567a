"""Pytest configuration and shared fixtures.

This module provides fixtures and configuration used across all tests.
"""

import os
from typing import Generator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set required environment variables for tests BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("TELEMETRY_DISABLED", "true")

from app.models.database import Base
from app.models import (
    User,
    Team,
    Product,
    Environment,
    EventClass,
    AttributeClass,
    Survey,
    Trigger,
    AttributeFilter,
)


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine with SQLite in-memory database.

    Yields:
        Engine: SQLAlchemy engine for testing

    Note:
        StaticPool keeps one connection so the in-memory database is shared
        with the threads FastAPI's TestClient runs sync routes on.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,  # Set to True for SQL debugging
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session.

    Args:
        db_engine: Test database engine fixture

    Yields:
        Session: SQLAlchemy session for testing
    """
    TestSessionLocal = sessionmaker(
        bind=db_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )

    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()


@pytest.fixture
def owner(db_session) -> User:
    """Provide a persisted user who can own teams."""
    user = User(name="Ada Owner", email="ada@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def product(db_session, owner) -> Product:
    """Provide a persisted product inside a bare team."""
    team = Team(name="Acme")
    product = Product(name="Acme Web")
    team.products.append(product)
    db_session.add(team)
    db_session.commit()
    return product


@pytest.fixture
def source_environment(db_session, product) -> Environment:
    """Provide an empty production environment."""
    environment = Environment(type="production", product_id=product.id)
    db_session.add(environment)
    db_session.commit()
    return environment


@pytest.fixture
def target_environment(db_session, product) -> Environment:
    """Provide an empty development environment."""
    environment = Environment(type="development", product_id=product.id)
    db_session.add(environment)
    db_session.commit()
    return environment


@pytest.fixture
def sample_questions() -> list:
    """Provide question documents for a survey."""
    return [
        {
            "id": "q1",
            "type": "openText",
            "headline": "What brought you here today?",
            "required": True,
        },
        {
            "id": "q2",
            "type": "multipleChoiceSingle",
            "headline": "How did you hear about us?",
            "choices": [
                {"id": "c1", "label": "Search"},
                {"id": "c2", "label": "Friend"},
            ],
            "required": False,
        },
    ]


@pytest.fixture
def targeted_survey(db_session, source_environment, sample_questions) -> Survey:
    """Provide a survey with two triggers and two attribute filters.

    Triggers: "New Session" and "Checkout Click" (noCode).
    Filters: email equals ada@example.com, plan notEquals free.
    """
    new_session = EventClass(
        name="New Session",
        description="Gets fired when a new session is created",
        type="automatic",
        environment_id=source_environment.id,
    )
    checkout_click = EventClass(
        name="Checkout Click",
        description="Click on the checkout button",
        type="noCode",
        no_code_config={
            "type": "click",
            "elementSelector": {"cssSelector": "#checkout"},
        },
        environment_id=source_environment.id,
    )
    email = AttributeClass(
        name="email",
        description="The email of the person",
        type="automatic",
        environment_id=source_environment.id,
    )
    plan = AttributeClass(
        name="plan",
        description="Billing plan",
        type="code",
        environment_id=source_environment.id,
    )

    survey = Survey(
        name="Onboarding",
        type="web",
        status="inProgress",
        questions=sample_questions,
        thank_you_card={"enabled": True, "headline": "Thanks!"},
        survey_closed_message={"heading": "Closed", "subheading": "See you soon"},
        recontact_days=7,
        environment_id=source_environment.id,
    )
    survey.triggers = [
        Trigger(event_class=new_session),
        Trigger(event_class=checkout_click),
    ]
    survey.attribute_filters = [
        AttributeFilter(
            attribute_class=email,
            condition="equals",
            value="ada@example.com",
            position=0,
        ),
        AttributeFilter(
            attribute_class=plan,
            condition="notEquals",
            value="free",
            position=1,
        ),
    ]
    db_session.add(survey)
    db_session.commit()
    return survey

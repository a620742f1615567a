"""Survey lifecycle actions.

This module implements creating, deleting and duplicating surveys within an
environment, and copying a survey into another environment. Copying resolves
the survey's event classes and attribute classes by name in the target
environment, creating any that are missing, before re-creating its triggers
and attribute filters there.
"""

import copy
from typing import Any, Mapping

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.environment import EventClass, AttributeClass
from app.models.survey import Survey, Trigger, AttributeFilter
from app.schemas.survey import SurveyStatus
from app.services.errors import ResourceNotFoundError
from app.services.telemetry import capture_telemetry
from app.logging_config import get_logger

logger = get_logger(__name__)

# Columns a copy never inherits from its source
CLONE_EXCLUDED_FIELDS = frozenset({"id", "environment_id", "created_at", "updated_at"})

# JSON documents copied by value so the copy never aliases the source
CLONE_DEEP_COPIED_FIELDS = ("questions", "thank_you_card", "survey_closed_message")

COPY_SUFFIX = " (copy)"


class SurveyService:
    """Service for survey lifecycle actions.

    Every action runs in the given session and commits once at the end. On a
    database error the session is rolled back and the error re-raised
    unchanged.
    """

    def __init__(self, db: Session):
        """Initialize survey service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def delete_survey(self, survey_id: str) -> Survey:
        """Delete a survey along with its triggers and attribute filters.

        Args:
            survey_id: Survey to delete

        Returns:
            Survey: The deleted survey

        Raises:
            NoResultFound: If no survey has this ID
        """
        survey = self.db.execute(
            select(Survey)
            .where(Survey.id == survey_id)
            .options(
                selectinload(Survey.triggers),
                selectinload(Survey.attribute_filters),
            )
        ).scalar_one()

        try:
            self.db.delete(survey)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete survey {survey_id}: {e}")
            self.db.rollback()
            raise

        logger.info("Deleted survey", extra={"survey_id": survey_id})
        return survey

    def create_survey(self, environment_id: str, survey_body: Mapping[str, Any]) -> Survey:
        """Create a survey in an environment from an unvalidated payload.

        Every key of ``survey_body`` is set verbatim on the new row; the
        environment always comes from ``environment_id``.

        Args:
            environment_id: Environment that owns the survey
            survey_body: Survey attributes keyed by model attribute name

        Returns:
            Survey: The created survey

        Raises:
            TypeError: If the payload names an attribute Survey doesn't have
            SQLAlchemyError: If the database rejects the insert
        """
        survey = Survey(**survey_body)
        survey.environment_id = environment_id

        try:
            self.db.add(survey)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create survey in environment {environment_id}: {e}")
            self.db.rollback()
            raise

        capture_telemetry("survey created")
        logger.info(
            f"Created survey '{survey.name}'",
            extra={"survey_id": survey.id, "environment_id": environment_id},
        )
        return survey

    def duplicate_survey(self, environment_id: str, survey_id: str) -> Survey:
        """Duplicate a survey within its own environment.

        The copy is a draft named "<name> (copy)" whose triggers and
        attribute filters reference the same classes as the source.

        Args:
            environment_id: Environment the source survey belongs to
            survey_id: Survey to duplicate

        Returns:
            Survey: The new survey

        Raises:
            ResourceNotFoundError: If the survey is not in the environment
        """
        source = self._get_survey(
            environment_id,
            survey_id,
            selectinload(Survey.triggers),
            selectinload(Survey.attribute_filters),
        )

        new_survey = Survey(**self._clone_fields(source))
        new_survey.environment_id = environment_id
        new_survey.triggers = [
            Trigger(event_class_id=trigger.event_class_id)
            for trigger in source.triggers
        ]
        new_survey.attribute_filters = [
            AttributeFilter(
                attribute_class_id=attribute_filter.attribute_class_id,
                condition=attribute_filter.condition,
                value=attribute_filter.value,
                position=position,
            )
            for position, attribute_filter in enumerate(source.attribute_filters)
        ]

        try:
            self.db.add(new_survey)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to duplicate survey {survey_id}: {e}")
            self.db.rollback()
            raise

        logger.info(
            f"Duplicated survey {survey_id} as {new_survey.id}",
            extra={"survey_id": new_survey.id, "environment_id": environment_id},
        )
        return new_survey

    def copy_to_other_environment(
        self,
        environment_id: str,
        survey_id: str,
        target_environment_id: str
    ) -> Survey:
        """Copy a survey into another environment.

        Flow:
        1. Resolve each trigger's event class by name in the target
           environment, creating it there when missing
        2. Resolve each filter's attribute class the same way, keeping
           filter i paired with resolved class i
        3. Create the copy in the target environment with triggers and
           filters pointing at the resolved classes

        Each call creates a new survey. Reference classes are only created
        when no class of the same name exists in the target environment.

        The whole copy is one transaction: created classes are flushed, not
        committed, and any database error rolls back every row of the copy.
        Class names are unique per environment, so when two copies race to
        create the same class the loser's commit raises IntegrityError.

        Args:
            environment_id: Environment the source survey belongs to
            survey_id: Survey to copy
            target_environment_id: Environment that receives the copy

        Returns:
            Survey: The new survey in the target environment

        Raises:
            ResourceNotFoundError: If the survey is not in the environment
            IntegrityError: If a concurrent copy created a same-named class
            SQLAlchemyError: If the database rejects any other insert
        """
        source = self._get_survey(
            environment_id,
            survey_id,
            selectinload(Survey.triggers).selectinload(Trigger.event_class),
            selectinload(Survey.attribute_filters).selectinload(AttributeFilter.attribute_class),
        )

        try:
            event_class_ids = [
                self._resolve_event_class(trigger.event_class, target_environment_id).id
                for trigger in source.triggers
            ]
            attribute_class_ids = [
                self._resolve_attribute_class(
                    attribute_filter.attribute_class, target_environment_id
                ).id
                for attribute_filter in source.attribute_filters
            ]

            new_survey = Survey(**self._clone_fields(source))
            new_survey.environment_id = target_environment_id
            new_survey.triggers = [
                Trigger(event_class_id=event_class_id)
                for event_class_id in event_class_ids
            ]
            new_survey.attribute_filters = [
                AttributeFilter(
                    attribute_class_id=attribute_class_id,
                    condition=attribute_filter.condition,
                    value=attribute_filter.value,
                    position=position,
                )
                for position, (attribute_filter, attribute_class_id) in enumerate(
                    zip(source.attribute_filters, attribute_class_ids)
                )
            ]

            self.db.add(new_survey)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to copy survey {survey_id} to environment "
                f"{target_environment_id}: {e}"
            )
            self.db.rollback()
            raise

        logger.info(
            f"Copied survey {survey_id} from {environment_id} as {new_survey.id}",
            extra={"survey_id": new_survey.id, "environment_id": target_environment_id},
        )
        return new_survey

    def _get_survey(self, environment_id: str, survey_id: str, *options) -> Survey:
        """Load a survey scoped to an environment or raise ResourceNotFoundError."""
        survey = self.db.execute(
            select(Survey)
            .where(Survey.id == survey_id, Survey.environment_id == environment_id)
            .options(*options)
        ).scalar_one_or_none()

        if survey is None:
            logger.warning(
                f"Survey {survey_id} not found in environment {environment_id}"
            )
            raise ResourceNotFoundError("Survey", survey_id)
        return survey

    @staticmethod
    def _clone_fields(source: Survey) -> dict[str, Any]:
        """Column values for a copy of ``source``.

        The copy gets a fresh ID, no environment, the copy suffix on its
        name and draft status.
        """
        fields = {
            attr.key: getattr(source, attr.key)
            for attr in inspect(Survey).column_attrs
            if attr.key not in CLONE_EXCLUDED_FIELDS
        }
        for key in CLONE_DEEP_COPIED_FIELDS:
            fields[key] = copy.deepcopy(fields[key])

        fields["name"] = f"{source.name}{COPY_SUFFIX}"
        fields["status"] = SurveyStatus.DRAFT.value
        return fields

    def _resolve_event_class(
        self,
        event_class: EventClass,
        target_environment_id: str
    ) -> EventClass:
        """Find the same-named event class in the target environment or create it."""
        existing = EventClass.find_by_name(self.db, target_environment_id, event_class.name)
        if existing is not None:
            return existing

        created = EventClass(
            name=event_class.name,
            description=event_class.description,
            type=event_class.type,
            no_code_config=(
                copy.deepcopy(event_class.no_code_config)
                if event_class.no_code_config
                else None
            ),
            environment_id=target_environment_id,
        )
        self.db.add(created)
        # Flush so a later lookup in this session finds the new row
        self.db.flush()

        logger.info(
            f"Created event class '{created.name}' in target environment",
            extra={"environment_id": target_environment_id},
        )
        return created

    def _resolve_attribute_class(
        self,
        attribute_class: AttributeClass,
        target_environment_id: str
    ) -> AttributeClass:
        """Find the same-named attribute class in the target environment or create it."""
        existing = AttributeClass.find_by_name(
            self.db, target_environment_id, attribute_class.name
        )
        if existing is not None:
            return existing

        created = AttributeClass(
            name=attribute_class.name,
            description=attribute_class.description,
            type=attribute_class.type,
            environment_id=target_environment_id,
        )
        self.db.add(created)
        self.db.flush()

        logger.info(
            f"Created attribute class '{created.name}' in target environment",
            extra={"environment_id": target_environment_id},
        )
        return created

"""Survey lifecycle endpoints.

Each endpoint is a thin wrapper over SurveyService; error translation to
HTTP status codes happens in the application's exception handlers. Survey
creation first parses JSON values into the column types.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import TypeAdapter, ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import DBAPIError, StatementError
from sqlalchemy.orm import Session

from app.models.database import get_db
from app.models.survey import Survey
from app.schemas.survey import CopySurveyRequest, SurveyRead
from app.services.survey_actions import SurveyService

router = APIRouter(prefix="/api")


def coerce_survey_body(survey_body: dict[str, Any]) -> dict[str, Any]:
    """Parse JSON values of survey columns into their Python types.

    Values are read with the response model's field types (so ISO strings
    become datetimes), falling back to the column's own Python type. Keys
    that are not survey attributes pass through for the model to reject.

    Raises:
        HTTPException: 422 for related rows or values of the wrong type
    """
    mapper = inspect(Survey)

    related = sorted(set(survey_body) & set(mapper.relationships.keys()))
    if related:
        raise HTTPException(
            status_code=422,
            detail=f"Related rows cannot be set when creating a survey: {', '.join(related)}"
        )

    coerced = dict(survey_body)
    for attr in mapper.column_attrs:
        if attr.key not in survey_body:
            continue
        field = SurveyRead.model_fields.get(attr.key)
        annotation = field.annotation if field else attr.columns[0].type.python_type
        try:
            coerced[attr.key] = TypeAdapter(annotation).validate_python(survey_body[attr.key])
        except ValidationError as e:
            raise HTTPException(
                status_code=422,
                detail=f"Invalid value for '{attr.key}': {e.errors()[0]['msg']}"
            )
    return coerced


@router.post(
    "/environments/{environment_id}/surveys",
    response_model=SurveyRead,
    status_code=status.HTTP_201_CREATED,
)
def create_survey(
    environment_id: str,
    survey_body: dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
) -> SurveyRead:
    """Create a survey from an unvalidated JSON object."""
    try:
        survey = SurveyService(db).create_survey(
            environment_id, coerce_survey_body(survey_body)
        )
    except TypeError as e:
        # Payload named an attribute the survey model does not have
        raise HTTPException(status_code=422, detail=str(e))
    except DBAPIError:
        raise
    except StatementError as e:
        # Value the column type could not bind
        raise HTTPException(status_code=422, detail=str(e.orig))
    return SurveyRead.model_validate(survey)


@router.delete("/surveys/{survey_id}", response_model=SurveyRead)
def delete_survey(survey_id: str, db: Session = Depends(get_db)) -> SurveyRead:
    """Delete a survey and return it."""
    survey = SurveyService(db).delete_survey(survey_id)
    return SurveyRead.model_validate(survey)


@router.post(
    "/environments/{environment_id}/surveys/{survey_id}/duplicate",
    response_model=SurveyRead,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_survey(
    environment_id: str,
    survey_id: str,
    db: Session = Depends(get_db)
) -> SurveyRead:
    """Duplicate a survey inside its environment."""
    survey = SurveyService(db).duplicate_survey(environment_id, survey_id)
    return SurveyRead.model_validate(survey)


@router.post(
    "/environments/{environment_id}/surveys/{survey_id}/copy",
    response_model=SurveyRead,
    status_code=status.HTTP_201_CREATED,
)
def copy_survey_to_other_environment(
    environment_id: str,
    survey_id: str,
    request: CopySurveyRequest,
    db: Session = Depends(get_db)
) -> SurveyRead:
    """Copy a survey into another environment."""
    survey = SurveyService(db).copy_to_other_environment(
        environment_id, survey_id, request.target_environment_id
    )
    return SurveyRead.model_validate(survey)

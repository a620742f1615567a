"""Team provisioning endpoint."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.models.database import get_db
from app.schemas.team import CreateTeamRequest, TeamRead
from app.services.team_provisioning import TeamProvisioningService
from app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


@router.post("/teams", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
def create_team(
    request: CreateTeamRequest,
    db: Session = Depends(get_db)
) -> TeamRead:
    """Create a team with its owner membership and default resources.

    Returns:
        TeamRead: The created team including its memberships
    """
    team = TeamProvisioningService(db).create_team(
        request.team_name, request.owner_user_id
    )
    return TeamRead.model_validate(team)

"""Pydantic schemas for team provisioning."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MembershipRole(str, Enum):
    """Roles a user can hold in a team."""
    OWNER = "owner"
    ADMIN = "admin"
    EDITOR = "editor"
    DEVELOPER = "developer"
    VIEWER = "viewer"


class CreateTeamRequest(BaseModel):
    """Body of a create-team request.

    Attributes:
        team_name: Name of the new team
        owner_user_id: User who becomes the accepted owner
    """
    team_name: str = Field(..., description="Name of the new team")
    owner_user_id: str = Field(..., description="Owning user ID")


class MembershipRead(BaseModel):
    """A membership as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: str
    accepted: bool


class TeamRead(BaseModel):
    """A team with its memberships."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    memberships: list[MembershipRead] = Field(default_factory=list)

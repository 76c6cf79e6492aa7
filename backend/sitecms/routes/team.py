"""SiteCMS Backend: Team Routes (CRUD over /api/team)."""

from typing import List

from fastapi import APIRouter, Depends

from sitecms.dependencies import get_team_repository
from sitecms.repositories.team import TeamRepository
from sitecms.schemas.common import SuccessResponse
from sitecms.schemas.content import TeamMemberPayload, TeamMemberRead

router = APIRouter(prefix="/api/team", tags=["Team"])


@router.get("", response_model=List[TeamMemberRead], summary="List team members")
async def list_team(team: TeamRepository = Depends(get_team_repository)) -> List[TeamMemberRead]:
    return [TeamMemberRead.model_validate(member) for member in await team.list_all()]


@router.post("", response_model=TeamMemberRead, summary="Add a team member")
async def create_team_member(
    body: TeamMemberPayload,
    team: TeamRepository = Depends(get_team_repository),
) -> TeamMemberRead:
    member = await team.create(**body.model_dump())
    return TeamMemberRead.model_validate(member)


@router.put("/{member_id}", response_model=SuccessResponse, summary="Update a team member")
async def update_team_member(
    member_id: int,
    body: TeamMemberPayload,
    team: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse:
    await team.update(member_id, body.model_dump())
    return SuccessResponse()


@router.delete("/{member_id}", response_model=SuccessResponse, summary="Remove a team member")
async def delete_team_member(
    member_id: int,
    team: TeamRepository = Depends(get_team_repository),
) -> SuccessResponse:
    await team.delete(member_id)
    return SuccessResponse()

"""
Leagues router.

Handles league and team endpoints:
- League create/detail, season rollover and its preview
- Dead money policy (read, replace)
- Franchise tag positional values
- Team create/detail and cap projection
"""

from fastapi import APIRouter, HTTPException, Query

from capsheet.api.schemas.leagues import (
    AdvanceSeasonPreviewResponse,
    AdvanceSeasonResponse,
    CapProjectionResponse,
    CapProjectionSchema,
    ContractRolloverSchema,
    CreateLeagueRequest,
    CreateTeamRequest,
    DeadMoneyConfigResponse,
    FranchiseTagValuesResponse,
    LeagueResponse,
    TeamResponse,
    UpdateDeadMoneyConfigRequest,
)
from capsheet.api.schemas.contracts import DeadMoneyRecordSchema
from capsheet.api.services.league_service import league_service
from capsheet.config import get_config
from capsheet.core.contracts import InvalidDeadMoneyConfig
from capsheet.core.models import League
from .deps import config_to_schema, get_league_or_404, get_team_or_404, record_to_schema, team_to_response

router = APIRouter(tags=["leagues"])


def _league_response(league: League) -> LeagueResponse:
    return LeagueResponse(
        **league.to_dict(),
        team_count=len(league_service.teams_in_league(league.league_id)),
    )


@router.post("/leagues", response_model=LeagueResponse, status_code=201)
async def create_league(request: CreateLeagueRequest) -> LeagueResponse:
    """Create a league."""
    league = league_service.create_league(
        name=request.name,
        season=request.season,
        salary_cap=request.salary_cap,
        max_franchise_tags=request.max_franchise_tags,
        minimum_salary=request.minimum_salary,
        annual_increase_rate=request.annual_increase_rate,
        dead_money_config=request.dead_money_config.to_storage() if request.dead_money_config else None,
    )
    return _league_response(league)


@router.get("/leagues/{league_id}", response_model=LeagueResponse)
async def get_league(league_id: str) -> LeagueResponse:
    """Get league detail."""
    return _league_response(get_league_or_404(league_id))


@router.get("/leagues/{league_id}/advance-season/preview", response_model=AdvanceSeasonPreviewResponse)
async def preview_advance_season(league_id: str) -> AdvanceSeasonPreviewResponse:
    """Show what rolling into the next season would change, without changing it."""
    league = get_league_or_404(league_id)
    previews = league_service.preview_advance_season(league_id)
    return AdvanceSeasonPreviewResponse(
        league_id=league_id,
        current_season=league.season,
        next_season=league.season + 1,
        contracts=[ContractRolloverSchema(**p.to_dict()) for p in previews],
        contracts_expiring=sum(1 for p in previews if p.expires),
        eligible_for_extension=sum(1 for p in previews if p.eligible_for_extension),
        eligible_for_tag=sum(1 for p in previews if p.eligible_for_tag),
    )


@router.post("/leagues/{league_id}/advance-season", response_model=AdvanceSeasonResponse)
async def advance_season(league_id: str) -> AdvanceSeasonResponse:
    """Roll the league into its next season (salary increases, expirations)."""
    league = get_league_or_404(league_id)
    updated, expired = league_service.advance_season(league_id)
    return AdvanceSeasonResponse(
        league_id=league_id,
        season=league.season,
        contracts_updated=updated,
        contracts_expired=expired,
    )


@router.get("/leagues/{league_id}/dead-money-config", response_model=DeadMoneyConfigResponse)
async def get_dead_money_config(league_id: str) -> DeadMoneyConfigResponse:
    """Get the league's dead money policy. Unreadable storage returns the default."""
    league = get_league_or_404(league_id)
    config, is_default = league_service.resolve_dead_money_config(league)
    return DeadMoneyConfigResponse(
        league_id=league.league_id,
        league_name=league.name,
        dead_money_config=config_to_schema(config),
        is_default=is_default,
    )


@router.put("/leagues/{league_id}/dead-money-config", response_model=DeadMoneyConfigResponse)
async def update_dead_money_config(
    league_id: str, request: UpdateDeadMoneyConfigRequest
) -> DeadMoneyConfigResponse:
    """Replace the league's dead money policy."""
    league = get_league_or_404(league_id)
    try:
        config = league_service.update_dead_money_config(
            league_id, request.dead_money_config.to_storage()
        )
    except InvalidDeadMoneyConfig as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DeadMoneyConfigResponse(
        league_id=league.league_id,
        league_name=league.name,
        dead_money_config=config_to_schema(config),
    )


@router.get("/leagues/{league_id}/franchise-tag-values", response_model=FranchiseTagValuesResponse)
async def get_franchise_tag_values(league_id: str) -> FranchiseTagValuesResponse:
    """Top-N average salary per position, the floor for franchise tag values."""
    get_league_or_404(league_id)
    top_n = get_config().franchise_tag_top_n
    averages = league_service.position_averages(league_id, top_n)
    return FranchiseTagValuesResponse(
        league_id=league_id,
        top_n=top_n,
        averages={position.value: value for position, value in averages.items()},
    )


@router.post("/leagues/{league_id}/teams", response_model=TeamResponse, status_code=201)
async def create_team(league_id: str, request: CreateTeamRequest) -> TeamResponse:
    """Add a team to a league."""
    get_league_or_404(league_id)
    team = league_service.create_team(
        league_id,
        name=request.name,
        abbreviation=request.abbreviation,
        owner_name=request.owner_name,
    )
    return team_to_response(team)


@router.get("/leagues/{league_id}/teams", response_model=list[TeamResponse])
async def list_teams(league_id: str) -> list[TeamResponse]:
    """List a league's teams."""
    get_league_or_404(league_id)
    return [team_to_response(t) for t in league_service.teams_in_league(league_id)]


@router.get("/teams/{team_id}", response_model=TeamResponse)
async def get_team(team_id: str) -> TeamResponse:
    """Get team detail with cap state."""
    return team_to_response(get_team_or_404(team_id))


@router.get("/teams/{team_id}/cap-projection", response_model=CapProjectionResponse)
async def get_cap_projection(
    team_id: str, years: int = Query(default=3, ge=1, le=10)
) -> CapProjectionResponse:
    """Project the team's cap over the coming seasons."""
    get_team_or_404(team_id)
    projections = league_service.cap_projection(team_id, years)
    return CapProjectionResponse(
        team_id=team_id,
        projections=[CapProjectionSchema(**p.to_dict()) for p in projections],
    )


@router.get("/teams/{team_id}/dead-money", response_model=list[DeadMoneyRecordSchema])
async def get_dead_money(team_id: str) -> list[DeadMoneyRecordSchema]:
    """Dead money records charged to the team."""
    get_team_or_404(team_id)
    return [record_to_schema(r) for r in league_service.dead_money_for_team(team_id)]

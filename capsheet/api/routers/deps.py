"""
Shared dependencies for the league and contract routers.

Lookup helpers that turn missing records into 404s, plus converters from
core objects to response schemas.
"""

from fastapi import HTTPException

from capsheet.api.schemas.contracts import (
    ContractSchema,
    DeadMoneyBreakdownSchema,
    DeadMoneyRecordSchema,
    DeadMoneySchema,
)
from capsheet.api.schemas.leagues import (
    DeadMoneyConfigSchema,
    FutureSeasonsSchema,
    TeamFinancialsSchema,
    TeamResponse,
)
from capsheet.api.services.league_service import NotFoundError, league_service
from capsheet.core.contracts import Contract, DeadMoneyConfig, DeadMoneyRecord, DeadMoneyResult
from capsheet.core.models import League, Team


def get_league_or_404(league_id: str) -> League:
    """
    Get a league by ID.

    Raises HTTPException 404 if not found.
    """
    try:
        return league_service.get_league(league_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def get_team_or_404(team_id: str) -> Team:
    """
    Get a team by ID.

    Raises HTTPException 404 if not found.
    """
    try:
        return league_service.get_team(team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def get_contract_or_404(team_id: str, contract_id: str) -> Contract:
    """
    Get a team's contract by ID.

    Raises HTTPException 404 if the team or contract is not found.
    """
    get_team_or_404(team_id)
    try:
        return league_service.get_contract(team_id, contract_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def contract_to_schema(contract: Contract) -> ContractSchema:
    """Convert Contract to response schema."""
    return ContractSchema(**contract.to_dict())


def dead_money_to_schema(result: DeadMoneyResult) -> DeadMoneySchema:
    """Convert DeadMoneyResult to response schema."""
    return DeadMoneySchema(
        current_season_amount=result.current_season_amount,
        next_season_amount=result.next_season_amount,
        total_amount=result.total_amount,
        breakdown=DeadMoneyBreakdownSchema(
            current_year_salary=result.breakdown.current_year_salary,
            years_remaining=result.breakdown.years_remaining,
            penalty_percentage=result.breakdown.penalty_percentage,
            is_practice_squad=result.breakdown.is_practice_squad,
        ),
    )


def record_to_schema(record: DeadMoneyRecord) -> DeadMoneyRecordSchema:
    return DeadMoneyRecordSchema(**record.to_dict())


def config_to_schema(config: DeadMoneyConfig) -> DeadMoneyConfigSchema:
    """Convert DeadMoneyConfig to its stored JSON shape."""
    data = config.to_dict()
    return DeadMoneyConfigSchema(
        currentSeason=data["currentSeason"],
        futureSeasons=FutureSeasonsSchema(**data["futureSeasons"]),
    )


def team_to_response(team: Team) -> TeamResponse:
    """Convert Team to response schema."""
    return TeamResponse(
        team_id=team.team_id,
        league_id=team.league_id,
        name=team.name,
        abbreviation=team.abbreviation,
        owner_name=team.owner_name,
        financials=TeamFinancialsSchema(**team.financials.to_dict()),
        franchise_tags_used=team.franchise_tags_used,
    )

"""
Contracts router.

Handles contract endpoints for a team:
- Sign and list contracts
- Dead money preview
- Release, extend, franchise tag
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from capsheet.api.schemas.contracts import (
    ContractSchema,
    ContractsResponse,
    DeadMoneyPreviewResponse,
    ExtendContractRequest,
    ExtendContractResponse,
    FranchiseTagResponse,
    FranchiseTagSchema,
    ReleaseContractRequest,
    ReleaseContractResponse,
    SignContractRequest,
)
from capsheet.api.services.league_service import league_service
from capsheet.core.contracts import ContractActionError
from capsheet.core.contracts.cap import CAP_STATUSES
from capsheet.core.contracts.money import round_currency
from capsheet.core.enums import AcquisitionType, Position, RosterStatus
from .deps import (
    contract_to_schema,
    dead_money_to_schema,
    get_contract_or_404,
    get_team_or_404,
    record_to_schema,
)

router = APIRouter(tags=["contracts"])


@router.post("/teams/{team_id}/contracts", response_model=ContractSchema, status_code=201)
async def sign_contract(team_id: str, request: SignContractRequest) -> ContractSchema:
    """Sign a player. Fails if the team lacks cap space."""
    get_team_or_404(team_id)
    try:
        contract = league_service.sign_contract(
            team_id,
            player_id=request.player_id,
            salary=request.salary,
            years=request.years,
            position=Position(request.position.value),
            player_name=request.player_name,
            acquisition_type=AcquisitionType(request.acquisition_type.value),
            roster_status=RosterStatus(request.roster_status.value),
        )
    except (ContractActionError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return contract_to_schema(contract)


@router.get("/teams/{team_id}/contracts", response_model=ContractsResponse)
async def get_contracts(team_id: str, include_inactive: bool = False) -> ContractsResponse:
    """Get the team's contracts, highest salary first."""
    team = get_team_or_404(team_id)
    contracts = league_service.contracts_for_team(team_id)
    if not include_inactive:
        contracts = [c for c in contracts if c.status in CAP_STATUSES]

    contracts.sort(key=lambda c: c.current_salary, reverse=True)

    return ContractsResponse(
        team_id=team_id,
        total_salary=team.financials.total_salary,
        contracts=[contract_to_schema(c) for c in contracts],
    )


@router.get("/teams/{team_id}/contracts/{contract_id}", response_model=ContractSchema)
async def get_contract(team_id: str, contract_id: str) -> ContractSchema:
    """Get a single contract."""
    return contract_to_schema(get_contract_or_404(team_id, contract_id))


@router.get(
    "/teams/{team_id}/contracts/{contract_id}/dead-money",
    response_model=DeadMoneyPreviewResponse,
)
async def preview_dead_money(
    team_id: str, contract_id: str, season: Optional[int] = Query(default=None)
) -> DeadMoneyPreviewResponse:
    """What releasing the player would cost, without releasing."""
    contract = get_contract_or_404(team_id, contract_id)
    try:
        season, result = league_service.preview_release(team_id, contract_id, season)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DeadMoneyPreviewResponse(
        contract_id=contract_id,
        season=season,
        dead_money=dead_money_to_schema(result),
        cap_savings=round_currency(contract.current_salary - result.current_season_amount),
    )


@router.post(
    "/teams/{team_id}/contracts/{contract_id}/release",
    response_model=ReleaseContractResponse,
)
async def release_contract(
    team_id: str, contract_id: str, request: Optional[ReleaseContractRequest] = None
) -> ReleaseContractResponse:
    """Release a player and charge dead money to the team."""
    get_contract_or_404(team_id, contract_id)
    request = request or ReleaseContractRequest()
    try:
        contract, result, records = await league_service.release_contract(
            team_id, contract_id, request.season, amount=request.amount, reason=request.reason
        )
    except (ContractActionError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ReleaseContractResponse(
        success=True,
        contract=contract_to_schema(contract),
        dead_money=dead_money_to_schema(result),
        records=[record_to_schema(r) for r in records],
        message="Player released",
    )


@router.post(
    "/teams/{team_id}/contracts/{contract_id}/extend",
    response_model=ExtendContractResponse,
)
async def extend_contract(
    team_id: str, contract_id: str, request: ExtendContractRequest
) -> ExtendContractResponse:
    """Extend a contract in its final year."""
    get_contract_or_404(team_id, contract_id)
    try:
        contract = await league_service.extend_contract(
            team_id, contract_id, request.new_salary, request.additional_years
        )
    except (ContractActionError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ExtendContractResponse(
        success=True,
        contract=contract_to_schema(contract),
        message="Contract extended",
    )


@router.post(
    "/teams/{team_id}/contracts/{contract_id}/tag",
    response_model=FranchiseTagResponse,
)
async def tag_contract(team_id: str, contract_id: str) -> FranchiseTagResponse:
    """Apply the franchise tag. The tag value is computed server side."""
    get_contract_or_404(team_id, contract_id)
    try:
        contract, tag = await league_service.tag_contract(team_id, contract_id)
    except ContractActionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return FranchiseTagResponse(
        success=True,
        contract=contract_to_schema(contract),
        tag=FranchiseTagSchema(**tag.to_dict()),
        message="Franchise tag applied",
    )

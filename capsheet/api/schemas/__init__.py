"""Pydantic schemas for API request/response models."""

from capsheet.api.schemas.contracts import (
    ContractSchema,
    ContractsResponse,
    DeadMoneyPreviewResponse,
    ExtendContractRequest,
    ExtendContractResponse,
    FranchiseTagResponse,
    ReleaseContractRequest,
    ReleaseContractResponse,
    SignContractRequest,
)
from capsheet.api.schemas.leagues import (
    AdvanceSeasonPreviewResponse,
    AdvanceSeasonResponse,
    CapProjectionResponse,
    CreateLeagueRequest,
    CreateTeamRequest,
    DeadMoneyConfigResponse,
    DeadMoneyConfigSchema,
    FranchiseTagValuesResponse,
    LeagueResponse,
    TeamResponse,
    UpdateDeadMoneyConfigRequest,
)

__all__ = [
    # Contracts
    "ContractSchema",
    "ContractsResponse",
    "DeadMoneyPreviewResponse",
    "ExtendContractRequest",
    "ExtendContractResponse",
    "FranchiseTagResponse",
    "ReleaseContractRequest",
    "ReleaseContractResponse",
    "SignContractRequest",
    # Leagues and teams
    "AdvanceSeasonPreviewResponse",
    "AdvanceSeasonResponse",
    "CapProjectionResponse",
    "CreateLeagueRequest",
    "CreateTeamRequest",
    "DeadMoneyConfigResponse",
    "DeadMoneyConfigSchema",
    "FranchiseTagValuesResponse",
    "LeagueResponse",
    "TeamResponse",
    "UpdateDeadMoneyConfigRequest",
]

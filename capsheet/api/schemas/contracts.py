"""Pydantic schemas for contract endpoints."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# === Enums (mirroring capsheet.core.enums) ===

class PositionSchema(str, Enum):
    """Position enum for API."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DL = "DL"
    LB = "LB"
    DB = "DB"


class RosterStatusSchema(str, Enum):
    """Roster status enum for API."""
    ACTIVE = "ACTIVE"
    PRACTICE_SQUAD = "PRACTICE_SQUAD"


class AcquisitionTypeSchema(str, Enum):
    """Acquisition type enum for API."""
    AUCTION = "auction"
    FAAB = "faab"
    ROOKIE_DRAFT = "rookie_draft"
    TRADE = "trade"
    UNDISPUTED = "undisputed"


# === Requests ===

class SignContractRequest(BaseModel):
    """Sign a player to a new contract."""
    player_id: str = Field(..., min_length=1)
    player_name: str = ""
    position: PositionSchema
    salary: float = Field(..., ge=0, description="Salary in the signing season (millions)")
    years: int = Field(..., ge=1, le=10)
    acquisition_type: AcquisitionTypeSchema = AcquisitionTypeSchema.AUCTION
    roster_status: RosterStatusSchema = RosterStatusSchema.ACTIVE


class ReleaseContractRequest(BaseModel):
    """Release a player. Defaults to the league's current season."""
    season: Optional[int] = None
    amount: Optional[float] = Field(
        default=None, ge=0, description="Manual dead money, replaces the computed charge"
    )
    reason: Optional[str] = None


class ExtendContractRequest(BaseModel):
    """Extend a contract in its final year."""
    new_salary: float = Field(..., gt=0)
    additional_years: int = Field(..., ge=1, le=10)


# === Responses ===

class ContractSchema(BaseModel):
    """Contract as returned by the API."""
    contract_id: str
    player_id: str
    team_id: str
    league_id: str
    player_name: str
    position: Optional[PositionSchema] = None
    original_salary: float
    original_years: int
    signed_season: int
    current_salary: float
    years_remaining: int
    status: str
    roster_status: RosterStatusSchema
    acquisition_type: AcquisitionTypeSchema
    has_been_tagged: bool
    has_been_extended: bool


class ContractsResponse(BaseModel):
    """All contracts of a team."""
    team_id: str
    total_salary: float
    contracts: list[ContractSchema]


class DeadMoneyBreakdownSchema(BaseModel):
    current_year_salary: float
    years_remaining: int
    penalty_percentage: float
    is_practice_squad: bool


class DeadMoneySchema(BaseModel):
    """Dead money for a release."""
    current_season_amount: float
    next_season_amount: float
    total_amount: float
    breakdown: DeadMoneyBreakdownSchema


class DeadMoneyRecordSchema(BaseModel):
    contract_id: str
    player_id: str
    team_id: str
    season: int
    amount: float
    reason: str


class DeadMoneyPreviewResponse(BaseModel):
    """What releasing a player would cost, without releasing."""
    contract_id: str
    season: int
    dead_money: DeadMoneySchema
    cap_savings: float


class ReleaseContractResponse(BaseModel):
    """Result of a release."""
    success: bool
    contract: ContractSchema
    dead_money: DeadMoneySchema
    records: list[DeadMoneyRecordSchema]
    message: str


class ExtendContractResponse(BaseModel):
    """Result of an extension."""
    success: bool
    contract: ContractSchema
    message: str


class FranchiseTagSchema(BaseModel):
    current_salary: float
    salary_with_increase: float
    position_average: float
    final_tag_value: float


class FranchiseTagResponse(BaseModel):
    """Result of applying a franchise tag."""
    success: bool
    contract: ContractSchema
    tag: FranchiseTagSchema
    message: str

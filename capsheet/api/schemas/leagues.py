"""Pydantic schemas for league and team endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


# === Dead Money Policy ===

class FutureSeasonsSchema(BaseModel):
    """Next-season percentage by years remaining after the cut."""
    one: float = Field(..., alias="1", ge=0, le=1)
    two: float = Field(..., alias="2", ge=0, le=1)
    three: float = Field(..., alias="3", ge=0, le=1)
    four: float = Field(..., alias="4", ge=0, le=1, description="4 or more years")

    model_config = {"populate_by_name": True}


class DeadMoneyConfigSchema(BaseModel):
    """Dead money policy in its stored JSON shape."""
    currentSeason: float = Field(..., ge=0, le=1)
    futureSeasons: FutureSeasonsSchema

    def to_storage(self) -> dict:
        return {
            "currentSeason": self.currentSeason,
            "futureSeasons": self.futureSeasons.model_dump(by_alias=True),
        }


class DeadMoneyConfigResponse(BaseModel):
    """Resolved dead money policy for a league."""
    league_id: str
    league_name: str
    dead_money_config: DeadMoneyConfigSchema
    is_default: bool = False


class UpdateDeadMoneyConfigRequest(BaseModel):
    """Replace a league's dead money policy."""
    dead_money_config: DeadMoneyConfigSchema


# === Leagues ===

class CreateLeagueRequest(BaseModel):
    """Request to create a league."""
    name: str = Field(..., min_length=1)
    season: int = Field(..., ge=1900)
    salary_cap: Optional[float] = Field(default=None, gt=0)
    max_franchise_tags: Optional[int] = Field(default=None, ge=0)
    minimum_salary: float = Field(default=1.0, ge=0)
    annual_increase_rate: float = Field(default=0.15, ge=0, le=1)
    dead_money_config: Optional[DeadMoneyConfigSchema] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class LeagueResponse(BaseModel):
    """League detail."""
    league_id: str
    name: str
    season: int
    salary_cap: float
    max_franchise_tags: int
    annual_increase_rate: float
    minimum_salary: float
    team_count: int = 0


class AdvanceSeasonResponse(BaseModel):
    """Result of rolling a league into a new season."""
    league_id: str
    season: int
    contracts_updated: int
    contracts_expired: int


class ContractRolloverSchema(BaseModel):
    """One contract's changes at season rollover."""
    contract_id: str
    team_id: str
    player_name: str
    current_salary: float
    new_salary: float
    current_years_remaining: int
    new_years_remaining: int
    expires: bool
    eligible_for_extension: bool
    eligible_for_tag: bool


class AdvanceSeasonPreviewResponse(BaseModel):
    """Season rollover preview. Nothing is changed."""
    league_id: str
    current_season: int
    next_season: int
    contracts: list[ContractRolloverSchema]
    contracts_expiring: int
    eligible_for_extension: int
    eligible_for_tag: int


class FranchiseTagValuesResponse(BaseModel):
    """Positional averages used for franchise tag values."""
    league_id: str
    top_n: int
    averages: dict[str, float]


# === Teams ===

class CreateTeamRequest(BaseModel):
    """Request to add a team to a league."""
    name: str = Field(..., min_length=1)
    abbreviation: str = ""
    owner_name: Optional[str] = None


class TeamFinancialsSchema(BaseModel):
    """Salary cap state of a team."""
    salary_cap: float
    total_salary: float
    current_dead_money: float
    next_season_dead_money: float
    available_cap: float


class TeamResponse(BaseModel):
    """Team detail."""
    team_id: str
    league_id: str
    name: str
    abbreviation: str
    owner_name: Optional[str] = None
    financials: TeamFinancialsSchema
    franchise_tags_used: int


class CapProjectionSchema(BaseModel):
    """Projected cap for one season."""
    season: int
    committed_salaries: float
    dead_money: float
    available_cap: float
    expiring_contracts: int


class CapProjectionResponse(BaseModel):
    """Multi-season cap projection."""
    team_id: str
    projections: list[CapProjectionSchema]

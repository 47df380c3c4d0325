"""
Player contracts and their lifecycle.

Contracts track:
- Original terms (salary, length, signing season), fixed at signing
- Current salary and years remaining, recomputed every season
- Extension and franchise tag history (each allowed once per career)
- Roster status, which changes the cost of a release

All monetary values in millions (e.g. 30.0 = $30M).
"""

from dataclasses import dataclass, replace
from typing import Optional
import uuid

from capsheet.core.contracts.dead_money import (
    DEFAULT_DEAD_MONEY_CONFIG,
    DeadMoneyConfig,
    DeadMoneyResult,
    calculate_dead_money,
)
from capsheet.core.contracts.franchise_tag import check_franchise_tag_eligibility
from capsheet.core.contracts.money import as_amount, round_currency
from capsheet.core.contracts.salary import ANNUAL_INCREASE_RATE, project_salary
from capsheet.core.enums import AcquisitionType, ContractStatus, Position, RosterStatus


# Set once at signing, never changed afterwards
IMMUTABLE_FIELDS = frozenset({"original_salary", "original_years", "signed_season"})


class ContractActionError(Exception):
    """A contract action is not allowed in the contract's current state."""


@dataclass
class Contract:
    """
    Player contract.

    original_salary, original_years and signed_season are historical and
    raise AttributeError if reassigned.
    """
    contract_id: str
    player_id: str
    team_id: str
    league_id: str

    original_salary: float
    original_years: int
    signed_season: int

    current_salary: float = 0.0
    years_remaining: int = 0
    status: ContractStatus = ContractStatus.ACTIVE

    player_name: str = ""
    position: Optional[Position] = None
    roster_status: RosterStatus = RosterStatus.ACTIVE
    acquisition_type: AcquisitionType = AcquisitionType.AUCTION

    has_been_tagged: bool = False
    has_been_extended: bool = False

    def __setattr__(self, name, value):
        if name in IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} cannot change after signing")
        super().__setattr__(name, value)

    @property
    def is_practice_squad(self) -> bool:
        return self.roster_status == RosterStatus.PRACTICE_SQUAD

    @property
    def is_final_year(self) -> bool:
        return self.years_remaining <= 1

    def contract_year_for(self, season: int) -> int:
        """Zero-indexed contract year for a league season."""
        return season - self.signed_season

    def salary_for_season(self, season: int, rate: float = ANNUAL_INCREASE_RATE) -> float:
        """Projected salary in a league season (0 before signing)."""
        year = self.contract_year_for(season)
        if year < 0:
            return 0.0
        return project_salary(self.original_salary, year, rate)

    def dead_money_if_cut(
        self,
        season: int,
        config: DeadMoneyConfig = DEFAULT_DEAD_MONEY_CONFIG,
        rate: float = ANNUAL_INCREASE_RATE,
    ) -> DeadMoneyResult:
        """
        Dead money if the player were released in the given season.

        Tagged and extended contracts are charged on their current terms,
        as if signed this season for the years they have left.
        """
        if self.status in (ContractStatus.TAGGED, ContractStatus.EXTENDED):
            current_terms = replace(
                self,
                original_salary=self.current_salary,
                original_years=self.years_remaining,
                signed_season=season,
                status=ContractStatus.ACTIVE,
            )
            return calculate_dead_money(current_terms, 0, config, rate)
        return calculate_dead_money(self, self.contract_year_for(season), config, rate)

    def to_dict(self) -> dict:
        return {
            "contract_id": self.contract_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "league_id": self.league_id,
            "original_salary": self.original_salary,
            "original_years": self.original_years,
            "signed_season": self.signed_season,
            "current_salary": self.current_salary,
            "years_remaining": self.years_remaining,
            "status": self.status.value,
            "player_name": self.player_name,
            "position": self.position.value if self.position else None,
            "roster_status": self.roster_status.value,
            "acquisition_type": self.acquisition_type.value,
            "has_been_tagged": self.has_been_tagged,
            "has_been_extended": self.has_been_extended,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Contract":
        return cls(
            contract_id=data["contract_id"],
            player_id=data["player_id"],
            team_id=data["team_id"],
            league_id=data["league_id"],
            original_salary=as_amount(data["original_salary"]),
            original_years=int(data["original_years"]),
            signed_season=int(data["signed_season"]),
            current_salary=as_amount(data.get("current_salary", data["original_salary"])),
            years_remaining=int(data.get("years_remaining", data["original_years"])),
            status=ContractStatus(data.get("status", "ACTIVE")),
            player_name=data.get("player_name", ""),
            position=Position(data["position"]) if data.get("position") else None,
            roster_status=RosterStatus(data.get("roster_status", "ACTIVE")),
            acquisition_type=AcquisitionType(data.get("acquisition_type", "auction")),
            has_been_tagged=data.get("has_been_tagged", False),
            has_been_extended=data.get("has_been_extended", False),
        )


def create_contract(
    player_id: str,
    team_id: str,
    league_id: str,
    salary: float,
    years: int,
    season: int,
    acquisition_type: AcquisitionType = AcquisitionType.AUCTION,
    player_name: str = "",
    position: Optional[Position] = None,
    roster_status: RosterStatus = RosterStatus.ACTIVE,
) -> Contract:
    """
    Sign a new contract.

    Args:
        salary: Salary in the signing season (millions)
        years: Contract length, at least 1
        season: League season of signing

    Raises:
        ValueError: If years < 1 or salary is negative
    """
    if years < 1:
        raise ValueError(f"Contract must be at least 1 year, got {years}")
    salary = as_amount(salary)
    if salary < 0:
        raise ValueError(f"Salary cannot be negative: {salary}")

    return Contract(
        contract_id=str(uuid.uuid4()),
        player_id=player_id,
        team_id=team_id,
        league_id=league_id,
        original_salary=round_currency(salary),
        original_years=years,
        signed_season=season,
        current_salary=round_currency(salary),
        years_remaining=years,
        player_name=player_name,
        position=position,
        roster_status=roster_status,
        acquisition_type=acquisition_type,
    )


def advance_season(contract: Contract, new_season: int, rate: float = ANNUAL_INCREASE_RATE) -> Contract:
    """
    Roll a contract into a new season.

    Applies the annual increase and counts down the remaining years.
    Expires the contract when no years are left. Cut and expired contracts
    are left alone.
    """
    if contract.status in (ContractStatus.CUT, ContractStatus.EXPIRED):
        return contract

    if contract.status == ContractStatus.EXTENDED:
        # Extended terms escalate from the extension salary, not the original
        contract.current_salary = round_currency(contract.current_salary * (1 + rate))
    elif contract.status == ContractStatus.ACTIVE:
        contract.current_salary = contract.salary_for_season(new_season, rate)

    contract.years_remaining = max(0, contract.years_remaining - 1)
    if contract.years_remaining == 0:
        contract.status = ContractStatus.EXPIRED
    return contract


@dataclass(frozen=True)
class SeasonRolloverPreview:
    """What advance_season() would do to one contract."""
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

    def to_dict(self) -> dict:
        return {
            "contract_id": self.contract_id,
            "team_id": self.team_id,
            "player_name": self.player_name,
            "current_salary": self.current_salary,
            "new_salary": self.new_salary,
            "current_years_remaining": self.current_years_remaining,
            "new_years_remaining": self.new_years_remaining,
            "expires": self.expires,
            "eligible_for_extension": self.eligible_for_extension,
            "eligible_for_tag": self.eligible_for_tag,
        }


def preview_advance_season(
    contract: Contract,
    new_season: int,
    rate: float = ANNUAL_INCREASE_RATE,
) -> SeasonRolloverPreview:
    """
    Roll a copy of the contract into a new season and report the result.

    The contract itself is not changed. An expiring contract reports a new
    salary of 0. Eligibility is for the new season, before any tag is used.
    """
    rolled = advance_season(replace(contract), new_season, rate)
    expires = rolled.status == ContractStatus.EXPIRED

    return SeasonRolloverPreview(
        contract_id=contract.contract_id,
        team_id=contract.team_id,
        player_name=contract.player_name,
        current_salary=contract.current_salary,
        new_salary=0.0 if expires else rolled.current_salary,
        current_years_remaining=contract.years_remaining,
        new_years_remaining=rolled.years_remaining,
        expires=expires,
        eligible_for_extension=check_extension_eligibility(rolled)[0],
        eligible_for_tag=check_franchise_tag_eligibility(rolled, tags_used=0)[0],
    )


def check_extension_eligibility(contract: Contract) -> tuple[bool, Optional[str]]:
    """
    Check whether a contract can be extended.

    Extensions happen only in the final year, once per career, and never
    for a tagged player.
    """
    if contract.status != ContractStatus.ACTIVE:
        return False, f"Contract is not active ({contract.status.value})"

    if contract.has_been_extended:
        return False, "Player has already been extended once"

    if contract.has_been_tagged:
        return False, "Tagged players cannot be extended"

    if not contract.is_final_year:
        return False, f"Extensions are only allowed in the final year. Years remaining: {contract.years_remaining}"

    return True, None


def apply_extension(contract: Contract, new_salary: float, additional_years: int) -> Contract:
    """
    Extend a contract in its final year.

    Raises:
        ContractActionError: If the contract is not eligible
        ValueError: If the new terms are invalid
    """
    eligible, reason = check_extension_eligibility(contract)
    if not eligible:
        raise ContractActionError(reason)
    if additional_years < 1:
        raise ValueError(f"Extension must add at least 1 year, got {additional_years}")
    new_salary = as_amount(new_salary)
    if new_salary <= 0:
        raise ValueError(f"Extension salary must be positive: {new_salary}")

    contract.status = ContractStatus.EXTENDED
    contract.current_salary = round_currency(new_salary)
    contract.years_remaining = additional_years
    contract.has_been_extended = True
    return contract


def apply_franchise_tag(contract: Contract, tag_value: float) -> Contract:
    """
    Replace a contract with a one-year franchise tag.

    Eligibility must be confirmed with check_franchise_tag_eligibility().
    """
    if contract.has_been_tagged:
        raise ContractActionError("Player has already been tagged")

    contract.status = ContractStatus.TAGGED
    contract.current_salary = round_currency(tag_value)
    contract.years_remaining = 1
    contract.has_been_tagged = True
    return contract


def release_contract(
    contract: Contract,
    season: int,
    config: DeadMoneyConfig = DEFAULT_DEAD_MONEY_CONFIG,
    rate: float = ANNUAL_INCREASE_RATE,
) -> DeadMoneyResult:
    """
    Release the player and return the dead money owed.

    Raises:
        ContractActionError: If the contract is already cut or expired
    """
    if contract.status in (ContractStatus.CUT, ContractStatus.EXPIRED):
        raise ContractActionError(f"Contract is not active ({contract.status.value})")

    result = contract.dead_money_if_cut(season, config, rate)
    contract.status = ContractStatus.CUT
    return result

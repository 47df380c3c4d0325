"""
Salary cap projection and validation.

Projects a team's committed salaries over the coming seasons from the
contracts' escalation schedule, and checks whether a team can absorb a
new cap charge.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from capsheet.core.contracts.money import round_currency
from capsheet.core.contracts.salary import ANNUAL_INCREASE_RATE, raw_salary
from capsheet.core.enums import ContractStatus

if TYPE_CHECKING:
    from capsheet.core.contracts.contract import Contract
    from capsheet.core.models.team import Team


# Contracts that still count against the cap
CAP_STATUSES = frozenset({ContractStatus.ACTIVE, ContractStatus.TAGGED, ContractStatus.EXTENDED})


@dataclass(frozen=True)
class CapProjection:
    """Projected cap state for one season."""
    season: int
    committed_salaries: float
    dead_money: float
    available_cap: float
    expiring_contracts: int

    def to_dict(self) -> dict:
        return {
            "season": self.season,
            "committed_salaries": self.committed_salaries,
            "dead_money": self.dead_money,
            "available_cap": self.available_cap,
            "expiring_contracts": self.expiring_contracts,
        }


@dataclass(frozen=True)
class CapCheck:
    """Result of a cap space check."""
    has_space: bool
    available_cap: float
    shortfall: Optional[float] = None


def _season_salary(contract: "Contract", offset: int, season: int, rate: float) -> Optional[float]:
    """Unrounded salary owed in a season, or None if the contract is off the books."""
    if contract.status == ContractStatus.ACTIVE:
        year = contract.contract_year_for(season)
        if year < 0 or year >= contract.original_years:
            return None
        return raw_salary(contract.original_salary, year, rate)

    # Tagged and extended terms run from the current salary
    if offset >= contract.years_remaining:
        return None
    return contract.current_salary * (1 + rate) ** offset


def project_team_cap(
    team: "Team",
    contracts: Iterable["Contract"],
    years: int,
    league_cap: float,
    start_season: int,
    rate: float = ANNUAL_INCREASE_RATE,
) -> list[CapProjection]:
    """
    Project a team's cap for the next `years` seasons.

    Dead money uses the team's current figure for the first season and
    the next-season figure for the second; later seasons carry none.
    """
    contracts = [c for c in contracts if c.status in CAP_STATUSES]
    projections = []

    for offset in range(max(0, years)):
        season = start_season + offset
        committed = 0.0
        expiring = 0

        for contract in contracts:
            salary = _season_salary(contract, offset, season, rate)
            if salary is None:
                continue
            committed += salary
            if contract.status == ContractStatus.ACTIVE:
                last_season = contract.signed_season + contract.original_years - 1
            else:
                last_season = start_season + contract.years_remaining - 1
            if season == last_season:
                expiring += 1

        if offset == 0:
            dead_money = team.current_dead_money
        elif offset == 1:
            dead_money = team.next_season_dead_money
        else:
            dead_money = 0.0

        projections.append(CapProjection(
            season=season,
            committed_salaries=round_currency(committed),
            dead_money=round_currency(dead_money),
            available_cap=round_currency(league_cap - committed - dead_money),
            expiring_contracts=expiring,
        ))

    return projections


def validate_cap_space(team: "Team", cost: float) -> CapCheck:
    """Check whether the team can take on `cost` this season."""
    available = team.available_cap
    if available >= cost:
        return CapCheck(has_space=True, available_cap=available)
    return CapCheck(
        has_space=False,
        available_cap=available,
        shortfall=round_currency(cost - available),
    )

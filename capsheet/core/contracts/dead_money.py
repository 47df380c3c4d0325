"""
Dead Money Calculation.

When a team releases a player mid-contract, part of the contract still
counts against the cap:

- Current season: the released year's projected salary times the league's
  current-season percentage (100% by default).
- Next season: every remaining year's projected salary, summed, times a
  single percentage chosen from the number of years left after the cut
  (bucketed 1, 2, 3, 4+).
- Practice squad players always cost 25% of the current year's salary and
  nothing next season, regardless of league policy.

The policy is per league and stored as JSON. Parsing happens once per
request through load_dead_money_config(); the calculator only ever sees a
validated DeadMoneyConfig.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from capsheet.core.contracts.money import as_amount, as_count, round_currency
from capsheet.core.contracts.salary import ANNUAL_INCREASE_RATE, project_salary, raw_salary
from capsheet.core.enums import RosterStatus

if TYPE_CHECKING:
    from capsheet.core.contracts.contract import Contract


# Fixed penalty for practice squad releases
PRACTICE_SQUAD_PERCENTAGE = 0.25

# Years-remaining buckets; anything above the last one uses it
FUTURE_SEASON_BUCKETS = (1, 2, 3, 4)
MAX_BUCKET = FUTURE_SEASON_BUCKETS[-1]


class InvalidDeadMoneyConfig(ValueError):
    """Stored or submitted dead money policy could not be used."""


@dataclass(frozen=True)
class DeadMoneyConfig:
    """
    Per-league dead money policy.

    current_season: fraction of the cut year's salary charged now
    future_seasons: years remaining after the cut -> fraction of the
        remaining years' salaries charged next season

    Every percentage must be a number in [0, 1]; anything else raises
    InvalidDeadMoneyConfig at construction.
    """
    current_season: float = 1.0
    future_seasons: Mapping[int, float] = field(
        default_factory=lambda: MappingProxyType({1: 0.0, 2: 0.5, 3: 0.75, 4: 1.0})
    )

    def __post_init__(self):
        if not isinstance(self.future_seasons, Mapping):
            raise InvalidDeadMoneyConfig("futureSeasons must be an object")

        future = {}
        for bucket, value in self.future_seasons.items():
            if isinstance(bucket, bool) or not isinstance(bucket, int):
                raise InvalidDeadMoneyConfig(f"futureSeasons bucket must be an integer, got {bucket!r}")
            future[bucket] = _percentage(value, f"futureSeasons.{bucket}")

        # Frozen dataclass: bypass __setattr__ to store the normalized values
        object.__setattr__(self, "current_season", _percentage(self.current_season, "currentSeason"))
        object.__setattr__(self, "future_seasons", MappingProxyType(future))

    def percentage_for(self, years_remaining: int) -> float:
        """Future-season percentage for a years-remaining count."""
        if years_remaining <= 0:
            return 0.0
        return self.future_seasons.get(min(years_remaining, MAX_BUCKET), 0.0)

    def to_dict(self) -> dict:
        """Storage shape: {"currentSeason": x, "futureSeasons": {"1": ...}}."""
        return {
            "currentSeason": self.current_season,
            "futureSeasons": {str(k): v for k, v in sorted(self.future_seasons.items())},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeadMoneyConfig":
        """
        Build a config from its storage shape.

        Raises:
            InvalidDeadMoneyConfig: Missing fields, non-numeric values or
                percentages outside [0, 1]
        """
        if not isinstance(data, Mapping):
            raise InvalidDeadMoneyConfig("Dead money config must be an object")

        current = _percentage(data.get("currentSeason"), "currentSeason")

        raw_future = data.get("futureSeasons")
        if not isinstance(raw_future, Mapping):
            raise InvalidDeadMoneyConfig("futureSeasons must be an object")

        future = {}
        for bucket in FUTURE_SEASON_BUCKETS:
            value = raw_future.get(str(bucket), raw_future.get(bucket))
            # A bucket the league never set charges nothing
            future[bucket] = 0.0 if value is None else _percentage(value, f"futureSeasons.{bucket}")

        return cls(current_season=current, future_seasons=future)


def _percentage(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidDeadMoneyConfig(f"{name} must be a number")
    if not 0 <= value <= 1:
        raise InvalidDeadMoneyConfig(f"{name} must be between 0 and 1, got {value}")
    return float(value)


DEFAULT_DEAD_MONEY_CONFIG = DeadMoneyConfig()


def parse_dead_money_config(raw: Any) -> DeadMoneyConfig:
    """
    Strictly parse a stored or submitted policy.

    Accepts a JSON string/bytes, a dict in storage shape, or a config.
    """
    if isinstance(raw, DeadMoneyConfig):
        return raw
    if raw is None:
        raise InvalidDeadMoneyConfig("No dead money config")
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise InvalidDeadMoneyConfig(f"Dead money config is not valid JSON: {e}") from e
    return DeadMoneyConfig.from_dict(raw)


def load_dead_money_config(raw: Any) -> DeadMoneyConfig:
    """Parse a stored policy, falling back to the default on any problem."""
    try:
        return parse_dead_money_config(raw)
    except InvalidDeadMoneyConfig:
        return DEFAULT_DEAD_MONEY_CONFIG


@dataclass(frozen=True)
class DeadMoneyBreakdown:
    """Inputs behind a dead money figure, for audit and display."""
    current_year_salary: float
    years_remaining: int
    penalty_percentage: float
    is_practice_squad: bool = False


@dataclass(frozen=True)
class DeadMoneyResult:
    """Dead money charged for a release."""
    current_season_amount: float
    next_season_amount: float
    total_amount: float
    breakdown: DeadMoneyBreakdown

    def to_dict(self) -> dict:
        return {
            "current_season_amount": self.current_season_amount,
            "next_season_amount": self.next_season_amount,
            "total_amount": self.total_amount,
            "breakdown": {
                "current_year_salary": self.breakdown.current_year_salary,
                "years_remaining": self.breakdown.years_remaining,
                "penalty_percentage": self.breakdown.penalty_percentage,
                "is_practice_squad": self.breakdown.is_practice_squad,
            },
        }


def calculate_dead_money(
    contract: "Contract",
    cut_year: int,
    config: DeadMoneyConfig = DEFAULT_DEAD_MONEY_CONFIG,
    rate: float = ANNUAL_INCREASE_RATE,
) -> DeadMoneyResult:
    """
    Calculate dead money for releasing a player.

    Args:
        contract: Contract being released
        cut_year: Zero-indexed contract year of the release
        config: League policy (already resolved)
        rate: Annual salary increase

    Raises:
        ValueError: If cut_year is negative
    """
    original_salary = as_amount(contract.original_salary)
    original_years = as_count(contract.original_years)
    is_practice_squad = contract.roster_status == RosterStatus.PRACTICE_SQUAD

    if cut_year < 0:
        raise ValueError(f"Cut year cannot be negative: {cut_year}")

    # Contract already over: nothing owed
    if cut_year >= original_years:
        return DeadMoneyResult(
            current_season_amount=0.0,
            next_season_amount=0.0,
            total_amount=0.0,
            breakdown=DeadMoneyBreakdown(
                current_year_salary=0.0,
                years_remaining=0,
                penalty_percentage=0.0,
                is_practice_squad=is_practice_squad,
            ),
        )

    current_year_salary = project_salary(original_salary, cut_year, rate)
    years_remaining = original_years - cut_year - 1

    if is_practice_squad:
        current_amount = current_year_salary * PRACTICE_SQUAD_PERCENTAGE
        next_amount = 0.0
        penalty = 0.0
    else:
        current_amount = current_year_salary * config.current_season
        penalty = config.percentage_for(years_remaining)
        next_amount = sum(
            raw_salary(original_salary, year, rate) * penalty
            for year in range(cut_year + 1, original_years)
        )

    current_amount = round_currency(current_amount)
    next_amount = round_currency(next_amount)

    return DeadMoneyResult(
        current_season_amount=current_amount,
        next_season_amount=next_amount,
        total_amount=round_currency(current_amount + next_amount),
        breakdown=DeadMoneyBreakdown(
            current_year_salary=current_year_salary,
            years_remaining=years_remaining,
            penalty_percentage=penalty,
            is_practice_squad=is_practice_squad,
        ),
    )


@dataclass
class DeadMoneyRecord:
    """Dead money charged to a team for one season."""
    contract_id: str
    player_id: str
    team_id: str
    season: int
    amount: float
    reason: str

    def to_dict(self) -> dict:
        return {
            "contract_id": self.contract_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "season": self.season,
            "amount": self.amount,
            "reason": self.reason,
        }


def manual_dead_money(result: DeadMoneyResult, amount: float) -> DeadMoneyResult:
    """
    Replace a computed charge with a manually entered amount.

    The whole amount lands in the release season; nothing carries over.
    The computed breakdown is kept for audit.
    """
    amount = round_currency(amount)
    if amount < 0:
        raise ValueError(f"Dead money amount cannot be negative: {amount}")
    return DeadMoneyResult(
        current_season_amount=amount,
        next_season_amount=0.0,
        total_amount=amount,
        breakdown=result.breakdown,
    )


def dead_money_records(
    contract: "Contract",
    cut_season: int,
    result: DeadMoneyResult,
    reason: str = "Release",
) -> list[DeadMoneyRecord]:
    """Per-season records for a release. Zero next-season charges are skipped."""
    records = [
        DeadMoneyRecord(
            contract_id=contract.contract_id,
            player_id=contract.player_id,
            team_id=contract.team_id,
            season=cut_season,
            amount=result.current_season_amount,
            reason=reason,
        )
    ]
    if result.next_season_amount > 0:
        records.append(
            DeadMoneyRecord(
                contract_id=contract.contract_id,
                player_id=contract.player_id,
                team_id=contract.team_id,
                season=cut_season + 1,
                amount=result.next_season_amount,
                reason=f"Release (remaining {result.breakdown.years_remaining} years)",
            )
        )
    return records

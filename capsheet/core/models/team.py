"""Team and salary cap state."""

from dataclasses import dataclass, field
from typing import Optional
import uuid

from capsheet.core.contracts.dead_money import DeadMoneyResult
from capsheet.core.contracts.money import round_currency


DEFAULT_SALARY_CAP = 279.0


@dataclass
class TeamFinancials:
    """
    Salary cap state of a team.

    Cap numbers in millions (e.g. 279.0 = $279M). Dead money from releases
    is split between this season and the next.
    """

    salary_cap: float = DEFAULT_SALARY_CAP
    total_salary: float = 0.0  # Sum of active contract salaries
    current_dead_money: float = 0.0  # Dead money charged this season
    next_season_dead_money: float = 0.0  # Dead money already owed next season

    @property
    def available_cap(self) -> float:
        """Available cap space."""
        return round_currency(self.salary_cap - self.total_salary - self.current_dead_money)

    @property
    def cap_used_pct(self) -> float:
        """Fraction of the cap in use."""
        if self.salary_cap <= 0:
            return 0.0
        return (self.total_salary + self.current_dead_money) / self.salary_cap

    def can_sign(self, salary: float) -> bool:
        """Check if the team can afford a new contract."""
        return self.available_cap >= salary

    def add_contract(self, salary: float) -> None:
        self.total_salary = round_currency(self.total_salary + salary)

    def remove_contract(self, salary: float) -> None:
        self.total_salary = round_currency(max(0.0, self.total_salary - salary))

    def apply_release(self, salary: float, dead_money: DeadMoneyResult) -> None:
        """
        Take a released contract off the books and charge its dead money.
        """
        self.remove_contract(salary)
        self.current_dead_money = round_currency(self.current_dead_money + dead_money.current_season_amount)
        self.next_season_dead_money = round_currency(self.next_season_dead_money + dead_money.next_season_amount)

    def new_season(self) -> None:
        """Carry next season's dead money into the current season."""
        self.current_dead_money = self.next_season_dead_money
        self.next_season_dead_money = 0.0

    def to_dict(self) -> dict:
        return {
            "salary_cap": self.salary_cap,
            "total_salary": self.total_salary,
            "current_dead_money": self.current_dead_money,
            "next_season_dead_money": self.next_season_dead_money,
            "available_cap": self.available_cap,
        }


@dataclass
class Team:
    """A fantasy team within a league."""

    league_id: str
    name: str
    abbreviation: str = ""
    team_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    owner_name: Optional[str] = None
    financials: TeamFinancials = field(default_factory=TeamFinancials)
    franchise_tags_used: int = 0

    def __post_init__(self):
        if not self.abbreviation:
            self.abbreviation = self.name[:3].upper()

    @property
    def available_cap(self) -> float:
        return self.financials.available_cap

    @property
    def current_dead_money(self) -> float:
        return self.financials.current_dead_money

    @property
    def next_season_dead_money(self) -> float:
        return self.financials.next_season_dead_money

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "league_id": self.league_id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "owner_name": self.owner_name,
            "financials": self.financials.to_dict(),
            "franchise_tags_used": self.franchise_tags_used,
        }

"""League settings."""

from dataclasses import dataclass, field
from typing import Optional
import uuid

from capsheet.core.contracts.salary import ANNUAL_INCREASE_RATE
from capsheet.core.models.team import DEFAULT_SALARY_CAP


@dataclass
class League:
    """
    A dynasty league and its contract rules.

    dead_money_config holds the policy exactly as stored (JSON text). It may
    be missing or malformed; it is resolved once per request by the
    league store.
    """

    name: str
    season: int
    league_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    salary_cap: float = DEFAULT_SALARY_CAP
    max_franchise_tags: int = 1
    annual_increase_rate: float = ANNUAL_INCREASE_RATE
    minimum_salary: float = 1.0
    dead_money_config: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "league_id": self.league_id,
            "name": self.name,
            "season": self.season,
            "salary_cap": self.salary_cap,
            "max_franchise_tags": self.max_franchise_tags,
            "annual_increase_rate": self.annual_increase_rate,
            "minimum_salary": self.minimum_salary,
        }

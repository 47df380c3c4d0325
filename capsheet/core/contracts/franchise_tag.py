"""
Franchise Tag valuation.

A team can keep one expiring player for one more season at a mandatory
salary: the greater of the player's current salary plus 15% and the
average of the top salaries at the player's position in the league.

Eligibility (final contract year, never tagged, team under its tag limit)
is checked separately; the valuation assumes it was confirmed.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from capsheet.core.contracts.money import as_amount, round_currency
from capsheet.core.enums import ContractStatus

if TYPE_CHECKING:
    from capsheet.core.contracts.contract import Contract


FRANCHISE_TAG_INCREASE = 0.15

# Number of top salaries averaged for the positional tag value
POSITION_AVERAGE_TOP_N = 10


@dataclass(frozen=True)
class FranchiseTagResult:
    """Franchise tag valuation for one player."""
    current_salary: float
    salary_with_increase: float
    position_average: float
    final_tag_value: float

    @property
    def uses_position_average(self) -> bool:
        """True when the positional market set the tag value."""
        return self.position_average > self.salary_with_increase

    def to_dict(self) -> dict:
        return {
            "current_salary": self.current_salary,
            "salary_with_increase": self.salary_with_increase,
            "position_average": self.position_average,
            "final_tag_value": self.final_tag_value,
        }


def calculate_franchise_tag_value(current_salary: float, position_average: float) -> FranchiseTagResult:
    """
    Calculate the tag salary.

    Args:
        current_salary: Player's salary this season (millions)
        position_average: Top-N average salary at the player's position
    """
    current = as_amount(current_salary)
    average = round_currency(position_average)
    with_increase = round_currency(current * (1 + FRANCHISE_TAG_INCREASE))

    return FranchiseTagResult(
        current_salary=current,
        salary_with_increase=with_increase,
        position_average=average,
        final_tag_value=round_currency(max(with_increase, average)),
    )


def position_top_average(salaries: Iterable[float], top_n: int = POSITION_AVERAGE_TOP_N) -> float:
    """Average of the top_n largest salaries. 0.0 when there are none."""
    top = sorted((as_amount(s) for s in salaries), reverse=True)[:max(0, top_n)]
    if not top:
        return 0.0
    return round_currency(sum(top) / len(top))


def check_franchise_tag_eligibility(
    contract: "Contract",
    tags_used: int,
    max_tags: int = 1,
) -> tuple[bool, Optional[str]]:
    """
    Check whether a contract can be tagged.

    Returns (eligible, reason). Reason is None when eligible.
    """
    if contract.has_been_tagged:
        return False, "Player has already been tagged"

    if contract.status != ContractStatus.ACTIVE:
        return False, f"Contract is not active ({contract.status.value})"

    if tags_used >= max_tags:
        return False, f"Team has used the maximum franchise tags for the season ({max_tags})"

    if contract.years_remaining > 1:
        return False, "Tag can only be applied in the final contract year"

    return True, None

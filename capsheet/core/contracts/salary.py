"""
Salary projection.

Contracts escalate by a fixed league-wide rate every season:

    salary(year) = original_salary * (1 + rate) ** year

Year 0 is the signing season.
"""

from capsheet.core.contracts.money import as_amount, round_currency


# Annual salary increase applied to every contract (15%)
ANNUAL_INCREASE_RATE = 0.15


def raw_salary(original_salary: float, target_year: int, rate: float = ANNUAL_INCREASE_RATE) -> float:
    """
    Unrounded projected salary. Callers that sum years should use this.

    Years far enough out to overflow a float project to 0.0.
    """
    if target_year < 0:
        raise ValueError(f"Target year cannot be negative: {target_year}")
    try:
        growth = (1 + as_amount(rate)) ** target_year
    except OverflowError:
        return 0.0
    # Out-of-range products come back as inf and coerce to 0.0
    return as_amount(as_amount(original_salary) * growth)


def project_salary(original_salary: float, target_year: int, rate: float = ANNUAL_INCREASE_RATE) -> float:
    """
    Salary for a given contract year.

    Args:
        original_salary: Salary at signing (millions)
        target_year: Zero-indexed contract year
        rate: Annual increase, defaults to the league-wide rate

    Raises:
        ValueError: If target_year is negative
    """
    return round_currency(raw_salary(original_salary, target_year, rate))


def salary_schedule(original_salary: float, years: int, rate: float = ANNUAL_INCREASE_RATE) -> list[float]:
    """Projected salary for every year of a contract."""
    return [project_salary(original_salary, year, rate) for year in range(max(0, years))]

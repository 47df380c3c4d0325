"""League and team models."""

from capsheet.core.models.league import League
from capsheet.core.models.team import DEFAULT_SALARY_CAP, Team, TeamFinancials

__all__ = ["DEFAULT_SALARY_CAP", "League", "Team", "TeamFinancials"]

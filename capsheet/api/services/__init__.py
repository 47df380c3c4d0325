"""API services for league and contract management."""

from capsheet.api.services.league_service import (
    CapSpaceError,
    LeagueService,
    NotFoundError,
    league_service,
)

__all__ = ["CapSpaceError", "LeagueService", "NotFoundError", "league_service"]

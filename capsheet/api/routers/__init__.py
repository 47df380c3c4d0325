"""API routers for different resource types."""

from capsheet.api.routers.contracts import router as contracts_router
from capsheet.api.routers.leagues import router as leagues_router

__all__ = [
    "contracts_router",
    "leagues_router",
]

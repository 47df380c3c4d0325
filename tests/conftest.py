"""Shared pytest fixtures for capsheet tests."""

import pytest
from fastapi.testclient import TestClient

from capsheet.api.main import app
from capsheet.api.services.league_service import league_service
from capsheet.core.contracts import Contract
from capsheet.core.enums import ContractStatus, Position, RosterStatus


# =============================================================================
# Contract Fixtures
# =============================================================================


def _make_contract(
    salary: float = 30.0,
    years: int = 4,
    signed_season: int = 2024,
    roster_status: RosterStatus = RosterStatus.ACTIVE,
    position: Position = Position.QB,
    years_remaining: int = None,
    status: ContractStatus = ContractStatus.ACTIVE,
) -> Contract:
    """Build a contract directly, without the signing rules."""
    return Contract(
        contract_id="contract-1",
        player_id="player-1",
        team_id="team-1",
        league_id="league-1",
        original_salary=salary,
        original_years=years,
        signed_season=signed_season,
        current_salary=salary,
        years_remaining=years if years_remaining is None else years_remaining,
        status=status,
        player_name="Josh Allen",
        position=position,
        roster_status=roster_status,
    )


@pytest.fixture
def contract_factory():
    """Factory for contracts with custom terms."""
    return _make_contract


@pytest.fixture
def qb_contract() -> Contract:
    """Four years at $30M, signed 2024."""
    return _make_contract()


@pytest.fixture
def practice_squad_contract() -> Contract:
    """Four years at $30M on the practice squad."""
    return _make_contract(roster_status=RosterStatus.PRACTICE_SQUAD)


@pytest.fixture
def final_year_contract() -> Contract:
    """Contract in its last season."""
    return _make_contract(years_remaining=1)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_league_service():
    """Start every test with an empty league store."""
    league_service.reset()
    yield
    league_service.reset()


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def league(client) -> dict:
    """A league in the 2024 season with a $100M cap."""
    response = client.post(
        "/api/v1/leagues",
        json={"name": "The Bad Place", "season": 2024, "salary_cap": 100.0},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def team(client, league) -> dict:
    """A team in the league."""
    response = client.post(
        f"/api/v1/leagues/{league['league_id']}/teams",
        json={"name": "Buffalo Bills", "abbreviation": "BUF"},
    )
    assert response.status_code == 201
    return response.json()

"""Tests for league, team and dead money policy endpoints."""

import pytest

from capsheet.api.services.league_service import league_service


DEFAULT_POLICY = {
    "currentSeason": 1.0,
    "futureSeasons": {"1": 0.0, "2": 0.5, "3": 0.75, "4": 1.0},
}

LENIENT_POLICY = {
    "currentSeason": 0.5,
    "futureSeasons": {"1": 0.0, "2": 0.25, "3": 0.5, "4": 0.5},
}


class TestRoot:
    """Tests for the root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "capsheet API"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestLeagues:
    """Tests for league create and detail."""

    def test_create(self, league):
        assert league["name"] == "The Bad Place"
        assert league["season"] == 2024
        assert league["salary_cap"] == 100.0
        assert league["max_franchise_tags"] == 1
        assert league["team_count"] == 0

    def test_default_cap(self, client):
        response = client.post("/api/v1/leagues", json={"name": "Medium Place", "season": 2024})
        assert response.json()["salary_cap"] == 279.0

    def test_get(self, client, league, team):
        response = client.get(f"/api/v1/leagues/{league['league_id']}")

        assert response.status_code == 200
        assert response.json()["team_count"] == 1

    def test_unknown_league(self, client):
        assert client.get("/api/v1/leagues/nope").status_code == 404

    def test_invalid_request(self, client):
        response = client.post("/api/v1/leagues", json={"name": "", "season": 2024})
        assert response.status_code == 422

    def test_create_with_policy(self, client):
        response = client.post(
            "/api/v1/leagues",
            json={"name": "Good Place", "season": 2024, "dead_money_config": LENIENT_POLICY},
        )
        league_id = response.json()["league_id"]

        config = client.get(f"/api/v1/leagues/{league_id}/dead-money-config").json()
        assert config["dead_money_config"] == LENIENT_POLICY


class TestDeadMoneyConfig:
    """Tests for GET/PUT /leagues/{id}/dead-money-config."""

    def test_new_league_has_default_policy(self, client, league):
        response = client.get(f"/api/v1/leagues/{league['league_id']}/dead-money-config")
        data = response.json()

        assert response.status_code == 200
        assert data["league_name"] == "The Bad Place"
        assert data["dead_money_config"] == DEFAULT_POLICY
        assert not data["is_default"]

    def test_update(self, client, league):
        url = f"/api/v1/leagues/{league['league_id']}/dead-money-config"
        response = client.put(url, json={"dead_money_config": LENIENT_POLICY})

        assert response.status_code == 200
        assert response.json()["dead_money_config"] == LENIENT_POLICY
        assert client.get(url).json()["dead_money_config"] == LENIENT_POLICY

    @pytest.mark.parametrize("policy", [
        {"currentSeason": 1.5, "futureSeasons": {"1": 0, "2": 0.5, "3": 0.75, "4": 1}},
        {"currentSeason": 1.0, "futureSeasons": {"1": 0, "2": -0.5, "3": 0.75, "4": 1}},
        {"currentSeason": 1.0, "futureSeasons": {"1": 0, "2": 0.5, "3": 0.75}},
        {"futureSeasons": {"1": 0, "2": 0.5, "3": 0.75, "4": 1}},
    ])
    def test_rejects_invalid_policy(self, client, league, policy):
        url = f"/api/v1/leagues/{league['league_id']}/dead-money-config"
        response = client.put(url, json={"dead_money_config": policy})

        assert response.status_code == 422
        assert client.get(url).json()["dead_money_config"] == DEFAULT_POLICY

    @pytest.mark.parametrize("stored", [None, "", "{not json", '{"currentSeason": 3}'])
    def test_unreadable_storage_returns_default(self, client, league, stored):
        league_service.get_league(league["league_id"]).dead_money_config = stored
        response = client.get(f"/api/v1/leagues/{league['league_id']}/dead-money-config")
        data = response.json()

        assert response.status_code == 200
        assert data["dead_money_config"] == DEFAULT_POLICY
        assert data["is_default"]

    def test_unknown_league(self, client):
        assert client.get("/api/v1/leagues/nope/dead-money-config").status_code == 404


class TestTeams:
    """Tests for team endpoints."""

    def test_create(self, team):
        assert team["name"] == "Buffalo Bills"
        assert team["abbreviation"] == "BUF"
        assert team["financials"]["salary_cap"] == 100.0
        assert team["financials"]["available_cap"] == 100.0

    def test_list(self, client, league, team):
        response = client.get(f"/api/v1/leagues/{league['league_id']}/teams")
        assert [t["team_id"] for t in response.json()] == [team["team_id"]]

    def test_create_in_unknown_league(self, client):
        response = client.post("/api/v1/leagues/nope/teams", json={"name": "Jets"})
        assert response.status_code == 404

    def test_unknown_team(self, client):
        assert client.get("/api/v1/teams/nope").status_code == 404


def _sign(client, team_id: str, **overrides) -> dict:
    payload = {"player_id": "player-17", "position": "QB", "salary": 20.0, "years": 4}
    payload.update(overrides)
    response = client.post(f"/api/v1/teams/{team_id}/contracts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCapProjection:
    """Tests for GET /teams/{id}/cap-projection."""

    def test_projection(self, client, team):
        _sign(client, team["team_id"])
        response = client.get(
            f"/api/v1/teams/{team['team_id']}/cap-projection", params={"years": 2}
        )
        projections = response.json()["projections"]

        assert response.status_code == 200
        assert [p["season"] for p in projections] == [2024, 2025]
        assert [p["committed_salaries"] for p in projections] == [20.0, 23.0]
        assert [p["available_cap"] for p in projections] == [80.0, 77.0]

    def test_default_three_years(self, client, team):
        response = client.get(f"/api/v1/teams/{team['team_id']}/cap-projection")
        assert len(response.json()["projections"]) == 3

    def test_includes_dead_money(self, client, team):
        contract = _sign(client, team["team_id"], salary=30.0)
        client.post(
            f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}/release",
            json={"season": 2025},
        )
        projections = client.get(f"/api/v1/teams/{team['team_id']}/cap-projection").json()["projections"]

        assert [p["dead_money"] for p in projections] == [34.5, 42.65, 0.0]

    @pytest.mark.parametrize("years", [0, 11])
    def test_years_out_of_range(self, client, team, years):
        response = client.get(
            f"/api/v1/teams/{team['team_id']}/cap-projection", params={"years": years}
        )
        assert response.status_code == 422


class TestFranchiseTagValues:
    """Tests for GET /leagues/{id}/franchise-tag-values."""

    def test_position_averages(self, client, league, team):
        _sign(client, team["team_id"], player_id="a", position="QB", salary=30.0)
        _sign(client, team["team_id"], player_id="b", position="QB", salary=20.0)
        response = client.get(f"/api/v1/leagues/{league['league_id']}/franchise-tag-values")
        data = response.json()

        assert response.status_code == 200
        assert data["top_n"] == 10
        assert data["averages"]["QB"] == 25.0
        assert data["averages"]["RB"] == 0.0


class TestAdvanceSeason:
    """Tests for POST /leagues/{id}/advance-season."""

    def test_rolls_contracts(self, client, league, team):
        contract = _sign(client, team["team_id"], player_id="a", salary=30.0, years=4)
        _sign(client, team["team_id"], player_id="b", salary=10.0, years=1)

        response = client.post(f"/api/v1/leagues/{league['league_id']}/advance-season")
        data = response.json()

        assert response.status_code == 200
        assert data["season"] == 2025
        assert data["contracts_updated"] == 2
        assert data["contracts_expired"] == 1

        rolled = client.get(
            f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}"
        ).json()
        assert rolled["current_salary"] == 34.5
        assert rolled["years_remaining"] == 3
        assert get_team_financials(client, team)["total_salary"] == 34.5

    def test_dead_money_carries_over(self, client, league, team):
        contract = _sign(client, team["team_id"], salary=30.0)
        client.post(
            f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}/release",
            json={"season": 2025},
        )
        client.post(f"/api/v1/leagues/{league['league_id']}/advance-season")
        financials = get_team_financials(client, team)

        assert financials["current_dead_money"] == 42.65
        assert financials["next_season_dead_money"] == 0.0

    def test_resets_tags_used(self, client, league, team):
        contract = _sign(client, team["team_id"], position="WR", salary=10.0, years=1)
        client.post(f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}/tag")
        client.post(f"/api/v1/leagues/{league['league_id']}/advance-season")

        assert client.get(f"/api/v1/teams/{team['team_id']}").json()["franchise_tags_used"] == 0


class TestAdvanceSeasonPreview:
    """Tests for GET /leagues/{id}/advance-season/preview."""

    def test_reports_each_contract(self, client, league, team):
        long_deal = _sign(client, team["team_id"], player_id="a", salary=30.0, years=4)
        expiring = _sign(client, team["team_id"], player_id="b", salary=10.0, years=1)

        response = client.get(f"/api/v1/leagues/{league['league_id']}/advance-season/preview")
        data = response.json()

        assert response.status_code == 200
        assert data["current_season"] == 2024
        assert data["next_season"] == 2025
        assert data["contracts_expiring"] == 1

        by_id = {c["contract_id"]: c for c in data["contracts"]}
        assert by_id[long_deal["contract_id"]]["new_salary"] == 34.5
        assert by_id[long_deal["contract_id"]]["new_years_remaining"] == 3
        assert by_id[long_deal["contract_id"]]["expires"] is False
        assert by_id[expiring["contract_id"]]["new_salary"] == 0.0
        assert by_id[expiring["contract_id"]]["expires"] is True

    def test_changes_nothing(self, client, league, team):
        contract = _sign(client, team["team_id"], salary=30.0, years=4)
        before = get_team_financials(client, team)

        client.get(f"/api/v1/leagues/{league['league_id']}/advance-season/preview")

        assert client.get(f"/api/v1/leagues/{league['league_id']}").json()["season"] == 2024
        fetched = client.get(
            f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}"
        ).json()
        assert fetched["current_salary"] == 30.0
        assert fetched["years_remaining"] == 4
        assert get_team_financials(client, team) == before

    def test_released_contracts_are_left_out(self, client, league, team):
        contract = _sign(client, team["team_id"], salary=30.0)
        client.post(
            f"/api/v1/teams/{team['team_id']}/contracts/{contract['contract_id']}/release"
        )
        data = client.get(f"/api/v1/leagues/{league['league_id']}/advance-season/preview").json()

        assert data["contracts"] == []

    def test_unknown_league(self, client):
        response = client.get("/api/v1/leagues/nope/advance-season/preview")
        assert response.status_code == 404


def get_team_financials(client, team: dict) -> dict:
    return client.get(f"/api/v1/teams/{team['team_id']}").json()["financials"]

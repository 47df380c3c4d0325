"""
League Service - contract actions against the league store.

Holds leagues, teams, contracts and dead money records in memory and runs
contract actions (sign, release, extend, tag, season rollover) through the
core contract rules. Route handlers call into this service; the service
raises plain exceptions that the routers translate into HTTP errors.

Every action that mutates a contract runs under that contract's lock, so
two concurrent releases of the same contract cannot both charge dead money.
"""

import asyncio
import logging
from typing import Any, Optional

from capsheet.config import get_config
from capsheet.core.contracts import (
    ContractActionError,
    DEFAULT_DEAD_MONEY_CONFIG,
    Contract,
    DeadMoneyConfig,
    DeadMoneyRecord,
    DeadMoneyResult,
    FranchiseTagResult,
    InvalidDeadMoneyConfig,
    SeasonRolloverPreview,
    advance_season,
    apply_extension,
    apply_franchise_tag,
    calculate_franchise_tag_value,
    check_extension_eligibility,
    check_franchise_tag_eligibility,
    create_contract,
    dead_money_records,
    manual_dead_money,
    parse_dead_money_config,
    position_top_average,
    preview_advance_season,
    project_team_cap,
    round_currency,
    release_contract,
    validate_cap_space,
)
from capsheet.core.contracts.cap import CAP_STATUSES, CapProjection
from capsheet.core.enums import AcquisitionType, ContractStatus, Position, RosterStatus
from capsheet.core.models import League, Team

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """A league, team or contract does not exist."""


class CapSpaceError(ContractActionError):
    """The team cannot absorb the cap charge of an action."""


class LeagueService:
    """In-memory league store and contract action runner."""

    def __init__(self) -> None:
        self._leagues: dict[str, League] = {}
        self._teams: dict[str, Team] = {}
        self._contracts: dict[str, Contract] = {}
        self._dead_money: list[DeadMoneyRecord] = []
        self._locks: dict[str, asyncio.Lock] = {}

    def reset(self) -> None:
        """Drop all stored data."""
        self._leagues.clear()
        self._teams.clear()
        self._contracts.clear()
        self._dead_money.clear()
        self._locks.clear()

    # === Leagues ===

    def create_league(
        self,
        name: str,
        season: int,
        salary_cap: Optional[float] = None,
        max_franchise_tags: Optional[int] = None,
        minimum_salary: float = 1.0,
        annual_increase_rate: Optional[float] = None,
        dead_money_config: Any = None,
    ) -> League:
        config = get_config()
        league = League(
            name=name,
            season=season,
            salary_cap=salary_cap if salary_cap is not None else config.default_salary_cap,
            max_franchise_tags=max_franchise_tags if max_franchise_tags is not None else config.max_franchise_tags,
            minimum_salary=minimum_salary,
        )
        if annual_increase_rate is not None:
            league.annual_increase_rate = annual_increase_rate
        policy = parse_dead_money_config(dead_money_config) if dead_money_config is not None else DEFAULT_DEAD_MONEY_CONFIG
        league.dead_money_config = policy.to_json()

        self._leagues[league.league_id] = league
        logger.info(f"Created league {league.name} ({league.league_id}) for season {season}")
        return league

    def get_league(self, league_id: str) -> League:
        league = self._leagues.get(league_id)
        if not league:
            raise NotFoundError("League not found")
        return league

    def resolve_dead_money_config(self, league: League) -> tuple[DeadMoneyConfig, bool]:
        """
        Load a league's stored policy.

        Returns (config, is_default). Missing or malformed storage falls
        back to the default policy.
        """
        try:
            return parse_dead_money_config(league.dead_money_config), False
        except InvalidDeadMoneyConfig as e:
            logger.warning(f"Invalid dead money config for league {league.league_id}, using default: {e}")
            return DEFAULT_DEAD_MONEY_CONFIG, True

    def update_dead_money_config(self, league_id: str, raw: Any) -> DeadMoneyConfig:
        """
        Replace a league's policy.

        Raises:
            InvalidDeadMoneyConfig: If the submitted policy is malformed
        """
        league = self.get_league(league_id)
        policy = parse_dead_money_config(raw)
        league.dead_money_config = policy.to_json()
        logger.info(f"Updated dead money config for league {league_id}: {league.dead_money_config}")
        return policy

    def advance_season(self, league_id: str) -> tuple[int, int]:
        """
        Roll the league into its next season.

        Returns (contracts_updated, contracts_expired).
        """
        league = self.get_league(league_id)
        league.season += 1

        updated = 0
        expired = 0
        for contract in self._contracts.values():
            if contract.league_id != league_id or contract.status not in CAP_STATUSES:
                continue
            advance_season(contract, league.season, league.annual_increase_rate)
            updated += 1
            if contract.status == ContractStatus.EXPIRED:
                expired += 1
                self._locks.pop(contract.contract_id, None)

        for team in self.teams_in_league(league_id):
            team.financials.new_season()
            team.financials.total_salary = self._committed_salary(team.team_id)
            team.franchise_tags_used = 0

        logger.info(f"League {league_id} advanced to season {league.season}: {updated} contracts updated, {expired} expired")
        return updated, expired

    def preview_advance_season(self, league_id: str) -> list[SeasonRolloverPreview]:
        """
        What advance_season() would do, without changing anything.

        One entry per contract still on the books, ordered by team name
        then player name.
        """
        league = self.get_league(league_id)
        next_season = league.season + 1
        team_names = {t.team_id: t.name for t in self.teams_in_league(league_id)}

        contracts = [
            c for c in self._contracts.values()
            if c.league_id == league_id and c.status in CAP_STATUSES
        ]
        contracts.sort(key=lambda c: (team_names.get(c.team_id, ""), c.player_name))
        return [
            preview_advance_season(c, next_season, league.annual_increase_rate)
            for c in contracts
        ]

    # === Teams ===

    def create_team(
        self,
        league_id: str,
        name: str,
        abbreviation: str = "",
        owner_name: Optional[str] = None,
    ) -> Team:
        league = self.get_league(league_id)
        team = Team(league_id=league_id, name=name, abbreviation=abbreviation, owner_name=owner_name)
        team.financials.salary_cap = league.salary_cap
        self._teams[team.team_id] = team
        return team

    def get_team(self, team_id: str) -> Team:
        team = self._teams.get(team_id)
        if not team:
            raise NotFoundError("Team not found")
        return team

    def teams_in_league(self, league_id: str) -> list[Team]:
        return [t for t in self._teams.values() if t.league_id == league_id]

    def cap_projection(self, team_id: str, years: int) -> list[CapProjection]:
        team = self.get_team(team_id)
        league = self.get_league(team.league_id)
        return project_team_cap(
            team,
            self.contracts_for_team(team_id),
            years,
            league.salary_cap,
            league.season,
            league.annual_increase_rate,
        )

    def dead_money_for_team(self, team_id: str) -> list[DeadMoneyRecord]:
        return [r for r in self._dead_money if r.team_id == team_id]

    def _committed_salary(self, team_id: str) -> float:
        return round_currency(sum(
            c.current_salary for c in self.contracts_for_team(team_id)
            if c.status in CAP_STATUSES
        ))

    # === Contracts ===

    def contracts_for_team(self, team_id: str) -> list[Contract]:
        return [c for c in self._contracts.values() if c.team_id == team_id]

    def get_contract(self, team_id: str, contract_id: str) -> Contract:
        contract = self._contracts.get(contract_id)
        if not contract or contract.team_id != team_id:
            raise NotFoundError("Contract not found")
        return contract

    def contract_lock(self, contract_id: str) -> asyncio.Lock:
        lock = self._locks.get(contract_id)
        if lock is None:
            lock = self._locks[contract_id] = asyncio.Lock()
        return lock

    def sign_contract(
        self,
        team_id: str,
        player_id: str,
        salary: float,
        years: int,
        position: Position,
        player_name: str = "",
        acquisition_type: AcquisitionType = AcquisitionType.AUCTION,
        roster_status: RosterStatus = RosterStatus.ACTIVE,
    ) -> Contract:
        """
        Sign a player.

        Raises:
            ContractActionError: Salary below the league minimum or player
                already under contract with the team
            CapSpaceError: Not enough cap space
        """
        team = self.get_team(team_id)
        league = self.get_league(team.league_id)

        if salary < league.minimum_salary:
            raise ContractActionError(f"Salary below league minimum ({league.minimum_salary})")

        for existing in self.contracts_for_team(team_id):
            if existing.player_id == player_id and existing.status in CAP_STATUSES:
                raise ContractActionError("Player already has an active contract with this team")

        check = validate_cap_space(team, salary)
        if not check.has_space:
            raise CapSpaceError(
                f"Insufficient cap space: available {check.available_cap}, short by {check.shortfall}"
            )

        contract = create_contract(
            player_id=player_id,
            team_id=team_id,
            league_id=league.league_id,
            salary=salary,
            years=years,
            season=league.season,
            acquisition_type=acquisition_type,
            player_name=player_name,
            position=position,
            roster_status=roster_status,
        )
        self._contracts[contract.contract_id] = contract
        team.financials.add_contract(contract.current_salary)

        logger.info(f"{team.abbreviation} signed {player_name or player_id}: {years}y at {contract.current_salary}")
        return contract

    def preview_release(
        self,
        team_id: str,
        contract_id: str,
        season: Optional[int] = None,
    ) -> tuple[int, DeadMoneyResult]:
        """Dead money a release would cost. Returns (season, result)."""
        contract = self.get_contract(team_id, contract_id)
        league = self.get_league(contract.league_id)
        season = league.season if season is None else season
        config, _ = self.resolve_dead_money_config(league)
        return season, contract.dead_money_if_cut(season, config, league.annual_increase_rate)

    async def release_contract(
        self,
        team_id: str,
        contract_id: str,
        season: Optional[int] = None,
        amount: Optional[float] = None,
        reason: Optional[str] = None,
    ) -> tuple[Contract, DeadMoneyResult, list[DeadMoneyRecord]]:
        """
        Release a player and charge dead money to the team.

        Args:
            season: Release season, defaults to the league's current season
            amount: Manual dead money that replaces the computed charge,
                all of it in the release season
            reason: Note stored on the release season's record

        Raises:
            ContractActionError: If the contract was already released or expired
            ValueError: If the season precedes signing or amount is negative
        """
        async with self.contract_lock(contract_id):
            contract = self.get_contract(team_id, contract_id)
            team = self.get_team(team_id)
            league = self.get_league(contract.league_id)
            season = league.season if season is None else season
            config, _ = self.resolve_dead_money_config(league)

            salary = contract.current_salary
            if amount is not None and amount < 0:
                raise ValueError(f"Dead money amount cannot be negative: {amount}")
            result = release_contract(contract, season, config, league.annual_increase_rate)
            if amount is not None:
                logger.info(
                    f"Manual dead money for {contract.player_name or contract.player_id}: "
                    f"{amount} replaces computed {result.total_amount}"
                )
                result = manual_dead_money(result, amount)
            records = dead_money_records(contract, season, result, reason or "Release")
            self._dead_money.extend(records)
            team.financials.apply_release(salary, result)

        # Released contracts never take another action
        self._locks.pop(contract_id, None)

        logger.info(
            f"{team.abbreviation} released {contract.player_name or contract.player_id}: "
            f"dead money {result.current_season_amount} now, {result.next_season_amount} next season"
        )
        return contract, result, records

    async def extend_contract(
        self,
        team_id: str,
        contract_id: str,
        new_salary: float,
        additional_years: int,
    ) -> Contract:
        """
        Extend a contract in its final year.

        Raises:
            ContractActionError: If the contract is not eligible
            CapSpaceError: If the raise does not fit under the cap
        """
        async with self.contract_lock(contract_id):
            contract = self.get_contract(team_id, contract_id)
            team = self.get_team(team_id)

            eligible, reason = check_extension_eligibility(contract)
            if not eligible:
                raise ContractActionError(reason)

            old_salary = contract.current_salary
            raise_amount = new_salary - old_salary
            if raise_amount > 0:
                check = validate_cap_space(team, raise_amount)
                if not check.has_space:
                    raise CapSpaceError(
                        f"Insufficient cap space: available {check.available_cap}, short by {check.shortfall}"
                    )

            apply_extension(contract, new_salary, additional_years)
            team.financials.remove_contract(old_salary)
            team.financials.add_contract(contract.current_salary)

        logger.info(f"{team.abbreviation} extended {contract.player_name or contract.player_id}: {additional_years}y at {contract.current_salary}")
        return contract

    def position_averages(self, league_id: str, top_n: Optional[int] = None) -> dict[Position, float]:
        """Top-N average current salary per position across the league."""
        top_n = top_n or get_config().franchise_tag_top_n
        salaries: dict[Position, list[float]] = {p: [] for p in Position}
        for contract in self._contracts.values():
            if contract.league_id == league_id and contract.status in CAP_STATUSES and contract.position:
                salaries[contract.position].append(contract.current_salary)
        return {position: position_top_average(values, top_n) for position, values in salaries.items()}

    async def tag_contract(self, team_id: str, contract_id: str) -> tuple[Contract, FranchiseTagResult]:
        """
        Apply the franchise tag.

        Raises:
            ContractActionError: If the contract is not eligible
            CapSpaceError: If the tag value does not fit under the cap
        """
        async with self.contract_lock(contract_id):
            contract = self.get_contract(team_id, contract_id)
            team = self.get_team(team_id)
            league = self.get_league(contract.league_id)

            eligible, reason = check_franchise_tag_eligibility(
                contract, team.franchise_tags_used, league.max_franchise_tags
            )
            if not eligible:
                raise ContractActionError(reason)

            current_salary = contract.salary_for_season(league.season, league.annual_increase_rate)
            average = self.position_averages(league.league_id).get(contract.position, 0.0)
            tag = calculate_franchise_tag_value(current_salary, average)

            raise_amount = tag.final_tag_value - contract.current_salary
            if raise_amount > 0:
                check = validate_cap_space(team, raise_amount)
                if not check.has_space:
                    raise CapSpaceError(
                        f"Insufficient cap space: available {check.available_cap}, short by {check.shortfall}"
                    )

            old_salary = contract.current_salary
            apply_franchise_tag(contract, tag.final_tag_value)
            team.financials.remove_contract(old_salary)
            team.financials.add_contract(contract.current_salary)
            team.franchise_tags_used += 1

        logger.info(f"{team.abbreviation} tagged {contract.player_name or contract.player_id} at {tag.final_tag_value}")
        return contract, tag


# Global service instance
league_service = LeagueService()

"""Tests for the contract lifecycle."""

import pytest

from capsheet.core.contracts import (
    Contract,
    ContractActionError,
    advance_season,
    apply_extension,
    apply_franchise_tag,
    check_extension_eligibility,
    create_contract,
    preview_advance_season,
    release_contract,
)
from capsheet.core.contracts.dead_money import DeadMoneyConfig
from capsheet.core.enums import AcquisitionType, ContractStatus, Position, RosterStatus


class TestCreateContract:
    """Tests for signing contracts."""

    def test_new_contract_terms(self):
        contract = create_contract(
            player_id="p-17",
            team_id="t-1",
            league_id="l-1",
            salary=30.0,
            years=4,
            season=2024,
            acquisition_type=AcquisitionType.FAAB,
            player_name="Josh Allen",
            position=Position.QB,
        )

        assert contract.original_salary == 30.0
        assert contract.current_salary == 30.0
        assert contract.original_years == 4
        assert contract.years_remaining == 4
        assert contract.signed_season == 2024
        assert contract.status == ContractStatus.ACTIVE
        assert contract.acquisition_type == AcquisitionType.FAAB
        assert not contract.has_been_tagged
        assert not contract.has_been_extended

    def test_unique_ids(self):
        first = create_contract("p", "t", "l", 1.0, 1, 2024)
        second = create_contract("p", "t", "l", 1.0, 1, 2024)
        assert first.contract_id != second.contract_id

    def test_rejects_zero_years(self):
        with pytest.raises(ValueError):
            create_contract("p", "t", "l", 5.0, 0, 2024)

    def test_rejects_negative_salary(self):
        with pytest.raises(ValueError):
            create_contract("p", "t", "l", -5.0, 2, 2024)


class TestOriginalTerms:
    """Original terms are fixed at signing."""

    @pytest.mark.parametrize("field_name,value", [
        ("original_salary", 50.0),
        ("original_years", 6),
        ("signed_season", 2030),
    ])
    def test_cannot_be_reassigned(self, qb_contract, field_name, value):
        with pytest.raises(AttributeError):
            setattr(qb_contract, field_name, value)

    def test_other_fields_can_change(self, qb_contract):
        qb_contract.current_salary = 12.0
        qb_contract.roster_status = RosterStatus.PRACTICE_SQUAD

        assert qb_contract.current_salary == 12.0
        assert qb_contract.is_practice_squad


class TestSalaryForSeason:
    """Tests for Contract.salary_for_season."""

    def test_follows_escalation(self, qb_contract):
        assert qb_contract.salary_for_season(2024) == 30.0
        assert qb_contract.salary_for_season(2025) == 34.5

    def test_before_signing_is_zero(self, qb_contract):
        assert qb_contract.salary_for_season(2023) == 0.0


class TestAdvanceSeason:
    """Tests for rolling contracts into a new season."""

    def test_escalates_and_counts_down(self, qb_contract):
        advance_season(qb_contract, 2025)

        assert qb_contract.current_salary == 34.5
        assert qb_contract.years_remaining == 3
        assert qb_contract.status == ContractStatus.ACTIVE

    def test_expires_after_last_year(self, qb_contract):
        for season in range(2025, 2029):
            advance_season(qb_contract, season)

        assert qb_contract.years_remaining == 0
        assert qb_contract.status == ContractStatus.EXPIRED

    def test_cut_contracts_are_untouched(self, contract_factory):
        contract = contract_factory(status=ContractStatus.CUT)
        advance_season(contract, 2025)

        assert contract.years_remaining == 4
        assert contract.current_salary == 30.0

    def test_extended_contract_escalates_from_new_salary(self, final_year_contract):
        apply_extension(final_year_contract, new_salary=40.0, additional_years=2)
        advance_season(final_year_contract, 2025)

        assert final_year_contract.current_salary == 46.0
        assert final_year_contract.years_remaining == 1
        assert final_year_contract.status == ContractStatus.EXTENDED

    def test_tagged_contract_expires_after_tag_season(self, final_year_contract):
        apply_franchise_tag(final_year_contract, 35.0)
        advance_season(final_year_contract, 2025)

        assert final_year_contract.status == ContractStatus.EXPIRED


class TestPreviewAdvanceSeason:
    """Tests for the season rollover preview."""

    def test_reports_without_changing_the_contract(self, qb_contract):
        before = qb_contract.to_dict()
        preview = preview_advance_season(qb_contract, 2025)

        assert qb_contract.to_dict() == before
        assert preview.current_salary == 30.0
        assert preview.new_salary == 34.5
        assert preview.current_years_remaining == 4
        assert preview.new_years_remaining == 3
        assert preview.expires is False

    def test_final_year_expires(self, final_year_contract):
        preview = preview_advance_season(final_year_contract, 2025)

        assert preview.expires is True
        assert preview.new_salary == 0.0
        assert preview.new_years_remaining == 0
        assert preview.eligible_for_extension is False
        assert final_year_contract.status == ContractStatus.ACTIVE

    def test_entering_final_year_opens_extension_and_tag(self, contract_factory):
        contract = contract_factory(years_remaining=2)
        preview = preview_advance_season(contract, 2025)

        assert preview.new_years_remaining == 1
        assert preview.eligible_for_extension is True
        assert preview.eligible_for_tag is True

    def test_matches_advance_season(self, qb_contract):
        preview = preview_advance_season(qb_contract, 2025, rate=0.10)
        advance_season(qb_contract, 2025, rate=0.10)

        assert preview.new_salary == qb_contract.current_salary == 33.0
        assert preview.new_years_remaining == qb_contract.years_remaining


class TestExtension:
    """Tests for contract extensions."""

    def test_final_year_is_eligible(self, final_year_contract):
        assert check_extension_eligibility(final_year_contract) == (True, None)

    def test_not_final_year(self, qb_contract):
        eligible, reason = check_extension_eligibility(qb_contract)

        assert not eligible
        assert "final year" in reason

    def test_apply(self, final_year_contract):
        apply_extension(final_year_contract, new_salary=40.0, additional_years=3)

        assert final_year_contract.status == ContractStatus.EXTENDED
        assert final_year_contract.current_salary == 40.0
        assert final_year_contract.years_remaining == 3
        assert final_year_contract.has_been_extended
        assert final_year_contract.original_salary == 30.0

    def test_only_once(self, final_year_contract):
        apply_extension(final_year_contract, new_salary=40.0, additional_years=1)
        with pytest.raises(ContractActionError):
            apply_extension(final_year_contract, new_salary=45.0, additional_years=1)

    def test_tagged_player_cannot_be_extended(self, final_year_contract):
        final_year_contract.has_been_tagged = True
        eligible, reason = check_extension_eligibility(final_year_contract)

        assert not eligible
        assert "Tagged" in reason

    def test_rejects_bad_terms(self, final_year_contract):
        with pytest.raises(ValueError):
            apply_extension(final_year_contract, new_salary=0.0, additional_years=2)
        with pytest.raises(ValueError):
            apply_extension(final_year_contract, new_salary=10.0, additional_years=0)


class TestFranchiseTag:
    """Tests for applying the franchise tag."""

    def test_apply(self, final_year_contract):
        apply_franchise_tag(final_year_contract, 28.75)

        assert final_year_contract.status == ContractStatus.TAGGED
        assert final_year_contract.current_salary == 28.75
        assert final_year_contract.years_remaining == 1
        assert final_year_contract.has_been_tagged

    def test_only_once(self, final_year_contract):
        apply_franchise_tag(final_year_contract, 28.75)
        with pytest.raises(ContractActionError):
            apply_franchise_tag(final_year_contract, 30.0)


class TestRelease:
    """Tests for releasing players."""

    def test_release_charges_dead_money(self, qb_contract):
        result = release_contract(qb_contract, 2025)

        assert qb_contract.status == ContractStatus.CUT
        assert result.current_season_amount == 34.5
        assert result.next_season_amount == 42.65

    def test_release_uses_league_policy(self, qb_contract):
        config = DeadMoneyConfig(current_season=0.5, future_seasons={1: 0.0, 2: 0.0, 3: 0.0, 4: 0.0})
        result = release_contract(qb_contract, 2025, config)

        assert result.current_season_amount == 17.25
        assert result.next_season_amount == 0.0

    def test_cannot_release_twice(self, qb_contract):
        release_contract(qb_contract, 2025)
        with pytest.raises(ContractActionError):
            release_contract(qb_contract, 2025)

    def test_tagged_contract_charged_on_tag_salary(self, final_year_contract):
        apply_franchise_tag(final_year_contract, 40.0)
        result = release_contract(final_year_contract, 2027)

        assert result.current_season_amount == 40.0
        assert result.next_season_amount == 0.0

    def test_extended_contract_charged_on_new_terms(self, final_year_contract):
        apply_extension(final_year_contract, new_salary=10.0, additional_years=3)
        result = final_year_contract.dead_money_if_cut(2027)

        # Two years left after the cut: 50% of 11.5 + 13.225
        assert result.current_season_amount == 10.0
        assert result.breakdown.years_remaining == 2
        assert result.next_season_amount == 12.36

    def test_preview_does_not_release(self, qb_contract):
        qb_contract.dead_money_if_cut(2025)
        assert qb_contract.status == ContractStatus.ACTIVE


class TestSerialization:
    """Tests for to_dict / from_dict."""

    def test_round_trip(self, qb_contract):
        restored = Contract.from_dict(qb_contract.to_dict())
        assert restored == qb_contract

    def test_defaults_for_missing_fields(self):
        contract = Contract.from_dict({
            "contract_id": "c",
            "player_id": "p",
            "team_id": "t",
            "league_id": "l",
            "original_salary": 12.0,
            "original_years": 3,
            "signed_season": 2024,
        })

        assert contract.current_salary == 12.0
        assert contract.years_remaining == 3
        assert contract.status == ContractStatus.ACTIVE
        assert contract.position is None

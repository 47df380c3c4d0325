"""
Contracts module for salary cap and contract management.

This module provides:
- Salary projection with annual increases
- Dead money calculation under a per-league policy
- Franchise tag valuation and eligibility
- Contract lifecycle (signing, season rollover, extension, tag, release)
- Team cap projection
"""

from capsheet.core.contracts.money import (
    as_amount,
    as_count,
    round_currency,
)

from capsheet.core.contracts.salary import (
    ANNUAL_INCREASE_RATE,
    project_salary,
    raw_salary,
    salary_schedule,
)

from capsheet.core.contracts.dead_money import (
    DEFAULT_DEAD_MONEY_CONFIG,
    PRACTICE_SQUAD_PERCENTAGE,
    DeadMoneyBreakdown,
    DeadMoneyConfig,
    DeadMoneyRecord,
    DeadMoneyResult,
    InvalidDeadMoneyConfig,
    calculate_dead_money,
    dead_money_records,
    load_dead_money_config,
    manual_dead_money,
    parse_dead_money_config,
)

from capsheet.core.contracts.franchise_tag import (
    FRANCHISE_TAG_INCREASE,
    POSITION_AVERAGE_TOP_N,
    FranchiseTagResult,
    calculate_franchise_tag_value,
    check_franchise_tag_eligibility,
    position_top_average,
)

from capsheet.core.contracts.contract import (
    Contract,
    ContractActionError,
    SeasonRolloverPreview,
    advance_season,
    apply_extension,
    apply_franchise_tag,
    check_extension_eligibility,
    create_contract,
    preview_advance_season,
    release_contract,
)

from capsheet.core.contracts.cap import (
    CapCheck,
    CapProjection,
    project_team_cap,
    validate_cap_space,
)

__all__ = [
    # Money
    "as_amount",
    "as_count",
    "round_currency",
    # Salary
    "ANNUAL_INCREASE_RATE",
    "project_salary",
    "raw_salary",
    "salary_schedule",
    # Dead money
    "DEFAULT_DEAD_MONEY_CONFIG",
    "PRACTICE_SQUAD_PERCENTAGE",
    "DeadMoneyBreakdown",
    "DeadMoneyConfig",
    "DeadMoneyRecord",
    "DeadMoneyResult",
    "InvalidDeadMoneyConfig",
    "calculate_dead_money",
    "dead_money_records",
    "load_dead_money_config",
    "manual_dead_money",
    "parse_dead_money_config",
    # Franchise tag
    "FRANCHISE_TAG_INCREASE",
    "POSITION_AVERAGE_TOP_N",
    "FranchiseTagResult",
    "calculate_franchise_tag_value",
    "check_franchise_tag_eligibility",
    "position_top_average",
    # Contract lifecycle
    "Contract",
    "ContractActionError",
    "SeasonRolloverPreview",
    "advance_season",
    "apply_extension",
    "apply_franchise_tag",
    "check_extension_eligibility",
    "create_contract",
    "preview_advance_season",
    "release_contract",
    # Cap
    "CapCheck",
    "CapProjection",
    "project_team_cap",
    "validate_cap_space",
]

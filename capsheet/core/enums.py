"""League, roster and contract enumerations."""

from enum import Enum


class Position(Enum):
    """Fantasy roster positions."""

    QB = "QB"  # Quarterback
    RB = "RB"  # Running Back
    WR = "WR"  # Wide Receiver
    TE = "TE"  # Tight End
    K = "K"  # Kicker
    DL = "DL"  # Defensive Line
    LB = "LB"  # Linebacker
    DB = "DB"  # Defensive Back


class ContractStatus(Enum):
    """Current status of a contract."""

    ACTIVE = "ACTIVE"        # In effect
    EXPIRED = "EXPIRED"      # Final year completed
    TAGGED = "TAGGED"        # Replaced by a one-year franchise tag
    EXTENDED = "EXTENDED"    # Extension negotiated
    CUT = "CUT"              # Player released


class RosterStatus(Enum):
    """Where the player sits on the roster. Affects dead money on release."""

    ACTIVE = "ACTIVE"
    PRACTICE_SQUAD = "PRACTICE_SQUAD"


class AcquisitionType(Enum):
    """How the team acquired the player."""

    AUCTION = "auction"
    FAAB = "faab"
    ROOKIE_DRAFT = "rookie_draft"
    TRADE = "trade"
    UNDISPUTED = "undisputed"

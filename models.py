# models.py
from dataclasses import dataclass, field
from enum import Enum


class SourceKind(str, Enum):
    LIVE = "live"
    SYNTHETIC = "synthetic"


class Tier(str, Enum):
    WHALE = "Whale"
    ACTIVE = "Active"
    STANDARD = "Standard"


class SecurityStatus(str, Enum):
    SECURE = "SECURE"
    MODERATE_RISK = "MODERATE RISK"
    HIGH_RISK = "HIGH RISK"


class FailureReason(str, Enum):
    INPUT_EMPTY = "empty input"
    INPUT_MALFORMED = "bad format"
    ACCOUNT_NOT_FOUND = "address not found"

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self]


FAILURE_MESSAGES = {
    FailureReason.INPUT_EMPTY: "Please enter a TRON wallet address",
    FailureReason.INPUT_MALFORMED: (
        'Invalid TRON address format. TRON addresses start with "T" '
        "and are 34 characters long."
    ),
    FailureReason.ACCOUNT_NOT_FOUND: "Wallet address not found on TRON network",
}


@dataclass(frozen=True)
class TokenHolding:
    token_id: str = ""
    name: str = ""
    symbol: str = ""
    balance: str = "0"
    decimals: int = 0
    token_type: str = ""


@dataclass(frozen=True)
class RawAccountData:
    account_info: dict
    tokens: list = field(default_factory=list)


@dataclass(frozen=True)
class AccountSnapshot:
    balance_sun: int
    transaction_count: int = 0
    last_active_ms: int | None = None
    tokens: tuple[TokenHolding, ...] = ()


@dataclass(frozen=True)
class DerivedMetrics:
    balance: str
    usd_value: str
    tier: Tier
    last_active: str
    scan_time: str
    transactions: str
    token_count: int
    network: str


@dataclass(frozen=True)
class SecurityCheck:
    name: str
    passed: bool


@dataclass(frozen=True)
class SecurityAssessment:
    status: SecurityStatus
    score: int
    color: str
    checks: tuple[SecurityCheck, ...] = ()


@dataclass(frozen=True)
class Success:
    address: str
    metrics: DerivedMetrics
    security: SecurityAssessment
    source_kind: SourceKind

    @property
    def is_synthetic(self) -> bool:
        return self.source_kind is SourceKind.SYNTHETIC

    @property
    def status_label(self) -> str:
        if self.is_synthetic:
            return "SCAN COMPLETE (MOCK DATA)"
        return "SCAN COMPLETE"


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    address: str = ""

    @property
    def message(self) -> str:
        return self.reason.message


LookupOutcome = Success | Failure

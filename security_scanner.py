import random

from logger import get_logger
from models import SecurityAssessment, SecurityCheck, SecurityStatus

logger = get_logger(__name__)

# Pass probability for each named check
ADDRESS_FORMAT_PASS = 1.0
MALICIOUS_ACTIVITY_PASS = 0.9
HIGH_RISK_TX_PASS = 0.8
CONTRACT_INTERACTIONS_PASS = 1.0
NETWORK_CONSISTENCY_PASS = 1.0

DEFAULT_CHECKS = (
    ("Address Format", ADDRESS_FORMAT_PASS),
    ("Malicious Activity", MALICIOUS_ACTIVITY_PASS),
    ("High-Risk Transactions", HIGH_RISK_TX_PASS),
    ("Smart Contract Interactions", CONTRACT_INTERACTIONS_PASS),
    ("Network Consistency", NETWORK_CONSISTENCY_PASS),
)

SECURE_MIN_SCORE = 80
MODERATE_MIN_SCORE = 60

STATUS_COLORS = {
    SecurityStatus.SECURE: "#00ff00",
    SecurityStatus.MODERATE_RISK: "#ffa500",
    SecurityStatus.HIGH_RISK: "#ff3333",
}


def status_for_score(score: int) -> SecurityStatus:
    if score >= SECURE_MIN_SCORE:
        return SecurityStatus.SECURE
    if score >= MODERATE_MIN_SCORE:
        return SecurityStatus.MODERATE_RISK
    return SecurityStatus.HIGH_RISK


class SecurityScanner:
    """
    Placeholder risk heuristic for a TRON address.

    The checks are weighted coin flips, not an analysis of the account, so
    the result must never be read as a security guarantee. Pass a seeded
    random.Random to get repeatable results.
    """

    def __init__(self, rng: random.Random | None = None, checks=DEFAULT_CHECKS):
        self.rng = rng or random.Random()
        self.checks = checks

    def run_checks(self) -> tuple[SecurityCheck, ...]:
        # p >= 1 always passes without consuming randomness
        return tuple(
            SecurityCheck(name, p >= 1.0 or self.rng.random() < p)
            for name, p in self.checks
        )

    def assess(self, address: str) -> SecurityAssessment:
        checks = self.run_checks()
        passed = sum(1 for c in checks if c.passed)
        score = round(100 * passed / len(checks)) if checks else 0
        status = status_for_score(score)

        logger.debug("security_assessed", address=address, score=score, status=status.name)
        return SecurityAssessment(
            status=status,
            score=score,
            color=STATUS_COLORS[status],
            checks=checks,
        )

# summary.py

from models import Failure, LookupOutcome, SecurityStatus, Success, Tier

TIER_BADGES = {
    Tier.WHALE: "🦈 Whale",
    Tier.ACTIVE: "💼 Active",
    Tier.STANDARD: "🧪 Standard",
}

SECURITY_BADGES = {
    SecurityStatus.SECURE: "🟢",
    SecurityStatus.MODERATE_RISK: "🟠",
    SecurityStatus.HIGH_RISK: "🔴",
}


class LookupSummaryFormatter:
    def __init__(self, outcome: LookupOutcome):
        self.outcome = outcome

    def format_summary(self) -> str:
        if isinstance(self.outcome, Failure):
            return self.format_failure(self.outcome)
        return self.format_success(self.outcome)

    def format_failure(self, failure: Failure) -> str:
        return f"❌ {failure.message}"

    def format_success(self, result: Success) -> str:
        m = result.metrics
        sec = result.security
        passed = sum(1 for c in sec.checks if c.passed)

        lines = [
            f"🔍 Scanned wallet: `{result.address}`",
            f"🔗 Network: {m.network}",
            f"💰 Balance: {m.balance} ({m.usd_value})",
            f"📦 Tokens held: {m.token_count}",
            f"🧾 Transactions: {m.transactions}",
            f"🕒 Last active: {m.last_active}",
            f"🎯 Profile: {TIER_BADGES[m.tier]}",
            f"{SECURITY_BADGES[sec.status]} Security: {sec.status.value} "
            f"({sec.score}/100, {passed}/{len(sec.checks)} checks passed)",
            "",
            f"✅ {result.status_label} at {m.scan_time}",
        ]
        if result.is_synthetic:
            lines.append(
                "⚠️ Tronscan was unreachable; the figures above are mock data, not the real account."
            )
        return "\n".join(lines)

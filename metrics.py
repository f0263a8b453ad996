# metrics.py

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext

from models import AccountSnapshot, DerivedMetrics, Tier

SUN_PER_TRX = 1_000_000
TRX_USD_RATE = 0.12
NETWORK_LABEL = "TRON (TRC20)"

# Smallest balances (in sun) that reach each tier: > 1,000 TRX and > 10 TRX
WHALE_MIN_SUN = 1_000_000_001
ACTIVE_MIN_SUN = 10_000_001

_SIX_PLACES = Decimal("0.000001")
_CENTS = Decimal("0.01")


def _precision_for(balance_sun) -> int:
    # enough digits for the whole part plus the quantized fraction
    return max(28, len(str(abs(int(balance_sun)))) + 10)


def sun_to_trx(balance_sun) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _precision_for(balance_sun)
        return Decimal(balance_sun) / SUN_PER_TRX


def format_balance(balance_sun) -> str:
    with localcontext() as ctx:
        ctx.prec = _precision_for(balance_sun)
        trx = sun_to_trx(balance_sun).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP)
        text = f"{trx:,.6f}"
    # keep between 2 and 6 fraction digits
    whole, frac = text.split(".")
    frac = frac.rstrip("0").ljust(2, "0")
    return f"{whole}.{frac} TRX"


def estimate_fiat_value(balance_sun, rate: float = TRX_USD_RATE) -> str:
    with localcontext() as ctx:
        ctx.prec = _precision_for(balance_sun)
        value = sun_to_trx(balance_sun) * Decimal(str(rate))
        value = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
        return f"${value:,.2f}"


def classify_tier(balance_sun) -> Tier:
    if balance_sun >= WHALE_MIN_SUN:
        return Tier.WHALE
    if balance_sun >= ACTIVE_MIN_SUN:
        return Tier.ACTIVE
    return Tier.STANDARD


def format_timestamp(epoch_ms: int | None) -> str:
    if not epoch_ms:
        return "Unknown"
    try:
        date = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return "Unknown"
    return f"{date:%b} {date.day}, {date.year}"


def format_scan_time(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return now.strftime("%H:%M:%S")


def format_count(count: int) -> str:
    return f"{count:,}"


def derive_metrics(
    snapshot: AccountSnapshot,
    rate: float = TRX_USD_RATE,
    now: datetime | None = None,
) -> DerivedMetrics:
    return DerivedMetrics(
        balance=format_balance(snapshot.balance_sun),
        usd_value=estimate_fiat_value(snapshot.balance_sun, rate),
        tier=classify_tier(snapshot.balance_sun),
        last_active=format_timestamp(snapshot.last_active_ms),
        scan_time=format_scan_time(now),
        transactions=format_count(snapshot.transaction_count),
        token_count=len(snapshot.tokens),
        network=NETWORK_LABEL,
    )

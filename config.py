# config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_TRONSCAN_API_URL = "https://apilist.tronscan.org"


@dataclass
class TronscanConfig:
    base_url: str
    api_key: str | None
    timeout: float
    token_page_size: int


@dataclass
class AppConfig:
    bot_token: str | None
    tronscan: TronscanConfig
    trx_usd_rate: float


def load_config(env_file: str | None = None) -> AppConfig:
    load_dotenv(env_file)

    tronscan = TronscanConfig(
        base_url=os.getenv("TRONSCAN_API_URL", DEFAULT_TRONSCAN_API_URL).rstrip("/"),
        api_key=os.getenv("TRONSCAN_API_KEY") or None,
        timeout=float(os.getenv("LOOKUP_TIMEOUT", "10")),
        token_page_size=int(os.getenv("TOKEN_PAGE_SIZE", "20")),
    )

    return AppConfig(
        bot_token=os.getenv("BOT_TOKEN"),
        tronscan=tronscan,
        trx_usd_rate=float(os.getenv("TRX_USD_RATE", "0.12")),  # fixed, no live rate
    )

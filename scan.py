# scan.py

import requests

from config import TronscanConfig, DEFAULT_TRONSCAN_API_URL
from errors import AccountUnavailable
from logger import get_logger
from models import AccountSnapshot, RawAccountData, TokenHolding

logger = get_logger(__name__)


class TronscanFetcher:
    """Reads account info and TRC10/TRC20 holdings from the Tronscan API."""

    def __init__(self, config: TronscanConfig | None = None):
        self.config = config or TronscanConfig(
            base_url=DEFAULT_TRONSCAN_API_URL,
            api_key=None,
            timeout=10,
            token_page_size=20,
        )
        self.headers = {"accept": "application/json"}
        if self.config.api_key:
            self.headers["TRON-PRO-API-KEY"] = self.config.api_key

    def fetch(self, address: str) -> RawAccountData:
        """
        Fetch account info, then the first page of token holdings.

        Raises AccountUnavailable when the account call fails. A failed
        token call is not fatal and gives an empty token list.
        """
        account_info = self.fetch_account(address)
        tokens = self.fetch_tokens(address)
        return RawAccountData(account_info=account_info, tokens=tokens)

    def fetch_account(self, address: str) -> dict:
        url = f"{self.config.base_url}/api/account"
        try:
            res = requests.get(
                url,
                params={"address": address},
                headers=self.headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout:
            logger.warning("account_fetch_timeout", address=address)
            raise AccountUnavailable(address, "request timed out")
        except requests.exceptions.RequestException as e:
            logger.warning("account_fetch_failed", address=address, error=str(e))
            raise AccountUnavailable(address, f"request failed: {e}")

        if res.status_code != 200:
            logger.warning("account_fetch_failed", address=address, status=res.status_code)
            raise AccountUnavailable(address, f"HTTP {res.status_code}")

        try:
            data = res.json()
        except ValueError:
            raise AccountUnavailable(address, "invalid JSON from Tronscan")
        if not isinstance(data, dict):
            raise AccountUnavailable(address, "unexpected account payload")
        return data

    def fetch_tokens(self, address: str) -> list:
        url = f"{self.config.base_url}/api/account/tokens"
        params = {
            "address": address,
            "start": 0,
            "limit": self.config.token_page_size,
        }
        try:
            res = requests.get(url, params=params, headers=self.headers, timeout=self.config.timeout)
            if res.status_code != 200:
                logger.info("token_fetch_skipped", address=address, status=res.status_code)
                return []
            data = res.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.info("token_fetch_skipped", address=address, error=str(e))
            return []

        tokens = data.get("data", []) if isinstance(data, dict) else []
        return tokens if isinstance(tokens, list) else []


def _as_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default


def parse_token(entry: dict) -> TokenHolding:
    return TokenHolding(
        token_id=str(entry.get("tokenId", "")),
        name=str(entry.get("tokenName", "")),
        symbol=str(entry.get("tokenAbbr", "")),
        balance=str(entry.get("balance", "0")),
        decimals=_as_int(entry.get("tokenDecimal")),
        token_type=str(entry.get("tokenType", "")),
    )


def snapshot_from_account(raw: RawAccountData) -> AccountSnapshot:
    info = raw.account_info
    last_active = info.get("latestOperationTime") or info.get("dateCreated")

    return AccountSnapshot(
        balance_sun=_as_int(info.get("balance")),
        transaction_count=_as_int(
            info.get("transactions") or info.get("totalTransactionCount")
        ),
        last_active_ms=_as_int(last_active) or None,
        tokens=tuple(parse_token(t) for t in raw.tokens if isinstance(t, dict)),
    )

# errors.py


class WalletLookupError(Exception):
    """Base exception for wallet lookup errors"""
    pass


class FetchError(WalletLookupError):
    """Raised when the explorer API cannot be reached or answers badly"""
    pass


class AccountUnavailable(FetchError):
    """Raised when the account info request fails"""

    def __init__(self, address: str, detail: str):
        super().__init__(f"Account {address} unavailable: {detail}")
        self.address = address
        self.detail = detail

# validator.py
import re

# "T" followed by 33 base58 characters (no 0, O, I, l)
TRON_ADDRESS_RE = re.compile(r"T[1-9A-HJ-NP-Za-km-z]{33}")
TRON_ADDRESS_LENGTH = 34


def is_valid_tron_address(address) -> bool:
    if not isinstance(address, str):
        return False
    return TRON_ADDRESS_RE.fullmatch(address) is not None

"""
Shared fixtures: a known-good TRON address, fake HTTP responses and a
deterministic orchestrator (seeded random source, fixed clock).
"""

import random
from datetime import datetime
from unittest.mock import MagicMock

import pytest

VALID_ADDRESS = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
FIXED_NOW = datetime(2024, 3, 1, 14, 5, 9)


def make_response(status_code=200, payload=None, json_error=False):
    res = MagicMock()
    res.status_code = status_code
    if json_error:
        res.json.side_effect = ValueError("not json")
    else:
        res.json.return_value = payload
    return res


@pytest.fixture
def valid_address():
    return VALID_ADDRESS


@pytest.fixture
def fetcher():
    return MagicMock()


@pytest.fixture
def orchestrator(fetcher):
    from lookup import LookupOrchestrator

    return LookupOrchestrator(
        fetcher=fetcher,
        rng=random.Random(1234),
        clock=lambda: FIXED_NOW,
    )

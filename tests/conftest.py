"""
Shared fixtures: canned API payloads and a mock-transport HTTP client factory
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import datetime, timedelta

import httpx
import pytest


@pytest.fixture
def block_payload():
    return {
        "data": [
            {
                "id": 820000,
                "hash": "00000000000000000002a7c4c1e48d76c5a37902165a270156b7a8d72728a0ab",
                "size": 1400000,
                "difficulty": 60000000000000,
                "weight": 3990000,
            }
        ],
        "context": {"code": 200},
    }


@pytest.fixture
def market_payload():
    return {
        "id": "bitcoin",
        "market_data": {
            "current_price": {"usd": 65000.5, "eur": 60000},
            "market_cap": {"usd": 1280000000000},
            "total_volume": {"usd": 31000000000},
            "price_change_percentage_24h": -1.25,
            "price_change_percentage_7d": 4.5,
        },
    }


def make_price_points(count: int, start: datetime = datetime(2024, 3, 1, 0, 0)):
    """Hourly [timestamp_ms, price] pairs, chronological"""
    return [
        [int((start + timedelta(hours=i)).timestamp() * 1000), 60000.0 + i]
        for i in range(count)
    ]


@pytest.fixture
def price_points():
    return make_price_points


@pytest.fixture
def price_payload():
    return {"prices": make_price_points(48), "market_caps": [], "total_volumes": []}


@pytest.fixture
def sentiment_payload():
    return {
        "name": "Fear and Greed Index",
        "data": [{"value": "72", "value_classification": "Greed", "timestamp": "1709251200"}],
    }


@pytest.fixture
def mock_client():
    """
    Build an httpx.AsyncClient whose requests are answered by `handler`.

    handler(request) -> httpx.Response (or raises an httpx error)
    """
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture
def json_handler():
    """Handler answering every request with the given JSON body and status"""
    def factory(body, status_code: int = 200):
        def handler(request):
            return httpx.Response(status_code, json=body)
        return handler
    return factory

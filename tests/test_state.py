"""
Unit tests for AggregateState merge rules and the read-only view
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import dataclasses

import pytest

from btc_dashboard.models import BlockSnapshot, PriceSeries, SentimentSnapshot
from btc_dashboard.server.state import AggregateState
from btc_dashboard.utils.task_util import FetchResult


BLOCK = BlockSnapshot(height=1, hash="aa", size_bytes=10, difficulty=1.5, weight=40)
SERIES = PriceSeries(labels=["1:00"], values=[100.0])


class TestMerge:

    def test_initial_state_is_empty(self):
        view = AggregateState().view()
        assert view.block is None
        assert view.market is None
        assert view.price_series is None
        assert view.sentiment is None
        assert view.last_error is None
        assert view.cycle_counter == 0

    def test_success_sets_field_and_timestamp(self):
        state = AggregateState()
        view = state.merge([FetchResult.success("block", BLOCK)])

        assert view.block == BLOCK
        assert "block" in view.updated_at
        assert view.last_update == view.updated_at["block"]

    def test_failure_sets_error_only(self):
        state = AggregateState(price_series=SERIES)
        view = state.merge([FetchResult.failure("price_series", "Failed to fetch price data: HTTP 500")])

        assert view.price_series == SERIES
        assert view.last_error == "Failed to fetch price data: HTTP 500"
        assert "price_series" not in view.updated_at

    def test_last_failure_in_order_wins(self):
        state = AggregateState()
        view = state.merge([
            FetchResult.failure("block", "first"),
            FetchResult.success("price_series", SERIES),
            FetchResult.failure("market", "second"),
        ])
        assert view.last_error == "second"

    def test_unknown_source_rejected_without_mutation(self):
        state = AggregateState()
        with pytest.raises(ValueError, match="weather"):
            state.merge([
                FetchResult.success("block", BLOCK),
                FetchResult.success("weather", {"rain": True}),
            ])
        assert state.block is None
        assert state.cycle_counter == 0


class TestView:

    def test_view_is_immutable(self):
        view = AggregateState().view()
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.block = BLOCK

    def test_view_is_a_copy(self):
        state = AggregateState()
        before = state.view()
        state.merge([FetchResult.success("block", BLOCK)])
        assert before.block is None
        assert before.updated_at == {}

    def test_to_dict(self):
        state = AggregateState()
        state.merge([
            FetchResult.success("block", BLOCK),
            FetchResult.success("sentiment", SentimentSnapshot(value=50, classification="Neutral", glyph="😐")),
            FetchResult.failure("market", "boom"),
        ])
        data = state.view().to_dict()

        assert data["block"] == {
            "height": 1, "hash": "aa", "size_bytes": 10, "difficulty": 1.5, "weight": 40,
        }
        assert data["sentiment"]["classification"] == "Neutral"
        assert data["market"] is None
        assert data["price_series"] is None
        assert data["last_error"] == "boom"
        assert data["cycle_counter"] == 1


class TestSubscribe:

    def test_unsubscribe(self):
        state = AggregateState()
        received = []
        unsubscribe = state.subscribe(received.append)

        state.merge([])
        unsubscribe()
        state.merge([])

        assert len(received) == 1
        assert received[0].cycle_counter == 1

    def test_unsubscribe_twice_is_safe(self):
        state = AggregateState()
        unsubscribe = state.subscribe(lambda view: None)
        unsubscribe()
        unsubscribe()


class TestPriceSeriesModel:

    def test_misaligned_series_rejected(self):
        with pytest.raises(ValueError, match="aligned"):
            PriceSeries(labels=["1:00", "2:00"], values=[1.0])

"""
HTTP tests for the tradeview API.

The app is built with an AsyncMock query capability, so the lifespan and the
full request path (routing, validation, dispatch, error mapping) run without
a database.
"""

import math
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from tradeview.config import ApiConfig, ConfigState, LoggingConfig
from tradeview.exceptions import QueryExecutionError
from tradeview.queries.dispatcher import CANDLE_SQL, PRIVATE_TRADE_SQL
from tradeview_api.main import create_app

TRADE_QUERY = {
    "account": "A",
    "exchange": "B",
    "pair": "C",
    "minPrice": "1",
    "maxPrice": "100",
    "minTimestamp": "1000",
    "maxTimestamp": "2000",
}


@pytest.fixture
def mock_db():
    db = AsyncMock()
    db.fetch_all.return_value = []
    db.fetch_one.return_value = {"?column?": 1}
    return db


@pytest.fixture
def settings():
    return ConfigState(logging=LoggingConfig(level="WARNING"))


@pytest.fixture
def client(mock_db, settings):
    with TestClient(create_app(settings=settings, db=mock_db)) as test_client:
        yield test_client


class TestLifespan:
    def test_pool_opened_and_closed(self, mock_db, settings):
        with TestClient(create_app(settings=settings, db=mock_db)):
            mock_db.connect.assert_awaited_once()
            mock_db.disconnect.assert_not_awaited()

        mock_db.disconnect.assert_awaited_once()

    def test_state_holds_only_query_objects(self, mock_db, settings):
        app = create_app(settings=settings, db=mock_db)

        assert app.state.db is mock_db
        assert app.state.dispatcher is not None
        assert not hasattr(app.state, "settings")


class TestHealthRoutes:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_health(self, client, mock_db):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"] == {"database": True}
        mock_db.fetch_one.assert_awaited_once_with("SELECT 1")

    def test_health_database_down(self, client, mock_db):
        mock_db.fetch_one.side_effect = QueryExecutionError("refused")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["detail"]["services"]["database"] is False

    def test_ready(self, client):
        assert client.get("/ready").json() == {"status": "ready"}


class TestKlineRoute:
    def test_returns_rows(self, client, mock_db):
        columns = ("timestamp", "open", "high", "low", "close", "volume")
        rows = [
            dict(zip(columns, (60_000, 1.0, 2.0, 0.5, 1.5, 10.0))),
            dict(zip(columns, (120_000, 1.5, 1.7, 1.1, 1.2, 4.0))),
        ]
        mock_db.fetch_all.return_value = rows

        response = client.get("/api/kline", params={"exchange": "binance", "pair": "BTCUSD"})

        assert response.status_code == 200
        assert response.json() == rows
        mock_db.fetch_all.assert_awaited_once_with(CANDLE_SQL, "binance", "BTCUSD", "1m")

    def test_period_forwarded(self, client, mock_db):
        client.get(
            "/api/kline",
            params={"exchange": "binance", "pair": "BTCUSD", "timeframe": "d", "period": "1h"},
        )

        mock_db.fetch_all.assert_awaited_once_with(CANDLE_SQL, "binance", "BTCUSD", "1h")

    def test_missing_pair(self, client, mock_db):
        response = client.get("/api/kline", params={"exchange": "binance"})

        assert response.status_code == 400
        assert response.json()["missing"] == ["pair"]
        mock_db.fetch_all.assert_not_awaited()

    def test_unknown_timeframe(self, client, mock_db):
        response = client.get(
            "/api/kline", params={"exchange": "binance", "pair": "BTCUSD", "timeframe": "m"}
        )

        assert response.status_code == 400
        assert response.json()["invalid"] == ["timeframe"]


class TestPrivateTradeRoute:
    def test_returns_rows_in_order(self, client, mock_db):
        rows = [
            {"timestamp": 1_100_000, "side": "buy", "price": 10.5, "size": 2.0},
            {"timestamp": 1_900_000, "side": "sell", "price": 11.0, "size": 1.0},
        ]
        mock_db.fetch_all.return_value = rows

        response = client.get("/api/private-trade", params=TRADE_QUERY)

        assert response.status_code == 200
        assert response.json() == rows
        mock_db.fetch_all.assert_awaited_once_with(
            PRIVATE_TRADE_SQL, "A", "B", "C", 1, 100, 1_000_000, 2_000_000
        )

    @pytest.mark.parametrize("field", list(TRADE_QUERY))
    def test_missing_field(self, client, mock_db, field):
        params = {k: v for k, v in TRADE_QUERY.items() if k != field}

        response = client.get("/api/private-trade", params=params)

        assert response.status_code == 400
        assert response.json()["missing"] == [field]
        mock_db.fetch_all.assert_not_awaited()

    def test_non_numeric_price_not_rejected(self, client, mock_db):
        # Current behaviour: NaN flows into the statement parameters.
        response = client.get("/api/private-trade", params={**TRADE_QUERY, "minPrice": "abc"})

        assert response.status_code == 200
        assert math.isnan(mock_db.fetch_all.await_args.args[4])

    def test_strict_numeric_rejects(self, mock_db):
        settings = ConfigState(
            logging=LoggingConfig(level="WARNING"), api=ApiConfig(strict_numeric=True)
        )
        with TestClient(create_app(settings=settings, db=mock_db)) as client:
            response = client.get(
                "/api/private-trade", params={**TRADE_QUERY, "minPrice": "abc"}
            )

        assert response.status_code == 400
        assert response.json()["invalid"] == ["minPrice"]
        mock_db.fetch_all.assert_not_awaited()

    def test_query_failure_is_500(self, client, mock_db):
        mock_db.fetch_all.side_effect = QueryExecutionError(
            'relation "private_trade" does not exist'
        )

        response = client.get("/api/private-trade", params=TRADE_QUERY)

        assert response.status_code == 500
        assert response.json() == {"detail": "Query execution failed"}

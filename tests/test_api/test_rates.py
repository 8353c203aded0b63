from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_cache
from api.main import app
from domain.exceptions.currency import RatesUnavailableError
from domain.models.rates import RateLookup, RateSnapshot

SNAPSHOT = RateSnapshot(
    fetched_at=1_700_000_000.0,
    base='EUR',
    as_of='2023-11-14',
    rates={'USD': 1.2, 'GBP': 0.9, 'JPY': 161.37},
)


@pytest.fixture
def mock_rate_cache():
    mock_cache = MagicMock()
    mock_cache.get_current = AsyncMock(return_value=RateLookup(snapshot=SNAPSHOT))
    return mock_cache


@pytest.fixture
def client(mock_rate_cache):
    app.dependency_overrides[get_rate_cache] = lambda: mock_rate_cache
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_get_rates_returns_snapshot(client):
    response = client.get('/api/rates')

    assert response.status_code == 200
    data = response.json()
    assert data['base'] == 'EUR'
    assert data['as_of'] == '2023-11-14'
    assert data['rates'] == {'USD': 1.2, 'GBP': 0.9, 'JPY': 161.37}
    assert data['degraded'] is False


def test_get_rates_degraded(client, mock_rate_cache):
    mock_rate_cache.get_current.return_value = RateLookup(snapshot=SNAPSHOT, degraded=True, error='down')

    response = client.get('/api/rates')

    assert response.status_code == 200
    assert response.json()['degraded'] is True


def test_get_currencies_includes_base(client):
    response = client.get('/api/currencies')

    assert response.status_code == 200
    assert response.json()['currencies'] == ['EUR', 'GBP', 'JPY', 'USD']


def test_get_rates_unavailable(client, mock_rate_cache):
    mock_rate_cache.get_current.side_effect = RatesUnavailableError('none yet')

    response = client.get('/api/rates')

    assert response.status_code == 503

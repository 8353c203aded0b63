from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_cache
from api.main import app
from domain.models.rates import CacheStatus


def make_status(**overrides) -> CacheStatus:
    values = {
        'has_snapshot': True,
        'is_stale': False,
        'refreshing': False,
        'age_seconds': 120.0,
        'staleness_seconds': 3600.0,
        'refresh_count': 3,
        'failure_count': 0,
        'currencies': ['EUR', 'GBP', 'USD'],
    }
    values.update(overrides)
    return CacheStatus(**values)


@pytest.fixture
def mock_rate_cache():
    mock_cache = MagicMock()
    mock_cache.status.return_value = make_status()
    return mock_cache


@pytest.fixture
def client(mock_rate_cache):
    app.dependency_overrides[get_rate_cache] = lambda: mock_rate_cache
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_health_fresh_snapshot_is_healthy(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'healthy'
    assert data['age_seconds'] == 120.0
    assert data['refresh_count'] == 3
    assert data['currency_count'] == 3


def test_health_stale_snapshot_is_degraded(client, mock_rate_cache):
    mock_rate_cache.status.return_value = make_status(is_stale=True, age_seconds=7200.0)

    response = client.get('/api/health')

    assert response.json()['status'] == 'degraded'


def test_health_failed_refresh_is_degraded(client, mock_rate_cache):
    mock_rate_cache.status.return_value = make_status(failure_count=1, last_error='Fixer.io request failed: ConnectError')

    data = client.get('/api/health').json()

    assert data['status'] == 'degraded'
    assert 'ConnectError' in data['last_error']


def test_health_without_snapshot_is_unhealthy(client, mock_rate_cache):
    mock_rate_cache.status.return_value = make_status(has_snapshot=False, is_stale=True, age_seconds=None, currencies=[])

    data = client.get('/api/health').json()

    assert data['status'] == 'unhealthy'
    assert data['currency_count'] == 0

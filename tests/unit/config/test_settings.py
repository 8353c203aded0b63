# nosec B101


import json
import logging

from config.logging_config import JSONFormatter, configure_logging
from config.settings import Settings


def test_defaults_match_hourly_refresh():
    settings = Settings(_env_file=None)

    assert settings.RATE_STALENESS_SECONDS == 3600
    assert settings.FETCH_RETRY_ATTEMPTS == 1
    assert settings.SERVE_STALE_WHILE_REFRESHING is False
    assert settings.FIXERIO_BASE_URL == 'http://data.fixer.io/api'


def test_api_key_from_environment_wins(tmp_path):
    key_file = tmp_path / 'key.txt'
    key_file.write_text('from-file\n')

    settings = Settings(_env_file=None, FIXERIO_API_KEY=' from-env ', FIXERIO_API_KEY_FILE=str(key_file))

    assert settings.load_api_key() == 'from-env'


def test_api_key_read_from_key_file(tmp_path):
    key_file = tmp_path / 'key.txt'
    key_file.write_text('abc123\n')

    settings = Settings(_env_file=None, FIXERIO_API_KEY='', FIXERIO_API_KEY_FILE=str(key_file))

    assert settings.load_api_key() == 'abc123'


def test_missing_key_file_yields_empty_key(tmp_path):
    settings = Settings(_env_file=None, FIXERIO_API_KEY='', FIXERIO_API_KEY_FILE=str(tmp_path / 'absent.txt'))

    assert settings.load_api_key() == ''


def test_staleness_override_from_environment(monkeypatch):
    monkeypatch.setenv('RATE_STALENESS_SECONDS', '900')

    assert Settings(_env_file=None).RATE_STALENESS_SECONDS == 900


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord('rates', logging.WARNING, __file__, 10, 'refresh failed: %s', ('down',), None)

    entry = json.loads(JSONFormatter().format(record))

    assert entry['level'] == 'WARNING'
    assert entry['logger'] == 'rates'
    assert entry['message'] == 'refresh failed: down'


def test_configure_logging_installs_single_console_handler():
    configure_logging('debug', json_output=True)
    configure_logging('warning')

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert logging.getLogger('httpx').level == logging.WARNING

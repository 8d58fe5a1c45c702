"""Root test configuration."""

import logging
import os

import pytest
import respx
import structlog

from panelbot.config import Settings

GRAFANA_HOST = "https://grafana.example.com"


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PANELBOT_* variables from the host out of Settings."""
    for name in list(os.environ):
        if name.startswith("PANELBOT_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def isolate_respx_routes():
    """Keep routes registered on respx's global router from leaking between tests."""
    respx.mock.snapshot()
    yield
    respx.mock.rollback()


@pytest.fixture
def settings():
    return Settings(_env_file=None, grafana_host=GRAFANA_HOST, grafana_api_key="grafana-key")


@pytest.fixture
def dashboard_payload():
    """Current-shape dashboard: 5 panels across 2 rows."""
    return {
        "meta": {"slug": "graphite-carbon-metrics"},
        "dashboard": {
            "title": "Graphite Carbon Metrics",
            "rows": [
                {
                    "panels": [
                        {"id": 11, "title": "$host CPU Usage"},
                        {"id": 12, "title": "Memory Free"},
                        {"id": 13, "title": "Swap Usage"},
                    ]
                },
                {
                    "panels": [
                        {"id": 21, "title": "memory total"},
                        {"id": 22, "title": "Disk IO"},
                    ]
                },
            ],
            "templating": {
                "list": [
                    {"name": "host", "current": {"text": "web-01", "value": "web-01"}},
                ]
            },
        },
    }


@pytest.fixture
def legacy_dashboard_payload():
    """Older shape: definition under ``model``."""
    return {
        "model": {
            "rows": [
                {"panels": [{"id": 1, "title": "Requests"}, {"id": 2, "title": "Errors"}]},
            ],
            "templating": [
                {"name": "env", "current": {"text": "prod"}},
            ],
        }
    }

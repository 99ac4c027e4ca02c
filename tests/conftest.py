# tests/conftest.py
from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from barometer.main import app
from barometer.normalizers import get_default_normalizer
from barometer.repositories import ObservationRepository
from barometer.routers.observations import get_repository


@pytest.fixture
def normalizer():
    return get_default_normalizer()


# --- Fake HTTP layer for the fetcher ---
def _fake_response(status_code: int = 200, payload=None, json_error: bool = False) -> Mock:
    m = Mock()
    m.status_code = status_code
    if json_error:
        m.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
    else:
        m.json.return_value = payload
    return m


@pytest.fixture
def fake_session():
    """
    Returns a factory: fake_session(status_code=..., payload=..., json_error=..., exc=...)
    builds a session whose .get() answers once with that response (or raises `exc`).
    """
    def _make(status_code: int = 200, payload=None, json_error: bool = False, exc: Exception | None = None):
        s = Mock(spec=requests.Session)
        if exc is not None:
            s.get.side_effect = exc
        else:
            s.get.return_value = _fake_response(status_code, payload, json_error)
        return s
    return _make


# --- Backend app with a controllable repository ---
@pytest.fixture
def repository():
    return ObservationRepository.from_records([
        {"NUTS": "AT13", "DISTRICT_CODE": 91900, "REF_YEAR": 1872, "REF_DATE": 187205,
         "P": "990.9", "P_MAX": "1003.2", "P_MIN": "981.2"},
        {"NUTS": "AT13", "DISTRICT_CODE": 91900, "REF_YEAR": 1872, "REF_DATE": 187206, "P": 991.6},
    ])


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

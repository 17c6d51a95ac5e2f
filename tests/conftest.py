from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from showing_service import config, logging_service
from showing_service.main import app
from showing_service.storage import ShowingCatalogue, catalogue as app_catalogue


@pytest.fixture
def catalogue():
    """Fresh in-memory catalogue for each test"""
    return ShowingCatalogue()


@pytest.fixture
def film(catalogue):
    return catalogue.create_film("Star Wars", "Sci-Fi", "A long time ago...", 120)


@pytest.fixture
def start():
    return datetime(2023, 10, 25, 18, 0)


@pytest.fixture
def actions_log(tmp_path, monkeypatch):
    log_file = tmp_path / "user_actions.log"
    monkeypatch.setattr(logging_service, "LOG_FILE", log_file)
    return log_file


@pytest.fixture
def client(actions_log, monkeypatch):
    """API client over the shared catalogue, cleared before and after each test"""
    monkeypatch.setattr(config, "PERSIST", False)
    app_catalogue.clear()
    yield TestClient(app)
    app_catalogue.clear()

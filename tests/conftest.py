"""Pytest fixtures for Spadebid integration tests."""
import pytest

from spadebid.server import app as app_module
from spadebid.server.config import GameConfig


@pytest.fixture
def app():
    """Create Flask app for testing."""
    app_module.app.config.update({
        'TESTING': True,
        'GAME_CONFIG': GameConfig(ai_autoplay=False),
    })
    app_module.current_engine = None
    app_module.current_scheduler = None
    yield app_module.app
    if app_module.current_scheduler:
        app_module.current_scheduler.cancel()


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def new_game(client):
    """Create a new game and return the response data."""
    response = client.post('/api/game/new', json={'name': 'Alice'})
    assert response.status_code == 200
    return response.get_json()

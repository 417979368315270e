import os
import sys
import pytest

# Ensure the backend root (containing the `kiosk` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from kiosk import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = '*'
    REALTIME_NAMESPACE = '/ws'
    REALTIME_CHANNEL = 'game_updates'
    LEADERBOARD_SIZE = 10
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import kiosk.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(flask_app):
    # Service-level tests call into the database without an explicit app
    yield flask_app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def make_player(flask_app):
    from kiosk.services.players import register_player

    def _make(name='Test', email=None, phone='555-1234'):
        email = email or f"{name.lower().replace(' ', '')}@example.com"
        return register_player(name, email, phone)

    return _make


@pytest.fixture()
def make_spin(flask_app):
    from kiosk.services.spins import create_spin

    def _make(player, value=1_000_000, created_at=None, **reels):
        values = {name: value for name in ('zillow', 'realtor', 'homes', 'google', 'smart_sign')}
        values.update(reels)
        spin = create_spin(player.id, values)
        if created_at is not None:
            spin.created_at = created_at
            db.session.commit()
        return spin

    return _make

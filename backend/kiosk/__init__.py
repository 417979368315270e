from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(cors_allowed_origins='*', async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from kiosk.errors import ValidationError, NotFoundError

    @flask_app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return jsonify({'errors': exc.messages}), 422

    @flask_app.errorhandler(NotFoundError)
    def handle_not_found(exc):
        return jsonify({'error': exc.message}), 404

    from kiosk.api.kiosk import kiosk
    # Tablet and TV clients use the /api base; bare paths serve LAN tools
    flask_app.register_blueprint(kiosk, url_prefix='/api')
    flask_app.register_blueprint(kiosk, url_prefix='', name='kiosk_root')

    from kiosk.socketio_events import register_socketio_handlers
    register_socketio_handlers(flask_app.config.get('REALTIME_NAMESPACE', '/ws'))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from kiosk.services import game_state
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            game_state.current()
            print('Database has been reset and the game state initialized!')

    @click.command('reset-session')
    def reset_session_command():
        """Forces the kiosk session back to idle."""
        from kiosk.services import game_state
        with flask_app.app_context():
            state = game_state.reset()
            print(f'Game state is now {state.state}')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(reset_session_command)

    return flask_app

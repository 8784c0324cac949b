from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(raw):
    origins = [o.strip() for o in (raw or '*').split(',') if o.strip()]
    if not origins or '*' in origins:
        return '*'
    return origins


def get_coordinator():
    """The coordinator that owns every session of the current app."""
    return current_app.extensions['lasertag']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from lasertag.services.games import GameCoordinator, GameRules
    from lasertag.services.games.broadcast import SocketIOGateway
    from lasertag.services.games.scheduler import BackgroundScheduler

    rules = GameRules.from_config(flask_app.config)
    flask_app.extensions['lasertag'] = GameCoordinator(
        gateway=SocketIOGateway(socketio),
        scheduler=BackgroundScheduler(socketio, logger=flask_app.logger),
        rules=rules,
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from lasertag.main import main
    flask_app.register_blueprint(main)

    from lasertag.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from lasertag.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    flask_app.logger.info(
        f"[config] capacity={rules.max_players} min_players={rules.min_players} "
        f"lives={rules.starting_lives} reload_ms={rules.reload_ms} end_on_win={rules.end_game_on_win}"
    )
    return flask_app

from flask import Blueprint, jsonify

from lasertag import get_coordinator
from lasertag.services.games.commands import CreateGame
from lasertag.services.games.errors import CodeGenerationFailed, SessionNotFound


games = Blueprint('games', __name__)


@games.route('/create', methods=['POST'])
def create_game():
    """Open a new lobby without a socket; the creator watches it later via watch_game."""
    try:
        code = get_coordinator().dispatch(CreateGame())
    except CodeGenerationFailed as exc:
        return jsonify({'error': str(exc)}), 503
    return jsonify({
        'message': 'New game created!',
        'game_code': code
    }), 201


@games.route('/', methods=['GET'])
def list_games():
    return jsonify(get_coordinator().list_sessions())


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    try:
        payload = get_coordinator().snapshot(game_code)
    except SessionNotFound as exc:
        return jsonify({'error': str(exc)}), 404
    return jsonify(payload)

import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list; '*' allows every origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Session capacity and start threshold
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '10'))
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '4'))
    # Combat tuning
    STARTING_LIVES = int(os.environ.get('STARTING_LIVES', '5'))
    MARKER_ID_MAX = int(os.environ.get('MARKER_ID_MAX', '14'))
    RELOAD_MS = int(os.environ.get('RELOAD_MS', '2000'))
    HIT_SCORE = int(os.environ.get('HIT_SCORE', '100'))
    BOMB_COST = int(os.environ.get('BOMB_COST', '400'))
    BOMB_DAMAGE = int(os.environ.get('BOMB_DAMAGE', '2'))
    # Session codes
    GAME_CODE_LENGTH = int(os.environ.get('GAME_CODE_LENGTH', '6'))
    GAME_CODE_RETRIES = int(os.environ.get('GAME_CODE_RETRIES', '100'))
    # Lifecycle policy: 1 enables, 0 disables
    END_GAME_ON_WIN = int(os.environ.get('END_GAME_ON_WIN', '1'))
    REMOVE_EMPTY_SESSIONS = int(os.environ.get('REMOVE_EMPTY_SESSIONS', '1'))
    # Period of game_time broadcasts (sec). 0 disables.
    GAME_CLOCK_INTERVAL_SEC = int(os.environ.get('GAME_CLOCK_INTERVAL_SEC', '1'))

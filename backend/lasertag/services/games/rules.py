from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    """Tunable constants for a session, read once from the app config."""

    max_players: int = 10
    min_players: int = 4
    starting_lives: int = 5
    marker_id_max: int = 14
    reload_ms: int = 2000
    hit_score: int = 100
    bomb_cost: int = 400
    bomb_damage: int = 2
    code_length: int = 6
    code_retries: int = 100
    end_game_on_win: bool = True
    remove_empty_sessions: bool = True
    clock_interval_sec: int = 1

    @property
    def reload_seconds(self) -> float:
        return self.reload_ms / 1000.0

    @classmethod
    def from_config(cls, cfg) -> 'GameRules':
        return cls(
            max_players=int(cfg.get('MAX_PLAYERS', 10)),
            min_players=int(cfg.get('MIN_PLAYERS', 4)),
            starting_lives=int(cfg.get('STARTING_LIVES', 5)),
            marker_id_max=int(cfg.get('MARKER_ID_MAX', 14)),
            reload_ms=int(cfg.get('RELOAD_MS', 2000)),
            hit_score=int(cfg.get('HIT_SCORE', 100)),
            bomb_cost=int(cfg.get('BOMB_COST', 400)),
            bomb_damage=int(cfg.get('BOMB_DAMAGE', 2)),
            code_length=int(cfg.get('GAME_CODE_LENGTH', 6)),
            code_retries=int(cfg.get('GAME_CODE_RETRIES', 100)),
            end_game_on_win=bool(int(cfg.get('END_GAME_ON_WIN', 1))),
            remove_empty_sessions=bool(int(cfg.get('REMOVE_EMPTY_SESSIONS', 1))),
            clock_interval_sec=int(cfg.get('GAME_CLOCK_INTERVAL_SEC', 1)),
        )

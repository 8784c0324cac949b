class GameError(Exception):
    """Base for every rejection reported back to the issuing connection."""

    message = 'Something went wrong'

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(GameError):
    pass


class PreconditionError(GameError):
    pass


class CodeGenerationFailed(GameError):
    message = 'Could not allocate a game code, please try again'


class SessionNotFound(PreconditionError):
    message = 'Game not found'


class SessionAlreadyStarted(PreconditionError):
    message = 'Game has already started'


class SessionFull(PreconditionError):
    message = 'Game is full'


class NotEnoughPlayers(PreconditionError):
    message = 'Not enough players to start'


class ShooterNotFound(PreconditionError):
    message = 'You are not a player in this game'


class TargetNotFound(PreconditionError):
    message = 'Target not found'


class ShooterReloading(PreconditionError):
    message = 'Reloading, wait before firing again'


class CannotShootSelf(PreconditionError):
    message = 'You cannot shoot yourself'


class PlayerEliminated(PreconditionError):
    message = 'You have been eliminated'


class InsufficientScore(PreconditionError):
    message = 'Not enough points to use the bomb'


class InvalidMarkerId(ValidationError):
    message = 'Marker ID must be a whole number'


class MarkerIdInUse(ValidationError):
    message = 'Marker ID is already in use'


class NoNamesAvailable(ValidationError):
    message = 'No player names available'

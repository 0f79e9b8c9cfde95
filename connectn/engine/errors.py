class ConnectNError(ValueError):
    """Base class for every engine contract violation."""


class ConfigurationError(ConnectNError):
    """Invalid engine or board parameters (negative depth, bad mistake rate...)."""


class InvalidMoveError(ConnectNError):
    """drop() on a full column, an out-of-range column, or with a non-player piece."""


class InvalidBoardError(ConnectNError):
    """A wire grid that cannot be turned into a legal Board."""

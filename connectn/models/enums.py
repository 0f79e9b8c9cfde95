from enum import StrEnum

class Piece(StrEnum):
    EMPTY = "_"
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Piece":
        if self is Piece.X:
            return Piece.O
        if self is Piece.O:
            return Piece.X
        raise ValueError("EMPTY has no opponent")

class Heuristic(StrEnum):
    CENTER = "center"
    STREAK = "streak"

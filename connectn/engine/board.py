from typing import List, Optional, Sequence, Tuple

from connectn.engine.constants import DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_WIN_CONDITION
from connectn.engine.errors import ConfigurationError, InvalidMoveError, InvalidBoardError
from connectn.models.enums import Piece

# Horizontal, Vertical, Diagonal \ (down-right), Diagonal / (up-right)
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (-1, 1)]

PLAYERS = (Piece.X, Piece.O)

# Symbols a client may send for an empty cell
EMPTY_SYMBOLS = {Piece.EMPTY.value, "", None}


class Board:
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 win_condition: int = DEFAULT_WIN_CONDITION):
        """
        Board uses (row, col) indexing.
        Row 0 is the TOP of the board.
        Row height-1 is the BOTTOM of the board.
        Values: "_"=Empty, "X", "O"
        """
        if width < 1 or height < 1:
            raise ConfigurationError(f"Board must be at least 1x1, got {width}x{height}")
        if win_condition < 2:
            raise ConfigurationError(f"win_condition must be >= 2, got {win_condition}")

        self.width = width
        self.height = height
        self.win_condition = win_condition
        self.cells = [[Piece.EMPTY for _ in range(width)] for _ in range(height)]
        # One bit per cell (row * width + col) for each player; used as cache key
        self._masks = {Piece.X: 0, Piece.O: 0}

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[Optional[str]]],
                  win_condition: int = DEFAULT_WIN_CONDITION) -> "Board":
        """
        Builds a Board from a wire grid (list of rows, Row 0 = Top).
        Rejects ragged grids, unknown symbols and pieces floating over empty cells.
        """
        if not grid or not grid[0]:
            raise InvalidBoardError("Board grid must have at least one row and one column")

        width = len(grid[0])
        board = cls(width, len(grid), win_condition)

        for r, row in enumerate(grid):
            if len(row) != width:
                raise InvalidBoardError(f"Row {r} has {len(row)} cells, expected {width}")
            for c, val in enumerate(row):
                if val in EMPTY_SYMBOLS:
                    continue
                try:
                    piece = Piece(val)
                except ValueError:
                    raise InvalidBoardError(f"Unknown symbol {val!r} at row {r}, column {c}")
                board._place(r, c, piece)

        # Gravity: once a column has a piece, everything below it must be filled
        for c in range(width):
            seen_piece = False
            for r in range(board.height):
                if board.cells[r][c] != Piece.EMPTY:
                    seen_piece = True
                elif seen_piece:
                    raise InvalidBoardError(f"Floating piece above empty cell ({r}, {c})")

        return board

    def to_grid(self) -> List[List[str]]:
        return [[cell.value for cell in row] for row in self.cells]

    def clone(self) -> "Board":
        copy = Board.__new__(Board)
        copy.width = self.width
        copy.height = self.height
        copy.win_condition = self.win_condition
        copy.cells = [row[:] for row in self.cells]
        copy._masks = dict(self._masks)
        return copy

    def get_valid_moves(self) -> List[int]:
        """Returns the column indices whose top cell is empty, ascending."""
        return [c for c in range(self.width) if self.cells[0][c] == Piece.EMPTY]

    def is_valid_move(self, col: int) -> bool:
        if col < 0 or col >= self.width:
            return False
        return self.cells[0][col] == Piece.EMPTY

    def is_full(self) -> bool:
        return all(self.cells[0][c] != Piece.EMPTY for c in range(self.width))

    def drop(self, col: int, piece: str) -> None:
        """
        Drops a piece into the specified column.
        Raises InvalidMoveError (and leaves the board untouched) if the move is illegal.
        """
        if piece not in PLAYERS:
            raise InvalidMoveError(f"Cannot drop {piece!r}: not a player piece")
        if not self.is_valid_move(col):
            raise InvalidMoveError(f"Invalid move: column {col}")

        # Gravity: Find the lowest empty row
        for r in range(self.height - 1, -1, -1):
            if self.cells[r][col] == Piece.EMPTY:
                self._place(r, col, Piece(piece))
                return

    def _place(self, r: int, c: int, piece: Piece):
        self.cells[r][c] = piece
        self._masks[piece] |= 1 << (r * self.width + c)

    def get_at(self, row: int, col: int) -> Piece:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.height}x{self.width} board")
        return self.cells[row][col]

    def check_win(self) -> Optional[Piece]:
        """
        Scans every cell (row-major) and returns the first piece that starts a
        run of win_condition in any direction, or None.
        """
        k = self.win_condition
        for r in range(self.height):
            for c in range(self.width):
                piece = self.cells[r][c]
                if piece == Piece.EMPTY:
                    continue
                for dr, dc in DIRECTIONS:
                    end_r, end_c = r + dr * (k - 1), c + dc * (k - 1)
                    if not (0 <= end_r < self.height and 0 <= end_c < self.width):
                        continue
                    if all(self.cells[r + dr * i][c + dc * i] == piece for i in range(1, k)):
                        return piece
        return None

    def encode(self) -> Tuple[int, int, int, int, int]:
        """Canonical key: structurally equal boards always encode identically."""
        return self.width, self.height, self.win_condition, self._masks[Piece.X], self._masks[Piece.O]

    # --- Formatting for Console / Logs ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {Piece.EMPTY: ".", Piece.X: "X", Piece.O: "O"}
        header = " " + " ".join(str(i % 10) for i in range(self.width))
        rows_str = []
        for r in range(self.height):
            row_cells = [symbols[self.cells[r][c]] for c in range(self.width)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.encode() == other.encode()

    def __repr__(self):
        return f"Board({self.width}x{self.height}, win={self.win_condition})"

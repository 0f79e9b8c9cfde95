"""
Minimax decision engine for Connect-N.

Alpha-beta search over cloned Boards with a transposition cache keyed by
(board encoding, remaining depth, maximizing flag). Only exact scores are
cached: a value produced by a cut-off is a bound, not a score, and is not
stored, so a cache hit is always safe to return.
"""

import logging
import math
import random
import time
from typing import List, NamedTuple, Optional

from connectn.engine.board import Board, DIRECTIONS
from connectn.engine.constants import (
    WIN_SCORE, CENTER_WEIGHT, STREAK_COMPLETE, STREAK_WEIGHTS, NO_MOVE,
)
from connectn.engine.errors import ConfigurationError
from connectn.engine.transposition import TranspositionTable
from connectn.models.enums import Piece, Heuristic

logger = logging.getLogger(__name__)


class RankedMove(NamedTuple):
    column: int
    score: int


class ConnectNAI:
    def __init__(
        self,
        ai_piece: str = Piece.O,
        depth: int = 4,
        mistake_rate: float = 0.0,
        name: str = "AI",
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        heuristic: str = Heuristic.CENTER,
        cache_size: Optional[int] = None,
    ):
        if ai_piece not in (Piece.X, Piece.O):
            raise ConfigurationError(f"ai_piece must be 'X' or 'O', got {ai_piece!r}")
        if depth < 0:
            raise ConfigurationError(f"depth must be a non-negative integer, got {depth!r}")
        if not (0.0 <= mistake_rate <= 1.0):
            raise ConfigurationError(f"mistake_rate must be within [0, 1], got {mistake_rate!r}")
        if cache_size is not None and cache_size < 1:
            raise ConfigurationError(f"cache_size must be positive, got {cache_size!r}")
        try:
            self.heuristic = Heuristic(heuristic)
        except ValueError:
            raise ConfigurationError(f"Unknown heuristic: {heuristic!r}")

        self.ai_piece = Piece(ai_piece)
        self.player_piece = self.ai_piece.opponent
        self.depth = depth
        self.mistake_rate = mistake_rate
        self.name = name
        self.rng = rng if rng is not None else random.Random(seed)
        self.tt = TranspositionTable(max_size=cache_size)
        self.nodes = 0
        self.last_reasoning = ""

    # --- Public API ---

    def choose_move(self, board: Board) -> int:
        """Returns the column to play, or NO_MOVE (-1) if the board is full."""
        valid = board.get_valid_moves()
        if not valid:
            self.last_reasoning = "Board is full, no move available."
            return NO_MOVE

        # Mistake branch: bypasses search entirely
        if self.mistake_rate > 0 and self.rng.random() < self.mistake_rate:
            move = self.rng.choice(valid)
            self.last_reasoning = f"{self.name} played a random column ({move})."
            logger.debug("%s mistake: random column %d from %s", self.name, move, valid)
            return move

        scored = self._score_moves(board, valid)

        best_move, best_score = scored[0]
        for col, score in scored[1:]:
            # Strictly greater: ties keep the lowest column
            if score > best_score:
                best_move, best_score = col, score

        self.last_reasoning = (
            f"{self.name} chose column {best_move} (score {best_score}) "
            f"after searching {self.nodes} positions at depth {self.depth}."
        )
        return best_move

    def get_ranked_moves(self, board: Board, top_k: Optional[int] = None) -> List[RankedMove]:
        """
        Scores every valid move like choose_move's search and returns the best
        top_k, highest score first (ties: lowest column first).
        Never takes the mistake branch.
        """
        if top_k is not None and top_k < 0:
            raise ConfigurationError(f"top_k must be >= 0, got {top_k}")

        valid = board.get_valid_moves()
        if not valid:
            return []

        ranked = sorted(self._score_moves(board, valid), key=lambda m: (-m.score, m.column))
        return ranked if top_k is None else ranked[:top_k]

    def minimax(self, board: Board, depth: int, alpha: float, beta: float, maximizing: bool) -> int:
        self.nodes += 1

        key = (board.encode(), depth, maximizing)
        if (cached := self.tt.get(key)) is not None:
            return cached

        winner = board.check_win()
        if winner is not None or depth <= 0 or board.is_full():
            score = self.evaluate(board, winner, depth)
            self.tt.put(key, score)
            return score

        alpha_orig, beta_orig = alpha, beta

        if maximizing:
            value = -math.inf
            for col in board.get_valid_moves():
                child = board.clone()
                child.drop(col, self.ai_piece)
                value = max(value, self.minimax(child, depth - 1, alpha, beta, False))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break  # Beta cut-off
        else:
            value = math.inf
            for col in board.get_valid_moves():
                child = board.clone()
                child.drop(col, self.player_piece)
                value = min(value, self.minimax(child, depth - 1, alpha, beta, True))
                beta = min(beta, value)
                if beta <= alpha:
                    break  # Alpha cut-off

        if alpha_orig < value < beta_orig:
            self.tt.put(key, value)
        return value

    def evaluate(self, board: Board, winner: Optional[str], depth_left: int) -> int:
        if winner == self.ai_piece:
            return WIN_SCORE + depth_left
        if winner == self.player_piece:
            return -WIN_SCORE - depth_left

        # Even widths favour the upper-middle column
        center = board.width // 2
        score = 0
        for r in range(board.height):
            cell = board.cells[r][center]
            if cell == self.ai_piece:
                score += CENTER_WEIGHT
            elif cell == self.player_piece:
                score -= CENTER_WEIGHT

        if self.heuristic == Heuristic.STREAK:
            score += self._streak_score(board)
        return score

    # --- Internals ---

    def _score_moves(self, board: Board, valid: List[int]) -> List[RankedMove]:
        """Full-window score of every candidate, in ascending column order."""
        self.nodes = 0
        hits_before = self.tt.hits
        start_time = time.time()

        scored = []
        for col in valid:
            child = board.clone()
            child.drop(col, self.ai_piece)
            score = self.minimax(child, max(self.depth - 1, 0), -math.inf, math.inf, False)
            scored.append(RankedMove(col, score))

        duration = round(time.time() - start_time, 3)
        logger.debug(
            "%s searched %d nodes (cache hits: %d, cached: %d) in %.3fs: %s",
            self.name, self.nodes, self.tt.hits - hits_before, len(self.tt), duration, scored,
        )
        return scored

    def _streak_score(self, board: Board) -> int:
        score = 0
        for r in range(board.height):
            for c in range(board.width):
                piece = board.cells[r][c]
                if piece == Piece.EMPTY:
                    continue
                sign = 1 if piece == self.ai_piece else -1
                for dr, dc in DIRECTIONS:
                    score += sign * self._count_streak(board, r, c, dr, dc)
        return score

    @staticmethod
    def _count_streak(board: Board, row: int, col: int, dr: int, dc: int) -> int:
        piece = board.cells[row][col]
        k = board.win_condition
        streak = 1
        open_ends = 0

        for sign in (1, -1):
            for i in range(1, k):
                r, c = row + sign * i * dr, col + sign * i * dc
                if r < 0 or r >= board.height or c < 0 or c >= board.width:
                    break
                cell = board.cells[r][c]
                if cell == piece:
                    streak += 1
                    continue
                if cell == Piece.EMPTY:
                    open_ends += 1
                break

        if streak >= k:
            return STREAK_COMPLETE
        if open_ends == 0:
            return 0
        return STREAK_WEIGHTS.get(k - streak, 0)


# --- Stateless entry points (one engine, one empty cache per call) ---

def choose_move(board: Board, ai_piece: str, depth: int, mistake_rate: float = 0.0,
                rng: Optional[random.Random] = None, **engine_options) -> int:
    ai = ConnectNAI(ai_piece, depth, mistake_rate, rng=rng, **engine_options)
    return ai.choose_move(board)


def get_ranked_moves(board: Board, ai_piece: str, depth: int, top_k: Optional[int] = None,
                     **engine_options) -> List[RankedMove]:
    ai = ConnectNAI(ai_piece, depth, **engine_options)
    return ai.get_ranked_moves(board, top_k)

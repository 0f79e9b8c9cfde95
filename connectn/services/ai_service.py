"""
AI Service - request-level glue between the HTTP layer and the engine.

Resolves request parameters (explicit fields > difficulty preset > config
defaults), rebuilds the Board from the wire grid, and runs a fresh
ConnectNAI per request so no transposition cache is shared between requests.
"""

import logging
import time
from typing import List

from connectn.core.config import Settings, settings as default_settings
from connectn.engine.ai import ConnectNAI, RankedMove
from connectn.engine.board import Board
from connectn.schemas.ai_schema import (
    MoveRequest, MoveResponse, HintResponse, RankedMoveResponse, DifficultyResponse,
)

logger = logging.getLogger(__name__)


class AIService:
    """Builds engines from requests and answers move/hint queries"""

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    def build_ai(self, request: MoveRequest) -> ConnectNAI:
        engine_cfg = self.settings.engine
        depth, mistake_rate = engine_cfg.depth, engine_cfg.mistake_rate
        name, heuristic = engine_cfg.name, engine_cfg.heuristic

        if request.difficulty:
            preset = self.settings.get_difficulty(request.difficulty)
            depth, mistake_rate = preset.depth, preset.mistake_rate
            name = preset.name or name
            heuristic = preset.heuristic or heuristic

        if request.ai_depth is not None:
            depth = request.ai_depth
        if request.mistake_rate is not None:
            mistake_rate = request.mistake_rate
        if request.ai_name:
            name = request.ai_name

        return ConnectNAI(
            ai_piece=request.ai_piece,
            depth=depth,
            mistake_rate=mistake_rate,
            name=name,
            heuristic=heuristic,
            cache_size=engine_cfg.cache_size,
        )

    def build_board(self, request: MoveRequest) -> Board:
        win_condition = request.win_condition or self.settings.board.win_condition
        return Board.from_grid(request.board, win_condition)

    def get_move(self, request: MoveRequest) -> MoveResponse:
        ai = self.build_ai(request)
        board = self.build_board(request)
        top_k = self._top_k(request)

        start_time = time.time()
        move = ai.choose_move(board)
        explanation = ai.last_reasoning
        ranked = ai.get_ranked_moves(board, top_k)
        duration = round(time.time() - start_time, 3)

        logger.info("%s (%s, depth %d) plays column %d in %.3fs",
                    ai.name, ai.ai_piece, ai.depth, move, duration)

        return MoveResponse(
            move=move,
            explanation=explanation,
            ranked_moves=self._to_response(ranked),
            duration=duration,
        )

    def get_hints(self, request: MoveRequest) -> HintResponse:
        ai = self.build_ai(request)
        board = self.build_board(request)
        ranked = ai.get_ranked_moves(board, self._top_k(request))
        return HintResponse(ranked_moves=self._to_response(ranked))

    def list_difficulties(self) -> List[DifficultyResponse]:
        return [
            DifficultyResponse(id=key, label=val.label, depth=val.depth, mistake_rate=val.mistake_rate)
            for key, val in self.settings.difficulties.items()
        ]

    def _top_k(self, request: MoveRequest) -> int:
        return request.top_k if request.top_k is not None else self.settings.engine.top_k

    @staticmethod
    def _to_response(ranked: List[RankedMove]) -> List[RankedMoveResponse]:
        return [RankedMoveResponse(move=m.column, score=m.score) for m in ranked]


# Singleton instance
ai_service = AIService()

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class MoveRequest(BaseModel):
    # Accept both camelCase (frontend) and snake_case; ignore unknown fields
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    board: List[List[Optional[str]]]
    ai_piece: str = Field("X", alias="aiPiece")

    # Unset fields fall back to the difficulty preset, then to the engine config
    ai_depth: Optional[int] = Field(None, alias="aiDepth")
    mistake_rate: Optional[float] = Field(None, alias="mistakeRate")
    ai_name: Optional[str] = Field(None, alias="aiName")
    win_condition: Optional[int] = Field(None, alias="winCondition")
    top_k: Optional[int] = Field(None, alias="topK")
    difficulty: Optional[str] = None


class RankedMoveResponse(BaseModel):
    move: int
    score: int


class MoveResponse(BaseModel):
    move: int
    explanation: str
    ranked_moves: List[RankedMoveResponse] = Field(default_factory=list, serialization_alias="rankedMoves")
    duration: float = 0.0


class HintResponse(BaseModel):
    ranked_moves: List[RankedMoveResponse] = Field(default_factory=list, serialization_alias="rankedMoves")


class DifficultyResponse(BaseModel):
    id: str
    label: str
    depth: int
    mistake_rate: float = Field(serialization_alias="mistakeRate")

import unittest

from connectn.core.config import Settings, EngineConfig, DifficultyConfig
from connectn.models.enums import Heuristic, Piece
from connectn.schemas.ai_schema import MoveRequest
from connectn.services.ai_service import AIService


def make_service():
    settings = Settings(
        engine=EngineConfig(name="Default", depth=3, mistake_rate=0.2, top_k=2, cache_size=1000),
        difficulties={
            "easy": DifficultyConfig(label="Easy", depth=1, mistake_rate=0.5),
            "hard": DifficultyConfig(label="Hard", name="Phantom", depth=5, mistake_rate=0.0, heuristic="streak"),
        },
    )
    return AIService(settings)


def request(**fields):
    return MoveRequest(board=[["_"] * 7 for _ in range(6)], **fields)


class TestBuildAI(unittest.TestCase):
    def test_engine_defaults(self):
        ai = make_service().build_ai(request(aiPiece="O"))
        self.assertEqual(ai.ai_piece, Piece.O)
        self.assertEqual(ai.depth, 3)
        self.assertEqual(ai.mistake_rate, 0.2)
        self.assertEqual(ai.name, "Default")
        self.assertEqual(ai.tt.max_size, 1000)

    def test_preset_overrides_defaults(self):
        ai = make_service().build_ai(request(difficulty="hard"))
        self.assertEqual(ai.depth, 5)
        self.assertEqual(ai.mistake_rate, 0.0)
        self.assertEqual(ai.name, "Phantom")
        self.assertEqual(ai.heuristic, Heuristic.STREAK)

    def test_preset_without_name_keeps_default_name(self):
        ai = make_service().build_ai(request(difficulty="easy"))
        self.assertEqual(ai.name, "Default")
        self.assertEqual(ai.heuristic, Heuristic.CENTER)

    def test_explicit_fields_override_preset(self):
        ai = make_service().build_ai(request(difficulty="hard", aiDepth=2, mistakeRate=0.4, aiName="Bob"))
        self.assertEqual((ai.depth, ai.mistake_rate, ai.name), (2, 0.4, "Bob"))

    def test_zero_mistake_rate_is_not_treated_as_unset(self):
        ai = make_service().build_ai(request(mistakeRate=0.0, aiDepth=0))
        self.assertEqual(ai.mistake_rate, 0.0)
        self.assertEqual(ai.depth, 0)


class TestQueries(unittest.TestCase):
    def test_get_move_uses_config_top_k(self):
        response = make_service().get_move(request(aiPiece="O", mistakeRate=0.0))
        self.assertEqual(len(response.ranked_moves), 2)
        self.assertIn(response.move, range(7))
        self.assertGreaterEqual(response.duration, 0.0)

    def test_hints(self):
        response = make_service().get_hints(request(aiPiece="O", topK=7))
        self.assertEqual(sorted(m.move for m in response.ranked_moves), list(range(7)))

    def test_list_difficulties(self):
        ids = [d.id for d in make_service().list_difficulties()]
        self.assertEqual(ids, ["easy", "hard"])


if __name__ == '__main__':
    unittest.main()

import unittest
from connectn.engine.transposition import TranspositionTable


class TestTranspositionTable(unittest.TestCase):
    def test_get_put_and_counters(self):
        tt = TranspositionTable()
        self.assertIsNone(tt.get("a"))
        tt.put("a", 12)
        self.assertEqual(tt.get("a"), 12)
        self.assertEqual(tt.hits, 1)
        self.assertEqual(tt.misses, 1)
        self.assertIn("a", tt)
        self.assertEqual(len(tt), 1)

    def test_zero_score_is_a_hit(self):
        tt = TranspositionTable()
        tt.put("draw", 0)
        self.assertEqual(tt.get("draw"), 0)
        self.assertEqual(tt.hits, 1)

    def test_unbounded_by_default(self):
        tt = TranspositionTable()
        for i in range(1000):
            tt.put(i, i)
        self.assertEqual(len(tt), 1000)

    def test_lru_eviction(self):
        tt = TranspositionTable(max_size=2)
        tt.put("a", 1)
        tt.put("b", 2)
        tt.get("a")  # "b" is now least recently used
        tt.put("c", 3)

        self.assertIn("a", tt)
        self.assertNotIn("b", tt)
        self.assertIn("c", tt)
        self.assertEqual(len(tt), 2)

    def test_reset(self):
        tt = TranspositionTable()
        tt.put("a", 1)
        tt.get("a")
        tt.reset()
        self.assertEqual(len(tt), 0)
        self.assertEqual(tt.hits, 0)
        self.assertEqual(tt.misses, 0)


if __name__ == '__main__':
    unittest.main()

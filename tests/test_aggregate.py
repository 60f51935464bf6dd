import itertools
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.tuning import AggregationTuning  # noqa: E402
from app.matching import calculate_match_score  # noqa: E402
from app.schemas.tailoring import MatchRecord, Requirement  # noqa: E402


def _record(text: str, importance: str = "medium", score: int = 0) -> MatchRecord:
    return MatchRecord(requirement=Requirement(text=text, importance=importance), score=score)


class AggregateScoreTests(unittest.TestCase):
    def test_empty_input_returns_floor(self):
        self.assertEqual(calculate_match_score([], []), 15)

    def test_full_coverage_is_clamped_to_ceiling(self):
        matched = [_record("Clear written communication", "high", 100), _record("Team leadership", "critical", 100)]
        self.assertEqual(calculate_match_score(matched, []), 95)

    def test_nothing_matched_returns_floor(self):
        missing = [_record("Python", "critical"), _record("Public speaking", "low")]
        self.assertEqual(calculate_match_score([], missing), 15)

    def test_domain_mismatch_caps_score(self):
        matched = [_record("Stakeholder communication", "critical", 90)]
        self.assertEqual(calculate_match_score(matched, [], has_domain_mismatch=True), 45)
        self.assertGreater(calculate_match_score(matched, []), 45)

    def test_weighted_coverage(self):
        matched = [_record("Stakeholder communication", "high", 80)]
        missing = [_record("Event planning", "medium")]
        # 0.8 * 2.5 / (2.5 + 1.5) = 0.5
        self.assertEqual(calculate_match_score(matched, missing), 50)

    def test_low_technical_coverage_is_penalized(self):
        matched = [_record("Stakeholder communication", "medium", 100), _record("Python scripting", "medium", 100)]
        missing = [_record("Kubernetes administration", "medium"), _record("AWS networking", "medium")]
        # weights: 1.5 + 2.25 matched; 3 + 3 missing -> 3.75 / 9.75 = 38; rate 0.33 -> x0.55
        self.assertEqual(calculate_match_score(matched, missing), 21)

    def test_critical_misses_scale_down(self):
        matched = [_record("Team leadership", "critical", 100)]
        missing = [_record("Budget ownership", "critical"), _record("Board reporting", "critical")]
        # 4 / 12 = 33 -> x0.6 = 20
        self.assertEqual(calculate_match_score(matched, missing), 20)

    def test_score_always_within_bounds(self):
        cfg = AggregationTuning()
        pool = [
            _record("Python services", "critical", 95),
            _record("Negotiation", "high", 72),
            _record("React frontend", "medium", 88),
            _record("Spanish", "low", 10),
            _record("Kubernetes", "critical", 0),
        ]
        for size in range(1, len(pool) + 1):
            for combo in itertools.combinations(pool, size):
                matched = [record for record in combo if record.score >= 70]
                missing = [record for record in combo if record.score < 70]
                for mismatch in (False, True):
                    score = calculate_match_score(matched, missing, mismatch, tuning=cfg)
                    self.assertGreaterEqual(score, cfg.score_floor)
                    self.assertLessEqual(score, cfg.score_ceiling)
                    if mismatch:
                        self.assertLessEqual(score, cfg.domain_mismatch_ceiling)


if __name__ == "__main__":
    unittest.main()

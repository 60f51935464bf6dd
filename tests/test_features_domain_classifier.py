import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.domain_classifier import (  # noqa: E402
    detect_domains,
    domains_overlap,
    requirement_set_domains,
    resume_domains,
    widen,
)
from app.schemas.tailoring import Requirement, RequirementSet, ResumeProfile  # noqa: E402


class DomainClassifierTests(unittest.TestCase):
    def test_sales_text_classifies_as_sales(self):
        domains = detect_domains("Own the sales pipeline and exceed quota attainment with an enterprise sales team")
        self.assertIn("sales", domains)
        self.assertNotIn("marketing", domains)

    def test_single_short_indicator_is_not_enough(self):
        self.assertEqual(detect_domains("We use HubSpot"), frozenset())
        self.assertIn("marketing", detect_domains("HubSpot and marketing automation"))

    def test_single_long_indicator_is_enough(self):
        self.assertEqual(detect_domains("Senior Software Engineer"), frozenset({"software"}))

    def test_empty_text_is_unclassified(self):
        self.assertEqual(detect_domains(""), frozenset())

    def test_overlap_rules(self):
        self.assertTrue(domains_overlap([], ["sales"]))
        self.assertTrue(domains_overlap(["sales"], []))
        self.assertFalse(domains_overlap(["sales"], [], permissive_unclassified=False))
        self.assertFalse(domains_overlap(["sales"], ["marketing"]))
        self.assertTrue(domains_overlap(["sales"], ["marketing"], widen_related=True))
        self.assertEqual(widen(["software"]), frozenset({"software", "frontend", "backend", "data"}))

    def test_resume_without_sections_falls_back_to_raw_text(self):
        profile = ResumeProfile(raw_text="Registered nurse focused on patient care in the ICU")
        self.assertEqual(resume_domains(profile), frozenset({"healthcare"}))

    def test_requirement_set_includes_title(self):
        requirements = RequirementSet(
            title="Financial Analyst",
            required=[Requirement(text="Build financial modeling for quarterly planning")],
        )
        self.assertEqual(requirement_set_domains(requirements), frozenset({"finance"}))


if __name__ == "__main__":
    unittest.main()

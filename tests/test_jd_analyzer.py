import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
TESTS_DIR = Path(__file__).resolve().parent
for path in (PROJECT_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app.ai.client import ModelClientError  # noqa: E402
from app.normalize.normalize_jd import (  # noqa: E402
    classify_importance,
    classify_requirement_type,
    extract_requirements_fallback,
)
from app.services.jd_analyzer import analyze_job_description  # noqa: E402
from fakes import FakeModelClient  # noqa: E402

JD_TEXT = (
    "Senior Backend Engineer\n"
    "Requirements:\n"
    "- 5+ years of experience building Python services\n"
    "- Must have strong PostgreSQL knowledge\n"
    "- Bachelor's degree in Computer Science\n"
    "- Familiar with Kubernetes\n"
)


class JDAnalyzerTests(unittest.IsolatedAsyncioTestCase):
    async def test_model_reply_is_normalized(self):
        reply = {
            "title": "  Staff Engineer ",
            "company": "",
            "required": [
                {"text": "Python", "type": "skill", "importance": "CRITICAL"},
                {"text": "python", "type": "skill", "importance": "high"},
                {"text": "Own on-call rotations", "type": "duty", "importance": "urgent"},
                {"text": "ok"},
            ],
            "preferred": ["Go experience"],
            "keywords": ["Python", "Go", "python", "gRPC"],
            "context": {"seniorityLevel": "Lead", "workStyle": "office", "teamSize": "8"},
        }
        client = FakeModelClient(jd_reply=json.dumps(reply))
        result = await analyze_job_description("irrelevant", client=client)

        self.assertEqual(result.title, "Staff Engineer")
        self.assertIsNone(result.company)
        self.assertEqual([req.text for req in result.required], ["Python", "Own on-call rotations"])
        self.assertEqual(result.required[0].importance, "critical")
        self.assertEqual((result.required[1].type, result.required[1].importance), ("other", "medium"))
        self.assertEqual(result.preferred[0].text, "Go experience")
        self.assertEqual(result.keywords, ["Python", "gRPC"])
        self.assertEqual(result.context.seniority_level, "lead")
        self.assertIsNone(result.context.work_style)
        self.assertEqual(result.context.team_size, "8")
        self.assertTrue(client.calls[0]["json_mode"])

    async def test_invalid_json_falls_back_to_extractor(self):
        result = await analyze_job_description(JD_TEXT, client=FakeModelClient(jd_reply="not json"))
        self.assertEqual(result, extract_requirements_fallback(JD_TEXT))

    async def test_empty_requirements_fall_back(self):
        reply = json.dumps({"title": "Engineer", "required": [], "preferred": []})
        result = await analyze_job_description(JD_TEXT, client=FakeModelClient(jd_reply=reply))
        self.assertEqual(len(result.all_requirements()), 4)

    async def test_model_errors_propagate(self):
        client = FakeModelClient(fail_on={"jd": ModelClientError("slow", kind="timeout")})
        with self.assertRaises(ModelClientError):
            await analyze_job_description(JD_TEXT, client=client)


class FallbackExtractorTests(unittest.TestCase):
    def test_bullets_split_into_required_and_preferred(self):
        result = extract_requirements_fallback(JD_TEXT)

        self.assertEqual(result.title, "Senior Backend Engineer")
        self.assertEqual(len(result.required), 2)
        self.assertEqual(len(result.preferred), 2)
        self.assertEqual(result.required[0].type, "experience")
        self.assertEqual(result.required[1].importance, "critical")
        self.assertEqual(result.preferred[0].type, "education")
        self.assertEqual(result.preferred[1].importance, "low")
        self.assertIn("python", result.keywords)

    def test_prose_lines_used_without_bullets(self):
        text = "About us\nWe build payments software.\nYou will design APIs for partners.\nok"
        result = extract_requirements_fallback(text)
        self.assertEqual(
            [req.text for req in result.all_requirements()],
            ["We build payments software.", "You will design APIs for partners."],
        )
        self.assertEqual(result.title, "We build payments software.")

    def test_empty_text(self):
        result = extract_requirements_fallback("")
        self.assertEqual(result.title, "Position")
        self.assertEqual(result.all_requirements(), [])

    def test_classifiers(self):
        self.assertEqual(classify_requirement_type("PMP certification preferred"), "certification")
        self.assertEqual(classify_requirement_type("Great attitude"), "other")
        self.assertEqual(classify_importance("Excellent communication"), "high")
        self.assertEqual(classify_importance("Nice attitude"), "medium")


if __name__ == "__main__":
    unittest.main()

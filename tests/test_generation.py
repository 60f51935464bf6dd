import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
TESTS_DIR = Path(__file__).resolve().parent
for path in (PROJECT_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app.core.config.tuning import GenerationTuning  # noqa: E402
from app.normalize.normalize_resume import parse_resume  # noqa: E402
from app.schemas.tailoring import (  # noqa: E402
    BulletEvidence,
    MatchRecord,
    Requirement,
    RequirementSet,
    ResumeProfile,
    SkillEvidence,
)
from app.services.cover_letter import (  # noqa: E402
    PLACEHOLDER_NAME,
    clean_cover_letter,
    generate_cover_letter,
    generate_quick_cover_letter,
    quick_tailored_resume,
    select_evidence,
)
from app.services.formatter import (  # noqa: E402
    build_tailored_resume,
    format_tailored_resume,
    jaccard_similarity,
    original_structure,
    prioritize_bullets,
)
from fakes import HUMANIZED_LETTER, FakeModelClient  # noqa: E402

RESUME_TEXT = (
    "Jane Doe\n"
    "jane@example.com\n"
    "Skills\n"
    "React, TypeScript\n"
    "Experience\n"
    "Senior Frontend Engineer | Acme Corp | 2019 - Present\n"
    "- Built React component library used by 40 teams across the company\n"
    "- Reduced bundle size by 35% through code splitting\n"
    "Frontend Developer | Beta Inc | 2016 - 2019\n"
    "- Developed ReactJS dashboards for 10,000 users\n"
    "Education\n"
    "B.S. Computer Science, University of Texas, 2016\n"
)

REQUIREMENTS = RequirementSet(
    title="Senior Frontend Engineer",
    company="Globex",
    required=[Requirement(text="Dashboards for large user bases", importance="high")],
    keywords=["React", "TypeScript"],
)


def _bullet_match(resume: ResumeProfile, exp_index: int, bullet_index: int, score: int) -> MatchRecord:
    experience = resume.experiences[exp_index]
    bullet = experience.bullets[bullet_index]
    return MatchRecord(
        requirement=Requirement(text="Dashboards for large user bases"),
        evidence=BulletEvidence(
            bullet=bullet, experience_title=experience.title, experience_company=experience.company
        ),
        score=score,
        match_type="semantic",
        evidence_text=bullet.text,
    )


class FormatterTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.resume = parse_resume(RESUME_TEXT)

    def test_matched_bullets_are_prioritized(self):
        bullets = prioritize_bullets(self.resume, [_bullet_match(self.resume, 1, 0, 85)])
        self.assertEqual(bullets[0].text, "Developed ReactJS dashboards for 10,000 users")
        self.assertEqual(bullets[0].experience, "Frontend Developer at Beta Inc")
        self.assertEqual(bullets[0].score, 85)
        self.assertEqual(len(bullets), 3)

    def test_jaccard_similarity(self):
        self.assertEqual(jaccard_similarity("a b c", "A B C"), 1.0)
        self.assertEqual(jaccard_similarity("a b", "c d"), 0.0)
        self.assertEqual(jaccard_similarity("", ""), 0.0)

    def test_drifting_bullets_are_dropped_and_originals_restored(self):
        data = {
            "summary": "Frontend engineer.",
            "skills": ["React"],
            "experiences": [
                {
                    "title": "Senior Frontend Engineer",
                    "company": "Acme Corp",
                    "dateRange": "2019 - Present",
                    "bullets": [
                        "Built React component library used by 40 teams across the company",
                        "Invented a quantum compiler for fun",
                    ],
                },
                {"title": "Frontend Developer", "company": "Beta Inc", "bullets": ["Led a team of 50 astronauts"]},
            ],
        }
        tailored = build_tailored_resume(data, self.resume, similarity_floor=0.7)

        self.assertEqual(
            tailored.experiences[0].bullets, ["Built React component library used by 40 teams across the company"]
        )
        self.assertEqual(tailored.experiences[1].bullets, ["Developed ReactJS dashboards for 10,000 users"])
        self.assertIsNone(tailored.experiences[1].date_range)
        self.assertEqual(tailored.skills, ["React"])
        self.assertEqual(tailored.education, ["B.S. Computer Science, University of Texas, 2016"])
        self.assertIn("SUMMARY\nFrontend engineer.", tailored.raw_text)
        self.assertIn("Senior Frontend Engineer | Acme Corp", tailored.raw_text)

    def test_empty_reply_keeps_original_experiences(self):
        tailored = build_tailored_resume({}, self.resume, similarity_floor=0.7)
        self.assertEqual(len(tailored.experiences), 2)
        self.assertEqual(tailored.skills, ["React", "TypeScript"])

    def test_scalar_experiences_and_skills_fall_back_to_originals(self):
        tailored = build_tailored_resume(
            {"experiences": "see above", "skills": 7}, self.resume, similarity_floor=0.7
        )
        self.assertEqual([exp.title for exp in tailored.experiences], ["Senior Frontend Engineer", "Frontend Developer"])
        self.assertEqual(tailored.skills, ["React", "TypeScript"])

    async def test_invalid_json_returns_original_structure(self):
        client = FakeModelClient(format_reply="```not json```")
        tailored = await format_tailored_resume(self.resume, [], REQUIREMENTS, client=client)
        self.assertEqual(tailored, original_structure(self.resume))
        self.assertTrue(client.calls[0]["json_mode"])

    async def test_format_prompt_lists_prioritized_bullets(self):
        client = FakeModelClient()
        await format_tailored_resume(
            self.resume, [_bullet_match(self.resume, 1, 0, 85)], REQUIREMENTS, client=client
        )
        prompt = client.calls[0]["prompt"]
        self.assertIn("Job Title: Senior Frontend Engineer", prompt)
        self.assertIn("Key Keywords: React, TypeScript", prompt)
        self.assertIn("1. [Frontend Developer at Beta Inc] Developed ReactJS dashboards", prompt)


class CoverLetterTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.resume = parse_resume(RESUME_TEXT)

    def test_clean_strips_preamble_and_adds_name(self):
        raw = "Sure! Here's your letter:\n\nHi,\n\n**I've** built things.\n\nThanks for reading."
        self.assertEqual(
            clean_cover_letter(raw, "Jane Doe"), "Hi,\n\nI've built things.\n\nThanks for reading.\n\nJane Doe"
        )

    def test_clean_drops_trailing_chatter(self):
        raw = "Hi,\n\nBody.\n\nBest,\nJane Doe\n\nLet me know if you want changes."
        self.assertEqual(clean_cover_letter(raw, "Jane Doe"), "Hi,\n\nBody.\n\nBest,\nJane Doe")

    def test_clean_removes_code_fences(self):
        raw = "```\nignored\n```\nHi,\n\nBody.\n\nJane Doe"
        self.assertEqual(clean_cover_letter(raw, "Jane Doe"), "Hi,\n\nBody.\n\nJane Doe")

    def test_evidence_falls_back_to_bullets(self):
        points = select_evidence([], self.resume, GenerationTuning())
        self.assertEqual(
            [point.evidence for point in points],
            [
                "Built React component library used by 40 teams across the company",
                "Reduced bundle size by 35% through code splitting",
                "Developed ReactJS dashboards for 10,000 users",
            ],
        )

    def test_evidence_respects_score_floor(self):
        matched = [_bullet_match(self.resume, 1, 0, 85), _bullet_match(self.resume, 0, 1, 40)]
        points = select_evidence(matched, self.resume, GenerationTuning())
        self.assertEqual(points[0].evidence, "Developed ReactJS dashboards for 10,000 users")
        self.assertNotIn(
            "Reduced bundle size by 35% through code splitting",
            [point.evidence for point in points[:1]],
        )

    async def test_standard_and_humanized_prompts(self):
        client = FakeModelClient()
        matched = [_bullet_match(self.resume, 1, 0, 85)]

        letter = await generate_cover_letter(matched, REQUIREMENTS, self.resume, client=client)
        humanized = await generate_cover_letter(matched, REQUIREMENTS, self.resume, client=client, humanize=True)

        self.assertTrue(letter.startswith("Hi,"))
        self.assertEqual(humanized, HUMANIZED_LETTER)
        self.assertEqual([call["kind"] for call in client.calls], ["letter", "humanized"])
        self.assertEqual([call["temperature"] for call in client.calls], [0.8, 0.95])
        self.assertIn("applying to Senior Frontend Engineer at Globex", client.calls[0]["prompt"])
        self.assertIn('For "Dashboards for large user bases": Developed ReactJS dashboards', client.calls[0]["prompt"])

    def test_quick_letter(self):
        letter = generate_quick_cover_letter([_bullet_match(self.resume, 1, 0, 85)], REQUIREMENTS, self.resume)
        self.assertTrue(letter.startswith("Hi,\n\nI saw the Senior Frontend Engineer role"))
        self.assertIn("developed reactjs dashboards for 10,000 users", letter)
        self.assertTrue(letter.endswith("Jane Doe"))

    def test_quick_letter_without_contact_uses_placeholder(self):
        letter = generate_quick_cover_letter([], REQUIREMENTS, ResumeProfile(raw_text=""))
        self.assertTrue(letter.endswith(PLACEHOLDER_NAME))

    def test_quick_resume_moves_backed_experience_first(self):
        skill_match = MatchRecord(
            requirement=Requirement(text="TypeScript"),
            evidence=SkillEvidence(skill=self.resume.skills[1]),
            score=95,
            match_type="exact",
            evidence_text="TypeScript",
        )
        tailored = quick_tailored_resume(self.resume, [skill_match, _bullet_match(self.resume, 1, 0, 85)])
        self.assertEqual([exp.company for exp in tailored.experiences], ["Beta Inc", "Acme Corp"])
        self.assertEqual(tailored.raw_text, RESUME_TEXT)


if __name__ == "__main__":
    unittest.main()

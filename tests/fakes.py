"""Test doubles shared by the async pipeline and API tests."""

import asyncio
import json
from types import SimpleNamespace

from app.integrations.authorship import DetectionResult

JD_REPLY = {
    "title": "Senior Frontend Engineer",
    "company": "Globex",
    "required": [
        {"text": "3+ years of experience with React", "type": "skill", "importance": "critical"},
        {"text": "Strong TypeScript skills", "type": "skill", "importance": "high"},
    ],
    "preferred": [
        {"text": "Experience with GraphQL federation", "type": "skill", "importance": "low"},
    ],
    "keywords": ["React", "TypeScript", "GraphQL"],
    "context": {"seniorityLevel": "senior", "workStyle": "remote"},
}

FORMAT_REPLY = {
    "summary": "Frontend engineer focused on React component systems.",
    "skills": ["React", "TypeScript"],
    "experiences": [
        {
            "title": "Senior Frontend Engineer",
            "company": "Acme Corp",
            "dateRange": "2019 - Present",
            "bullets": ["Built React component library used by 40 teams across the company"],
        }
    ],
}

LETTER = (
    "Hi,\n\nThe Globex role caught my eye because I've spent years on React component systems. "
    "At Acme I built a component library used by 40 teams.\n\nThanks for reading.\n\nJane Doe"
)
HUMANIZED_LETTER = (
    "Hi,\n\nHonestly, the Globex role is a great fit. I built a React library 40 teams use. "
    "But the part I'm proudest of is cutting bundle size by 35%.\n\nJane Doe"
)


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``; replays scripted replies."""

    def __init__(self, replies, *, delay_s: float = 0.0):
        self.replies = list(replies)
        self.delay_s = delay_s
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return completion(reply)


def fake_sdk(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class FakeModelClient:
    """Routes prompts by their opening line, like the real prompt templates."""

    def __init__(self, *, jd_reply=None, format_reply=None, letter=LETTER, humanized=HUMANIZED_LETTER, fail_on=None):
        self.jd_reply = json.dumps(JD_REPLY) if jd_reply is None else jd_reply
        self.format_reply = json.dumps(FORMAT_REPLY) if format_reply is None else format_reply
        self.letter = letter
        self.humanized = humanized
        self.fail_on = fail_on or {}
        self.calls = []

    @staticmethod
    def kind_of(prompt: str) -> str:
        if prompt.startswith("Analyze this job description"):
            return "jd"
        if prompt.startswith("You are reformatting a resume"):
            return "format"
        if prompt.startswith("You must write a cover letter that sounds 100% human"):
            return "humanized"
        return "letter"

    async def call(self, prompt, *, json_mode=False, max_tokens=1000, temperature=0.7, model=None):
        kind = self.kind_of(prompt)
        self.calls.append({"kind": kind, "json_mode": json_mode, "temperature": temperature, "prompt": prompt})
        if kind in self.fail_on:
            raise self.fail_on[kind]
        return {
            "jd": self.jd_reply,
            "format": self.format_reply,
            "humanized": self.humanized,
            "letter": self.letter,
        }[kind]

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call["kind"] == kind)


class FakeDetector:
    def __init__(self, scores):
        self.scores = list(scores)
        self.texts = []

    async def detect(self, text):
        self.texts.append(text)
        score = self.scores.pop(0) if len(self.scores) > 1 else self.scores[0]
        if isinstance(score, BaseException):
            raise score
        return DetectionResult(score=score, is_human_passing=score < 50, feedback=f"score {score}")

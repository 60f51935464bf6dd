from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from functools import lru_cache

from app.ai.client import ModelClient
from app.core.config.tuning import ScoringTuning, get_tuning
from app.integrations.authorship import AuthorshipDetector, DetectionResult
from app.matching import calculate_match_score, match_resume
from app.normalize.normalize_resume import parse_resume
from app.schemas.tailoring import (
    DetectionInfo,
    MatchOutcome,
    MatchRecord,
    RequirementSet,
    ResumeProfile,
    TailoredResume,
    TailoringOutcome,
)
from app.services import diagnostics
from app.services.cover_letter import (
    generate_cover_letter,
    generate_quick_cover_letter,
    quick_tailored_resume,
)
from app.services.errors import TailoringErrorKind, to_tailoring_error
from app.services.formatter import format_tailored_resume
from app.services.jd_analyzer import analyze_job_description
from app.services.progress import ProgressCallback, ProgressStream

logger = logging.getLogger("app.tailoring")

_STILL_FLAGGED_NOTE = (
    "We rewrote the letter once to sound more natural, but it may still read as generated. "
    "A few personal edits before sending would help."
)


@contextmanager
def _stage(kind: TailoringErrorKind) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        error = to_tailoring_error(exc, kind)
        if error is exc:
            raise
        raise error from exc


class TailoringOrchestrator:
    """Runs the full tailoring pipeline for one résumé/JD pair per call.

    Steps: parse, analyze, match, then résumé formatting and the cover letter
    concurrently, then one authorship check with at most one humanized
    regeneration. Every failure surfaces as a single ``TailoringError``.
    """

    def __init__(
        self,
        model_client: ModelClient,
        detector: AuthorshipDetector,
        *,
        tuning: ScoringTuning | None = None,
        fallback_to_quick: bool = False,
    ):
        self._model = model_client
        self._detector = detector
        self._tuning = tuning or get_tuning()
        self._fallback_to_quick = fallback_to_quick

    async def _analyze(
        self, resume_text: str, jd_text: str, stream: ProgressStream, *, quick: bool
    ) -> tuple[ResumeProfile, RequirementSet, MatchOutcome, int]:
        stream.emit("parsing", 20 if quick else 10, "Parsing..." if quick else "Parsing resume...")
        with _stage("parse_error"):
            resume = parse_resume(resume_text)
        diagnostics.log_resume(resume)

        stream.emit("analyzing", 50 if quick else 30, "Analyzing..." if quick else "Analyzing job description...")
        with _stage("jd_analysis_error"):
            requirements = await analyze_job_description(
                jd_text, client=self._model, tuning=self._tuning.generation
            )
        diagnostics.log_requirements(requirements)

        stream.emit("matching", 70 if quick else 50, "Matching..." if quick else "Matching qualifications...")
        with _stage("matching_error"):
            outcome = match_resume(resume, requirements, tuning=self._tuning)
            score = calculate_match_score(
                outcome.matched,
                outcome.missing,
                outcome.has_domain_mismatch,
                tuning=self._tuning.aggregation,
            )
        diagnostics.log_matches(outcome.matched, outcome.missing, score)
        return resume, requirements, outcome, score

    async def _format(
        self, resume: ResumeProfile, matched: Sequence[MatchRecord], requirements: RequirementSet
    ) -> TailoredResume:
        try:
            return await format_tailored_resume(
                resume, matched, requirements, client=self._model, tuning=self._tuning.generation
            )
        except Exception:
            if not self._fallback_to_quick:
                raise
            logger.warning("resume_format_quick_fallback", exc_info=True)
            return quick_tailored_resume(resume, matched)

    async def _cover_letter(
        self,
        resume: ResumeProfile,
        matched: Sequence[MatchRecord],
        requirements: RequirementSet,
        *,
        humanize: bool = False,
    ) -> str:
        try:
            return await generate_cover_letter(
                matched,
                requirements,
                resume,
                client=self._model,
                humanize=humanize,
                tuning=self._tuning.generation,
            )
        except Exception:
            if not self._fallback_to_quick:
                raise
            logger.warning("cover_letter_quick_fallback humanize=%s", humanize, exc_info=True)
            return generate_quick_cover_letter(matched, requirements, resume)

    async def _staged_format(self, *args) -> TailoredResume:
        with _stage("formatting_error"):
            return await self._format(*args)

    async def _staged_cover_letter(self, *args, humanize: bool = False) -> str:
        with _stage("cover_letter_error"):
            return await self._cover_letter(*args, humanize=humanize)

    async def _generate(
        self, resume: ResumeProfile, matched: Sequence[MatchRecord], requirements: RequirementSet
    ) -> tuple[TailoredResume, str]:
        format_task = asyncio.create_task(self._staged_format(resume, matched, requirements))
        letter_task = asyncio.create_task(self._staged_cover_letter(resume, matched, requirements))
        tasks = (format_task, letter_task)
        try:
            tailored, letter = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return tailored, letter

    async def _detect(self, text: str) -> DetectionResult | None:
        try:
            return await self._detector.detect(text)
        except Exception:  # noqa: BLE001 - detection is advisory
            logger.warning("authorship_check_failed", exc_info=True)
            return None

    async def _check_authorship(
        self,
        letter: str,
        resume: ResumeProfile,
        matched: Sequence[MatchRecord],
        requirements: RequirementSet,
        stream: ProgressStream,
    ) -> tuple[str, DetectionInfo]:
        threshold = self._tuning.detection.humanize_threshold
        first = await self._detect(letter)
        if first is None:
            return letter, DetectionInfo(score=0, is_human_passing=True, feedback="Detection unavailable")
        if first.score <= threshold:
            return letter, DetectionInfo(
                score=first.score, is_human_passing=first.is_human_passing, feedback=first.feedback
            )

        logger.info("cover_letter_humanize score=%s threshold=%s", first.score, threshold)
        stream.emit("cover_letter", 90, "Humanizing content...")
        regenerated = await self._staged_cover_letter(resume, matched, requirements, humanize=True)

        recheck = await self._detect(regenerated)
        if recheck is None:
            return regenerated, DetectionInfo(
                score=0,
                is_human_passing=True,
                feedback="Detection unavailable",
                regenerated=True,
                initial_score=first.score,
            )
        feedback = recheck.feedback
        if recheck.score > threshold:
            feedback = f"{recheck.feedback} {_STILL_FLAGGED_NOTE}"
        return regenerated, DetectionInfo(
            score=recheck.score,
            is_human_passing=recheck.is_human_passing,
            feedback=feedback,
            regenerated=True,
            initial_score=first.score,
        )

    async def analyze(self, jd_text: str) -> RequirementSet:
        with _stage("jd_analysis_error"):
            return await analyze_job_description(jd_text, client=self._model, tuning=self._tuning.generation)

    async def match(
        self, resume_text: str, jd_text: str
    ) -> tuple[ResumeProfile, RequirementSet, MatchOutcome, int]:
        """Parse, analyze and match without generating anything."""
        stream = ProgressStream()
        try:
            return await self._analyze(resume_text, jd_text, stream, quick=False)
        finally:
            stream.close()

    async def tailor(
        self,
        resume_text: str,
        jd_text: str,
        *,
        progress: ProgressStream | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> TailoringOutcome:
        stream = progress or ProgressStream(on_progress=on_progress)
        started = time.perf_counter()
        try:
            resume, requirements, outcome, score = await self._analyze(resume_text, jd_text, stream, quick=False)

            stream.emit("formatting", 60, "Tailoring resume...")
            tailored, letter = await self._generate(resume, outcome.matched, requirements)

            stream.emit("ai_check", 80, "Checking content quality...")
            letter, detection = await self._check_authorship(
                letter, resume, outcome.matched, requirements, stream
            )

            stream.emit("complete", 100, "Complete!")
        except Exception as exc:
            error = to_tailoring_error(exc, "api_error")
            logger.warning(
                json.dumps(
                    {
                        "event": "tailoring_error",
                        "kind": error.kind,
                        "error": str(error),
                        "duration_ms": int((time.perf_counter() - started) * 1000),
                    }
                )
            )
            if error is exc:
                raise
            raise error from exc
        finally:
            stream.close()

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            json.dumps(
                {
                    "event": "tailoring_complete",
                    "mode": "full",
                    "match_score": score,
                    "matched": len(outcome.matched),
                    "missing": len(outcome.missing),
                    "domain_mismatch": outcome.has_domain_mismatch,
                    "regenerated": detection.regenerated,
                    "duration_ms": elapsed_ms,
                }
            )
        )
        return TailoringOutcome(
            resume=tailored,
            cover_letter=letter,
            match_score=score,
            matched_items=outcome.matched,
            missing_items=outcome.missing,
            has_domain_mismatch=outcome.has_domain_mismatch,
            processing_time_ms=elapsed_ms,
            detection=detection,
        )

    async def tailor_quick(
        self,
        resume_text: str,
        jd_text: str,
        *,
        progress: ProgressStream | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> TailoringOutcome:
        """Single model call (JD analysis); résumé and letter come from templates."""
        stream = progress or ProgressStream(on_progress=on_progress)
        started = time.perf_counter()
        try:
            resume, requirements, outcome, score = await self._analyze(resume_text, jd_text, stream, quick=True)
            tailored = quick_tailored_resume(resume, outcome.matched)
            letter = generate_quick_cover_letter(outcome.matched, requirements, resume)
            stream.emit("complete", 100, "Complete!")
        except Exception as exc:
            error = to_tailoring_error(exc, "api_error")
            logger.warning(json.dumps({"event": "tailoring_error", "mode": "quick", "kind": error.kind}))
            if error is exc:
                raise
            raise error from exc
        finally:
            stream.close()

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            json.dumps(
                {"event": "tailoring_complete", "mode": "quick", "match_score": score, "duration_ms": elapsed_ms}
            )
        )
        return TailoringOutcome(
            resume=tailored,
            cover_letter=letter,
            match_score=score,
            matched_items=outcome.matched,
            missing_items=outcome.missing,
            has_domain_mismatch=outcome.has_domain_mismatch,
            processing_time_ms=elapsed_ms,
            detection=None,
        )


@lru_cache(maxsize=1)
def get_default_orchestrator() -> TailoringOrchestrator:
    return TailoringOrchestrator(ModelClient.from_config(), AuthorshipDetector.from_settings())


async def tailor_resume(
    resume_text: str,
    jd_text: str,
    *,
    on_progress: ProgressCallback | None = None,
    progress: ProgressStream | None = None,
    orchestrator: TailoringOrchestrator | None = None,
) -> TailoringOutcome:
    runner = orchestrator or get_default_orchestrator()
    return await runner.tailor(resume_text, jd_text, progress=progress, on_progress=on_progress)


async def tailor_resume_quick(
    resume_text: str,
    jd_text: str,
    *,
    on_progress: ProgressCallback | None = None,
    progress: ProgressStream | None = None,
    orchestrator: TailoringOrchestrator | None = None,
) -> TailoringOutcome:
    runner = orchestrator or get_default_orchestrator()
    return await runner.tailor_quick(resume_text, jd_text, progress=progress, on_progress=on_progress)

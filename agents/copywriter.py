"""Gemini-backed copywriter that turns a shortlist into three editorial picks."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Sequence

from google import generativeai as genai
from pydantic import ValidationError

from costume_app.config import CostumeConfig
from costume_app.logging_config import get_logger, log_event
from logic.filtering import apply_hard_filters
from logic.fallback import difficulty_for_effort
from logic.prompts import build_system_prompt, build_user_prompt
from logic.safety import find_forbidden_phrases
from logic.validation import GeneratedPayload
from models.costume import Costume
from models.quiz import QuizResponse
from models.recommendation import Recommendation
from tools.observability import instrument_tool

logger = get_logger(__name__)

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 1500
REQUIRED_PICKS = 3


class CopywriterError(RuntimeError):
    """Raised when generated copy is unavailable or fails validation."""


class CostumeCopywriter:
    """Asks the generative model for three picks and validates them strictly.

    Any failure (transport, timeout, malformed JSON, a foreign or duplicate id,
    wrong arity, a banned phrase, a pick that breaks a hard filter) raises
    :class:`CopywriterError`. Nothing is partially accepted and nothing is
    retried.
    """

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        timeout_seconds: float = 8.0,
        client: Any | None = None,
    ) -> None:
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client = client
        if self._client is None and api_key:
            genai.configure(api_key=api_key)
            self._client = genai.GenerativeModel(
                model_name=model_name, system_instruction=build_system_prompt()
            )

    @classmethod
    def from_config(cls, config: CostumeConfig) -> "CostumeCopywriter":
        return cls(
            model_name=config.gemini_model,
            api_key=config.google_api_key,
            timeout_seconds=config.generator_timeout_seconds,
        )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def _generate(self, prompt: str) -> str:
        try:
            response = self._client.generate_content(
                prompt,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    temperature=TEMPERATURE,
                    max_output_tokens=MAX_OUTPUT_TOKENS,
                ),
                request_options={"timeout": self.timeout_seconds},
            )
            text = response.text
        except Exception as exc:  # noqa: BLE001
            raise CopywriterError(f"generation failed: {exc}") from exc
        if not text or not text.strip():
            raise CopywriterError("empty generation")
        return text

    @staticmethod
    def _parse(text: str) -> GeneratedPayload:
        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`")
            cleaned = cleaned[len("json"):] if cleaned.startswith("json") else cleaned
        try:
            return GeneratedPayload.model_validate(json.loads(cleaned))
        except json.JSONDecodeError as exc:
            raise CopywriterError(f"invalid JSON: {exc.msg}") from exc
        except ValidationError as exc:
            raise CopywriterError(f"schema mismatch: {exc.error_count()} errors") from exc

    def _check(self, payload: GeneratedPayload, quiz: QuizResponse, shortlist: Dict[str, Costume]) -> List[Costume]:
        picks = payload.recommendations
        ids = [pick.costume_id for pick in picks]
        if len(ids) != REQUIRED_PICKS:
            raise CopywriterError(f"expected {REQUIRED_PICKS} picks, got {len(ids)}")
        if len(set(ids)) != len(ids):
            raise CopywriterError(f"duplicate picks: {ids}")
        foreign = [cid for cid in ids if cid not in shortlist]
        if foreign:
            raise CopywriterError(f"picks outside the shortlist: {foreign}")

        for pick in picks:
            banned = find_forbidden_phrases(
                [*pick.why_it_matches, *pick.shopping_list, *pick.substitutions, *pick.warnings]
            )
            if banned:
                raise CopywriterError(f"banned phrases in {pick.costume_id}: {banned}")

        selected = [shortlist[cid] for cid in ids]
        allowed = {costume.costume_id for costume in apply_hard_filters(selected, quiz)}
        violations = [cid for cid in ids if cid not in allowed]
        if violations:
            raise CopywriterError(f"picks violate hard filters: {violations}")
        return selected

    @instrument_tool("costume_copywriter")
    def write(
        self,
        quiz: QuizResponse,
        shortlist: Sequence[Costume],
        effective_request: QuizResponse | None = None,
    ) -> List[Recommendation]:
        """Return three validated recommendations drawn from ``shortlist``.

        The prompt describes ``quiz`` as the user answered it. Picks are checked
        against ``effective_request`` when relaxation widened the request.
        """

        if self._client is None:
            raise CopywriterError("copywriter not configured")

        by_id = {costume.costume_id: costume for costume in shortlist}
        payload = self._parse(self._generate(build_user_prompt(quiz, shortlist)))
        selected = self._check(payload, effective_request or quiz, by_id)

        recommendations = []
        for pick, costume in zip(payload.recommendations, selected):
            recommendations.append(
                Recommendation(
                    costume_id=costume.costume_id,
                    title=costume.display_title,
                    why_it_matches=list(pick.why_it_matches),
                    difficulty=difficulty_for_effort(costume.constraints.effort),
                    anchor_item=costume.requirements.anchor_item,
                    shopping_list=list(pick.shopping_list),
                    similarity_tags=costume.similarity_tags(),
                    substitutions=list(pick.substitutions),
                    warnings=list(pick.warnings),
                )
            )
        log_event(logger, logging.INFO, "copywriter_accepted", picks=[rec.costume_id for rec in recommendations])
        return recommendations


__all__ = ["CopywriterError", "CostumeCopywriter"]

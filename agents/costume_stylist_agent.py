"""Costume stylist agent running the filter, score, diversify and compose pipeline."""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from agents.copywriter import CopywriterError, CostumeCopywriter
from costume_app.logging_config import get_logger, log_event, operation_context
from logic.diversify import diversify_shortlist
from logic.fallback import compose_fallback_recommendations
from logic.refinement import apply_direction, boost_by_similarity, exclude_costumes
from logic.relaxation import apply_relaxation_ladder, format_relaxation_message
from logic.scoring import ScoredCostume, score_and_rank
from logic.validation import RecommendationOut
from models.quiz import QuizResponse
from models.recommendation import Recommendation
from tools.catalog_store import CostumeCatalog
from tools.image_resolver import ImageResolver, OfflineImageResolver

logger = get_logger(__name__)

RANKED_POOL_SIZE = 30
RECOMMENDATION_COUNT = 3
SIMILAR_POOL_SIZE = 50
SIMILAR_COUNT = 5


class CostumeStylistAgent:
    """Recommends costumes deterministically, with optional generated copy.

    The copywriter is consulted at most once per call. When it is missing or
    fails, the template composer writes the copy instead.
    """

    def __init__(
        self,
        catalog: CostumeCatalog,
        copywriter: Optional[CostumeCopywriter] = None,
        image_resolver: Optional[ImageResolver] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.catalog = catalog
        self.copywriter = copywriter
        self.image_resolver = image_resolver or OfflineImageResolver()
        self.rng = rng or random.Random()

    def _with_images(self, recommendations: Iterable[Recommendation]) -> List[Dict[str, object]]:
        payload = []
        for recommendation in recommendations:
            costume = self.catalog.get(recommendation.costume_id)
            if costume is not None:
                image = self.image_resolver.resolve_with_fallback(costume.images)
                recommendation = replace(recommendation, image=image)
            payload.append(RecommendationOut.from_recommendation(recommendation).model_dump())
        return payload

    def _compose(
        self, quiz: QuizResponse, shortlist: Sequence[ScoredCostume], effective: QuizResponse
    ) -> tuple[List[Recommendation], str, Optional[str]]:
        costumes = [entry.costume for entry in shortlist]
        if self.copywriter is not None and self.copywriter.enabled and len(costumes) >= RECOMMENDATION_COUNT:
            try:
                return self.copywriter.write(quiz, costumes, effective), "generated", None
            except CopywriterError as exc:
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="copywriter_rejected",
                    agent="stylist",
                    reason=str(exc),
                )
                fallback_reason = str(exc)
        else:
            fallback_reason = "copywriter_unavailable"
        recommendations = compose_fallback_recommendations(costumes, quiz, self.rng, count=RECOMMENDATION_COUNT)
        return recommendations, "fallback", fallback_reason

    def recommend(self, quiz: QuizResponse) -> Dict[str, object]:
        """Return three recommendations plus relaxation and mode metadata."""

        with operation_context("agent:stylist.recommend") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="stylist",
                method="recommend",
                correlation_id=correlation_id,
                goals=list(quiz.goals),
                effort=quiz.effort,
                universes=sorted(quiz.universes) if quiz.universes is not None else "any",
            )

            relaxation = apply_relaxation_ladder(self.catalog.as_list(), quiz)
            # Rank against what the user asked for; diversify against what we widened to.
            ranked = score_and_rank(relaxation.costumes, quiz, top_n=RANKED_POOL_SIZE)
            shortlist = diversify_shortlist(ranked, relaxation.request, self.rng)

            if shortlist:
                recommendations, mode, fallback_reason = self._compose(quiz, shortlist, relaxation.request)
            else:
                recommendations, mode, fallback_reason = [], "fallback", "empty_pool"

            if not recommendations:
                status = "empty"
            elif len(recommendations) < RECOMMENDATION_COUNT:
                status = "partial"
            else:
                status = "ok"

            response = {
                "status": status,
                "recommendations": self._with_images(recommendations),
                "meta": {
                    "mode": mode,
                    "dataset_version": self.catalog.version,
                    "relaxations_applied": relaxation.relaxations_applied,
                    "relaxation_message": format_relaxation_message(relaxation.relaxations_applied),
                },
                "debug_summary": {
                    "pool_sizes": relaxation.pool_sizes,
                    "ranked": [
                        {"id": entry.costume_id, "score": round(entry.score, 3)} for entry in ranked[:10]
                    ],
                    "shortlist": [entry.costume_id for entry in shortlist],
                    "fallback_reason": fallback_reason,
                },
            }

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="stylist",
                method="recommend",
                correlation_id=correlation_id,
                status=status,
                mode=mode,
                recommendation_count=len(recommendations),
                relaxations=relaxation.relaxations_applied,
            )
            return response

    def find_similar(
        self,
        costume_id: str,
        quiz: QuizResponse,
        direction: Optional[str] = None,
        exclude_ids: Sequence[str] = (),
    ) -> Dict[str, object]:
        """Return one to five costumes close to ``costume_id`` after a direction nudge."""

        with operation_context("agent:stylist.find_similar") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="stylist",
                method="find_similar",
                correlation_id=correlation_id,
                costume_id=costume_id,
                direction=direction,
                excluded=len(exclude_ids),
            )

            selected = self.catalog.get(costume_id)
            if selected is None:
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="agent_call_completed",
                    agent="stylist",
                    method="find_similar",
                    correlation_id=correlation_id,
                    status="not_found",
                )
                return {
                    "status": "not_found",
                    "recommendations": [],
                    "debug_summary": {"costume_id": costume_id},
                }

            adjusted = apply_direction(quiz, direction)
            relaxation = apply_relaxation_ladder(self.catalog.as_list(), adjusted)
            candidates = exclude_costumes(relaxation.costumes, [costume_id, *exclude_ids])
            ranked = boost_by_similarity(score_and_rank(candidates, adjusted, top_n=SIMILAR_POOL_SIZE), selected)
            similar = diversify_shortlist(ranked, relaxation.request, self.rng, shortlist_size=SIMILAR_COUNT)

            recommendations = compose_fallback_recommendations(
                [entry.costume for entry in similar], adjusted, self.rng, count=SIMILAR_COUNT
            )
            status = "ok" if recommendations else "empty"

            response = {
                "status": status,
                "recommendations": self._with_images(recommendations),
                "debug_summary": {
                    "direction": direction,
                    "pool_sizes": relaxation.pool_sizes,
                    "relaxations_applied": relaxation.relaxations_applied,
                    "candidates": len(candidates),
                    "similar": [
                        {"id": entry.costume_id, "score": round(entry.score, 3)} for entry in similar
                    ],
                },
            }
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="stylist",
                method="find_similar",
                correlation_id=correlation_id,
                status=status,
                recommendation_count=len(recommendations),
            )
            return response


__all__ = ["CostumeStylistAgent", "RECOMMENDATION_COUNT", "SIMILAR_COUNT"]

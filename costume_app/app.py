"""Costume Concierge app bootstrap."""

import logging
import random
from typing import Any, Dict

from pydantic import ValidationError

from agents.copywriter import CostumeCopywriter
from agents.costume_stylist_agent import CostumeStylistAgent
from costume_app.config import CostumeConfig
from costume_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.validation import (
    MoreLikeThisPayload,
    MoreLikeThisResponse,
    QuizPayload,
    RecommendResponse,
    validation_failure,
)
from tools.catalog_store import CostumeCatalog, load_catalog
from tools.image_resolver import ImageResolver, RemoteImageResolver

LOGGER = get_logger(__name__)


class CostumeConciergeApp:
    """Loads the catalog once and wires the stylist agent with its collaborators."""

    def __init__(
        self,
        config: CostumeConfig | None = None,
        catalog: CostumeCatalog | None = None,
        copywriter: CostumeCopywriter | None = None,
        image_resolver: ImageResolver | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or CostumeConfig.from_env()
        configure_logging()

        self.catalog = catalog if catalog is not None else load_catalog(
            self.config.catalog_path, self.config.dataset_version
        )
        self.copywriter = copywriter or CostumeCopywriter.from_config(self.config)
        self.image_resolver = image_resolver or RemoteImageResolver(
            api_key=self.config.tmdb_api_key, timeout_seconds=self.config.image_timeout_seconds
        )
        self.stylist = CostumeStylistAgent(
            catalog=self.catalog,
            copywriter=self.copywriter,
            image_resolver=self.image_resolver,
            rng=rng,
        )

    def recommend(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a raw quiz submission and return three recommendations."""

        with operation_context("app:recommend") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_started",
                agent="app",
                method="recommend",
                correlation_id=correlation_id,
            )
            try:
                quiz = QuizPayload.model_validate(payload).to_quiz()
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    agent="app",
                    method="recommend",
                    details=exc.errors(include_url=False, include_input=False),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid quiz payload", exc)

            response = self.stylist.recommend(quiz)
            return RecommendResponse.model_validate(response).model_dump()

    def more_like_this(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a refinement request and return up to five similar costumes."""

        with operation_context("app:more_like_this") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_started",
                agent="app",
                method="more_like_this",
                correlation_id=correlation_id,
            )
            try:
                request = MoreLikeThisPayload.model_validate(payload)
                quiz = request.quiz.to_quiz()
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    agent="app",
                    method="more_like_this",
                    details=exc.errors(include_url=False, include_input=False),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid more-like-this payload", exc)

            response = self.stylist.find_similar(
                request.selected_costume_id,
                quiz,
                direction=request.direction,
                exclude_ids=request.exclude_ids,
            )
            return MoreLikeThisResponse.model_validate(response).model_dump()


__all__ = ["CostumeConciergeApp"]

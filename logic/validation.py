"""Pydantic schemas and helpers for validating request payloads and generated copy."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models.quiz import (
    Boundaries,
    CelebrityMatch,
    ClosetBoosters,
    PhotoCues,
    PracticalPreferences,
    QuizResponse,
)
from models.recommendation import Recommendation

Vibe = Literal["funny", "sexy", "stylish", "clever", "low_effort_high_payoff"]
Effort = Literal["one_item", "few_fast", "some_work", "suffer_for_bit"]
Budget = Literal["lt_30", "30_75", "75_150", "dont_care"]
Universe = Literal["movie", "tv", "music", "sports", "internet"]
Era = Literal["70s_80s", "90s", "2000s", "current", "any"]
Direction = Literal["more_recognizable", "weirder", "easier", "hotter", "stylisher"]


class BoundariesPayload(BaseModel):
    no_skin_tone_change: bool = True
    avoid_culture_specific: bool = False
    avoid_religious: bool = False
    avoid_political: bool = False
    avoid_face_paint: bool = False
    avoid_wigs: bool = False
    avoid_controversial: bool = False


class PracticalPayload(BaseModel):
    must_be_comfortable: bool = False
    must_survive_crowded_bar: bool = False
    needs_pockets: bool = False
    indoor_only: bool = False


class ClosetBoostersPayload(BaseModel):
    has_leather_jacket: bool = False
    has_sunglasses: bool = False
    has_suit: bool = False
    has_boots: bool = False
    has_dress: bool = False
    has_blazer: bool = False


class CelebrityMatchPayload(BaseModel):
    name: str = Field(min_length=1)
    confidence: Literal["high", "medium", "low"] = "medium"
    notes: Optional[str] = None


class PhotoCuesPayload(BaseModel):
    """Selfie-derived cues. Only ever used for soft scoring."""

    glasses_likely: bool = False
    facial_hair_likely: bool = False
    hair_length: Literal["short", "medium", "long", "unknown"] = "unknown"
    hair_color: Literal["black", "brown", "blonde", "red", "gray", "white", "other", "unknown"] = "unknown"
    hair_style: Optional[str] = None
    face_shape: Literal["oval", "round", "square", "heart", "oblong", "diamond", "rectangle", "unknown"] = (
        "unknown"
    )
    skin_tone: Literal["very_light", "light", "medium", "olive", "tan", "brown", "dark", "unknown"] = "unknown"
    features: List[str] = []
    age_range: Literal["teen", "20s", "30s", "40s", "50s", "60plus", "unknown"] = "unknown"
    build: Optional[Literal["slim", "athletic", "average", "muscular", "large", "unknown"]] = None
    celebrity_matches: List[CelebrityMatchPayload] = []
    vibe_keywords: List[str] = []


class QuizPayload(BaseModel):
    """Wire shape of a quiz submission."""

    goals: List[Vibe] = Field(min_length=1, max_length=2)
    effort: Effort
    niche_target: int = Field(default=4, ge=1, le=7)
    resemblance_target: int = Field(default=4, ge=1, le=7)
    budget: Budget = "dont_care"
    era: Era = "any"
    universes: List[Universe] = []
    gender_pref: Literal["match", "dont_match", "dont_care"] = "dont_care"
    user_gender: Optional[Literal["male", "female", "other"]] = None
    boundaries: BoundariesPayload = Field(default_factory=BoundariesPayload)
    practical: PracticalPayload = Field(default_factory=PracticalPayload)
    closet_boosters: Optional[ClosetBoostersPayload] = None
    photo_cues: Optional[PhotoCuesPayload] = None
    notes: Optional[str] = None

    def to_quiz(self) -> QuizResponse:
        cues = None
        if self.photo_cues is not None:
            data = self.photo_cues.model_dump()
            data["features"] = tuple(data["features"])
            data["vibe_keywords"] = tuple(data["vibe_keywords"])
            data["celebrity_matches"] = tuple(CelebrityMatch(**match) for match in data["celebrity_matches"])
            cues = PhotoCues(**data)
        boosters = ClosetBoosters(**self.closet_boosters.model_dump()) if self.closet_boosters else None
        return QuizResponse(
            goals=tuple(self.goals),
            effort=self.effort,
            niche_target=self.niche_target,
            resemblance_target=self.resemblance_target,
            budget=self.budget,
            era=self.era,
            universes=frozenset(self.universes),
            gender_pref=self.gender_pref,
            user_gender=self.user_gender,
            boundaries=Boundaries(**self.boundaries.model_dump()),
            practical=PracticalPreferences(**self.practical.model_dump()),
            closet_boosters=boosters,
            photo_cues=cues,
            notes=self.notes,
        )


class MoreLikeThisPayload(BaseModel):
    selected_costume_id: str = Field(min_length=1)
    quiz: QuizPayload
    direction: Optional[Direction] = None
    exclude_ids: List[str] = []


class GeneratedRecommendation(BaseModel):
    """One pick returned by the copywriter."""

    model_config = ConfigDict(extra="ignore")

    costume_id: str = Field(min_length=1)
    why_it_matches: List[str] = Field(min_length=2, max_length=3)
    shopping_list: List[str] = Field(min_length=3, max_length=7)
    substitutions: List[str] = []
    warnings: List[str] = []


class GeneratedPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    recommendations: List[GeneratedRecommendation] = Field(min_length=3, max_length=3)


class ImageOut(BaseModel):
    url: str
    attribution_text: Optional[str] = None
    attribution_link: Optional[str] = None


class RecommendationOut(BaseModel):
    costume_id: str
    title: str
    image: Optional[ImageOut] = None
    why_it_matches: List[str] = Field(min_length=2, max_length=3)
    difficulty: Literal["Easy", "Medium", "Hard"]
    anchor_item: str
    shopping_list: List[str] = Field(min_length=3, max_length=7)
    substitutions: List[str] = []
    warnings: List[str] = []
    similarity_tags: List[str] = []

    @classmethod
    def from_recommendation(cls, recommendation: Recommendation) -> "RecommendationOut":
        image = None
        if recommendation.image is not None:
            image = ImageOut(
                url=recommendation.image.url,
                attribution_text=recommendation.image.attribution_text,
                attribution_link=recommendation.image.attribution_link,
            )
        return cls(
            costume_id=recommendation.costume_id,
            title=recommendation.title,
            image=image,
            why_it_matches=list(recommendation.why_it_matches),
            difficulty=recommendation.difficulty,
            anchor_item=recommendation.anchor_item,
            shopping_list=list(recommendation.shopping_list),
            substitutions=list(recommendation.substitutions),
            warnings=list(recommendation.warnings),
            similarity_tags=list(recommendation.similarity_tags),
        )


class RecommendMeta(BaseModel):
    mode: Literal["generated", "fallback"]
    dataset_version: str
    relaxations_applied: List[str] = []
    relaxation_message: Optional[str] = None


class RecommendResponse(BaseModel):
    status: Literal["ok", "partial", "empty"]
    recommendations: List[RecommendationOut] = Field(max_length=3)
    meta: RecommendMeta
    debug_summary: Optional[Dict[str, Any]] = None


class MoreLikeThisResponse(BaseModel):
    status: Literal["ok", "not_found", "empty"]
    recommendations: List[RecommendationOut] = Field(max_length=5)
    debug_summary: Optional[Dict[str, Any]] = None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = exc.errors(include_url=False, include_context=False, include_input=False)
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "GeneratedPayload",
    "GeneratedRecommendation",
    "MoreLikeThisPayload",
    "MoreLikeThisResponse",
    "QuizPayload",
    "RecommendResponse",
    "RecommendationOut",
    "ValidationResult",
    "validation_failure",
]

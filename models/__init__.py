"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.costume import Costume, from_raw_metadata
from models.quiz import QuizResponse
from models.recommendation import Recommendation, ResolvedImage

__all__ = ["Costume", "QuizResponse", "Recommendation", "ResolvedImage", "from_raw_metadata"]

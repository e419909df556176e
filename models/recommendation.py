"""Recommendation output records."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ResolvedImage:
    url: str
    attribution_text: Optional[str] = None
    attribution_link: Optional[str] = None


@dataclass(frozen=True)
class Recommendation:
    """Display payload for one recommended costume."""

    costume_id: str
    title: str
    why_it_matches: List[str]
    difficulty: str
    anchor_item: str
    shopping_list: List[str]
    similarity_tags: List[str]
    substitutions: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    image: Optional[ResolvedImage] = None

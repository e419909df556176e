"""Read-only costume catalog loaded once from a versioned JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, StrictBool, ValidationError

from costume_app.logging_config import get_logger, log_event
from models.costume import Costume, from_raw_metadata

LOGGER = get_logger(__name__)


class _ConstraintsRecord(BaseModel):
    effort: str
    budget: str
    comfort: str
    bar_friendly: StrictBool = False
    pockets_likely: StrictBool = False


class _RequirementsRecord(BaseModel):
    anchor_item: str
    items: Any = None
    wig_required: StrictBool = False
    face_paint_required: StrictBool = False


class _SafetyRecord(BaseModel):
    culture_specific: StrictBool = False
    religious_attire: StrictBool = False
    political_figure: StrictBool = False
    controversial: StrictBool = False
    skin_tone_change_implied: StrictBool = False


class _SimilarityRecord(BaseModel):
    archetype_tags: Any = None
    vibe_tags: Any = None


class _ImagesRecord(BaseModel):
    primary: Dict[str, Any]
    alternatives: Optional[List[Dict[str, Any]]] = None


class CostumeRecordSchema(BaseModel):
    """Shape check for one raw catalog record.

    Flags must be real JSON booleans and nested sections must be objects;
    value ranges and enums are checked by the domain constructors.
    """

    vibes: Dict[str, int]
    constraints: _ConstraintsRecord
    requirements: _RequirementsRecord
    safety: Optional[_SafetyRecord] = None
    similarity: _SimilarityRecord
    images: _ImagesRecord
    requires_body_paint_or_full_face_paint: StrictBool = False
    funny_extreme: StrictBool = False


def _schema_reason(exc: ValidationError) -> str:
    fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
    return f"invalid fields: {', '.join(fields)}"


@dataclass(frozen=True)
class CostumeCatalog:
    """Immutable, deduplicated list of costumes with id lookup."""

    costumes: Tuple[Costume, ...]
    version: str
    _by_id: Dict[str, Costume] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {costume.costume_id: costume for costume in self.costumes})

    def __len__(self) -> int:
        return len(self.costumes)

    def __iter__(self) -> Iterator[Costume]:
        return iter(self.costumes)

    def get(self, costume_id: str) -> Optional[Costume]:
        return self._by_id.get(costume_id)

    def as_list(self) -> List[Costume]:
        return list(self.costumes)


def build_catalog(records: Iterable[Dict[str, object]], version: str) -> CostumeCatalog:
    """Validate raw records, dropping invalid entries and duplicate ids (first wins)."""

    costumes: List[Costume] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        record_id = record.get("id") if isinstance(record, dict) else None
        try:
            if not isinstance(record, dict):
                raise ValueError("catalog record must be an object")
            CostumeRecordSchema.model_validate(record)
            costume = from_raw_metadata(record)
        except ValidationError as exc:
            reason = _schema_reason(exc)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            reason = str(exc)
        else:
            reason = None
        if reason is not None:
            log_event(
                LOGGER,
                logging.WARNING,
                "catalog_record_invalid",
                index=index,
                costume_id=record_id or "unknown",
                reason=reason,
            )
            continue
        if costume.costume_id in seen:
            log_event(LOGGER, logging.WARNING, "catalog_record_duplicate", costume_id=costume.costume_id)
            continue
        seen.add(costume.costume_id)
        costumes.append(costume)
    return CostumeCatalog(costumes=tuple(costumes), version=version)


def load_catalog(path: str | Path, version: str = "v1") -> CostumeCatalog:
    """Load the catalog file. A missing file yields an empty catalog."""

    catalog_path = Path(path)
    if not catalog_path.exists():
        log_event(LOGGER, logging.WARNING, "catalog_missing", path=str(catalog_path))
        return CostumeCatalog(costumes=(), version=version)

    payload = json.loads(catalog_path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Catalog file {catalog_path} must contain a JSON array")

    catalog = build_catalog(payload, version)
    log_event(
        LOGGER,
        logging.INFO,
        "catalog_loaded",
        path=str(catalog_path),
        version=version,
        loaded=len(catalog),
        dropped=len(payload) - len(catalog),
    )
    return catalog


__all__ = ["CostumeCatalog", "CostumeRecordSchema", "build_catalog", "load_catalog"]

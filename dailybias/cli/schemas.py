"""
Input file schemas for the CLI.

Catalog and progress files are JSON, either a bare list of records or an
object wrapping the list (``{"biases": [...]}`` / ``{"progress": [...]}``).
Progress records may be in the current snake_case layout or the legacy
camelCase layout with millisecond timestamps.
"""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dailybias.core.catalog import merge_catalogs
from dailybias.core.models import Bias, BiasCategory, BiasProgress, BiasSource


# ========================================
# Catalog
# ========================================


class BiasSchema(BaseModel):
    """One catalog entry."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique bias id")
    title: str = Field(..., min_length=1)
    category: BiasCategory = Field(BiasCategory.MISC, description="decision, memory, social, perception or misc")
    summary: str = ""
    why: str = ""
    counter: str = ""
    source: BiasSource = BiasSource.CORE
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    def to_domain(self) -> Bias:
        return Bias(
            id=self.id,
            title=self.title,
            category=self.category,
            summary=self.summary,
            why=self.why,
            counter=self.counter,
            source=self.source,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CatalogFile(BaseModel):
    biases: List[BiasSchema] = Field(default_factory=list)


# ========================================
# Progress
# ========================================


class ProgressRecordSchema(BaseModel):
    """
    One progress record.

    Only the id is checked here; field conversion and legacy migration are
    handled by ``BiasProgress.from_dict``.
    """

    model_config = ConfigDict(extra="allow")

    schema_version: Optional[int] = None
    bias_id: Optional[str] = None
    biasId: Optional[str] = None

    @model_validator(mode="after")
    def _require_id(self) -> ProgressRecordSchema:
        if not (self.bias_id or self.biasId):
            raise ValueError("progress record needs 'bias_id' (or legacy 'biasId')")
        return self

    def to_domain(self) -> BiasProgress:
        payload: Dict[str, Any] = self.model_dump(exclude_none=True)
        if self.schema_version is None and self.bias_id is not None:
            # snake_case records without a version are current-layout records
            payload["schema_version"] = 2
        return BiasProgress.from_dict(payload)


class ProgressFile(BaseModel):
    progress: List[ProgressRecordSchema] = Field(default_factory=list)


# ========================================
# Loaders
# ========================================


def _read_json(path: Path, key: str) -> Dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        return {key: data}
    return data


def load_catalog(path: Path, user_path: Optional[Path] = None) -> list[Bias]:
    """
    Load and validate a catalog file, optionally merged with user biases.

    Entries from ``user_path`` are tagged as user-authored.

    Raises:
        pydantic.ValidationError: If a record is malformed.
        DuplicateItemError: If two biases share an id.
    """
    core = [b.to_domain() for b in CatalogFile.model_validate(_read_json(path, "biases")).biases]
    user: list[Bias] = []
    if user_path is not None:
        records = CatalogFile.model_validate(_read_json(user_path, "biases")).biases
        user = [replace(b.to_domain(), source=BiasSource.USER) for b in records]
    return merge_catalogs(core, user)


def load_progress(path: Optional[Path]) -> list[BiasProgress]:
    """Load progress records; a missing path means no progress yet."""
    if path is None:
        return []
    records = ProgressFile.model_validate(_read_json(path, "progress")).progress
    return [record.to_domain() for record in records]

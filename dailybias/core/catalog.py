"""
Catalog helpers.

The catalog is an ordered, read-only sequence of Bias records. Core and
user-authored items are merged into one sequence and treated uniformly by
the selectors.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from loguru import logger

from dailybias.core.errors import DuplicateItemError, UnknownItemError
from dailybias.core.models import Bias, BiasCategory


def merge_catalogs(core: Iterable[Bias], user: Iterable[Bias] = ()) -> list[Bias]:
    """
    Merge core and user biases, core first, preserving order.

    Raises:
        DuplicateItemError: If an id appears twice across both sources.
    """
    merged: list[Bias] = []
    seen: set[str] = set()
    for bias in [*core, *user]:
        if bias.id in seen:
            raise DuplicateItemError(bias.id)
        seen.add(bias.id)
        merged.append(bias)

    logger.debug(f"Merged catalog: {len(merged)} biases")
    return merged


def catalog_index(catalog: Sequence[Bias]) -> dict[str, Bias]:
    """Map bias id to Bias, rejecting duplicate ids."""
    index: dict[str, Bias] = {}
    for bias in catalog:
        if bias.id in index:
            raise DuplicateItemError(bias.id)
        index[bias.id] = bias
    return index


def find_bias(catalog: Sequence[Bias], bias_id: str) -> Bias:
    """
    Look up a bias by id.

    Raises:
        UnknownItemError: If the id is not in the catalog.
    """
    for bias in catalog:
        if bias.id == bias_id:
            return bias
    raise UnknownItemError(bias_id)


def filter_by_category(catalog: Sequence[Bias], category: BiasCategory | str) -> list[Bias]:
    category = BiasCategory(category)
    return [bias for bias in catalog if bias.category == category]


__all__ = ["merge_catalogs", "catalog_index", "find_bias", "filter_by_category"]

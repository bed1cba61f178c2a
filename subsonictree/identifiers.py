#!/usr/bin/env python3

"""Identifier grammar shared by the tree and its data sources.

Two shapes exist. A simple id names a static node or a category, for
example ``[mostPlayedID]``. A compound id appends an entity key to a
category id with no separator, for example ``[mostPlayedID]al-42`` for the
track list of album ``al-42`` reached through Most Played. Compound ids are
decoded by stripping the first category prefix that matches, tested in a
fixed priority order.

:meth:`IdentifierCodec.classify` turns any id into exactly one of the
variants below.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple, Union

from subsonictree.constants import CATEGORY_IDS, COMPOUND_PREFIXES


@dataclass(frozen=True)
class StaticId:
    """A static container whose children live in the registry."""

    node_id: str


@dataclass(frozen=True)
class CategoryId:
    """A second level category answered by the data source."""

    category_id: str


@dataclass(frozen=True)
class DetailId:
    """One entity's contents addressed under a category."""

    category_id: str
    entity_key: str


@dataclass(frozen=True)
class UnknownId:
    """An id matching no known shape."""

    raw: str


Identifier = Union[StaticId, CategoryId, DetailId, UnknownId]


class IdentifierCodec:
    """Encoder, decoder and classifier for browse identifiers."""

    def __init__(
        self,
        is_static_container: Callable[[str], bool] = lambda node_id: False,
        category_ids: Iterable[str] = CATEGORY_IDS,
        compound_prefixes: Iterable[str] = COMPOUND_PREFIXES,
    ):
        """Initialize the codec.

        Args:
            is_static_container: Predicate telling whether an id names a
                static node with linked children.
            category_ids: Every category id the data source can answer.
            compound_prefixes: Category ids that may prefix an entity key,
                in match priority order.
        """
        self._is_static_container = is_static_container
        self.category_ids = frozenset(category_ids)
        self.compound_prefixes: Tuple[str, ...] = tuple(compound_prefixes)

    def encode(self, category_id: str, entity_key: str) -> str:
        """Build the compound id addressing ``entity_key`` under a category."""
        if category_id not in self.compound_prefixes:
            raise ValueError(f"{category_id} cannot prefix a compound id")
        if not entity_key:
            raise ValueError("Compound ids require a non-empty entity key")
        return f"{category_id}{entity_key}"

    def is_compound_prefix(self, category_id: str) -> bool:
        return category_id in self.compound_prefixes

    def decode(self, node_id: str) -> Optional[Tuple[str, str]]:
        """Split a compound id into ``(category_id, entity_key)``.

        Returns:
            The decoded pair, or None when the id is not a compound id.
        """
        for prefix in self.compound_prefixes:
            if node_id.startswith(prefix) and len(node_id) > len(prefix):
                return prefix, node_id[len(prefix):]
        return None

    def classify(self, node_id: str) -> Identifier:
        """Map an id onto exactly one identifier variant."""
        if self._is_static_container(node_id):
            return StaticId(node_id)
        if node_id in self.category_ids:
            return CategoryId(node_id)
        decoded = self.decode(node_id)
        if decoded is not None:
            return DetailId(*decoded)
        return UnknownId(node_id)

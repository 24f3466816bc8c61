# priming/core/merge.py
"""
Merge algebra for priming aggregates.

Pure functions only: every call builds new immutable values, nothing is
accumulated between calls.

Rules:
  - Intents union by (name, source).
  - Entities union by (name, id, source).
  - Vocabulary lists union by entity key. When several contributors target
    the same entity, their entries are concatenated in contributor order;
    entries sharing a canonical form collapse into one whose synonyms are
    the union of theirs, in first-seen order.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Tuple, TypeVar

from priming.core.domain.models import (
    Entity,
    Intent,
    PrimingAggregate,
    VocabularyEntry,
    VocabularyList,
)

T = TypeVar("T", bound=Hashable)


def dedupe(items: Iterable[T]) -> Tuple[T, ...]:
    """Drop exact duplicates, keeping the first occurrence of each item."""
    seen: Dict[T, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


def merge_intents(*groups: Iterable[Intent]) -> FrozenSet[Intent]:
    by_key: Dict[Tuple[str, str], Intent] = {}
    for group in groups:
        for intent in group:
            by_key.setdefault(intent.key, intent)
    return frozenset(by_key.values())


def merge_entities(*groups: Iterable[Entity]) -> FrozenSet[Entity]:
    by_key: Dict[Tuple[str, str, str], Entity] = {}
    for group in groups:
        for entity in group:
            by_key.setdefault(entity.key, entity)
    return frozenset(by_key.values())


def merge_entries(entries: Iterable[VocabularyEntry]) -> Tuple[VocabularyEntry, ...]:
    """Collapse entries sharing a canonical form, keeping first-seen order."""
    synonyms: Dict[str, List[str]] = {}
    for entry in entries:
        synonyms.setdefault(entry.canonical_form, []).extend(entry.synonyms)
    return tuple(
        VocabularyEntry(canonical_form=form, synonyms=dedupe(values))
        for form, values in synonyms.items()
    )


def merge_vocabulary(*groups: Mapping[str, VocabularyList]) -> Dict[str, VocabularyList]:
    entries: Dict[str, List[VocabularyEntry]] = {}
    for group in groups:
        for entity_key, vocabulary in group.items():
            entries.setdefault(entity_key, []).extend(vocabulary.entries)
    return {
        entity_key: VocabularyList(entity=entity_key, entries=merge_entries(values))
        for entity_key, values in entries.items()
    }


def merge_aggregates(aggregates: Iterable[PrimingAggregate]) -> PrimingAggregate:
    """Union-merge aggregates in the given (contributor) order."""
    parts = list(aggregates)
    if not parts:
        return PrimingAggregate.empty()
    if len(parts) == 1:
        return parts[0]

    return PrimingAggregate(
        intents=merge_intents(*(p.intents for p in parts)),
        entities=merge_entities(*(p.entities for p in parts)),
        vocabulary_lists=merge_vocabulary(*(p.vocabulary_lists for p in parts)),
    )


def restrict_to_entities(aggregate: PrimingAggregate, entity_names: Iterable[str]) -> PrimingAggregate:
    """
    Keep only the entities named in `entity_names` and their vocabulary.
    Intents are dropped. A bound name the aggregate does not know about is
    kept as a bare `Entity(name)` so the speech channel still hears it.
    """
    names = dedupe(entity_names)
    kept = [e for e in aggregate.entities if e.name in names]
    known = {e.name for e in kept}
    kept.extend(Entity(name=name) for name in names if name not in known)

    return PrimingAggregate(
        entities=frozenset(kept),
        vocabulary_lists={
            key: vocabulary
            for key, vocabulary in aggregate.vocabulary_lists.items()
            if key in names
        },
    )

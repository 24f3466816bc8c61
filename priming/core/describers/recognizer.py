# priming/core/describers/recognizer.py
"""
Recognizer Description Provider.

Turns any recognizer declaration into the PrimingAggregate it contributes.
Handlers are plain functions registered per concrete recognizer class in
`RECOGNIZER_HANDLERS`; every `RecognizerDescriber` starts from its own copy
of that table, so registering a custom kind on one instance never leaks
into another.
"""

from __future__ import annotations

from typing import Callable, Optional

import structlog

from priming.core.describers.registry import KindRegistry
from priming.core.domain.exceptions import UnsupportedRecognizerKindError
from priming.core.domain.models import (
    Entity,
    Intent,
    PrimingAggregate,
    VocabularyEntry,
    VocabularyList,
)
from priming.core.domain.recognizers import (
    PREBUILT_ENTITY_RECOGNIZERS,
    CrossTrainedRecognizerSet,
    LuisRecognizer,
    MultiLanguageRecognizer,
    QnAMakerRecognizer,
    Recognizer,
    RecognizerSet,
    RegexEntityRecognizer,
    RegexRecognizer,
)
from priming.core.merge import dedupe, merge_aggregates, merge_entries

logger = structlog.get_logger()

RecognizerHandler = Callable[["RecognizerDescriber", Recognizer, Optional[str]], PrimingAggregate]

RECOGNIZER_HANDLERS: KindRegistry[RecognizerHandler] = KindRegistry(UnsupportedRecognizerKindError)


class RecognizerDescriber:
    """
    Computes `describe(recognizer, locale) -> PrimingAggregate`.

    Pure and re-entrant: the same declaration always yields an equal aggregate.
    """

    def __init__(self, handlers: Optional[KindRegistry[RecognizerHandler]] = None):
        self._handlers = (handlers or RECOGNIZER_HANDLERS).copy()

    def register(self, cls: type, handler: RecognizerHandler, *, override: bool = False) -> None:
        self._handlers.register(cls, handler, override=override)

    def supports(self, cls: type) -> bool:
        return cls in self._handlers

    def describe(self, recognizer: Recognizer, locale: Optional[str] = None) -> PrimingAggregate:
        """
        Args:
            recognizer: Any registered recognizer variant.
            locale: Turn locale, only consulted by locale-routing recognizers.

        Raises:
            UnsupportedRecognizerKindError: If the variant has no handler.
        """
        handler = self._handlers.resolve(recognizer)
        return handler(self, recognizer, locale)


# ---------------------------------------------------------------------------
# Leaf recognizers
# ---------------------------------------------------------------------------


@RECOGNIZER_HANDLERS.handles(*PREBUILT_ENTITY_RECOGNIZERS)
def _describe_prebuilt_entity(describer, recognizer, locale):
    return PrimingAggregate(entities=frozenset([Entity(name=recognizer.entity_name)]))


@RECOGNIZER_HANDLERS.handles(RegexEntityRecognizer)
def _describe_regex_entity(describer, recognizer, locale):
    return PrimingAggregate(
        entities=frozenset([Entity(name=recognizer.name, id=recognizer.id or "")])
    )


@RECOGNIZER_HANDLERS.handles(LuisRecognizer)
def _describe_luis(describer, recognizer: LuisRecognizer, locale):
    # The model is already locale specific, so `locale` is ignored.
    vocabulary = {}
    for dynamic_list in recognizer.dynamic_lists:
        entries = [
            VocabularyEntry(
                canonical_form=element.canonical_form,
                synonyms=dedupe([element.canonical_form, *element.synonyms]),
            )
            for element in dynamic_list.elements
        ]
        previous = vocabulary.get(dynamic_list.entity)
        if previous is not None:
            entries = [*previous.entries, *entries]
        vocabulary[dynamic_list.entity] = VocabularyList(
            entity=dynamic_list.entity, entries=merge_entries(entries)
        )

    return PrimingAggregate(
        intents=frozenset(recognizer.possible_intents),
        entities=frozenset(recognizer.possible_entities),
        vocabulary_lists=vocabulary,
    )


@RECOGNIZER_HANDLERS.handles(RegexRecognizer)
def _describe_regex(describer, recognizer: RegexRecognizer, locale):
    source = recognizer.id or ""
    intents = PrimingAggregate(
        intents=frozenset(Intent(name=p.intent, source=source) for p in recognizer.intents)
    )
    return merge_aggregates(
        [intents, *(describer.describe(child, locale) for child in recognizer.entities)]
    )


@RECOGNIZER_HANDLERS.handles(QnAMakerRecognizer)
def _describe_qna(describer, recognizer, locale):
    # FAQ answers have no intent/entity schema to prime.
    return PrimingAggregate.empty()


# ---------------------------------------------------------------------------
# Composite recognizers
# ---------------------------------------------------------------------------


@RECOGNIZER_HANDLERS.handles(RecognizerSet, CrossTrainedRecognizerSet)
def _describe_set(describer, recognizer, locale):
    return merge_aggregates(describer.describe(child, locale) for child in recognizer.recognizers)


@RECOGNIZER_HANDLERS.handles(MultiLanguageRecognizer)
def _describe_multi_language(describer, recognizer: MultiLanguageRecognizer, locale):
    child = recognizer.recognizers.get(locale or "")
    if child is None:
        child = recognizer.recognizers.get("")
    if child is None:
        logger.debug(
            "priming_locale_unresolved",
            recognizer_id=recognizer.id,
            locale=locale,
            available=sorted(recognizer.recognizers),
        )
        return PrimingAggregate.empty()
    return describer.describe(child, locale)

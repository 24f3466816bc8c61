# priming/core/describers/dialog.py
"""
Dialog Priming Provider.

Computes what a dialog can prime, built on top of the recognizer describer.
Composite adaptive dialogs union their recognizer with every statically
reachable child, regardless of which triggers are enabled at runtime; that
union is the "possible" universe for the dialog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set

import structlog

from priming.core.describers.recognizer import RecognizerDescriber
from priming.core.describers.registry import KindRegistry
from priming.core.domain.dialogs import (
    AdaptiveDialog,
    Ask,
    AttachmentInput,
    BeginDialog,
    ChoiceInput,
    ConfirmInput,
    DateTimeInput,
    Dialog,
    DialogSet,
    EndDialog,
    Foreach,
    IfCondition,
    NumberInput,
    SendActivity,
    TextInput,
)
from priming.core.domain.exceptions import UnsupportedDialogKindError
from priming.core.domain.models import Entity, PrimingAggregate, VocabularyEntry, VocabularyList
from priming.core.merge import merge_aggregates

logger = structlog.get_logger()


@dataclass
class DescribeScope:
    """State threaded through one describe() walk."""
    dialogs: Optional[DialogSet] = None
    locale: Optional[str] = None
    visited: Set[str] = field(default_factory=set)


DialogHandler = Callable[["DialogDescriber", Dialog, DescribeScope], PrimingAggregate]

DIALOG_HANDLERS: KindRegistry[DialogHandler] = KindRegistry(UnsupportedDialogKindError)


class DialogDescriber:
    """
    Computes `describe(dialog, dialogs, locale) -> PrimingAggregate`.

    `dialogs` plays the role of the dialog context: it resolves dialogs
    referenced by id from `BeginDialog` actions.
    """

    def __init__(
        self,
        recognizers: Optional[RecognizerDescriber] = None,
        handlers: Optional[KindRegistry[DialogHandler]] = None,
    ):
        self.recognizers = recognizers or RecognizerDescriber()
        self._handlers = (handlers or DIALOG_HANDLERS).copy()

    def register(self, cls: type, handler: DialogHandler, *, override: bool = False) -> None:
        self._handlers.register(cls, handler, override=override)

    def supports(self, cls: type) -> bool:
        return cls in self._handlers

    def describe(
        self,
        dialog: Dialog,
        dialogs: Optional[DialogSet] = None,
        locale: Optional[str] = None,
    ) -> PrimingAggregate:
        """
        Raises:
            UnsupportedDialogKindError: If any reachable dialog has no handler.
            UnsupportedRecognizerKindError: If a configured recognizer has no handler.
        """
        return self.describe_child(dialog, DescribeScope(dialogs=dialogs, locale=locale))

    def describe_child(self, dialog: Dialog, scope: DescribeScope) -> PrimingAggregate:
        """Describe `dialog` as part of an ongoing walk. Each dialog id is visited once."""
        handler = self._handlers.resolve(dialog)
        if dialog.id in scope.visited:
            return PrimingAggregate.empty()
        scope.visited.add(dialog.id)
        return handler(self, dialog, scope)

    def describe_all(self, dialogs: Iterable[Dialog], scope: DescribeScope) -> PrimingAggregate:
        return merge_aggregates(self.describe_child(d, scope) for d in dialogs)


def _entities(*names: str) -> PrimingAggregate:
    return PrimingAggregate(entities=frozenset(Entity(name=n) for n in names))


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@DIALOG_HANDLERS.handles(NumberInput)
def _describe_number_input(describer, dialog, scope):
    return _entities("number")


@DIALOG_HANDLERS.handles(ConfirmInput)
def _describe_confirm_input(describer, dialog, scope):
    return _entities("boolean")


@DIALOG_HANDLERS.handles(DateTimeInput)
def _describe_datetime_input(describer, dialog, scope):
    return _entities("datetime")


@DIALOG_HANDLERS.handles(ChoiceInput)
def _describe_choice_input(describer, dialog: ChoiceInput, scope):
    options = dialog.recognizer_options
    names: List[str] = []
    if options.recognize_numbers:
        names.append("number")
    if options.recognize_ordinals:
        names.append("ordinal")

    entries = []
    for choice in dialog.choices:
        synonyms: List[str] = []
        if not options.no_value:
            synonyms.append(choice.value)
        if not options.no_action and choice.action is not None and choice.action.title:
            synonyms.append(choice.action.title)
        synonyms.extend(choice.synonyms)
        entries.append(VocabularyEntry(canonical_form=choice.value, synonyms=tuple(synonyms)))

    vocabulary = VocabularyList(entity=dialog.id, entries=tuple(entries))
    return PrimingAggregate(
        entities=frozenset(Entity(name=n) for n in names),
        vocabulary_lists={dialog.id: vocabulary},
    )


# Free-form inputs and pure control flow add no priming signal.
@DIALOG_HANDLERS.handles(TextInput, AttachmentInput, SendActivity, Ask, EndDialog)
def _describe_nothing(describer, dialog, scope):
    return PrimingAggregate.empty()


# ---------------------------------------------------------------------------
# Action containers
# ---------------------------------------------------------------------------


@DIALOG_HANDLERS.handles(IfCondition)
def _describe_if_condition(describer, dialog: IfCondition, scope):
    return describer.describe_all([*dialog.actions, *dialog.else_actions], scope)


@DIALOG_HANDLERS.handles(Foreach)
def _describe_foreach(describer, dialog: Foreach, scope):
    return describer.describe_all(dialog.actions, scope)


@DIALOG_HANDLERS.handles(BeginDialog)
def _describe_begin_dialog(describer, dialog: BeginDialog, scope):
    target = dialog.dialog
    if isinstance(target, str):
        resolved = scope.dialogs.find(target) if scope.dialogs is not None else None
        if resolved is None:
            logger.warning("priming_dialog_reference_unresolved", action_id=dialog.id, target=target)
            return PrimingAggregate.empty()
        target = resolved
    return describer.describe_child(target, scope)


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------


@DIALOG_HANDLERS.handles(AdaptiveDialog)
def _describe_adaptive(describer, dialog: AdaptiveDialog, scope):
    parts = []
    if dialog.recognizer is not None:
        parts.append(describer.recognizers.describe(dialog.recognizer, scope.locale))
    parts.append(describer.describe_all(dialog.actions(), scope))
    return merge_aggregates(parts)

# priming/core/context_stack.py
"""
Turn-scoped priming context stack.

One ContextFrame per begun-but-not-ended dialog, innermost dialog on top.
The stack lives in the dialog engine's per-turn transient state and is
mutated only through explicit begin / declare / end calls made by the
engine as dialogs start and finish. Frames are never released on scope
exit: the engine's event contract pairs every push with a pop.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Sequence

import structlog

from priming.core.describers.dialog import DialogDescriber
from priming.core.domain.dialogs import Dialog, DialogSet
from priming.core.domain.exceptions import SchemaBindingMissingError, StackMismatchError
from priming.core.domain.models import ContextFrame, PrimingAggregate
from priming.core.merge import dedupe, restrict_to_entities

logger = structlog.get_logger()

TURN_STATE_KEY = "turn.primingContext"


class ContextStack:
    """LIFO sequence of ContextFrames owned by a single turn."""

    def __init__(self) -> None:
        self._frames: List[ContextFrame] = []

    @classmethod
    def attach(cls, turn_state: MutableMapping[str, Any], key: str = TURN_STATE_KEY) -> "ContextStack":
        """Return the stack stored in `turn_state`, creating it on first use."""
        stack = turn_state.get(key)
        if stack is None:
            stack = cls()
            turn_state[key] = stack
        return stack

    @staticmethod
    def detach(turn_state: MutableMapping[str, Any], key: str = TURN_STATE_KEY) -> Optional["ContextStack"]:
        """Discard the stack at turn end."""
        return turn_state.pop(key, None)

    @property
    def top(self) -> Optional[ContextFrame]:
        return self._frames[-1] if self._frames else None

    def push(self, frame: ContextFrame) -> None:
        self._frames.append(frame)

    def pop(self) -> ContextFrame:
        return self._frames.pop()

    def replace_top(self, frame: ContextFrame) -> None:
        self._frames[-1] = frame

    def clear(self) -> int:
        count = len(self._frames)
        self._frames.clear()
        return count

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[ContextFrame]:
        return iter(self._frames)


def schema_bindings(dialog: Dialog, properties: Sequence[str]) -> Optional[List[str]]:
    """
    Entity names the dialog's schema binds to `properties`, in declaration
    order without duplicates. Returns None if the dialog has no schema.

    A property without an explicit `$entities` list is bound to the entity
    of the same name.

    Raises:
        SchemaBindingMissingError: If a property is absent from the schema.
    """
    schema = getattr(dialog, "property_schema", None)
    if not schema:
        return None

    declared: Dict[str, Any] = schema.get("properties") or {}
    names: List[str] = []
    for prop in properties:
        if prop not in declared:
            raise SchemaBindingMissingError(dialog.id, prop)
        definition = declared[prop] or {}
        names.extend(definition.get("$entities") or [prop])
    return list(dedupe(names))


class ContextStackManager:
    """
    Drives the ContextStack from dialog lifecycle events.

    The ambient view (`locale`, `possible`, `expected`) is the top frame,
    or the turn's base locale with empty aggregates when no dialog is active.
    """

    def __init__(
        self,
        describer: DialogDescriber,
        turn_state: MutableMapping[str, Any],
        turn_locale: str = "",
        dialogs: Optional[DialogSet] = None,
        state_key: str = TURN_STATE_KEY,
    ):
        self.describer = describer
        self.turn_locale = turn_locale
        self.dialogs = dialogs
        self.stack = ContextStack.attach(turn_state, state_key)

    # --- Ambient view ---

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def top(self) -> Optional[ContextFrame]:
        return self.stack.top

    @property
    def current(self) -> ContextFrame:
        return self.stack.top or ContextFrame(locale=self.turn_locale)

    @property
    def locale(self) -> str:
        return self.current.locale

    @property
    def possible(self) -> PrimingAggregate:
        return self.current.possible

    @property
    def expected(self) -> PrimingAggregate:
        return self.current.expected

    # --- Transitions ---

    def begin_dialog(self, dialog: Dialog, locale: Optional[str] = None) -> ContextFrame:
        """
        Describe `dialog` and push its frame. Nothing specific is requested
        yet, so `expected` starts equal to `possible`.
        """
        resolved = locale or self.turn_locale
        possible = self.describer.describe(dialog, self.dialogs, resolved)
        frame = ContextFrame(
            dialog_id=dialog.id, locale=resolved, described=possible, possible=possible, expected=possible
        )
        self.stack.push(frame)

        logger.debug(
            "priming_frame_pushed",
            dialog_id=dialog.id,
            depth=self.depth,
            locale=resolved,
            intents=len(possible.intents),
            entities=len(possible.entities),
        )
        return frame

    def declare_expected_properties(self, dialog: Dialog, properties: Sequence[str]) -> ContextFrame:
        """
        Narrow the top frame to the entities the dialog's schema binds to
        `properties`. Each declaration replaces the previous one: narrowing
        starts from the begin-time description, not from the current frame.
        Without a schema the frame is left unchanged.

        Raises:
            StackMismatchError: If `dialog` does not own the top frame.
            SchemaBindingMissingError: If a property is not in the schema.
        """
        frame = self._require_top(dialog)
        bound = schema_bindings(dialog, properties)
        if bound is None:
            return frame

        narrowed = restrict_to_entities(frame.described, bound)
        frame = frame.model_copy(update={"possible": narrowed, "expected": narrowed})
        self.stack.replace_top(frame)

        logger.debug(
            "priming_frame_narrowed",
            dialog_id=dialog.id,
            depth=self.depth,
            properties=list(properties),
            entities=bound,
        )
        return frame

    def end_dialog(self, dialog: Dialog) -> ContextFrame:
        """
        Pop the frame owned by `dialog` and return the new ambient frame.

        Raises:
            StackMismatchError: If `dialog` is not the top. The stack is left untouched.
        """
        self._require_top(dialog)
        self.stack.pop()
        logger.debug("priming_frame_popped", dialog_id=dialog.id, depth=self.depth, locale=self.locale)
        return self.current

    def unwind(self) -> int:
        """Drop every frame, e.g. when the conversation is reset mid-turn."""
        dropped = self.stack.clear()
        if dropped:
            logger.info("priming_stack_unwound", frames=dropped, locale=self.turn_locale)
        return dropped

    def _require_top(self, dialog: Dialog) -> ContextFrame:
        top = self.stack.top
        if top is None or top.dialog_id != dialog.id:
            raise StackMismatchError(dialog.id, top.dialog_id if top else None)
        return top

# priming/core/use_cases/track_dialog_priming.py
import structlog
from typing import Any, MutableMapping, Optional, Sequence

from priming.core.context_stack import TURN_STATE_KEY, ContextStack, ContextStackManager
from priming.core.describers.dialog import DialogDescriber
from priming.core.domain.dialogs import Dialog, DialogSet
from priming.core.domain.exceptions import DomainError
from priming.core.domain.models import ContextFrame
from priming.core.ports.speech_channel import ISpeechChannel
from priming.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

TurnState = MutableMapping[str, Any]


class TrackDialogPriming:
    """
    Use Case: Keeps the speech channel primed for the innermost active dialog.

    The dialog engine calls one method per lifecycle event. Each call:
    1. Mutates the turn's context stack synchronously, before any await,
       so a push is visible before nested dialogs begin and a pop happens
       before control returns to the parent.
    2. Publishes the resulting ambient frame to the speech channel port.
    3. Lets domain errors (StackMismatch, SchemaBindingMissing...) propagate.
    """

    def __init__(
        self,
        describer: DialogDescriber,
        channel: ISpeechChannel,
        default_locale: str = "",
        state_key: str = TURN_STATE_KEY,
    ):
        self.describer = describer
        self.channel = channel
        self.default_locale = default_locale
        self.state_key = state_key
        self._manager_key = f"{state_key}.manager"

    def start_turn(
        self,
        turn_state: TurnState,
        turn_locale: Optional[str] = None,
        dialogs: Optional[DialogSet] = None,
    ) -> ContextStackManager:
        """Creates the turn's (empty) context stack and its manager."""
        manager = ContextStackManager(
            self.describer,
            turn_state,
            turn_locale=turn_locale or self.default_locale,
            dialogs=dialogs,
            state_key=self.state_key,
        )
        turn_state[self._manager_key] = manager
        return manager

    def manager_for(self, turn_state: TurnState) -> ContextStackManager:
        manager = turn_state.get(self._manager_key)
        if manager is None:
            manager = self.start_turn(turn_state)
        return manager

    async def on_begin(self, turn_state: TurnState, dialog: Dialog, locale: Optional[str] = None) -> ContextFrame:
        with tracer.start_as_current_span("use_case.priming.begin") as span:
            span.set_attribute("app.dialog_id", dialog.id)
            manager = self.manager_for(turn_state)
            frame = manager.begin_dialog(dialog, locale=locale)
            span.set_attribute("app.priming_depth", manager.depth)

            logger.info("priming_dialog_begun", dialog_id=dialog.id, depth=manager.depth, locale=frame.locale)
            await self._publish(frame)
            return frame

    async def on_expected_properties(
        self, turn_state: TurnState, dialog: Dialog, properties: Sequence[str]
    ) -> ContextFrame:
        with tracer.start_as_current_span("use_case.priming.expected") as span:
            span.set_attribute("app.dialog_id", dialog.id)
            manager = self.manager_for(turn_state)
            frame = manager.declare_expected_properties(dialog, properties)

            logger.info("priming_expectations_declared", dialog_id=dialog.id, properties=list(properties))
            await self._publish(frame)
            return frame

    async def on_end(self, turn_state: TurnState, dialog: Dialog) -> ContextFrame:
        with tracer.start_as_current_span("use_case.priming.end") as span:
            span.set_attribute("app.dialog_id", dialog.id)
            manager = self.manager_for(turn_state)
            frame = manager.end_dialog(dialog)
            span.set_attribute("app.priming_depth", manager.depth)

            logger.info("priming_dialog_ended", dialog_id=dialog.id, depth=manager.depth, locale=frame.locale)
            await self._publish(frame)
            return frame

    async def on_cancel(self, turn_state: TurnState) -> ContextFrame:
        """Turn cancellation: unwind the whole stack, then publish the empty default."""
        with tracer.start_as_current_span("use_case.priming.cancel") as span:
            manager = self.manager_for(turn_state)
            dropped = manager.unwind()
            span.set_attribute("app.priming_dropped", dropped)

            frame = manager.current
            await self._publish(frame)
            return frame

    def end_turn(self, turn_state: TurnState) -> None:
        """Discards the turn's stack. Frames still open at this point are dropped."""
        manager = turn_state.pop(self._manager_key, None)
        if manager is not None and manager.depth:
            logger.warning("priming_turn_ended_with_open_frames", frames=manager.depth)
        ContextStack.detach(turn_state, self.state_key)

    async def _publish(self, frame: ContextFrame) -> None:
        try:
            await self.channel.publish(frame)
        except DomainError:
            raise
        except Exception as e:
            logger.error("priming_publish_failed", dialog_id=frame.dialog_id, error=str(e), exc_info=True)
            raise DomainError(f"Unexpected speech channel failure: {str(e)}")

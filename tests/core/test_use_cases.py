# tests/core/test_use_cases.py
import pytest

from priming.core.domain.dialogs import AdaptiveDialog, Ask, NumberInput, OnBeginDialog
from priming.core.domain.exceptions import DomainError, SchemaBindingMissingError, StackMismatchError
from priming.core.domain.models import ContextFrame, Entity, PrimingAggregate


@pytest.fixture
def adaptive(luis, schema):
    return AdaptiveDialog(
        recognizer=luis,
        triggers=[OnBeginDialog(actions=[Ask(activity="Prompt", expected_properties=["property1"])])],
        schema=schema,
    )


@pytest.mark.asyncio
class TestTrackDialogPriming:

    async def test_begin_publishes_pushed_frame(self, container, mock_speech_channel, turn_state):
        """
        Scenario: A number prompt begins on an empty stack.
        Expected: The frame is pushed and published to the speech channel.
        """
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        use_case.start_turn(turn_state, turn_locale="en-us")
        dialog = NumberInput()

        # Act
        frame = await use_case.on_begin(turn_state, dialog)

        # Assert
        assert frame.dialog_id == dialog.id
        assert frame.possible == PrimingAggregate(entities=[Entity(name="number")])
        assert use_case.manager_for(turn_state).depth == 1
        mock_speech_channel.publish.assert_awaited_once_with(frame)

    async def test_full_lifecycle(self, container, mock_speech_channel, turn_state, adaptive):
        """
        Scenario: Begin an adaptive dialog, ask for property1, then end it.
        Expected: Three publishes; the last one is the empty default in the turn locale.
        """
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        use_case.start_turn(turn_state, turn_locale="en-us")

        # Act
        await use_case.on_begin(turn_state, adaptive)
        narrowed = await use_case.on_expected_properties(turn_state, adaptive, ["property1"])
        final = await use_case.on_end(turn_state, adaptive)

        # Assert
        assert narrowed.expected.entities == {Entity(name="entity1", source="foo.lu")}
        assert narrowed.possible.intents == frozenset()
        assert final == ContextFrame(locale="en-us")
        assert mock_speech_channel.publish.await_count == 3
        assert mock_speech_channel.publish.await_args.args[0] == final

    async def test_nested_dialogs_restore_parent(self, container, mock_speech_channel, turn_state, adaptive):
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        use_case.start_turn(turn_state, turn_locale="en-us")
        child = NumberInput()

        # Act
        parent_frame = await use_case.on_begin(turn_state, adaptive)
        await use_case.on_begin(turn_state, child)
        restored = await use_case.on_end(turn_state, child)

        # Assert
        assert restored == parent_frame

    async def test_mismatched_end_propagates(self, container, mock_speech_channel, turn_state):
        """
        Scenario: The engine reports the end of a dialog that is not on top.
        Expected: StackMismatch propagates, nothing is published for it, the stack is unchanged.
        """
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        use_case.start_turn(turn_state, turn_locale="en-us")
        outer, inner = AdaptiveDialog(), NumberInput()
        await use_case.on_begin(turn_state, outer)
        await use_case.on_begin(turn_state, inner)
        mock_speech_channel.publish.reset_mock()

        # Act & Assert
        with pytest.raises(StackMismatchError):
            await use_case.on_end(turn_state, outer)

        mock_speech_channel.publish.assert_not_awaited()
        assert use_case.manager_for(turn_state).depth == 2

    async def test_missing_schema_binding_propagates(self, container, turn_state, adaptive):
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        await use_case.on_begin(turn_state, adaptive)

        # Act & Assert
        with pytest.raises(SchemaBindingMissingError):
            await use_case.on_expected_properties(turn_state, adaptive, ["unknown"])

    async def test_channel_failure(self, container, mock_speech_channel, turn_state):
        """
        Scenario: The speech channel throws an unexpected infrastructure exception.
        Expected: The Use Case wraps it in a DomainError; the frame stays pushed.
        """
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        mock_speech_channel.publish.side_effect = Exception("Socket closed")

        # Act & Assert
        with pytest.raises(DomainError) as excinfo:
            await use_case.on_begin(turn_state, NumberInput())

        assert "Unexpected speech channel failure" in str(excinfo.value)
        assert use_case.manager_for(turn_state).depth == 1

    async def test_cancel_unwinds_and_publishes_default(self, container, mock_speech_channel, turn_state, adaptive):
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        use_case.start_turn(turn_state, turn_locale="de-de")
        await use_case.on_begin(turn_state, adaptive)
        await use_case.on_begin(turn_state, NumberInput())

        # Act
        frame = await use_case.on_cancel(turn_state)

        # Assert
        assert frame == ContextFrame(locale="de-de")
        assert use_case.manager_for(turn_state).depth == 0
        mock_speech_channel.publish.assert_awaited_with(frame)

    async def test_end_turn_discards_state(self, container, turn_state):
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        await use_case.on_begin(turn_state, NumberInput())

        # Act
        use_case.end_turn(turn_state)

        # Assert
        assert turn_state == {}

    async def test_turns_are_isolated(self, container):
        # Arrange
        use_case = container.track_dialog_priming_use_case()
        first_turn, second_turn = {}, {}

        # Act
        await use_case.on_begin(first_turn, NumberInput())

        # Assert
        assert use_case.manager_for(first_turn).depth == 1
        assert use_case.manager_for(second_turn).depth == 0

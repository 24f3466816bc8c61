# priming/core/domain/dialogs.py
"""
Dialog declarations used for priming.

Only the statically declared tree matters here: inputs, actions, triggers
and composite adaptive dialogs. Turn routing and activity handling belong
to the dialog engine and are not modelled.
"""

import uuid
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from priming.core.domain.recognizers import Recognizer


class Dialog(BaseModel):
    """
    Base class for every dialog and action.
    A dialog declared without an id gets a generated one, so each instance
    can be matched against its priming frame.
    """
    kind: ClassVar[str] = "Microsoft.Dialog"

    id: Optional[str] = None

    def model_post_init(self, __context: Any) -> None:
        if not self.id:
            self.id = f"{self.kind}[{uuid.uuid4().hex[:8]}]"


# --- Inputs ---

class InputDialog(Dialog):
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    property_path: Optional[str] = Field(default=None, alias="property", description="Memory path the input value is bound to.")
    always_prompt: bool = False


class NumberInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.NumberInput"


class ConfirmInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.ConfirmInput"


class DateTimeInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.DateTimeInput"


class TextInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.TextInput"


class AttachmentInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.AttachmentInput"


class CardAction(BaseModel):
    """Button shown next to a choice. Its title is also something users say."""
    type: str = "imBack"
    title: str = ""
    value: Optional[str] = None


class Choice(BaseModel):
    value: str
    action: Optional[CardAction] = None
    synonyms: List[str] = Field(default_factory=list)


class FindChoicesOptions(BaseModel):
    """Controls which parts of a choice are matched."""
    no_value: bool = False
    no_action: bool = False
    recognize_numbers: bool = True
    recognize_ordinals: bool = True


class ChoiceInput(InputDialog):
    kind: ClassVar[str] = "Microsoft.ChoiceInput"

    choices: List[Choice] = Field(default_factory=list)
    recognizer_options: FindChoicesOptions = Field(default_factory=FindChoicesOptions)

    @field_validator("choices", mode="before")
    @classmethod
    def _coerce_plain_choices(cls, value: Any) -> Any:
        # Declarative resources may list choices as bare strings.
        if isinstance(value, list):
            return [{"value": v} if isinstance(v, str) else v for v in value]
        return value


# --- Actions (pure control flow) ---

class SendActivity(Dialog):
    kind: ClassVar[str] = "Microsoft.SendActivity"

    activity: Optional[str] = None


class Ask(SendActivity):
    """Sends a prompt and declares which schema properties are now expected."""
    kind: ClassVar[str] = "Microsoft.Ask"

    expected_properties: List[str] = Field(default_factory=list)


class EndDialog(Dialog):
    kind: ClassVar[str] = "Microsoft.EndDialog"

    value: Optional[str] = None


class BeginDialog(Dialog):
    """Starts another dialog, given inline or by id."""
    kind: ClassVar[str] = "Microsoft.BeginDialog"

    dialog: Union[Dialog, str]


class IfCondition(Dialog):
    kind: ClassVar[str] = "Microsoft.IfCondition"

    condition: str = "true"
    actions: List[Dialog] = Field(default_factory=list)
    else_actions: List[Dialog] = Field(default_factory=list)


class Foreach(Dialog):
    kind: ClassVar[str] = "Microsoft.Foreach"

    items_property: str = ""
    actions: List[Dialog] = Field(default_factory=list)


# --- Triggers ---

class OnCondition(BaseModel):
    """A trigger: a condition plus the actions it runs."""
    kind: ClassVar[str] = "Microsoft.OnCondition"

    condition: Optional[str] = None
    actions: List[Dialog] = Field(default_factory=list)


class OnBeginDialog(OnCondition):
    kind: ClassVar[str] = "Microsoft.OnBeginDialog"


class OnIntent(OnCondition):
    kind: ClassVar[str] = "Microsoft.OnIntent"

    intent: str = ""
    entities: List[str] = Field(default_factory=list)


class OnUnknownIntent(OnCondition):
    kind: ClassVar[str] = "Microsoft.OnUnknownIntent"


# --- Composite ---

class AdaptiveDialog(Dialog):
    """
    Schema-driven composite dialog.

    `property_schema` (declared as "schema") is a JSON-schema-like object
    whose `properties.<name>.$entities` lists the entity names that can fill
    each property.
    """
    model_config = ConfigDict(populate_by_name=True)
    kind: ClassVar[str] = "Microsoft.AdaptiveDialog"

    recognizer: Optional[Recognizer] = None
    triggers: List[OnCondition] = Field(default_factory=list)
    property_schema: Optional[Dict[str, Any]] = Field(default=None, alias="schema")

    def actions(self) -> Iterator[Dialog]:
        """Top-level actions of every trigger, in declaration order."""
        for trigger in self.triggers:
            yield from trigger.actions


class DialogSet:
    """Dialogs addressable by id, used to resolve `BeginDialog` references."""

    def __init__(self, dialogs: Optional[List[Dialog]] = None):
        self._dialogs: Dict[str, Dialog] = {}
        for dialog in dialogs or []:
            self.add(dialog)

    def add(self, dialog: Dialog) -> "DialogSet":
        self._dialogs[dialog.id] = dialog
        return self

    def find(self, dialog_id: str) -> Optional[Dialog]:
        return self._dialogs.get(dialog_id)

    def __contains__(self, dialog_id: object) -> bool:
        return dialog_id in self._dialogs

    def __len__(self) -> int:
        return len(self._dialogs)

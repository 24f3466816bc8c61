# priming/core/domain/exceptions.py
from typing import Optional


class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Polymorphic Dispatch Errors ---

class UnsupportedRecognizerKindError(DomainError):
    """Raised when no describer is registered for a recognizer variant."""
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Recognizer kind '{kind}' has no registered priming describer.")

class UnsupportedDialogKindError(DomainError):
    """Raised when no describer is registered for a dialog variant."""
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Dialog kind '{kind}' has no registered priming describer.")

# --- Context Stack Errors ---

class StackMismatchError(DomainError):
    """Raised when a dialog ends (or declares expectations) without being the stack top."""
    def __init__(self, dialog_id: str, top_id: Optional[str]):
        self.dialog_id = dialog_id
        self.top_id = top_id
        top = f"'{top_id}'" if top_id is not None else "an empty stack"
        super().__init__(f"Dialog '{dialog_id}' is not the active priming frame; found {top}.")

class SchemaBindingMissingError(DomainError):
    """Raised when an expected property has no entry in the dialog schema."""
    def __init__(self, dialog_id: str, property_name: str):
        self.dialog_id = dialog_id
        self.property_name = property_name
        super().__init__(f"Property '{property_name}' is not declared in the schema of dialog '{dialog_id}'.")

# Short names used throughout the engine contract.
StackMismatch = StackMismatchError
UnsupportedRecognizerKind = UnsupportedRecognizerKindError
UnsupportedDialogKind = UnsupportedDialogKindError
SchemaBindingMissing = SchemaBindingMissingError

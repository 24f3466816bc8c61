# priming/adapters/declarative.py
"""
Declarative resource loader.

Turns `$kind`-tagged JSON (the `.dialog` / `.recognizer` resource format)
into recognizer and dialog models:

* `$kind` selects the variant, e.g. "Microsoft.NumberInput". The
  "Microsoft." prefix may be omitted.
* camelCase keys are mapped to the models' snake_case fields.
* Any nested object carrying a `$kind` is loaded recursively.
* The body of `schema` is kept verbatim (its `$entities` bindings matter).

Unknown kinds raise the same errors the describers raise, so a typo in a
resource fails at load time instead of priming nothing.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, Union

import structlog

from priming.core.domain import dialogs as dialog_models
from priming.core.domain import recognizers as recognizer_models
from priming.core.domain.dialogs import Dialog, DialogSet, OnCondition
from priming.core.domain.exceptions import (
    DomainError,
    UnsupportedDialogKindError,
    UnsupportedRecognizerKindError,
)
from priming.core.domain.recognizers import Recognizer

logger = structlog.get_logger()

KIND_PREFIX = "Microsoft."
RESOURCE_SUFFIXES = (".dialog", ".json")

# Keys whose values are recognizers, whatever object holds them.
_RECOGNIZER_KEYS = {"recognizer", "recognizers"}
# Keys whose bodies are copied without key conversion.
_VERBATIM_KEYS = {"schema"}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")

LoadedModel = Union[Recognizer, Dialog, OnCondition]


def _collect_kinds(module, base: type, *abstract: type) -> Dict[str, type]:
    table: Dict[str, type] = {}
    for obj in vars(module).values():
        if isinstance(obj, type) and issubclass(obj, base) and obj not in abstract and "kind" in vars(obj):
            table[obj.kind] = obj
    return table


RECOGNIZER_KINDS: Dict[str, Type[Recognizer]] = _collect_kinds(recognizer_models, Recognizer, Recognizer)
DIALOG_KINDS: Dict[str, type] = {
    **_collect_kinds(dialog_models, Dialog, Dialog),
    **_collect_kinds(dialog_models, OnCondition),
}


def snake_case(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _lookup(table: Mapping[str, type], kind: str) -> Optional[type]:
    if kind in table:
        return table[kind]
    return table.get(KIND_PREFIX + kind)


def _convert(value: Any, recognizer_context: bool) -> Any:
    if isinstance(value, Mapping):
        if "$kind" in value:
            return _build(value, recognizer_context)
        if value and all(isinstance(v, Mapping) and "$kind" in v for v in value.values()):
            # Locale -> recognizer maps keep their keys untouched.
            return {k: _build(v, recognizer_context) for k, v in value.items()}
        return {snake_case(k): _convert(v, recognizer_context) for k, v in value.items() if not k.startswith("$")}
    if isinstance(value, list):
        return [_convert(v, recognizer_context) for v in value]
    return value


def _build(data: Mapping[str, Any], recognizer_context: bool) -> LoadedModel:
    kind = data.get("$kind") or data.get("kind")
    if not isinstance(kind, str):
        raise DomainError(f"Declarative object is missing '$kind': {sorted(data)}")

    if recognizer_context:
        cls = _lookup(RECOGNIZER_KINDS, kind)
        if cls is None:
            raise UnsupportedRecognizerKindError(kind)
    else:
        cls = _lookup(DIALOG_KINDS, kind)
        if cls is None:
            raise UnsupportedDialogKindError(kind)

    fields: Dict[str, Any] = {}
    for key, value in data.items():
        if key.startswith("$") or key == "kind":
            continue
        name = snake_case(key)
        if key in _VERBATIM_KEYS:
            fields[name] = value
            continue
        nested_recognizers = key in _RECOGNIZER_KEYS or issubclass(cls, Recognizer)
        fields[name] = _convert(value, nested_recognizers)

    return cls.model_validate(fields)


def load_recognizer(data: Mapping[str, Any]) -> Recognizer:
    """
    Build a recognizer from its declarative JSON form.

    Raises:
        UnsupportedRecognizerKindError: If `$kind` (here or nested) is unknown.
    """
    return _build(data, recognizer_context=True)


def load_dialog(data: Mapping[str, Any], default_id: Optional[str] = None) -> Dialog:
    """
    Build a dialog from its declarative JSON form.

    Args:
        data: The decoded resource.
        default_id: Id used when the resource declares none (the file stem
            for resources loaded from disk).

    Raises:
        UnsupportedDialogKindError: If a dialog `$kind` is unknown.
        UnsupportedRecognizerKindError: If a recognizer `$kind` is unknown.
    """
    payload = dict(data)
    if default_id and not payload.get("id"):
        payload["id"] = default_id
    dialog = _build(payload, recognizer_context=False)
    if not isinstance(dialog, Dialog):
        raise UnsupportedDialogKindError(str(payload.get("$kind")))
    return dialog


def load_dialog_file(path: Union[str, Path]) -> Dialog:
    """Load one `.dialog` resource. Its id defaults to the file stem."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return load_dialog(data, default_id=path.name.split(".")[0])


def load_dialog_directory(directory: Union[str, Path]) -> DialogSet:
    """
    Load every resource in `directory` into a DialogSet.
    Resources that fail to load are logged and skipped.
    """
    directory = Path(directory)
    dialogs = DialogSet()

    if not directory.exists():
        logger.warning("dialog_directory_not_found", path=str(directory))
        return dialogs

    for resource in sorted(directory.iterdir()):
        if resource.suffix not in RESOURCE_SUFFIXES:
            continue
        try:
            dialogs.add(load_dialog_file(resource))
        except (DomainError, ValueError, OSError) as e:
            logger.error("dialog_resource_failed", path=str(resource), error=str(e))

    logger.info("dialog_resources_loaded", path=str(directory), count=len(dialogs))
    return dialogs

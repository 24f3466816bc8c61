# priming/core/describers/registry.py
"""
Lightweight kind -> handler registry.

Describers dispatch on the *concrete* class of a recognizer or dialog.
Subclasses do not inherit a parent's handler: a new variant must be
registered explicitly, otherwise describing it fails loudly.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, List, Optional, TypeVar

from priming.core.domain.exceptions import DomainError

H = TypeVar("H", bound=Callable)


class KindRegistry(Generic[H]):
    """Maps variant classes to their priming handlers."""

    def __init__(self, missing: Callable[[str], DomainError]):
        self._handlers: Dict[type, H] = {}
        self._missing = missing

    def register(self, cls: type, handler: H, *, override: bool = False) -> H:
        """
        Register `handler` for instances of exactly `cls`.

        If `override` is False (default), replacing an existing handler
        raises a ValueError.
        """
        if not override:
            existing = self._handlers.get(cls)
            if existing is not None and existing is not handler:
                raise ValueError(
                    f"Kind {cls.__name__!r} already has handler {existing!r}; "
                    f"refusing to overwrite with {handler!r}. "
                    f"Pass override=True if this is intentional."
                )
        self._handlers[cls] = handler
        return handler

    def handles(self, *classes: type) -> Callable[[H], H]:
        """Decorator form of `register` for one or more classes."""

        def decorator(handler: H) -> H:
            for cls in classes:
                self.register(cls, handler)
            return handler

        return decorator

    def resolve(self, obj: object) -> H:
        handler = self._handlers.get(type(obj))
        if handler is None:
            kind = vars(type(obj)).get("kind") or type(obj).__name__
            raise self._missing(kind)
        return handler

    def get(self, cls: type) -> Optional[H]:
        return self._handlers.get(cls)

    def kinds(self) -> List[type]:
        return list(self._handlers)

    def copy(self) -> "KindRegistry[H]":
        clone: KindRegistry[H] = KindRegistry(self._missing)
        clone._handlers = dict(self._handlers)
        return clone

    def __contains__(self, cls: object) -> bool:
        return cls in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

"""
Priming describers.

Polymorphic providers that turn recognizer and dialog declarations into
PrimingAggregates. One handler is registered per concrete variant.
"""

from priming.core.describers.dialog import DIALOG_HANDLERS, DescribeScope, DialogDescriber
from priming.core.describers.recognizer import RECOGNIZER_HANDLERS, RecognizerDescriber
from priming.core.describers.registry import KindRegistry

__all__ = [
    "DIALOG_HANDLERS",
    "RECOGNIZER_HANDLERS",
    "DescribeScope",
    "DialogDescriber",
    "KindRegistry",
    "RecognizerDescriber",
]

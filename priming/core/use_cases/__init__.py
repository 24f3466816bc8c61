# priming/core/use_cases/__init__.py
"""
Core Use Cases (Application Logic).

Interactors the dialog engine calls while a turn runs. They drive the
context stack from dialog lifecycle events and push the resulting
priming frame to the speech channel port.
"""

from .track_dialog_priming import TrackDialogPriming

__all__ = [
    "TrackDialogPriming",
]

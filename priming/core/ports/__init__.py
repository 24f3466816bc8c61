# priming/core/ports/__init__.py
"""
Core Ports (Interfaces).

Protocols the infrastructure adapters implement, so the priming core can
hand its output to the outside world without knowing who consumes it.
"""

from .speech_channel import ISpeechChannel

__all__ = [
    "ISpeechChannel",
]

# priming/core/ports/speech_channel.py
from typing import Protocol
from priming.core.domain.models import ContextFrame

class ISpeechChannel(Protocol):
    """
    Port for the speech/voice channel adapter that consumes priming output.
    Implementations:
    - LoggingSpeechChannel (records and logs every published frame)
    """

    async def publish(self, frame: ContextFrame) -> None:
        """
        Hands the current ambient frame to the channel so it can bias its
        recognizer vocabulary and grammar.

        Args:
            frame: The top of the context stack (or the empty default frame).
        """
        ...

    async def health_check(self) -> bool:
        """Returns True if the channel accepts priming updates."""
        ...

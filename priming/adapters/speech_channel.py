# priming/adapters/speech_channel.py
import structlog
from typing import List, Optional

from priming.core.ports.speech_channel import ISpeechChannel
from priming.core.domain.models import ContextFrame

logger = structlog.get_logger()

class LoggingSpeechChannel(ISpeechChannel):
    """
    Speech channel adapter that keeps the frames it receives and logs a
    summary of each. Used when no voice channel is attached, and as the
    reference for what a real channel receives.
    """

    def __init__(self, history_size: int = 50):
        self.history_size = history_size
        self.published: List[ContextFrame] = []

    @property
    def last(self) -> Optional[ContextFrame]:
        return self.published[-1] if self.published else None

    async def publish(self, frame: ContextFrame) -> None:
        self.published.append(frame)
        if len(self.published) > self.history_size:
            del self.published[: len(self.published) - self.history_size]

        logger.info(
            "speech_priming_published",
            dialog_id=frame.dialog_id or None,
            locale=frame.locale,
            possible_intents=len(frame.possible.intents),
            possible_entities=len(frame.possible.entities),
            expected_entities=sorted(frame.expected.entity_names()),
            vocabulary_lists=sorted(frame.possible.vocabulary_lists),
        )

    async def health_check(self) -> bool:
        return True

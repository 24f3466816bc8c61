# tests/conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from priming.shared.container import Container
from priming.core.ports.speech_channel import ISpeechChannel
from priming.core.describers import DialogDescriber, RecognizerDescriber
from priming.core.domain.models import Entity, Intent, VocabularyEntry, VocabularyList
from priming.core.domain.recognizers import (
    DynamicList,
    ListElement,
    LuisRecognizer,
    MultiLanguageRecognizer,
    QnAMakerRecognizer,
)

# Every fixture below builds fresh instances, so no test can leak
# configuration into another through a shared recognizer object.

def make_luis(source: str) -> LuisRecognizer:
    """A trained-model recognizer whose schema is tagged with `source`."""
    return LuisRecognizer(
        possible_intents=[Intent(name="intent1", source=source)],
        possible_entities=[Entity(name="entity1", source=source), Entity(name="dlist", source=source)],
        dynamic_lists=[
            DynamicList(
                entity="dlist",
                elements=[ListElement(canonical_form="value1", synonyms=["synonym1", "synonym2"])],
            )
        ],
    )

@pytest.fixture
def luis_factory():
    return make_luis

@pytest.fixture
def luis():
    return make_luis("foo.lu")

@pytest.fixture
def luis_en():
    return make_luis("foo.en-us.lu")

@pytest.fixture
def qna():
    return QnAMakerRecognizer(knowledge_base_id="kb")

@pytest.fixture
def multi(luis, luis_en):
    return MultiLanguageRecognizer(recognizers={"en-us": luis_en, "": luis})

@pytest.fixture
def dlist():
    """The vocabulary the `luis` fixture is expected to prime."""
    return VocabularyList(
        entity="dlist",
        entries=(VocabularyEntry(canonical_form="value1", synonyms=("value1", "synonym1", "synonym2")),),
    )

@pytest.fixture
def schema():
    return {
        "type": "object",
        "properties": {
            "property1": {"type": "string", "$entities": ["entity1"]},
        },
    }

@pytest.fixture
def recognizer_describer():
    return RecognizerDescriber()

@pytest.fixture
def dialog_describer(recognizer_describer):
    return DialogDescriber(recognizers=recognizer_describer)

@pytest.fixture
def turn_state():
    """The dialog engine's per-turn transient state bag."""
    return {}

@pytest.fixture(scope="function")
def mock_speech_channel():
    """Returns a mock implementation of the Speech Channel."""
    channel = MagicMock(spec=ISpeechChannel)
    # Async methods must be mocked with AsyncMock
    channel.publish = AsyncMock()
    channel.health_check = AsyncMock(return_value=True)
    return channel

@pytest.fixture(scope="function")
def container(mock_speech_channel):
    """
    Sets up the Dependency Injection Container for testing, with the
    speech channel replaced by the mock above.
    """
    container = Container()
    container.speech_channel.override(mock_speech_channel)

    yield container

    container.speech_channel.reset_override()

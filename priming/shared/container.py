# priming/shared/container.py
from dependency_injector import containers, providers

from priming.shared.config import settings
from priming.adapters.speech_channel import LoggingSpeechChannel
from priming.core.describers import DialogDescriber, RecognizerDescriber
from priming.core.use_cases.track_dialog_priming import TrackDialogPriming

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    Assembly instructions for the priming service. Tests override the
    speech channel with a mock.
    """

    # 1. Describers (Singleton: handler tables are built once, describe() is pure)
    recognizer_describer = providers.Singleton(RecognizerDescriber)

    dialog_describer = providers.Singleton(
        DialogDescriber,
        recognizers=recognizer_describer,
    )

    # 2. Gateways (Infrastructure Adapters)
    speech_channel = providers.Singleton(LoggingSpeechChannel)

    # 3. Use Cases
    # Factory: a new interactor per request, sharing the singletons above.
    track_dialog_priming_use_case = providers.Factory(
        TrackDialogPriming,
        describer=dialog_describer,
        channel=speech_channel,
        default_locale=settings.DEFAULT_LOCALE,
        state_key=settings.TURN_STATE_KEY,
    )

# Instantiate the container for global access
container = Container()

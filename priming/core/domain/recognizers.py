# priming/core/domain/recognizers.py
"""
Recognizer declarations.

These models only carry configuration. Recognition itself happens in the
NLU/FAQ services; the priming layer reads the static schema declared here
(intents, entities, dynamic lists) to bias the speech front end.

Every concrete variant advertises its declarative `$kind` through the
`kind` class attribute. Describers dispatch on the concrete class.
"""

from typing import ClassVar, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from priming.core.domain.models import Entity, Intent


class Recognizer(BaseModel):
    """Base class for all recognizer variants."""
    kind: ClassVar[str] = "Microsoft.Recognizer"

    id: Optional[str] = Field(default=None, description="Optional recognizer identifier.")


# --- Prebuilt Single-Entity Recognizers ---

class EntityRecognizer(Recognizer):
    """
    A recognizer that extracts exactly one prebuilt entity type.
    Subclasses only set `kind` and `entity_name`.
    """
    entity_name: ClassVar[str] = ""


class AgeEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.AgeEntityRecognizer"
    entity_name: ClassVar[str] = "age"


class ChannelMentionEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.ChannelMentionEntityRecognizer"
    entity_name: ClassVar[str] = "channelMention"


class ConfirmationEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.ConfirmationEntityRecognizer"
    entity_name: ClassVar[str] = "boolean"


class CurrencyEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.CurrencyEntityRecognizer"
    entity_name: ClassVar[str] = "currency"


class DateTimeEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.DateTimeEntityRecognizer"
    entity_name: ClassVar[str] = "datetime"


class DimensionEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.DimensionEntityRecognizer"
    entity_name: ClassVar[str] = "dimension"


class EmailEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.EmailEntityRecognizer"
    entity_name: ClassVar[str] = "email"


class GuidEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.GuidEntityRecognizer"
    entity_name: ClassVar[str] = "guid"


class HashtagEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.HashtagEntityRecognizer"
    entity_name: ClassVar[str] = "hashtag"


class IpEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.IpEntityRecognizer"
    entity_name: ClassVar[str] = "ip"


class MentionEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.MentionEntityRecognizer"
    entity_name: ClassVar[str] = "mention"


class NumberEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.NumberEntityRecognizer"
    entity_name: ClassVar[str] = "number"


class NumberRangeEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.NumberRangeEntityRecognizer"
    entity_name: ClassVar[str] = "numberrange"


class OrdinalEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.OrdinalEntityRecognizer"
    entity_name: ClassVar[str] = "ordinal"


class PercentageEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.PercentageEntityRecognizer"
    entity_name: ClassVar[str] = "percentage"


class PhoneNumberEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.PhoneNumberEntityRecognizer"
    entity_name: ClassVar[str] = "phonenumber"


class TemperatureEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.TemperatureEntityRecognizer"
    entity_name: ClassVar[str] = "temperature"


class UrlEntityRecognizer(EntityRecognizer):
    kind: ClassVar[str] = "Microsoft.UrlEntityRecognizer"
    entity_name: ClassVar[str] = "url"


class RegexEntityRecognizer(Recognizer):
    """
    Custom pattern entity. Several of these may share a `name`;
    the recognizer `id` tells them apart.
    """
    kind: ClassVar[str] = "Microsoft.RegexEntityRecognizer"

    name: str = Field(..., description="Entity name produced on a match.")
    pattern: str = ""


PREBUILT_ENTITY_RECOGNIZERS: List[type] = [
    AgeEntityRecognizer,
    ChannelMentionEntityRecognizer,
    ConfirmationEntityRecognizer,
    CurrencyEntityRecognizer,
    DateTimeEntityRecognizer,
    DimensionEntityRecognizer,
    EmailEntityRecognizer,
    GuidEntityRecognizer,
    HashtagEntityRecognizer,
    IpEntityRecognizer,
    MentionEntityRecognizer,
    NumberEntityRecognizer,
    NumberRangeEntityRecognizer,
    OrdinalEntityRecognizer,
    PercentageEntityRecognizer,
    PhoneNumberEntityRecognizer,
    TemperatureEntityRecognizer,
    UrlEntityRecognizer,
]


# --- NLU / FAQ Recognizers ---

class ListElement(BaseModel):
    """A canonical value and the synonyms supplied for it at runtime."""
    canonical_form: str
    synonyms: List[str] = Field(default_factory=list)


class DynamicList(BaseModel):
    """Runtime vocabulary extending one list entity of a trained model."""
    model_config = ConfigDict(populate_by_name=True)

    entity: str
    elements: List[ListElement] = Field(default_factory=list, alias="list")


class LuisRecognizer(Recognizer):
    """
    Trained-intent recognizer bound to one compiled, locale-specific model.

    `possible_intents` and `possible_entities` are generated by tooling and
    already carry the compiled model's source tag (e.g. "foo.en-us.lu").
    """
    kind: ClassVar[str] = "Microsoft.LuisRecognizer"

    application_id: str = ""
    endpoint: str = ""
    possible_intents: List[Intent] = Field(default_factory=list)
    possible_entities: List[Entity] = Field(default_factory=list)
    dynamic_lists: List[DynamicList] = Field(default_factory=list)


class IntentPattern(BaseModel):
    intent: str
    pattern: str


class RegexRecognizer(Recognizer):
    """Pattern-based intent recognizer with nested entity recognizers."""
    kind: ClassVar[str] = "Microsoft.RegexRecognizer"

    intents: List[IntentPattern] = Field(default_factory=list)
    entities: List[Recognizer] = Field(default_factory=list)


class QnAMakerRecognizer(Recognizer):
    """FAQ recognizer. Carries no intent or entity schema."""
    kind: ClassVar[str] = "Microsoft.QnAMakerRecognizer"

    knowledge_base_id: str = ""
    hostname: str = ""


# --- Composite Recognizers ---

class RecognizerSet(Recognizer):
    """Runs every child recognizer and unions their results."""
    kind: ClassVar[str] = "Microsoft.RecognizerSet"

    recognizers: List[Recognizer] = Field(default_factory=list)


class CrossTrainedRecognizerSet(Recognizer):
    """
    Like RecognizerSet, but children were cross-trained so that one of them
    can defer to another at runtime. Cross-training never affects priming.
    """
    kind: ClassVar[str] = "Microsoft.CrossTrainedRecognizerSet"

    recognizers: List[Recognizer] = Field(default_factory=list)


class MultiLanguageRecognizer(Recognizer):
    """
    Routes to a child recognizer by locale.
    The entry keyed by "" is the default used when no exact match exists.
    """
    kind: ClassVar[str] = "Microsoft.MultiLanguageRecognizer"

    recognizers: Dict[str, Recognizer] = Field(default_factory=dict)

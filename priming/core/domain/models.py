# priming/core/domain/models.py
from types import MappingProxyType
from typing import Annotated, Dict, FrozenSet, Mapping, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

# --- Priming Value Objects ---

class Intent(BaseModel):
    """
    A named conversational goal a recognizer can detect.

    `source` identifies the compiled model the intent comes from, so two
    models declaring "Greeting" are still told apart.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    source: str = ""

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.source)


class Entity(BaseModel):
    """
    A named extractable value type (number, datetime, a custom list...).

    `id` disambiguates pattern entities sharing a name. Missing values are
    normalized to "" so they take part in the key.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    id: str = ""
    source: str = ""

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.name, self.id, self.source)


class VocabularyEntry(BaseModel):
    """One recognizable phrase and its alternate forms. Synonym order matters."""
    model_config = ConfigDict(frozen=True)

    canonical_form: str
    synonyms: Tuple[str, ...] = ()


class VocabularyList(BaseModel):
    """All vocabulary for one entity."""
    model_config = ConfigDict(frozen=True)

    entity: str = Field(..., description="Entity key the vocabulary belongs to.")
    entries: Tuple[VocabularyEntry, ...] = ()


# Read-only view over an insertion-ordered entity key -> VocabularyList map.
# Serialized as a plain dict.
VocabularyMap = Annotated[
    Mapping[str, VocabularyList],
    AfterValidator(lambda value: MappingProxyType(dict(value))),
    PlainSerializer(dict, return_type=Dict[str, VocabularyList]),
]


class PrimingAggregate(BaseModel):
    """
    Immutable snapshot of everything a recognizer or dialog can prime.
    This is the unit produced by every describer and held by the context stack.
    """
    model_config = ConfigDict(frozen=True)

    intents: FrozenSet[Intent] = frozenset()
    entities: FrozenSet[Entity] = frozenset()
    vocabulary_lists: VocabularyMap = Field(default_factory=lambda: MappingProxyType({}))

    def __hash__(self) -> int:
        return hash((self.intents, self.entities, tuple(self.vocabulary_lists.items())))

    @classmethod
    def empty(cls) -> "PrimingAggregate":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.intents or self.entities or self.vocabulary_lists)

    def vocabulary_for(self, entity_key: str) -> Optional[VocabularyList]:
        return self.vocabulary_lists.get(entity_key)

    def entity_names(self) -> FrozenSet[str]:
        return frozenset(e.name for e in self.entities)


class ContextFrame(BaseModel):
    """
    Priming state for one active dialog instance.

    Fields:
      - dialog_id: The dialog that owns the frame ("" for the ambient default).
      - locale: Locale the frame was described for.
      - described: The dialog's full description, as computed when it began.
        Narrowing always starts again from here.
      - possible: Everything reachable from the dialog, narrowed to the
        currently expected properties when its schema binds them.
      - expected: What the dialog is currently asking for.
    """
    model_config = ConfigDict(frozen=True)

    dialog_id: str = ""
    locale: str = ""
    described: PrimingAggregate = Field(default_factory=PrimingAggregate)
    possible: PrimingAggregate = Field(default_factory=PrimingAggregate)
    expected: PrimingAggregate = Field(default_factory=PrimingAggregate)

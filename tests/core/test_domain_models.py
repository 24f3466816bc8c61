# tests/core/test_domain_models.py
import pytest
from pydantic import ValidationError

from priming.core.domain.dialogs import AdaptiveDialog, ChoiceInput, NumberInput
from priming.core.domain.models import (
    ContextFrame,
    Entity,
    Intent,
    PrimingAggregate,
    VocabularyEntry,
    VocabularyList,
)

class TestIdentityKeys:
    def test_entity_defaults_normalize_to_empty_string(self):
        entity = Entity(name="number")
        assert entity.id == ""
        assert entity.source == ""
        assert entity.key == ("number", "", "")

    def test_entities_with_same_key_are_equal_and_hash_alike(self):
        assert Entity(name="pattern", id="a") == Entity(name="pattern", id="a")
        assert len({Entity(name="pattern", id="a"), Entity(name="pattern", id="a")}) == 1

    def test_entity_id_disambiguates_same_name(self):
        assert Entity(name="pattern", id="a") != Entity(name="pattern", id="b")

    def test_intent_source_disambiguates_same_name(self):
        assert Intent(name="intent1", source="foo.lu") != Intent(name="intent1", source="bar.lu")
        assert Intent(name="intent1", source="foo.lu").key == ("intent1", "foo.lu")

class TestImmutability:
    def test_value_objects_are_frozen(self):
        """Priming snapshots must not change after they are produced."""
        entity = Entity(name="number")
        with pytest.raises(ValidationError):
            entity.name = "ordinal"

        frame = ContextFrame(locale="en-us")
        with pytest.raises(ValidationError):
            frame.locale = "fr-fr"

    def test_vocabulary_lists_are_read_only(self):
        """
        Scenario: A frame shares one aggregate between `possible` and `expected`.
        Expected: Its vocabulary cannot be edited in place, so neither view can drift.
        """
        vocabulary = VocabularyList(entity="dlist", entries=(VocabularyEntry(canonical_form="value1"),))
        source = {"dlist": vocabulary}
        aggregate = PrimingAggregate(vocabulary_lists=source)
        frame = ContextFrame(possible=aggregate, expected=aggregate)

        with pytest.raises(TypeError):
            frame.possible.vocabulary_lists["injected"] = vocabulary

        source["injected"] = vocabulary  # the caller's dict is copied, not shared
        assert list(frame.expected.vocabulary_lists) == ["dlist"]

    def test_aggregates_and_frames_are_hashable(self):
        vocabulary = VocabularyList(entity="dlist", entries=(VocabularyEntry(canonical_form="value1"),))
        first = PrimingAggregate(entities=[Entity(name="dlist")], vocabulary_lists={"dlist": vocabulary})
        second = PrimingAggregate(entities=[Entity(name="dlist")], vocabulary_lists={"dlist": vocabulary})

        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert hash(ContextFrame(possible=first)) == hash(ContextFrame(possible=second))

    def test_vocabulary_serializes_as_mapping(self):
        vocabulary = VocabularyList(entity="dlist", entries=(VocabularyEntry(canonical_form="value1"),))
        dumped = PrimingAggregate(vocabulary_lists={"dlist": vocabulary}).model_dump()
        assert isinstance(dumped["vocabulary_lists"], dict)
        assert dumped["vocabulary_lists"]["dlist"]["entries"][0]["canonical_form"] == "value1"

    def test_synonyms_become_tuples(self):
        entry = VocabularyEntry(canonical_form="red", synonyms=["crimson", "scarlet"])
        assert entry.synonyms == ("crimson", "scarlet")

class TestPrimingAggregate:
    def test_empty(self):
        aggregate = PrimingAggregate.empty()
        assert aggregate.is_empty
        assert aggregate.vocabulary_for("anything") is None

    def test_equality_ignores_set_order(self):
        a = PrimingAggregate(entities=frozenset([Entity(name="a"), Entity(name="b")]))
        b = PrimingAggregate(entities=[Entity(name="b"), Entity(name="a")])
        assert a == b

    def test_equality_respects_synonym_order(self):
        first = VocabularyList(entity="e", entries=(VocabularyEntry(canonical_form="x", synonyms=("1", "2")),))
        second = VocabularyList(entity="e", entries=(VocabularyEntry(canonical_form="x", synonyms=("2", "1")),))
        assert PrimingAggregate(vocabulary_lists={"e": first}) != PrimingAggregate(vocabulary_lists={"e": second})

    def test_entity_names(self):
        aggregate = PrimingAggregate(entities=[Entity(name="number"), Entity(name="entity1", source="foo.lu")])
        assert aggregate.entity_names() == frozenset({"number", "entity1"})

class TestDialogIdentity:
    def test_generated_id_uses_kind(self):
        dialog = NumberInput()
        assert dialog.id.startswith("Microsoft.NumberInput[")

    def test_generated_ids_are_unique(self):
        assert NumberInput().id != NumberInput().id

    def test_explicit_id_is_kept(self):
        assert ChoiceInput(id="choiceTest").id == "choiceTest"

    def test_schema_alias(self):
        dialog = AdaptiveDialog(schema={"properties": {}})
        assert dialog.property_schema == {"properties": {}}

    def test_plain_string_choices(self):
        dialog = ChoiceInput(choices=["red", "green"])
        assert [c.value for c in dialog.choices] == ["red", "green"]

"""
Tests for part and model number extraction.
"""
from partsbot.utils.entities import (
    extract_entities,
    extract_model_number,
    extract_part_number,
)


def test_extract_part_and_model_number():
    """The canonical compatibility question yields one of each."""
    entities = extract_entities("Is PS11752778 compatible with WDT780SAEM1?")

    assert entities.part_numbers == ("PS11752778",), "Part number not extracted"
    assert entities.model_numbers == ("WDT780SAEM1",), "Model number not extracted"


def test_part_numbers_are_uppercased_and_deduplicated():
    entities = extract_entities("ps11752778 or PS11752778 or Ps11752778, maybe PS2358880")
    assert entities.part_numbers == ("PS11752778", "PS2358880")


def test_part_number_needs_six_digits():
    assert extract_entities("PS12345").part_numbers == ()
    assert extract_entities("PS123456").part_numbers == ("PS123456",)


def test_part_numbers_never_reported_as_models():
    entities = extract_entities("PS11752778")
    assert entities.model_numbers == ()


def test_model_numbers_keep_first_occurrence_order():
    entities = extract_entities("WRS325FDAM04 then WDT780SAEM1 then WRS325FDAM04 again")
    assert entities.model_numbers == ("WRS325FDAM04", "WDT780SAEM1")


def test_model_numbers_are_case_sensitive():
    """Lowercase text is not mistaken for a model number."""
    assert extract_entities("my wdt780saem1 dishwasher").model_numbers == ()


def test_no_entities():
    entities = extract_entities("my fridge is making a noise")
    assert entities.part_numbers == ()
    assert entities.model_numbers == ()
    assert entities.is_empty()


def test_first_match_helpers():
    message = "Swap PS11752778 for PS2358880 on my WDT780SAEM1"
    assert extract_part_number(message) == "PS11752778"
    assert extract_model_number(message) == "WDT780SAEM1"
    assert extract_part_number("nothing here") is None
    assert extract_model_number("nothing here") is None


def test_entity_set_serialization():
    dumped = extract_entities("PS11752778").model_dump(by_alias=True)
    assert dumped == {"partNumbers": ("PS11752778",), "modelNumbers": ()}

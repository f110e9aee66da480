from __future__ import annotations

from models import ATTRIBUTE_KEYS, CanonicalRecord
from retrieval.normalizer import merge_details, normalize_item


def _image(image_id="abc123", url="https://cdn2.thedogapi.com/images/abc123.jpg", breeds=None):
    payload = {"id": image_id, "url": url, "width": 800, "height": 600}
    if breeds is not None:
        payload["breeds"] = breeds
    return payload


BEAGLE = {
    "id": 31,
    "name": "Beagle",
    "temperament": "Amiable, Even Tempered, Excitable, Determined, Gentle, Intelligent",
    "life_span": "13 - 16 years",
    "weight": {"imperial": "20 - 35", "metric": "9 - 16"},
}


def test_normalize_maps_first_breed_to_attributes() -> None:
    record = normalize_item(_image(breeds=[BEAGLE, {"name": "Poodle"}]))

    assert isinstance(record, CanonicalRecord)
    assert record.id == "abc123"
    assert record.image_url.endswith("abc123.jpg")
    assert record.has_full_attributes is True
    assert record.attributes == {
        "breed": "Beagle",
        "temperament": "Amiable, Even Tempered, Excitable, Determined, Gentle, Intelligent",
        "life_span": "13 - 16 years",
        "weight": "20 - 35",
    }


def test_weight_falls_back_to_metric() -> None:
    breed = dict(BEAGLE, weight={"imperial": "", "metric": "9 - 16"})
    record = normalize_item(_image(breeds=[breed]))
    assert record.attributes["weight"] == "9 - 16"


def test_missing_breed_fields_become_empty_strings() -> None:
    record = normalize_item(_image(breeds=[{"name": "Mystery"}]))

    assert record.has_full_attributes is True
    assert set(record.attributes) == set(ATTRIBUTE_KEYS)
    assert record.attributes["temperament"] == ""
    assert record.attributes["weight"] == ""


def test_strict_mode_discards_breedless_items() -> None:
    assert normalize_item(_image(breeds=[])) is None
    assert normalize_item(_image()) is None


def test_lenient_mode_keeps_breedless_items_with_empty_attributes() -> None:
    record = normalize_item(_image(breeds=[]), strict=False)

    assert record is not None
    assert record.has_full_attributes is False
    assert set(record.attributes) == set(ATTRIBUTE_KEYS)
    assert all(value == "" for value in record.attributes.values())


def test_id_falls_back_to_breed_id() -> None:
    record = normalize_item(_image(image_id=None, breeds=[BEAGLE]))
    assert record.id == "31"


def test_unusable_inputs_return_none() -> None:
    assert normalize_item(None) is None
    assert normalize_item(["not", "a", "mapping"]) is None
    assert normalize_item(_image(url="", breeds=[BEAGLE])) is None


def test_merge_details_fills_attributes_and_keeps_candidate_url() -> None:
    candidate = normalize_item(_image(breeds=[]), strict=False)
    merged = merge_details(candidate, {"id": "abc123", "breeds": [BEAGLE]})

    assert merged is not None
    assert merged.has_full_attributes is True
    assert merged.attributes["breed"] == "Beagle"
    assert merged.image_url == candidate.image_url


def test_merge_details_without_breed_returns_none() -> None:
    candidate = normalize_item(_image(breeds=[]), strict=False)
    assert merge_details(candidate, {"id": "abc123", "breeds": []}) is None
    assert merge_details(candidate, None) is None

from __future__ import annotations

from models import BanList, CanonicalRecord
from retrieval.ban_matcher import banned_matches, is_banned


def _record(**attributes) -> CanonicalRecord:
    return CanonicalRecord(
        id="img-1",
        image_url="https://example.com/dog.jpg",
        attributes=attributes,
        has_full_attributes=bool(attributes),
    )


def test_empty_ban_list_never_excludes() -> None:
    assert is_banned(_record(breed="Beagle"), BanList()) is False


def test_scalar_key_matches_case_insensitive_and_trimmed() -> None:
    record = _record(breed="Beagle", life_span="13 - 16 years")

    assert is_banned(record, BanList.from_mapping({"breed": ["  beagle "]})) is True
    assert is_banned(record, BanList.from_mapping({"life_span": ["13 - 16 YEARS"]})) is True


def test_scalar_key_requires_whole_string_equality() -> None:
    record = _record(breed="Beagle Harrier")
    assert is_banned(record, BanList.from_mapping({"breed": ["Beagle"]})) is False


def test_temperament_matches_on_any_token() -> None:
    record = _record(breed="Akita", temperament="Friendly, Aggressive, Loyal")
    ban_list = BanList.from_mapping({"temperament": ["aggressive"]})

    assert is_banned(record, ban_list) is True
    assert banned_matches(record, ban_list) == [("temperament", "aggressive")]


def test_temperament_does_not_match_substrings() -> None:
    record = _record(breed="Akita", temperament="Friendly, Loyal")
    assert is_banned(record, BanList.from_mapping({"temperament": ["Friend"]})) is False


def test_missing_attribute_is_never_a_match() -> None:
    record = _record(breed="Beagle")
    ban_list = BanList.from_mapping({"weight": ["20 - 35"], "temperament": ["Gentle"]})
    assert is_banned(record, ban_list) is False


def test_unknown_ban_keys_are_ignored() -> None:
    record = _record(breed="Beagle")
    assert is_banned(record, BanList.from_mapping({"color": ["Beagle"]})) is False


def test_banned_matches_reports_every_hit() -> None:
    record = _record(breed="Beagle", temperament="Gentle, Determined", weight="20 - 35")
    ban_list = BanList.from_mapping(
        {"breed": ["Poodle", "Beagle"], "temperament": ["Determined", "Gentle"], "weight": ["30"]}
    )

    assert banned_matches(record, ban_list) == [
        ("breed", "Beagle"),
        ("temperament", "Determined"),
        ("temperament", "Gentle"),
    ]

"""Map raw TheDogAPI image objects onto ``CanonicalRecord``."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from models import BREED, LIFE_SPAN, TEMPERAMENT, WEIGHT, CanonicalRecord, empty_attributes


def _first_breed(raw: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    breeds = raw.get("breeds")
    if isinstance(breeds, list) and breeds and isinstance(breeds[0], Mapping):
        return breeds[0]
    return None


def _weight_text(breed: Mapping[str, Any]) -> str:
    weight = breed.get("weight")
    if isinstance(weight, Mapping):
        return str(weight.get("imperial") or weight.get("metric") or "").strip()
    return str(weight or "").strip()


def _breed_attributes(breed: Mapping[str, Any]) -> Dict[str, str]:
    return {
        BREED: str(breed.get("name") or "").strip(),
        TEMPERAMENT: str(breed.get("temperament") or "").strip(),
        LIFE_SPAN: str(breed.get("life_span") or "").strip(),
        WEIGHT: _weight_text(breed),
    }


def normalize_item(raw: Any, *, strict: bool = True) -> Optional[CanonicalRecord]:
    """
    Normalize one raw item.

    Returns None when the item is unusable: not a mapping, no image URL, or
    (in strict mode) no breed sub-object. In lenient mode a breedless item
    comes back with empty attributes and ``has_full_attributes=False``.
    """
    if not isinstance(raw, Mapping):
        return None

    image_url = str(raw.get("url") or "").strip()
    if not image_url:
        return None

    breed = _first_breed(raw)
    if breed is None and strict:
        return None

    item_id = raw.get("id") or (breed.get("id") if breed else None)

    return CanonicalRecord(
        id=str(item_id or ""),
        image_url=image_url,
        attributes=_breed_attributes(breed) if breed else empty_attributes(),
        has_full_attributes=breed is not None,
    )


def merge_details(candidate: CanonicalRecord, detail: Any) -> Optional[CanonicalRecord]:
    """
    Combine a detail lookup with the candidate it was issued for.

    The detail must carry breed data; its image URL wins when present, and
    the candidate's id and URL fill any gaps.
    """
    if not isinstance(detail, Mapping):
        return None
    breed = _first_breed(detail)
    if breed is None:
        return None
    return CanonicalRecord(
        id=str(detail.get("id") or candidate.id),
        image_url=str(detail.get("url") or "").strip() or candidate.image_url,
        attributes=_breed_attributes(breed),
        has_full_attributes=True,
    )

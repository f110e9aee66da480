"""
Data Models / Schemas
Canonical record and ban list shared by the normalizer, matcher and retrieval loop.
"""
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# Fixed attribute keys carried by every CanonicalRecord
BREED = "breed"
TEMPERAMENT = "temperament"
LIFE_SPAN = "life_span"
WEIGHT = "weight"

ATTRIBUTE_KEYS: Tuple[str, ...] = (BREED, TEMPERAMENT, LIFE_SPAN, WEIGHT)

# Temperament is a comma-separated list and is matched token by token
MULTI_VALUED_KEY = TEMPERAMENT
TOKEN_DELIMITER = ","


def empty_attributes() -> Dict[str, str]:
    return {key: "" for key in ATTRIBUTE_KEYS}


def split_tokens(value: str) -> List[str]:
    """Split a multi-valued attribute into trimmed, non-empty tokens (original case)."""
    return [token.strip() for token in str(value or "").split(TOKEN_DELIMITER) if token.strip()]


class CanonicalRecord(BaseModel):
    """A normalized dog image with its breed attributes"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable image identifier")
    image_url: str = Field(..., description="Displayable image URL")
    attributes: Mapping[str, str] = Field(
        default_factory=empty_attributes,
        validate_default=True,
        description="Fixed attribute set, read-only",
    )
    has_full_attributes: bool = Field(default=False, description="Source item carried breed metadata")

    @field_validator("attributes", mode="before")
    @classmethod
    def _fixed_keys(cls, value: Any) -> Dict[str, str]:
        provided = dict(value or {})
        unknown = set(provided) - set(ATTRIBUTE_KEYS)
        if unknown:
            raise ValueError(f"unknown attribute keys: {sorted(unknown)}")
        return {key: str(provided.get(key) or "") for key in ATTRIBUTE_KEYS}

    @field_validator("attributes", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("attributes")
    def _dump_attributes(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    @property
    def breed(self) -> str:
        return self.attributes[BREED]

    def temperament_tokens(self) -> List[str]:
        return split_tokens(self.attributes[TEMPERAMENT])


class BanList(BaseModel):
    """
    Caller-supplied exclusion criteria, keyed by attribute.

    Instances are immutable snapshots: ``with_value`` and ``without_value``
    return new lists and leave the receiver untouched. Values keep the
    caller's spelling; matching is case-insensitive and trimmed.
    """

    model_config = ConfigDict(frozen=True)

    entries: Dict[str, FrozenSet[str]] = Field(default_factory=dict)

    @field_validator("entries", mode="before")
    @classmethod
    def _clean_entries(cls, value: Any) -> Dict[str, FrozenSet[str]]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("ban list must be a mapping of attribute to values")
        cleaned: Dict[str, FrozenSet[str]] = {}
        for raw_key, raw_values in value.items():
            key = str(raw_key or "").strip().lower()
            if not key:
                continue
            if isinstance(raw_values, str):
                raw_values = [raw_values]
            elif raw_values is not None and not isinstance(raw_values, Iterable):
                raise ValueError(f"banned values for {key!r} must be a string or a list of strings")
            values = frozenset(
                str(item).strip() for item in list(raw_values or []) if str(item or "").strip()
            )
            if values:
                cleaned[key] = values
        return cleaned

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]] = None) -> "BanList":
        return cls(entries=mapping if mapping is not None else {})

    def is_empty(self) -> bool:
        return not self.entries

    def values_for(self, key: str) -> FrozenSet[str]:
        return self.entries.get(key, frozenset())

    def contains(self, key: str, value: str) -> bool:
        needle = str(value or "").strip().lower()
        return any(item.lower() == needle for item in self.values_for(key))

    def with_value(self, key: str, value: str) -> "BanList":
        """Return a copy with ``value`` banned under ``key`` (no-op for blanks and duplicates)."""
        key = str(key or "").strip().lower()
        trimmed = str(value or "").strip()
        if not key or not trimmed or self.contains(key, trimmed):
            return self
        entries = dict(self.entries)
        entries[key] = self.values_for(key) | {trimmed}
        return BanList(entries=entries)

    def without_value(self, key: str, value: str) -> "BanList":
        """Return a copy with ``value`` un-banned; the key disappears once empty."""
        key = str(key or "").strip().lower()
        if not self.contains(key, value):
            return self
        needle = str(value or "").strip().lower()
        entries = dict(self.entries)
        entries[key] = frozenset(item for item in self.values_for(key) if item.lower() != needle)
        return BanList(entries=entries)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: sorted(values) for key, values in sorted(self.entries.items())}

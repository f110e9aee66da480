"""Ban-list predicate for canonical records."""

from __future__ import annotations

from typing import List, Tuple

from models import MULTI_VALUED_KEY, BanList, CanonicalRecord, split_tokens


def _fold(value: str) -> str:
    return str(value or "").strip().lower()


def banned_matches(record: CanonicalRecord, ban_list: BanList) -> List[Tuple[str, str]]:
    """Return every ``(key, banned_value)`` pair that excludes ``record``."""
    matches: List[Tuple[str, str]] = []
    for key, banned_values in ban_list.entries.items():
        value = record.attributes.get(key, "")
        if not value.strip():
            continue

        if key == MULTI_VALUED_KEY:
            tokens = {_fold(token) for token in split_tokens(value)}
            hits = [banned for banned in banned_values if _fold(banned) in tokens]
        else:
            folded = _fold(value)
            hits = [banned for banned in banned_values if _fold(banned) == folded]

        matches.extend((key, banned) for banned in sorted(hits))
    return matches


def is_banned(record: CanonicalRecord, ban_list: BanList) -> bool:
    if ban_list.is_empty():
        return False
    return bool(banned_matches(record, ban_list))

"""
Data Models
"""
from .schemas import (
    ATTRIBUTE_KEYS,
    BREED,
    LIFE_SPAN,
    MULTI_VALUED_KEY,
    TEMPERAMENT,
    TOKEN_DELIMITER,
    WEIGHT,
    BanList,
    CanonicalRecord,
    empty_attributes,
    split_tokens,
)

__all__ = [
    "ATTRIBUTE_KEYS",
    "BREED",
    "LIFE_SPAN",
    "MULTI_VALUED_KEY",
    "TEMPERAMENT",
    "TOKEN_DELIMITER",
    "WEIGHT",
    "BanList",
    "CanonicalRecord",
    "empty_attributes",
    "split_tokens",
]

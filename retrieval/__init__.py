"""
Retrieval Module
Normalize, filter and retry until a dog passes the ban list.
"""
from .normalizer import normalize_item, merge_details
from .ban_matcher import is_banned, banned_matches
from .cancellation import CancellationToken
from .timeout_guard import with_timeout, DEFAULT_TIMEOUT_MS
from .backoff import BackoffPolicy, constant_backoff, exponential_backoff
from .history import ViewHistory
from .loop import ItemSource, fetch_random_item, DEFAULT_MAX_ATTEMPTS
from .fetcher import DogFetcher, fetch_random_dog

__all__ = [
    "normalize_item",
    "merge_details",
    "is_banned",
    "banned_matches",
    "CancellationToken",
    "with_timeout",
    "DEFAULT_TIMEOUT_MS",
    "BackoffPolicy",
    "constant_backoff",
    "exponential_backoff",
    "ViewHistory",
    "ItemSource",
    "fetch_random_item",
    "DEFAULT_MAX_ATTEMPTS",
    "DogFetcher",
    "fetch_random_dog",
]

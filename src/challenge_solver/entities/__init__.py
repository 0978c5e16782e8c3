"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .catalog import Character, Creature, Planet
from .challenge import Answer, Challenge, SubmissionResult

__all__ = [
    "Answer",
    "CacheEntryEntity",
    "Challenge",
    "Character",
    "Creature",
    "Planet",
    "SubmissionResult",
]

"""Helpers for normalising record identifiers stored in reference arrays."""

from collections.abc import Iterable
from uuid import UUID

type IdLike = UUID | str


def id_str(value: IdLike) -> str:
    """
    Return the canonical string form of an identifier.

    Reference arrays are stored as JSON, so every id is compared in its
    hyphenated lowercase string form.

    Raises:
        ValueError: If `value` is not a valid UUID
    """
    if isinstance(value, UUID):
        return str(value)
    return str(UUID(str(value)))


def as_id_set(value: IdLike | Iterable[IdLike] | None) -> set[str]:
    """
    Normalise a single reference, a collection of references or `None` to a set.

    Single-valued relations (category, image file) become a singleton or an
    empty set so they can be diffed like multi-valued ones.
    """
    if value is None:
        return set()
    if isinstance(value, UUID | str):
        return {id_str(value)}
    return {id_str(item) for item in value}

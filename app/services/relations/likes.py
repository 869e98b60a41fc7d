"""Set semantics for the `likes` arrays on blogs and comments."""

from collections import Counter
from collections.abc import Iterable
from logging import getLogger
from typing import Any
from uuid import UUID

from app.configs import file_logger
from app.errors.relations import DuplicateLikeError
from app.errors.validation import ValidationError
from app.repositories.base import BaseRepository
from app.services.relations.sync import RelationDiff, diff_ids
from app.utils.ids import IdLike, id_str

logger = file_logger(getLogger(__name__))


def toggle_member(likes: list[str], user_id: IdLike) -> list[str]:
    """Remove `user_id` if present, append it otherwise."""
    member = id_str(user_id)
    if member in likes:
        return [like for like in likes if like != member]
    return [*likes, member]


def find_duplicates(ids: Iterable[str]) -> list[str]:
    return sorted(item for item, seen in Counter(ids).items() if seen > 1)


def normalise_likes(new_likes: Iterable[IdLike]) -> list[str]:
    """
    Canonicalise a submitted likes array.

    Raises:
        ValidationError: If an entry is not a valid id
        DuplicateLikeError: If the same id is submitted twice
    """
    try:
        submitted = [id_str(item) for item in new_likes]
    except ValueError as e:
        raise ValidationError("Likes must contain valid user ids") from e

    duplicates = find_duplicates(submitted)
    if duplicates:
        raise DuplicateLikeError(duplicates)
    return submitted


def apply_likes_diff(likes: list[str], diff: RelationDiff, submitted: list[str]) -> list[str]:
    """Drop removed ids and append added ones in submission order."""
    kept = [like for like in likes if like not in diff.removed]
    return kept + [like for like in submitted if like in diff.added]


async def toggle_like[ModelT](
    repository: BaseRepository[ModelT],
    entity_id: UUID | str,
    user_id: IdLike,
) -> ModelT:
    """
    Toggle a principal's like on a blog or comment.

    Calling it twice with the same user restores the original membership.

    Raises:
        RecordNotFoundError: If the entity does not exist
    """
    record: Any = await repository.get_or_raise(entity_id)
    record.likes = toggle_member(list(record.likes), user_id)
    return await repository.save(record)


async def replace_likes[ModelT](
    repository: BaseRepository[ModelT],
    entity_id: UUID | str,
    new_likes: Iterable[IdLike],
) -> ModelT:
    """
    Replace the likes of a blog or comment with a submitted array.

    The stored likes are left untouched when the array is rejected.

    Raises:
        RecordNotFoundError: If the entity does not exist
        ValidationError: If an id is malformed
        DuplicateLikeError: If the array holds a duplicate id
    """
    record: Any = await repository.get_or_raise(entity_id)
    submitted = normalise_likes(new_likes)

    diff = diff_ids(record.likes, submitted)
    if not diff.changed:
        return record

    record.likes = apply_likes_diff(list(record.likes), diff, submitted)
    logger.debug(
        f"{repository.entity} {entity_id} likes +{len(diff.added)} -{len(diff.removed)}",
    )
    return await repository.save(record)

"""Reconciliation of back-references when a record is deleted."""

from collections.abc import Iterable, Mapping
from logging import getLogger
from typing import Any

from app.configs import file_logger
from app.errors.database import DatabaseError
from app.errors.relations import ReferencedRecordError, RelationSyncError
from app.models.image_file import ImageFileDB
from app.repositories.base import BaseRepository
from app.services.relations.sync import Relation, RelationDiff
from app.utils.ids import id_str

logger = file_logger(getLogger(__name__))

IMAGE_OWNER_KINDS = ("blog", "author", "category")


def image_ref(kind: str, owner_id: Any) -> dict[str, str]:
    """Tagged entry stored in `ImageFileDB.referenced_docs`."""
    return {"kind": kind, "id": id_str(owner_id)}


async def cascade_delete_refs(
    snapshot: Mapping[str, Any],
    relations: Iterable[Relation],
) -> dict[str, RelationDiff]:
    """
    Remove a deleted owner from every list that mirrors one of its references.

    Args:
        snapshot: Forward reference values captured before the delete
        relations: The relations the owner participates in

    Returns:
        dict[str, RelationDiff]: Diff applied per relation field
    """
    applied: dict[str, RelationDiff] = {}
    for relation in relations:
        applied[relation.field] = await relation.sync(snapshot.get(relation.field), None)
    return applied


def ensure_unreferenced(record: Any, entity: str, back_ref: str = "blogs") -> None:
    """
    Refuse to delete a record that blogs still point at.

    Raises:
        ReferencedRecordError: If the back-reference list is not empty
    """
    refs = getattr(record, back_ref)
    if refs:
        raise ReferencedRecordError(entity, len(refs))


async def release_image_references(
    image: ImageFileDB,
    owners: Mapping[str, BaseRepository[Any]],
) -> int:
    """
    Null `image_file` on every record listed in `image.referenced_docs`.

    Each tagged reference names the repository to load from, so only the
    referencing records are touched.

    Args:
        image: The image file being deleted
        owners: Repository per reference kind (`blog`, `author`, `category`)

    Returns:
        int: Number of records whose `image_file` was cleared

    Raises:
        RelationSyncError: If a referencing record cannot be written
    """
    released = 0
    for ref in image.referenced_docs:
        repository = owners.get(ref.get("kind", ""))
        if repository is None:
            logger.warning(f"Unknown reference kind {ref!r} on image {image.id}")
            continue
        record = await repository.get_by_id(ref["id"])
        if record is None or record.image_file != image.id:
            continue
        record.image_file = None
        try:
            await repository.save(record)
        except DatabaseError as e:
            logger.exception(f"Failed to release image {image.id} from {ref!r}")
            raise RelationSyncError(f"{repository.entity}.image_file", ref["id"]) from e
        released += 1
    return released

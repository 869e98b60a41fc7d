"""
Back-reference synchronisation.

A forward reference (`BlogDB.category`, `BlogDB.tags`, `*.image_file`) is
mirrored by a list on the referenced record (`blogs`, `referenced_docs`).
`sync_relation` moves a record between those lists when its forward
reference changes.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from logging import getLogger
from typing import Any

from app.configs import file_logger
from app.errors.database import DatabaseError, RecordNotFoundError
from app.errors.relations import RelationSyncError
from app.repositories.base import BaseRepository
from app.utils.ids import IdLike, as_id_set

logger = file_logger(getLogger(__name__))

# A plain id string, or a tagged `{"kind": ..., "id": ...}` reference
type BackRef = str | dict[str, str]
type RefInput = IdLike | Iterable[IdLike] | None


@dataclass(frozen=True)
class RelationDiff:
    """Ids that entered and left a relation."""

    added: frozenset[str]
    removed: frozenset[str]

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def diff_ids(old_ids: RefInput, new_ids: RefInput) -> RelationDiff:
    """
    Compare two reference values as sets.

    Single-valued references are treated as singleton-or-empty sets and the
    ordering of multi-valued ones is ignored.
    """
    old = as_id_set(old_ids)
    new = as_id_set(new_ids)
    return RelationDiff(added=frozenset(new - old), removed=frozenset(old - new))


def pull_ref(refs: list[Any], ref: BackRef) -> list[Any]:
    """Return a new list without `ref`."""
    return [item for item in refs if item != ref]


def push_ref(refs: list[Any], ref: BackRef) -> list[Any]:
    """Return a new list with `ref` appended, unless already present."""
    if ref in refs:
        return list(refs)
    return [*refs, ref]


async def write_back_refs(
    related: BaseRepository[Any],
    record: Any,
    back_ref: str,
    refs: list[Any],
) -> None:
    """
    Persist a new back-reference list on `record`.

    A new list object is always assigned so the JSON column is flagged dirty.

    Raises:
        RelationSyncError: If the write fails
    """
    setattr(record, back_ref, refs)
    try:
        await related.save(record)
    except DatabaseError as e:
        logger.exception(
            f"Failed to write {related.entity}.{back_ref} on {record.id}",
        )
        raise RelationSyncError(f"{related.entity}.{back_ref}", str(record.id)) from e


async def sync_relation(
    old_ids: RefInput,
    new_ids: RefInput,
    related: BaseRepository[Any],
    owner_ref: BackRef,
    *,
    back_ref: str = "blogs",
    strict: bool = False,
) -> RelationDiff:
    """
    Bring the related records' back-reference lists in line with a new reference value.

    Removed ids are pulled first, then added ids are pushed, one write per
    changed related record. Records already gone are skipped on removal.

    Args:
        old_ids: Reference value before the change
        new_ids: Reference value after the change
        related: Repository of the referenced records
        owner_ref: Entry identifying the owner in the back-reference list
        back_ref: Name of the back-reference list on the related record
        strict: Raise if an added id does not exist instead of ignoring it

    Returns:
        RelationDiff: The added and removed ids

    Raises:
        RecordNotFoundError: If `strict` and an added record is missing
        RelationSyncError: If a related write fails
    """
    diff = diff_ids(old_ids, new_ids)
    if not diff.changed:
        return diff

    for related_id in sorted(diff.removed):
        record = await related.get_by_id(related_id)
        if record is None:
            logger.debug(f"{related.entity} {related_id} already gone, skipping pull")
            continue
        await write_back_refs(
            related,
            record,
            back_ref,
            pull_ref(getattr(record, back_ref), owner_ref),
        )

    for related_id in sorted(diff.added):
        record = await related.get_by_id(related_id)
        if record is None:
            if strict:
                raise RecordNotFoundError(entity=related.entity, record_id=related_id)
            logger.debug(f"{related.entity} {related_id} not found, skipping push")
            continue
        await write_back_refs(
            related,
            record,
            back_ref,
            push_ref(getattr(record, back_ref), owner_ref),
        )

    return diff


@dataclass(frozen=True)
class Relation:
    """
    One forward reference field of an owner record and the list mirroring it.

    Attributes:
        field: Name of the forward reference on the owner (`tags`, `category`)
        related: Repository holding the referenced records
        owner_ref: Entry identifying the owner in the back-reference list
        back_ref: Back-reference list name on the referenced record
    """

    field: str
    related: BaseRepository[Any]
    owner_ref: BackRef
    back_ref: str = "blogs"

    async def sync(
        self,
        old_ids: RefInput,
        new_ids: RefInput,
        *,
        strict: bool = False,
    ) -> RelationDiff:
        return await sync_relation(
            old_ids,
            new_ids,
            self.related,
            self.owner_ref,
            back_ref=self.back_ref,
            strict=strict,
        )

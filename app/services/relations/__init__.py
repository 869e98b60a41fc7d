"""Referential-integrity helpers shared by the domain services."""

from app.services.relations.cascade import (
    IMAGE_OWNER_KINDS,
    cascade_delete_refs,
    ensure_unreferenced,
    image_ref,
    release_image_references,
)
from app.services.relations.likes import (
    find_duplicates,
    normalise_likes,
    replace_likes,
    toggle_like,
    toggle_member,
)
from app.services.relations.sync import (
    BackRef,
    Relation,
    RelationDiff,
    diff_ids,
    pull_ref,
    push_ref,
    sync_relation,
)

__all__ = [
    "IMAGE_OWNER_KINDS",
    "BackRef",
    "Relation",
    "RelationDiff",
    "cascade_delete_refs",
    "diff_ids",
    "ensure_unreferenced",
    "find_duplicates",
    "image_ref",
    "normalise_likes",
    "pull_ref",
    "push_ref",
    "release_image_references",
    "replace_likes",
    "sync_relation",
    "toggle_like",
    "toggle_member",
]

# =============================================================================
# core/projector.py  -  Field Projector
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Cuts one raw Qiita item down to the fields the caller asked for.
#
#   Without additional_fields the result is ONLY the default set:
#       {"title": ..., "url": ..., "created_at": ..., "user": {"name": ...}}
#
#   additional_fields adds to that.  Entries are either plain keys ("id",
#   "tags", "user") or one-level dotted paths ("user.id").
#
# THE RULES (all order-sensitive, later entries win):
#   1. "parent.child" is staged under parent only if raw[parent] is a mapping
#      and it actually holds child.  Anything else is skipped.
#   2. "key" is staged if raw has that key.  "user" stages the WHOLE user.
#   3. Staged values are merged onto the defaults by merge_fields():
#      mapping onto mapping is a shallow merge, anything else overwrites.
#   4. Unknown fields vanish.  No error, no null placeholder.
#
# PURITY:
#   Values are deep-copied out of the raw item, so the output never shares
#   nested objects with the input (or with another projection of it).
# =============================================================================

import copy
from typing import Any, Iterable, Mapping, Optional

from core.models import DEFAULT_FIELDS, DEFAULT_NESTED_FIELDS, ProjectedItem, RawItem


def default_projection(item: RawItem) -> ProjectedItem:
    """Copy just the default fields that exist on the item."""
    result: ProjectedItem = {}
    for key in DEFAULT_FIELDS:
        if key in item:
            result[key] = copy.deepcopy(item[key])

    for parent, children in DEFAULT_NESTED_FIELDS.items():
        source = item.get(parent)
        if not isinstance(source, Mapping):
            continue
        nested = {
            child: copy.deepcopy(source[child])
            for child in children
            if child in source
        }
        if nested:
            result[parent] = nested
    return result


def stage_additional_fields(item: RawItem, fields: Iterable[str]) -> dict[str, Any]:
    """Resolve each requested field against the item, in order.

    Returns the staged values keyed by top-level name.  Dotted entries land
    in a nested dict under their parent.
    """
    staged: dict[str, Any] = {}
    for field in fields:
        if "." in field:
            # Only the first level of nesting is honoured: "a.b.c" reads a.b
            parent, child = field.split(".")[:2]
            source = item.get(parent)
            if not isinstance(source, Mapping) or child not in source:
                continue
            bucket = staged.get(parent)
            if not isinstance(bucket, dict):
                bucket = staged[parent] = {}
            bucket[child] = copy.deepcopy(source[child])
        elif field in item:
            staged[field] = copy.deepcopy(item[field])
    return staged


def merge_fields(base: Mapping[str, Any], staged: Mapping[str, Any]) -> ProjectedItem:
    """Merge staged values onto base and return a new dict.

    For each staged key: if both sides are mappings they are shallow-merged
    (staged keys win, base-only keys survive); otherwise the staged value
    replaces whatever base had.
    """
    result: ProjectedItem = dict(base)
    for key, value in staged.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = {**current, **value}
        else:
            result[key] = value
    return result


def project_item(item: RawItem, additional_fields: Optional[Iterable[str]] = None) -> ProjectedItem:
    """Project one raw item to the default fields plus any additional ones."""
    if not isinstance(item, Mapping):
        return {}
    defaults = default_projection(item)
    if not additional_fields:
        return defaults
    return merge_fields(defaults, stage_additional_fields(item, additional_fields))


def project_items(
    items: Iterable[RawItem],
    additional_fields: Optional[Iterable[str]] = None,
) -> list[ProjectedItem]:
    """Project every item, preserving order."""
    fields = list(additional_fields or [])
    return [project_item(item, fields) for item in items]

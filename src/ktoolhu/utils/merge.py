"""Two-way merge patch computation.

A two-way merge patch expresses only the fields that differ between two
versions of a document: changed or added keys carry their new value, removed
keys carry ``None`` (``null`` on the wire), and unchanged keys are omitted.
Maps are diffed recursively; lists and scalars that differ are replaced as a
whole.

For documents whose lists are untouched, this is the same patch the API
server's strategic merge would compute, so it can be sent with the
``application/strategic-merge-patch+json`` content type.
"""

from __future__ import annotations

import copy
from typing import Any


def create_two_way_merge_patch(
    original: dict[str, Any],
    modified: dict[str, Any],
) -> dict[str, Any]:
    """Compute the patch that turns ``original`` into ``modified``.

    Args:
        original: Document as read from the cluster.
        modified: Locally edited copy.

    Returns:
        Patch document. Empty when the documents are equal.

    Example:
        >>> create_two_way_merge_patch({"a": {"b": 1, "c": 2}}, {"a": {"b": 1, "c": 3}})
        {'a': {'c': 3}}
    """
    patch: dict[str, Any] = {}

    for key, new_value in modified.items():
        if key not in original:
            patch[key] = copy.deepcopy(new_value)
            continue

        old_value = original[key]
        if old_value == new_value:
            continue

        if isinstance(old_value, dict) and isinstance(new_value, dict):
            nested = create_two_way_merge_patch(old_value, new_value)
            if nested:
                patch[key] = nested
        else:
            patch[key] = copy.deepcopy(new_value)

    for key in original:
        if key not in modified:
            patch[key] = None

    return patch

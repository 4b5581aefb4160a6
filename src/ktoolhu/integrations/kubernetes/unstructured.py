"""Schema-less access to live Kubernetes objects.

Objects read through the dynamic client are plain nested ``dict``/``list``
trees. :class:`Unstructured` wraps one such tree and offers path lookups that
report a missing node explicitly instead of raising ``KeyError`` or
``TypeError`` halfway through a traversal.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Final


class _Missing:
    """Sentinel type for absent nodes."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def lookup(tree: Any, *path: str) -> Any:
    """Walk ``path`` through nested mappings.

    Returns:
        The node at ``path``, or :data:`MISSING` if any step is absent or
        is not a mapping. An explicit ``null`` value is returned as ``None``.
    """
    current = tree
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


class Unstructured:
    """A live cluster object held as an untyped document."""

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document

    @classmethod
    def from_k8s_object(cls, obj: Any) -> Unstructured:
        """Create from a dynamic client ``ResourceInstance`` or a plain dict."""
        if isinstance(obj, Unstructured):
            return obj
        if hasattr(obj, "to_dict"):
            return cls(obj.to_dict())
        return cls(dict(obj))

    # =========================================================================
    # Path Access
    # =========================================================================

    def lookup(self, *path: str) -> Any:
        """Return the node at ``path`` or :data:`MISSING`."""
        return lookup(self._document, *path)

    def nested_map(self, *path: str) -> dict[str, Any] | None:
        """Return the mapping at ``path`` (not a copy), or None if absent or not a map."""
        node = self.lookup(*path)
        return node if isinstance(node, dict) else None

    def ensure_map(self, *path: str) -> dict[str, Any] | None:
        """Return the mapping at ``path``, creating empty maps for absent or null steps.

        Returns None when an existing node on the way is not a mapping.
        """
        current: Any = self._document
        for key in path:
            child = current.get(key)
            if child is None:
                child = {}
                current[key] = child
            if not isinstance(child, dict):
                return None
            current = child
        return current

    # =========================================================================
    # Well-known Fields
    # =========================================================================

    @property
    def kind(self) -> str:
        return self._document.get("kind") or ""

    @property
    def api_version(self) -> str:
        return self._document.get("apiVersion") or ""

    @property
    def metadata(self) -> dict[str, Any]:
        return self.nested_map("metadata") or {}

    @property
    def name(self) -> str:
        return self.metadata.get("name") or ""

    @property
    def namespace(self) -> str | None:
        return self.metadata.get("namespace")

    @property
    def deletion_timestamp(self) -> str | None:
        value = self.metadata.get("deletionTimestamp")
        return str(value) if value else None

    @property
    def finalizers(self) -> list[str]:
        return list(self.metadata.get("finalizers") or [])

    @finalizers.setter
    def finalizers(self, value: list[str]) -> None:
        metadata = self.ensure_map("metadata")
        if metadata is not None:
            metadata["finalizers"] = list(value)

    # =========================================================================
    # Copy and Serialization
    # =========================================================================

    def deep_copy(self) -> Unstructured:
        """Return an independent copy of this object."""
        return Unstructured(copy.deepcopy(self._document))

    def to_dict(self) -> dict[str, Any]:
        """Return the underlying document (not a copy)."""
        return self._document

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unstructured):
            return NotImplemented
        return self._document == other._document

    def __repr__(self) -> str:
        return f"Unstructured({self.kind}/{self.name}, namespace={self.namespace!r})"

"""Walk every object of a set of kinds across namespaces."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ktoolhu.integrations.kubernetes.exceptions import ListError
from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind
from ktoolhu.integrations.kubernetes.unstructured import Unstructured
from ktoolhu.services.kubernetes.base import K8sBaseManager


class ObjectWalker(K8sBaseManager):
    """Lists live objects kind by kind, namespace by namespace."""

    _entity_name = "walker"

    def walk(
        self,
        namespace: str | None,
        kinds: Iterable[ResourceKind],
    ) -> Iterator[Unstructured]:
        """Iterate over the objects of ``kinds``.

        When ``namespace`` is empty the namespace list is read right away;
        the objects themselves are only listed as the iterator advances.
        Kinds that do not support ``list`` are skipped, as are individual
        (kind, namespace) pairs whose list call fails.

        Args:
            namespace: Single namespace to walk, or None/"" for all.
            kinds: Kinds to list, walked in the given order.

        Returns:
            A single-pass iterator of objects, grouped by kind.
        """
        namespaces = [namespace] if namespace else self._namespace_names()
        return self._iterate(list(kinds), namespaces)

    def _namespace_names(self) -> list[str]:
        try:
            result = self._client.core_v1.list_namespace()
        except Exception as e:
            self._handle_api_error(e, "Namespace", None, None)
        return [ns.metadata.name for ns in result.items or []]

    def _iterate(self, kinds: list[ResourceKind], namespaces: list[str]) -> Iterator[Unstructured]:
        for kind in kinds:
            if not kind.supports("list"):
                self._log.debug("skipping_unlistable_kind", kind=str(kind))
                continue
            for ns in namespaces:
                yield from self._list(kind, ns)

    def _list(self, kind: ResourceKind, namespace: str) -> Iterator[Unstructured]:
        try:
            result = self._resource_api(kind).get(namespace=namespace)
        except Exception as e:
            error = ListError(
                resource_type=kind.qualified_name,
                namespace=namespace,
                original_error=self._translate(e, kind.kind, None, namespace),
            )
            self._log.warning("list_failed", kind=str(kind), namespace=namespace, error=str(error))
            return

        document = result.to_dict() if hasattr(result, "to_dict") else result
        for item in document.get("items") or []:
            item.setdefault("kind", kind.kind)
            item.setdefault("apiVersion", kind.group_version)
            yield Unstructured(item)

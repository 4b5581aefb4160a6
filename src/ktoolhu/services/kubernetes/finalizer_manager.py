"""Finalizer remediation for namespaces stuck in Terminating.

A namespace cannot finish deleting while objects inside it still carry
finalizers that no controller is going to remove. This workflow finds those
objects, reports them and, when asked to, clears their finalizers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ktoolhu.integrations.kubernetes.exceptions import RemoteWriteError
from ktoolhu.integrations.kubernetes.models.cluster import (
    BlockingObject,
    NamespaceSnapshot,
    RemediationSummary,
    TerminatingScan,
)
from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind
from ktoolhu.integrations.kubernetes.unstructured import Unstructured
from ktoolhu.services.kubernetes.base import K8sBaseManager
from ktoolhu.services.kubernetes.catalog import ResourceCatalog
from ktoolhu.services.kubernetes.namespace_manager import NamespaceManager
from ktoolhu.services.kubernetes.walker import ObjectWalker

if TYPE_CHECKING:
    from ktoolhu.core.config.models import TerminatingNamespaceConfig
    from ktoolhu.integrations.kubernetes.client import KubernetesClient


class FinalizerManager(K8sBaseManager):
    """Reports and optionally clears finalizers blocking namespace deletion."""

    _entity_name = "finalizer"

    def __init__(self, client: KubernetesClient, config: TerminatingNamespaceConfig) -> None:
        super().__init__(client)
        self._config = config

    def scan(self) -> TerminatingScan:
        """Snapshot the namespace list and pick out the terminating ones."""
        namespaces = NamespaceManager(self._client).list_namespaces()
        terminating = [ns for ns in namespaces if ns.is_terminating]
        self._log.info(
            "scanned_namespaces",
            total=len(namespaces),
            terminating=len(terminating),
        )
        return TerminatingScan(total=len(namespaces), terminating=terminating)

    def remediate(
        self,
        scan: TerminatingScan,
        *,
        on_catalog: Callable[[list[ResourceKind]], None] | None = None,
        on_namespace: Callable[[NamespaceSnapshot], None] | None = None,
        on_report: Callable[[BlockingObject], None] | None = None,
        confirm: Callable[[BlockingObject], bool] | None = None,
    ) -> RemediationSummary:
        """Walk every terminating namespace and handle its blocking objects.

        Nothing is discovered when the scan found no terminating namespace.
        Every blocking object is passed to ``on_report``. With ``delete``
        enabled its finalizers are then removed, after ``confirm`` approves
        it unless ``assume_yes`` is set. A missing ``confirm`` declines.

        Args:
            scan: Result of :meth:`scan`. Namespaces are not re-read.
            on_catalog: Called once with the resolved namespaced kinds.
            on_namespace: Called before each terminating namespace is walked.
            on_report: Called for each blocking object.
            confirm: Asked once per blocking object before its finalizers
                are removed.

        Returns:
            Reported, cleared and skipped objects.

        Raises:
            DiscoveryError: If the resource catalog cannot be resolved.
            RemoteWriteError: If clearing finalizers fails. Stops the run.
        """
        if not scan.terminating:
            self._log.info("no_terminating_namespaces", total=scan.total)
            return RemediationSummary()

        kinds = ResourceCatalog(self._client).list_namespaced_kinds()
        if on_catalog is not None:
            on_catalog(kinds)

        summary = RemediationSummary(
            namespaces=len(scan.terminating),
            resource_kinds=len(kinds),
        )
        walker = ObjectWalker(self._client)

        for namespace in scan.terminating:
            if on_namespace is not None:
                on_namespace(namespace)
            for kind in kinds:
                for obj in walker.walk(namespace.name, [kind]):
                    if not obj.deletion_timestamp or not obj.finalizers:
                        continue
                    self._handle(obj, kind, namespace.name, summary, on_report, confirm)

        self._log.info(
            "remediation_finished",
            reported=len(summary.reported),
            cleared=len(summary.cleared),
            skipped=len(summary.skipped),
        )
        return summary

    def _handle(
        self,
        obj: Unstructured,
        kind: ResourceKind,
        namespace: str,
        summary: RemediationSummary,
        on_report: Callable[[BlockingObject], None] | None,
        confirm: Callable[[BlockingObject], bool] | None,
    ) -> None:
        blocking = BlockingObject.from_unstructured(obj, namespace)
        self._log.info(
            "found_blocking_object",
            kind=blocking.kind,
            name=blocking.name,
            namespace=namespace,
            finalizers=blocking.finalizers,
        )
        summary.reported.append(blocking)
        if on_report is not None:
            on_report(blocking)

        if not self._config.delete:
            return
        if not self._config.assume_yes and (confirm is None or not confirm(blocking)):
            summary.skipped.append(blocking)
            return

        self.clear_finalizers(obj, kind, namespace)
        summary.cleared.append(blocking)

    def clear_finalizers(self, obj: Unstructured, kind: ResourceKind, namespace: str) -> None:
        """Replace ``obj`` with a copy whose finalizer list is empty.

        Raises:
            RemoteWriteError: If the update is rejected or fails.
        """
        modified = obj.deep_copy()
        modified.finalizers = []
        try:
            self._resource_api(kind).replace(body=modified.to_dict(), namespace=namespace)
        except Exception as e:
            cause = self._translate(e, obj.kind, obj.name, namespace)
            raise RemoteWriteError(
                operation="update",
                cause=cause,
                resource_type=obj.kind,
                resource_name=obj.name,
                namespace=namespace,
            ) from e
        self._log.info("cleared_finalizers", kind=obj.kind, name=obj.name, namespace=namespace)

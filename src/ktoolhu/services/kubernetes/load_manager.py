"""ConfigMap load generator used to stress the control plane's object store."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any

from ktoolhu.integrations.kubernetes.exceptions import KubernetesConflictError
from ktoolhu.integrations.kubernetes.models.workloads import LoadSummary
from ktoolhu.services.kubernetes.base import K8sBaseManager
from ktoolhu.services.kubernetes.namespace_manager import NamespaceManager
from ktoolhu.utils.concurrency import run_bounded

if TYPE_CHECKING:
    from ktoolhu.core.config.models import ConfigMapLoadConfig
    from ktoolhu.integrations.kubernetes.client import KubernetesClient

CONFIG_MAP_PREFIX = "ktoolhu"
LOAD_LABELS = {"app": "ktoolhu"}


def config_map_name(index: int) -> str:
    return f"{CONFIG_MAP_PREFIX}-{index}"


class ConfigMapLoadManager(K8sBaseManager):
    """Creates and then repeatedly updates a set of padded ConfigMaps.

    The create batch runs to completion before the update batch starts.
    Individual write failures are logged and counted, never raised.
    """

    _entity_name = "configmap_load"

    def __init__(self, client: KubernetesClient, config: ConfigMapLoadConfig) -> None:
        super().__init__(client)
        self._config = config
        self._lock = threading.Lock()
        self._summary = LoadSummary(namespace=config.namespace)

    def build_config_map(self, index: int) -> Any:
        """Build the ConfigMap body for unit ``index``."""
        from kubernetes.client import V1ConfigMap, V1ObjectMeta

        return V1ConfigMap(
            metadata=V1ObjectMeta(
                name=config_map_name(index),
                namespace=self._config.namespace,
                labels=dict(LOAD_LABELS),
            ),
            data={"data": f"{index}{self._config.padding}"},
        )

    def run(self) -> LoadSummary:
        """Run both phases and return the collected counters.

        Raises:
            KubernetesError: If the target namespace cannot be created.
        """
        config = self._config
        NamespaceManager(self._client).ensure_namespace(config.namespace)

        self._log.info("create_phase_started", count=config.create, parallel=config.parallel)
        started = time.perf_counter()
        run_bounded(config.parallel, config.create, self._create)
        self._summary.create_seconds = time.perf_counter() - started

        self._log.info("update_phase_started", count=config.update, parallel=config.parallel)
        started = time.perf_counter()
        run_bounded(config.parallel, config.update, self._update)
        self._summary.update_seconds = time.perf_counter() - started

        self._log.info(
            "load_finished",
            created=self._summary.created,
            already_existed=self._summary.already_existed,
            create_failures=self._summary.create_failures,
            updated=self._summary.updated,
            update_failures=self._summary.update_failures,
        )
        return self._summary.model_copy()

    def _create(self, index: int) -> None:
        body = self.build_config_map(index)
        name = body.metadata.name
        try:
            self._client.core_v1.create_namespaced_config_map(
                namespace=self._config.namespace,
                body=body,
            )
        except Exception as e:
            error = self._translate(e, "ConfigMap", name, self._config.namespace)
            if isinstance(error, KubernetesConflictError) and error.already_exists:
                self._count("already_existed")
                return
            self._log.error("create_config_map_failed", name=name, error=str(error))
            self._count("create_failures")
            return
        self._count("created")

    def _update(self, index: int) -> None:
        # Data follows the update index; only the name points at a created ConfigMap.
        name = config_map_name(index % self._config.create)
        body = self.build_config_map(index)
        body.metadata.name = name
        try:
            self._client.core_v1.replace_namespaced_config_map(
                name=name,
                namespace=self._config.namespace,
                body=body,
            )
        except Exception as e:
            error = self._translate(e, "ConfigMap", name, self._config.namespace)
            self._log.error("update_config_map_failed", name=name, error=str(error))
            self._count("update_failures")
            return
        self._count("updated")

    def _count(self, field: str) -> None:
        with self._lock:
            setattr(self._summary, field, getattr(self._summary, field) + 1)

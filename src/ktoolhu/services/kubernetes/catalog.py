"""Resource catalog resolution through the discovery endpoints."""

from __future__ import annotations

from typing import Any

from ktoolhu.integrations.kubernetes.exceptions import DiscoveryError
from ktoolhu.integrations.kubernetes.models.discovery import ResourceKind
from ktoolhu.services.kubernetes.base import K8sBaseManager

CORE_GROUP_VERSION = "v1"


class ResourceCatalog(K8sBaseManager):
    """Enumerates the namespaced resource kinds served by the cluster.

    The core group is read from ``/api/v1`` and every other group from its
    preferred version under ``/apis``. Nothing is cached: each call reflects
    the cluster at that moment.
    """

    _entity_name = "catalog"

    def list_namespaced_kinds(self, verb: str | None = "list") -> list[ResourceKind]:
        """Resolve all namespaced kinds.

        Args:
            verb: Keep only kinds supporting this verb. None keeps every kind.

        Returns:
            Kinds in discovery order, core group first.

        Raises:
            DiscoveryError: If the group list cannot be read, or no group at
                all could be resolved.
        """
        retry = self._client.make_retry_decorator()
        failed: list[str] = []
        kinds: list[ResourceKind] = []

        self._log.debug("discovering_resources", verb=verb)

        try:
            group_list = retry(self._client.apis.get_api_versions)()
        except Exception as e:
            error = self._translate(e, "APIGroupList")
            raise DiscoveryError(
                message=f"Failed to list API groups: {error}",
                original_error=e,
            ) from e

        sources: list[tuple[str, str]] = [("", CORE_GROUP_VERSION)]
        for group in group_list.groups or []:
            preferred = group.preferred_version or (group.versions or [None])[0]
            if preferred is None:
                continue
            sources.append((group.name, preferred.version))

        for group_name, version in sources:
            label = f"{group_name}/{version}" if group_name else version
            try:
                resource_list = retry(self._fetch_group)(group_name, version)
            except Exception as e:
                error = self._translate(e, "APIResourceList", label)
                self._log.warning("discovery_group_failed", group_version=label, error=str(error))
                failed.append(label)
                continue
            kinds.extend(self._namespaced(group_name, version, resource_list, verb))

        if len(failed) == len(sources):
            raise DiscoveryError(
                message="Failed to discover resources for every API group",
                failed_groups=failed,
            )

        self._log.debug(
            "discovered_resources",
            count=len(kinds),
            failed_groups=failed,
        )
        return kinds

    def _fetch_group(self, group: str, version: str) -> Any:
        if not group:
            return self._client.core_v1.get_api_resources()
        return self._client.custom_objects.get_api_resources(group, version)

    @staticmethod
    def _namespaced(
        group: str,
        version: str,
        resource_list: Any,
        verb: str | None,
    ) -> list[ResourceKind]:
        kinds = []
        for resource in resource_list.resources or []:
            # "pods/log", "deployments/scale", ...
            if "/" in resource.name or not resource.namespaced:
                continue
            kind = ResourceKind.from_api_resource(group, version, resource)
            if verb is not None and not kind.supports(verb):
                continue
            kinds.append(kind)
        return kinds

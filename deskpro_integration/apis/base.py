from __future__ import annotations

from typing import Any

from deskpro_integration.client import DeskproClient


class ResourceApi:
    """Operations shared by every top-level DeskPRO resource."""

    collection = ""

    def __init__(self, client: DeskproClient):
        self._client = client

    def _path(self, resource_id: int | str, *parts: Any) -> str:
        segments = [self.collection, str(int(resource_id))]
        segments.extend(str(part) for part in parts)
        return "/" + "/".join(segments)

    def find(
        self,
        criteria: dict[str, Any] | None = None,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> Any:
        params = self._client.list_params(criteria, page, order, cache)
        results = self._client.call("GET", f"/{self.collection}", params)
        return self._client.get_response(results)

    def create(self, info: dict[str, Any]) -> Any:
        results = self._client.call("POST", f"/{self.collection}", info)
        return self._client.get_response(results)

    def get(self, resource_id: int | str) -> Any:
        results = self._client.call("GET", self._path(resource_id))
        return self._client.get_response(results)

    def update(self, resource_id: int | str, info: dict[str, Any]) -> bool:
        results = self._client.call("POST", self._path(resource_id), info)
        return self._client.get_success_response(results)

    def delete(self, resource_id: int | str) -> bool:
        results = self._client.call("DELETE", self._path(resource_id))
        return self._client.get_success_response(results)

    def get_labels(self, resource_id: int | str) -> Any:
        results = self._client.call("GET", self._path(resource_id, "labels"))
        return self._client.get_response(results)

    def add_label(self, resource_id: int | str, label: str) -> Any:
        results = self._client.call("POST", self._path(resource_id, "labels"), {"label": label})
        return self._client.get_response(results)

    def get_label(self, resource_id: int | str, label: str) -> bool:
        results = self._client.call("GET", self._path(resource_id, "labels", label))
        return self._client.get_exists_response(results)

    def remove_label(self, resource_id: int | str, label: str) -> bool:
        # the remote route really is singular here
        results = self._client.call("DELETE", self._path(resource_id, "label", label))
        return self._client.get_success_response(results)

    def get_fields(self) -> Any:
        results = self._client.call("GET", f"/{self.collection}/fields")
        return self._client.get_response(results)


class MembershipResourceApi(ResourceApi):
    """Resources that also carry contact details and usergroups (people, organizations)."""

    def get_contact_details(self, resource_id: int | str) -> Any:
        results = self._client.call("GET", self._path(resource_id, "contact-details"))
        return self._client.get_response(results)

    def get_contact_detail(self, resource_id: int | str, contact_id: int | str) -> bool:
        results = self._client.call("GET", self._path(resource_id, "contact-details", int(contact_id)))
        return self._client.get_exists_response(results)

    def remove_contact_detail(self, resource_id: int | str, contact_id: int | str) -> bool:
        results = self._client.call("DELETE", self._path(resource_id, "contact-details", int(contact_id)))
        return self._client.get_success_response(results)

    def get_groups(self, resource_id: int | str) -> Any:
        results = self._client.call("GET", self._path(resource_id, "groups"))
        return self._client.get_response(results)

    def add_group(self, resource_id: int | str, group_id: int | str) -> Any:
        results = self._client.call("POST", self._path(resource_id, "groups"), {"id": group_id})
        return self._client.get_response(results)

    def get_group(self, resource_id: int | str, group_id: int | str) -> bool:
        results = self._client.call("GET", self._path(resource_id, "groups", int(group_id)))
        return self._client.get_exists_response(results)

    def remove_group(self, resource_id: int | str, group_id: int | str) -> bool:
        results = self._client.call("DELETE", self._path(resource_id, "groups", int(group_id)))
        return self._client.get_success_response(results)

    def get_all_groups(self) -> Any:
        results = self._client.call("GET", f"/{self.collection}/groups")
        return self._client.get_response(results)

    def _list_sub_resource(
        self,
        resource_id: int | str,
        sub_resource: str,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> Any:
        params = self._client.list_params(None, page, order, cache)
        results = self._client.call("GET", self._path(resource_id, sub_resource), params)
        return self._client.get_response(results)

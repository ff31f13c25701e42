from __future__ import annotations

from typing import Any

from deskpro_integration.apis.base import MembershipResourceApi


class OrganizationsApi(MembershipResourceApi):
    collection = "organizations"

    def get_members(
        self,
        organization_id: int | str,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> Any:
        return self._list_sub_resource(organization_id, "members", page, order, cache)

    def get_tickets(
        self,
        organization_id: int | str,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> Any:
        return self._list_sub_resource(organization_id, "tickets", page, order, cache)

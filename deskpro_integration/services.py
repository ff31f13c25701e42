from __future__ import annotations

from typing import Any

from deskpro_integration.apis import OrganizationsApi, PeopleApi, TicketsApi
from deskpro_integration.client import DeskproClient
from deskpro_integration.config import AppSettings
from deskpro_integration.http import HttpClient

RECENT_TICKETS_ORDER = "ticket.date_created:desc"


class DeskproService:
    def __init__(
        self,
        client: DeskproClient,
        organizations_api: OrganizationsApi,
        people_api: PeopleApi,
        tickets_api: TicketsApi,
    ):
        self._client = client
        self.organizations = organizations_api
        self.people = people_api
        self.tickets = tickets_api

    @property
    def deskpro_url(self) -> str:
        return self._client.root_url

    @property
    def api_errors(self) -> list[list[Any]] | None:
        return self._client.last_errors

    def find_people_by_email(self, email: str) -> list[Any]:
        results = self.people.find({"email": email})
        if not results or not results.get("people"):
            return []
        return _as_list(results["people"])

    def recent_tickets(self, person_id: int | str, limit: int = 10) -> list[Any]:
        results = self.tickets.find({"person_id": person_id}, 1, RECENT_TICKETS_ORDER)
        if not results or not results.get("tickets"):
            return []
        return _as_list(results["tickets"])[:limit]


def _as_list(collection: Any) -> list[Any]:
    # the API returns keyed objects for some collections
    if isinstance(collection, dict):
        return list(collection.values())
    return list(collection)


def build_service(settings: AppSettings) -> DeskproService:
    http_client = HttpClient(settings.api_key, timeout_seconds=settings.timeout_seconds)
    client = DeskproClient(settings.root_url, settings.api_key, http_client=http_client)
    return DeskproService(
        client=client,
        organizations_api=OrganizationsApi(client),
        people_api=PeopleApi(client),
        tickets_api=TicketsApi(client),
    )

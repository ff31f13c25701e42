from __future__ import annotations

from typing import Any

from deskpro_integration.apis.base import ResourceApi


class TicketsApi(ResourceApi):
    collection = "tickets"

    def delete(self, ticket_id: int | str, ban: bool = False) -> bool:
        results = self._client.call("DELETE", self._path(ticket_id), {"ban": 1 if ban else 0})
        return self._client.get_success_response(results)

    def undelete(self, ticket_id: int | str) -> bool:
        return self._action(ticket_id, "undelete")

    def mark_as_spam(self, ticket_id: int | str, ban: bool = False) -> bool:
        return self._action(ticket_id, "spam", {"ban": 1 if ban else 0})

    def unmark_as_spam(self, ticket_id: int | str) -> bool:
        return self._action(ticket_id, "unspam")

    def claim(self, ticket_id: int | str) -> bool:
        return self._action(ticket_id, "claim")

    def lock(self, ticket_id: int | str) -> bool:
        return self._action(ticket_id, "lock")

    def unlock(self, ticket_id: int | str) -> bool:
        return self._action(ticket_id, "unlock")

    def merge(self, target_id: int | str, source_id: int | str) -> bool:
        return self._action(target_id, f"merge/{int(source_id)}")

    def get_messages(self, ticket_id: int | str) -> Any:
        results = self._client.call("GET", self._path(ticket_id, "messages"))
        return self._client.get_response(results)

    def create_message(self, ticket_id: int | str, message: str, extra: dict[str, Any] | None = None) -> Any:
        params = dict(extra or {})
        params["message"] = message
        results = self._client.call("POST", self._path(ticket_id, "messages"), params)
        return self._client.get_response(results)

    def get_message(self, ticket_id: int | str, message_id: int | str) -> Any:
        results = self._client.call("GET", self._path(ticket_id, "messages", int(message_id)))
        return self._client.get_response(results)

    def get_participants(self, ticket_id: int | str) -> Any:
        results = self._client.call("GET", self._path(ticket_id, "participants"))
        return self._client.get_response(results)

    def add_participant(
        self,
        ticket_id: int | str,
        person_id: int | str | None = None,
        email: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {}
        if person_id:
            params["person_id"] = person_id
        if email:
            params["email"] = email

        results = self._client.call("POST", self._path(ticket_id, "participants"), params)
        return self._client.get_response(results)

    def get_participant(self, ticket_id: int | str, person_id: int | str) -> bool:
        results = self._client.call("GET", self._path(ticket_id, "participants", int(person_id)))
        return self._client.get_exists_response(results)

    def remove_participant(self, ticket_id: int | str, person_id: int | str) -> bool:
        results = self._client.call("DELETE", self._path(ticket_id, "participants", int(person_id)))
        return self._client.get_success_response(results)

    def get_departments(self) -> Any:
        return self._lookup("departments")

    def get_products(self) -> Any:
        return self._lookup("products")

    def get_categories(self) -> Any:
        return self._lookup("categories")

    def get_priorities(self) -> Any:
        return self._lookup("priorities")

    def get_workflows(self) -> Any:
        return self._lookup("workflows")

    def get_filters(self) -> Any:
        return self._lookup("filters")

    def run_filter(self, filter_id: int | str, page: int = 1) -> Any:
        results = self._client.call("GET", f"/tickets/filters/{int(filter_id)}", {"page": page})
        return self._client.get_response(results)

    def _action(self, ticket_id: int | str, action: str, params: dict[str, Any] | None = None) -> bool:
        results = self._client.call("POST", self._path(ticket_id, action), params)
        return self._client.get_success_response(results)

    def _lookup(self, name: str) -> Any:
        results = self._client.call("GET", f"/tickets/{name}")
        return self._client.get_response(results)

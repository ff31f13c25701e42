from __future__ import annotations

from typing import Any

from deskpro_integration.apis.base import MembershipResourceApi


class PeopleApi(MembershipResourceApi):
    collection = "people"

    def reset_password(self, person_id: int | str, password: str, send_email: bool = True) -> bool:
        params = {
            "password": password,
            "send_email": 1 if send_email else 0,
        }
        results = self._client.call("POST", self._path(person_id, "reset-password"), params)
        return self._client.get_success_response(results)

    def get_tickets(
        self,
        person_id: int | str,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> Any:
        return self._list_sub_resource(person_id, "tickets", page, order, cache)

    def get_notes(self, person_id: int | str) -> Any:
        results = self._client.call("GET", self._path(person_id, "notes"))
        return self._client.get_response(results)

    def create_note(self, person_id: int | str, note: str) -> Any:
        results = self._client.call("POST", self._path(person_id, "notes"), {"note": note})
        return self._client.get_response(results)

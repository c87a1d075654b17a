from collections.abc import Mapping
from typing import Any

from ...application.ports.outbound.errors import BackendResponseError
from .client import BackendClient, response_json

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def _eq_params(filters: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(column, f"eq.{value}") for column, value in filters.items()]


class Table:
    """Query builder for one backend table.

    Supports the operations the service needs: select with ordering and
    equality filters, insert of one or many rows, update and delete scoped by
    equality filters. Update and delete refuse to run without a filter.
    """

    def __init__(
        self,
        client: BackendClient,
        name: str,
        access_token: str | None = None,
    ) -> None:
        self._client = client
        self._name = name
        self._access_token = access_token

    @property
    def name(self) -> str:
        return self._name

    @property
    def _path(self) -> str:
        return f"/rest/v1/{self._name}"

    async def select(
        self,
        columns: str = "*",
        *,
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        params = [("select", columns)]
        params.extend(_eq_params(filters or {}))
        if order:
            params.append(("order", f"{order}.{'asc' if ascending else 'desc'}"))

        response = await self._client.request(
            "GET", self._path, access_token=self._access_token, params=params
        )
        return self._rows(response_json(response))

    async def insert(self, rows: Mapping[str, Any] | list[Mapping[str, Any]]) -> list[dict[str, Any]]:
        payload = [dict(rows)] if isinstance(rows, Mapping) else [dict(r) for r in rows]
        response = await self._client.request(
            "POST",
            self._path,
            access_token=self._access_token,
            json=payload,
            headers=RETURN_REPRESENTATION,
        )
        return self._rows(response_json(response))

    async def update(
        self,
        values: Mapping[str, Any],
        *,
        filters: Mapping[str, Any],
    ) -> list[dict[str, Any]]:
        self._require_filters(filters, "update")
        response = await self._client.request(
            "PATCH",
            self._path,
            access_token=self._access_token,
            params=_eq_params(filters),
            json=dict(values),
            headers=RETURN_REPRESENTATION,
        )
        return self._rows(response_json(response))

    async def delete(self, *, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        self._require_filters(filters, "delete")
        response = await self._client.request(
            "DELETE",
            self._path,
            access_token=self._access_token,
            params=_eq_params(filters),
            headers=RETURN_REPRESENTATION,
        )
        return self._rows(response_json(response)) if response.content else []

    def _require_filters(self, filters: Mapping[str, Any], operation: str) -> None:
        if not filters:
            raise ValueError(f"Refusing to {operation} every row of {self._name}")

    def _rows(self, body: Any) -> list[dict[str, Any]]:
        if not isinstance(body, list) or not all(isinstance(row, dict) for row in body):
            raise BackendResponseError(
                f"Expected a list of rows from {self._name}, got {type(body).__name__}"
            )
        return body

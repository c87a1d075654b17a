"""Admin skill operations end to end against an in-memory skills table."""

import itertools
import json
from unittest.mock import AsyncMock

import httpx
import pytest

from certshowcase.application.services import AdminService
from certshowcase.infrastructure.adapters import RestCertificationRepository, RestSkillRepository
from certshowcase.infrastructure.backend import BackendClient


class SkillsTable:
    """MockTransport handler emulating the REST skills table (eq. filters only)."""

    def __init__(self):
        self.rows: list[dict] = []
        self._ids = itertools.count(1)

    def _matches(self, request: httpx.Request, row: dict) -> bool:
        for column in ("certification_id", "skill_name"):
            value = request.url.params.get(column)
            if value is not None and row[column] != value.removeprefix("eq."):
                return False
        return True

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            found = [row for row in self.rows if self._matches(request, row)]
            return httpx.Response(200, json=sorted(found, key=lambda r: r["skill_name"]))
        if request.method == "POST":
            created = [
                {"id": f"s{next(self._ids)}", **row} for row in json.loads(request.content)
            ]
            self.rows.extend(created)
            return httpx.Response(201, json=created)
        if request.method == "DELETE":
            removed = [row for row in self.rows if self._matches(request, row)]
            self.rows = [row for row in self.rows if row not in removed]
            return httpx.Response(200, json=removed)
        return httpx.Response(405)


@pytest.fixture
def table():
    return SkillsTable()


@pytest.fixture
def service(table):
    client = BackendClient(
        "https://project.backend.test",
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(table)),
    )
    return AdminService(AsyncMock(), RestSkillRepository(client), AsyncMock())


class TestSkillStore:
    @pytest.mark.asyncio
    async def test_adding_same_name_twice_keeps_both_rows(self, service, table):
        await service.add_skill("c1", "Docker")
        result = await service.add_skill("c1", "Docker")

        assert result.skills.skills == ["Docker", "Docker"]
        assert len(table.rows) == 2

    @pytest.mark.asyncio
    async def test_add_then_remove_restores_previous_set(self, service):
        await service.add_skill("c1", "EC2")
        await service.add_skill("c2", "Lambda")
        before = (await service.list_skills("c1")).skills.skills

        await service.add_skill("c1", "S3")
        result = await service.remove_skill("c1", "S3")

        assert result.skills.skills == before == ["EC2"]

    @pytest.mark.asyncio
    async def test_remove_deletes_every_duplicate_for_that_certification(self, service, table):
        for certification_id, name in [("c1", "EC2"), ("c1", "EC2"), ("c1", "S3"), ("c2", "EC2")]:
            await service.add_skill(certification_id, name)

        result = await service.remove_skill("c1", "EC2")

        assert result.notifications[0].description == "Skill removed successfully"
        assert result.skills.skills == ["S3"]
        assert [(r["certification_id"], r["skill_name"]) for r in table.rows] == [
            ("c1", "S3"),
            ("c2", "EC2"),
        ]

    @pytest.mark.asyncio
    async def test_skill_name_with_slash_round_trips(self, service, table):
        await service.add_skill("c1", "CI/CD")

        result = await service.remove_skill("c1", "CI/CD")

        assert result.skills.skills == []
        assert table.rows == []


class TestNonJsonBackendBody:
    @pytest.mark.asyncio
    async def test_admin_load_reports_fetch_failure(self):
        client = BackendClient(
            "https://project.backend.test",
            anon_key="anon-key",
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(
                    lambda request: httpx.Response(200, text="<html>gateway</html>")
                )
            ),
        )
        service = AdminService(
            RestCertificationRepository(client), RestSkillRepository(client), AsyncMock()
        )

        result = await service.load()

        assert result.certifications is None
        assert [n.description for n in result.notifications] == [
            "Failed to fetch certifications"
        ]

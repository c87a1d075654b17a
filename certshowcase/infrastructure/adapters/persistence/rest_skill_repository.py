import structlog

from ....application.ports.outbound import BackendResponseError, SkillRepository
from ....domain.entities import Skill
from ...backend import BackendClient, Table
from .rows import SkillRow, parse_row

logger = structlog.get_logger()


class RestSkillRepository(SkillRepository):
    def __init__(
        self,
        client: BackendClient,
        table_name: str = "skills",
        access_token: str | None = None,
    ):
        self._table = Table(client, table_name, access_token=access_token)

    async def list_for(self, certification_id: str) -> list[Skill]:
        rows = await self._table.select(
            filters={"certification_id": certification_id},
            order="skill_name",
        )
        return [parse_row(SkillRow, row, self._table.name).to_entity() for row in rows]

    async def add(self, certification_id: str, skill_name: str) -> Skill:
        rows = await self._table.insert(
            {"certification_id": certification_id, "skill_name": skill_name}
        )
        if not rows:
            raise BackendResponseError(f"Insert into {self._table.name} returned no row")
        logger.info("Skill added", certification_id=certification_id, skill_name=skill_name)
        return parse_row(SkillRow, rows[0], self._table.name).to_entity()

    async def remove(self, certification_id: str, skill_name: str) -> int:
        # Matches on the pair, so duplicate names are all removed together
        rows = await self._table.delete(
            filters={"certification_id": certification_id, "skill_name": skill_name}
        )
        logger.info(
            "Skill removed",
            certification_id=certification_id,
            skill_name=skill_name,
            rows=len(rows),
        )
        return len(rows)

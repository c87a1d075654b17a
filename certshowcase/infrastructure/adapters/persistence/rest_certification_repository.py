import structlog

from ....application.ports.outbound import BackendResponseError, CertificationRepository
from ....domain.entities import Certification, CertificationDraft
from ...backend import BackendClient, Table
from .rows import to_certification

logger = structlog.get_logger()


class RestCertificationRepository(CertificationRepository):
    def __init__(
        self,
        client: BackendClient,
        table_name: str = "certifications",
        access_token: str | None = None,
    ):
        self._table = Table(client, table_name, access_token=access_token)

    async def list_all(self) -> list[Certification]:
        rows = await self._table.select(order="created_at", ascending=False)
        return [to_certification(row, self._table.name) for row in rows]

    async def get_by_id(self, certification_id: str) -> Certification | None:
        rows = await self._table.select(filters={"id": certification_id})
        if not rows:
            return None
        return to_certification(rows[0], self._table.name)

    async def create(self, draft: CertificationDraft) -> Certification:
        rows = await self._table.insert(draft.to_row())
        if not rows:
            raise BackendResponseError(f"Insert into {self._table.name} returned no row")
        certification = to_certification(rows[0], self._table.name)
        logger.info("Certification created", certification_id=certification.id)
        return certification

    async def update(
        self,
        certification_id: str,
        draft: CertificationDraft,
        replace_file: bool = False,
    ) -> Certification | None:
        rows = await self._table.update(
            draft.to_row(include_file_url=replace_file),
            filters={"id": certification_id},
        )
        if not rows:
            return None
        logger.info(
            "Certification updated",
            certification_id=certification_id,
            replaced_file=replace_file,
        )
        return to_certification(rows[0], self._table.name)

    async def delete(self, certification_id: str) -> None:
        # Skills go with it through the backend's foreign key cascade
        await self._table.delete(filters={"id": certification_id})
        logger.info("Certification deleted", certification_id=certification_id)

from ....application.ports.outbound import ProfileRepository
from ....domain.entities import Profile
from ...backend import BackendClient, Table
from .rows import ProfileRow, parse_row


class RestProfileRepository(ProfileRepository):
    def __init__(
        self,
        client: BackendClient,
        table_name: str = "profiles",
        access_token: str | None = None,
    ):
        self._table = Table(client, table_name, access_token=access_token)

    async def get_by_user_id(self, user_id: str) -> Profile | None:
        rows = await self._table.select(filters={"user_id": user_id})
        if not rows:
            return None
        return parse_row(ProfileRow, rows[0], self._table.name).to_entity()

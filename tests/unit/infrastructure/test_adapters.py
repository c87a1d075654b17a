import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from certshowcase.application.ports.outbound import (
    Attachment,
    AuthProviderError,
    BackendResponseError,
)
from certshowcase.application.services import SessionStore
from certshowcase.domain.entities import CertificationDraft, CertificationType
from certshowcase.domain.value_objects import AuthEvent
from certshowcase.infrastructure.adapters import (
    BackendAuthProvider,
    BucketFileStorage,
    RestCertificationRepository,
    RestProfileRepository,
    RestSkillRepository,
)
from certshowcase.infrastructure.adapters.storage.bucket_file_storage import attachment_key
from certshowcase.infrastructure.backend import BackendClient


def json_client(*payloads, status_code: int = 200):
    """Backend client answering each request with the next payload in turn."""
    requests: list[httpx.Request] = []
    queue = list(payloads)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=queue.pop(0))

    client = BackendClient(
        "https://project.backend.test",
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return client, requests


class TestRestCertificationRepository:
    @pytest.mark.asyncio
    async def test_list_all_newest_created_first(self, row_factory):
        client, requests = json_client([row_factory("c1"), row_factory("c2", type="badge")])
        repo = RestCertificationRepository(client)

        records = await repo.list_all()

        assert [r.id for r in records] == ["c1", "c2"]
        assert records[1].type is CertificationType.BADGE
        assert requests[0].url.params["order"] == "created_at.desc"

    @pytest.mark.asyncio
    async def test_unknown_enum_value_rejected(self, row_factory):
        client, _ = json_client([row_factory("c1", type="diploma")])
        repo = RestCertificationRepository(client)

        with pytest.raises(BackendResponseError):
            await repo.list_all()

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self):
        client, requests = json_client([])
        repo = RestCertificationRepository(client)

        assert await repo.get_by_id("nope") is None
        assert requests[0].url.params["id"] == "eq.nope"

    @pytest.mark.asyncio
    async def test_create_sends_null_for_empty_fields(self, row_factory):
        client, requests = json_client([row_factory("c9")])
        repo = RestCertificationRepository(client, access_token="user-token")  # noqa: S106

        created = await repo.create(CertificationDraft(title="CKA", issuer="CNCF", description=""))

        assert created.id == "c9"
        body = json.loads(requests[0].content)[0]
        assert body["description"] is None
        assert body["certificate_file_url"] is None
        assert requests[0].headers["Authorization"] == "Bearer user-token"

    @pytest.mark.asyncio
    async def test_update_without_new_file_omits_file_column(self, row_factory):
        client, requests = json_client([row_factory("c1")])
        repo = RestCertificationRepository(client)

        await repo.update("c1", CertificationDraft(title="CKA", issuer="CNCF"))

        body = json.loads(requests[0].content)
        assert "certificate_file_url" not in body
        assert requests[0].url.params["id"] == "eq.c1"

    @pytest.mark.asyncio
    async def test_update_with_new_file_sets_file_column(self, row_factory):
        client, requests = json_client([row_factory("c1")])
        repo = RestCertificationRepository(client)
        draft = CertificationDraft(
            title="CKA", issuer="CNCF", certificate_file_url="https://cdn/1-a.pdf"
        )

        await repo.update("c1", draft, replace_file=True)

        assert json.loads(requests[0].content)["certificate_file_url"] == "https://cdn/1-a.pdf"

    @pytest.mark.asyncio
    async def test_update_matching_no_row_returns_none(self):
        client, _ = json_client([])
        repo = RestCertificationRepository(client)

        assert await repo.update("missing", CertificationDraft(title="A", issuer="B")) is None

    @pytest.mark.asyncio
    async def test_delete_by_id(self):
        client, requests = json_client([])
        repo = RestCertificationRepository(client)

        await repo.delete("c1")

        assert requests[0].method == "DELETE"
        assert requests[0].url.params["id"] == "eq.c1"


class TestRestSkillRepository:
    @pytest.mark.asyncio
    async def test_list_for_alphabetical(self):
        client, requests = json_client(
            [
                {"id": "s1", "certification_id": "c1", "skill_name": "EC2"},
                {"id": "s2", "certification_id": "c1", "skill_name": "S3"},
            ]
        )
        repo = RestSkillRepository(client)

        skills = await repo.list_for("c1")

        assert [s.skill_name for s in skills] == ["EC2", "S3"]
        assert requests[0].url.params["order"] == "skill_name.asc"
        assert requests[0].url.params["certification_id"] == "eq.c1"

    @pytest.mark.asyncio
    async def test_add(self):
        client, requests = json_client(
            [{"id": "s3", "certification_id": "c1", "skill_name": "IAM"}]
        )
        repo = RestSkillRepository(client)

        skill = await repo.add("c1", "IAM")

        assert skill.id == "s3"
        assert json.loads(requests[0].content) == [{"certification_id": "c1", "skill_name": "IAM"}]

    @pytest.mark.asyncio
    async def test_remove_matches_pair_and_counts_rows(self):
        client, requests = json_client(
            [
                {"id": "s1", "certification_id": "c1", "skill_name": "EC2"},
                {"id": "s2", "certification_id": "c1", "skill_name": "EC2"},
            ]
        )
        repo = RestSkillRepository(client)

        removed = await repo.remove("c1", "EC2")

        assert removed == 2
        params = requests[0].url.params
        assert params["certification_id"] == "eq.c1"
        assert params["skill_name"] == "eq.EC2"


class TestRestProfileRepository:
    @pytest.mark.asyncio
    async def test_get_by_user_id(self):
        client, _ = json_client(
            [{"id": "p1", "user_id": "user-123", "username": "admin", "is_admin": True}]
        )
        repo = RestProfileRepository(client)

        profile = await repo.get_by_user_id("user-123")

        assert profile.is_admin is True

    @pytest.mark.asyncio
    async def test_missing_profile(self):
        client, _ = json_client([])

        assert await RestProfileRepository(client).get_by_user_id("user-123") is None


class TestBucketFileStorage:
    def test_attachment_key(self):
        assert attachment_key("cert.pdf", 1700000000000) == "1700000000000-cert.pdf"

    @pytest.mark.asyncio
    async def test_store_uploads_and_returns_public_url(self):
        bucket = MagicMock()
        bucket.upload = AsyncMock(return_value="1700000000000-cert.pdf")
        bucket.get_public_url.return_value = "https://cdn/1700000000000-cert.pdf"
        storage = BucketFileStorage(bucket, clock_ms=lambda: 1700000000000)

        url = await storage.store(
            Attachment(filename="cert.pdf", content=b"%PDF", content_type="application/pdf")
        )

        assert url == "https://cdn/1700000000000-cert.pdf"
        bucket.upload.assert_called_once_with("1700000000000-cert.pdf", b"%PDF", "application/pdf")
        bucket.get_public_url.assert_called_once_with("1700000000000-cert.pdf")


class TestBackendAuthProvider:
    SESSION = {
        "access_token": "access-abc",
        "refresh_token": "refresh-xyz",
        "expires_in": 3600,
        "user": {"id": "user-123", "email": "admin@example.com"},
    }

    @pytest.fixture
    def store(self):
        return SessionStore()

    @pytest.fixture
    def events(self, store):
        received = []
        store.subscribe(lambda event, session: received.append(event))
        return received

    @pytest.fixture
    def api(self):
        api = AsyncMock()
        api.sign_in_with_password.return_value = self.SESSION
        api.refresh.return_value = self.SESSION
        return api

    @pytest.mark.asyncio
    async def test_sign_in_publishes_signed_in(self, api, store, events):
        provider = BackendAuthProvider(api, store)

        session = await provider.sign_in_with_password("admin@example.com", "secret")

        assert session.user.id == "user-123"
        assert store.session == session
        assert events == [AuthEvent.SIGNED_IN]

    @pytest.mark.asyncio
    async def test_rejected_sign_in_publishes_nothing(self, api, store, events):
        api.sign_in_with_password.side_effect = AuthProviderError("Invalid login credentials", 400)
        provider = BackendAuthProvider(api, store)

        with pytest.raises(AuthProviderError):
            await provider.sign_in_with_password("admin@example.com", "wrong")

        assert events == []

    @pytest.mark.asyncio
    async def test_sign_out_ends_session_even_if_revoke_fails(
        self, api, store, events, sample_session
    ):
        store.publish(AuthEvent.INITIAL_SESSION, sample_session)
        api.sign_out.side_effect = AuthProviderError("network", None)
        provider = BackendAuthProvider(api, store)

        with pytest.raises(AuthProviderError):
            await provider.sign_out()

        assert store.session is None
        assert events[-1] is AuthEvent.SIGNED_OUT
        api.sign_out.assert_called_once_with("access-abc")

    @pytest.mark.asyncio
    async def test_sign_out_without_session(self, api, store, events):
        provider = BackendAuthProvider(api, store)

        await provider.sign_out()

        api.sign_out.assert_not_called()
        assert events == [AuthEvent.SIGNED_OUT]

    @pytest.mark.asyncio
    async def test_refresh_publishes_token_refreshed(self, api, store, events):
        provider = BackendAuthProvider(api, store)

        await provider.refresh_session("refresh-xyz")

        assert events == [AuthEvent.TOKEN_REFRESHED]

    @pytest.mark.asyncio
    async def test_rejected_refresh_signs_out(self, api, store, events):
        api.refresh.side_effect = AuthProviderError("Invalid Refresh Token", 400)
        provider = BackendAuthProvider(api, store)

        with pytest.raises(AuthProviderError):
            await provider.refresh_session("stale")

        assert events == [AuthEvent.SIGNED_OUT]

    @pytest.mark.asyncio
    async def test_unreachable_refresh_keeps_session(self, api, store, events):
        api.refresh.side_effect = AuthProviderError("Backend unreachable: ConnectError")
        provider = BackendAuthProvider(api, store)

        with pytest.raises(AuthProviderError):
            await provider.refresh_session("refresh-xyz")

        assert events == []

    @pytest.mark.asyncio
    async def test_payload_without_user_rejected(self, api, store):
        api.sign_in_with_password.return_value = {**self.SESSION, "user": {}}
        provider = BackendAuthProvider(api, store)

        with pytest.raises(BackendResponseError):
            await provider.sign_in_with_password("admin@example.com", "secret")

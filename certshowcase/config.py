from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Service
    service_name: str = "certshowcase"
    debug: bool = False
    secret_key: str = "change-me"  # noqa: S105

    # Backend (managed Postgres + auth + object storage)
    backend_url: str = "http://localhost:54321"
    backend_anon_key: str = ""
    backend_timeout: float = 10.0
    certifications_table: str = "certifications"
    skills_table: str = "skills"
    profiles_table: str = "profiles"
    storage_bucket: str = "certificates"

    # Authentication
    jwt_audience: str = "authenticated"
    jwt_algorithms: list[str] = ["RS256", "ES256"]
    jwks_cache_ttl: int = 3600
    require_admin_profile: bool = False
    admin_route: str = "/admin"

    # Listing
    transition_window_seconds: float = 0.4
    max_listing_views: int = 500

    # Uploads
    allowed_attachment_extensions: list[str] = [".pdf", ".jpg", ".jpeg", ".png"]
    max_upload_size: int = 10 * 1024 * 1024

    # Security
    csrf_enabled: bool = True

    @property
    def auth_base_url(self) -> str:
        return f"{self.backend_url.rstrip('/')}/auth/v1"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()

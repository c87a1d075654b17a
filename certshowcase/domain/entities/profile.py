from dataclasses import dataclass
from datetime import datetime


@dataclass
class Profile:
    """Per-user profile linked to an auth identity."""

    id: str
    user_id: str
    username: str
    is_admin: bool = False
    totp_secret: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        # Keep the TOTP secret out of logs and tracebacks
        return (
            f"Profile(id={self.id!r}, user_id={self.user_id!r}, "
            f"username={self.username!r}, is_admin={self.is_admin!r})"
        )

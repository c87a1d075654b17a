from pydantic import BaseModel, Field

from ...domain.value_objects import GateState


class SignInDTO(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)


class SessionStateDTO(BaseModel):
    state: GateState
    user_id: str | None = None
    email: str | None = None
    redirect_to: str | None = None


class SignInResponseDTO(BaseModel):
    success: bool
    message: str
    redirect_to: str | None = None

"""
Mahasiswa Panel — Auth request/response schemas

Missing, null or empty fields and password mismatches are reported with their
own error types so the validation handler can show the message verbatim.
Each request schema names its required-fields message in `missing_message`;
the handler also uses it when the body itself is absent.
"""
from typing import ClassVar

from pydantic import BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

ALL_FIELDS_REQUIRED = "Semua field wajib diisi"


def _require(model: "AuthRequest", fields: tuple[str, ...]) -> None:
    if any(not getattr(model, name) for name in fields):
        raise PydanticCustomError("missing_fields", model.missing_message)


def _require_match(password: str, confirmation: str) -> None:
    if password != confirmation:
        raise PydanticCustomError("password_mismatch", "Password tidak sama")


class AuthRequest(BaseModel):
    missing_message: ClassVar[str] = ALL_FIELDS_REQUIRED

    model_config = {"populate_by_name": True}

    email: str | None = None


class LoginRequest(AuthRequest):
    missing_message: ClassVar[str] = "Email dan password wajib diisi"

    password: str | None = None

    @model_validator(mode="after")
    def check_required(self):
        _require(self, ("email", "password"))
        return self


class RegisterRequest(AuthRequest):
    password: str | None = None
    confirm_password: str | None = Field(None, alias="confirmPassword")
    full_name: str | None = Field(None, alias="fullName")

    @model_validator(mode="after")
    def check_required(self):
        _require(self, ("email", "password", "confirm_password", "full_name"))
        _require_match(self.password, self.confirm_password)
        return self


class ResetPasswordRequest(AuthRequest):
    missing_message: ClassVar[str] = "Email wajib diisi"

    @model_validator(mode="after")
    def check_required(self):
        _require(self, ("email",))
        return self


class VerifyOtpResetRequest(AuthRequest):
    otp: str | None = None
    new_password: str | None = Field(None, alias="newPassword")
    confirm_password: str | None = Field(None, alias="confirmPassword")

    @model_validator(mode="after")
    def check_required(self):
        _require(self, ("email", "otp", "new_password", "confirm_password"))
        _require_match(self.new_password, self.confirm_password)
        return self


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class LoginResponse(MessageResponse):
    user: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    dependencies: dict[str, str]

"""Pydantic v2 schemas for API request/response bodies.

Request bodies that are forwarded to the banking backend use its camelCase
field names on the wire (``populate_by_name`` also accepts snake_case).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Body as sent to the backend: camelCase, only the fields the client set."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ─── Health / Status ───────────────────────────────────────────────────────────


class ModeInfoRead(BaseModel):
    mode: Literal["forced-mock", "live-unknown", "live-available", "live-unavailable"]
    forced_mock: bool
    backend_available: bool | None = None
    using_mock: bool
    label: Literal["MOCK", "API"]
    last_checked_at: str | None = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str = "0.1.0"
    environment: dict[str, Any]
    backend: ModeInfoRead


class BackendStatusResponse(ModeInfoRead):
    warnings: list[str] = Field(default_factory=list)


class MockModeUpdate(BaseModel):
    enabled: bool


class RefreshResponse(BackendStatusResponse):
    reachable: bool


# ─── Auth ──────────────────────────────────────────────────────────────────────


class CustomerLoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


# ─── Customer ──────────────────────────────────────────────────────────────────


class ProfileUpdate(_CamelModel):
    # Unknown fields are passed through so the backend decides what is editable.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    profile_photo_url: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {**super().to_payload(), **(self.model_extra or {})}


class TransactionCreate(_CamelModel):
    account_id: int
    transaction_type: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    description: str | None = None
    mode: str | None = None
    recipient_account_id: int | None = None
    transaction_fee: float | None = Field(None, ge=0, allow_inf_nan=False)
    bank_name: str | None = None
    ifsc_code: str | None = None
    initiated_by: str | None = None
    remarks: str | None = None


class SupportTicketCreate(_CamelModel):
    subject: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str | None = None
    priority: str | None = None


class TicketMessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


# ─── Admin ─────────────────────────────────────────────────────────────────────


class KycDecision(BaseModel):
    status: str = Field(..., min_length=1)
    notes: str | None = None

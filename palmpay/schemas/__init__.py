"""Pydantic schemas used across the HTTP and WebSocket surfaces."""
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    detail: str


class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str
    full_name: str = Field(..., max_length=100)
    father_name: str = Field(..., max_length=100)
    cnic: str = Field(..., max_length=32)


class LoginRequest(BaseModel):
    email: str
    password: str


class AccountResponse(BaseModel):
    id: str
    email: str
    full_name: str
    father_name: Optional[str] = None
    cnic: Optional[str] = None
    balance_cents: int
    currency: str
    email_verified: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    ws_url: str
    account: AccountResponse


class RegisterResponse(LoginResponse):
    password_strength: str
    # Handed back directly while there is no outbound mail integration.
    verification_token: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str


class PasswordForgotRequest(BaseModel):
    email: str


class PasswordForgotResponse(BaseModel):
    detail: str
    reset_token: Optional[str] = None


class PasswordResetRequest(BaseModel):
    token: str
    new_password: str


class EmailVerifyRequest(BaseModel):
    token: str


class TransactionResponse(BaseModel):
    id: str
    transfer_id: str
    type: Literal["send", "receive"]
    amount_cents: int
    signed_amount_cents: int
    currency: str
    counterparty_id: str
    counterparty_name: Optional[str] = None
    counterparty_email: Optional[str] = None
    counterparty_cnic: Optional[str] = None
    note: str = ""
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    account: AccountResponse
    recent_transactions: list[TransactionResponse] = Field(default_factory=list)


class TransferCreateRequest(BaseModel):
    recipient_id: str = Field(..., min_length=1)
    amount: Union[str, int, float]
    note: str = ""
    transfer_id: Optional[str] = None


class TransferResponse(BaseModel):
    transfer_id: str
    amount_cents: int
    currency: str
    balance_cents: int
    legs_recorded: int
    notifications_created: int


class RecentRecipientResponse(BaseModel):
    id: str
    name: str
    email: str
    cnic: str
    last_amount_cents: int

    model_config = ConfigDict(from_attributes=True)


class RecentRecipientListResponse(BaseModel):
    recipients: list[RecentRecipientResponse] = Field(default_factory=list)


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: str
    amount_cents: int
    transfer_id: str
    counterparty_name: Optional[str] = None
    counterparty_email: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse] = Field(default_factory=list)


class PayeeResponse(BaseModel):
    id: str
    name: str
    email: str
    cnic: str

    model_config = ConfigDict(from_attributes=True)


class PayeeListResponse(BaseModel):
    payees: list[PayeeResponse] = Field(default_factory=list)


class ScanRequest(BaseModel):
    data: str

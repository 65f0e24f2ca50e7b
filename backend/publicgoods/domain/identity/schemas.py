"""Pydantic schemas for identity endpoints."""

from __future__ import annotations

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
	email: EmailStr
	password: str = Field(..., min_length=1, max_length=256)
	wallet_address: Optional[str] = Field(default=None, max_length=128)


class LoginRequest(BaseModel):
	email: EmailStr
	password: str = Field(..., min_length=1, max_length=256)


class UserOut(BaseModel):
	id: UUID
	email: str
	wallet_address: Optional[str] = None


class SessionOut(BaseModel):
	access_token: str
	token_type: Literal["bearer"] = "bearer"
	session_id: UUID
	expires_in: int


class AuthResponse(BaseModel):
	user: UserOut
	session: SessionOut


class SessionStatus(BaseModel):
	status: Literal["anonymous", "authenticated"]
	user_id: Optional[str] = None


class MenuItemOut(BaseModel):
	label: str
	href: str
	action: Optional[str] = None


class LogoutResponse(BaseModel):
	ok: bool = True

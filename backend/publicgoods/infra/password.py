"""Password policy and Argon2id hashing for account credentials."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

from publicgoods.settings import settings

MIN_PASSWORD_LENGTH = 6

_hasher: Optional[PasswordHasher] = None


def _get_hasher() -> PasswordHasher:
	global _hasher
	if _hasher is None:
		_hasher = PasswordHasher(
			time_cost=settings.password_time_cost,
			memory_cost=settings.password_memory_kib,
			parallelism=settings.password_parallelism,
		)
	return _hasher


def password_problem(password: str) -> Optional[str]:
	"""Reason a new password is refused, or None when it is acceptable."""
	if len(password) < MIN_PASSWORD_LENGTH:
		return "password_too_short"
	return None


def hash_password(password: str) -> str:
	return _get_hasher().hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
	try:
		return _get_hasher().verify(stored_hash, password)
	except (argon_exc.VerificationError, argon_exc.InvalidHashError):
		return False

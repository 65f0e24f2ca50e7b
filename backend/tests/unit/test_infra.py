import time

import jwt
import pytest

from publicgoods.api.middleware_request_id import choose_request_id
from publicgoods.infra import jwt as jwt_helper
from publicgoods.infra import rate_limit
from publicgoods.infra.password import hash_password, password_problem, verify_password
from publicgoods.obs.logging import redact


@pytest.mark.asyncio
async def test_fixed_window_counts_per_actor():
	now = 1_000_000.0
	first = await rate_limit.hit("search", "1.2.3.4", limit=2, window_seconds=60, now=now)
	second = await rate_limit.hit("search", "1.2.3.4", limit=2, window_seconds=60, now=now + 1)
	third = await rate_limit.hit("search", "1.2.3.4", limit=2, window_seconds=60, now=now + 2)
	other = await rate_limit.hit("search", "5.6.7.8", limit=2, window_seconds=60, now=now + 2)
	assert [first.allowed, second.allowed, third.allowed, other.allowed] == [True, True, False, True]
	assert third.resets_in == 18

	next_window = await rate_limit.hit("search", "1.2.3.4", limit=2, window_seconds=60, now=now + 60)
	assert next_window.count == 1


@pytest.mark.asyncio
async def test_enforce_raises_with_retry_after():
	with pytest.raises(rate_limit.RateLimitExceeded) as excinfo:
		await rate_limit.enforce("login:id", "a@example.org", limit=0)
	assert excinfo.value.status_code == 429
	assert 1 <= excinfo.value.retry_after <= 60


def test_session_token_round_trip_and_expiry():
	token = jwt_helper.issue_session_token("u1", "s1", email="a@example.org", ttl_seconds=60)
	claims = jwt_helper.read_session_token(token)
	assert (claims.user_id, claims.session_id, claims.email) == ("u1", "s1", "a@example.org")

	expired = jwt_helper.issue_session_token("u1", "s1", ttl_seconds=10, now=int(time.time()) - 3600)
	with pytest.raises(jwt.InvalidTokenError):
		jwt_helper.read_session_token(expired)


def test_password_policy_and_hashing():
	assert password_problem("12345") == "password_too_short"
	assert password_problem("123456") is None
	stored = hash_password("secret1")
	assert verify_password(stored, "secret1")
	assert not verify_password(stored, "secret2")
	assert not verify_password("not-a-hash", "secret1")


def test_request_id_reuse_rules():
	assert choose_request_id("abc-123") == "abc-123"
	generated = choose_request_id("bad id\nwith newline")
	assert generated != "bad id\nwith newline"
	assert len(generated) == 36
	assert len(choose_request_id(None)) == 36


def test_log_redaction():
	assert redact("wallet_address", "0xabc") == "[redacted]"
	assert redact("payload", {"email": "a@example.org", "name": "x"}) == {"email": "[redacted]", "name": "x"}
	assert redact("note", "x" * 300).endswith("...")

import pytest

from publicgoods.domain.identity import schemas, service
from publicgoods.domain.identity.session_state import SIGNED_IN, SIGNED_OUT, auth_events
from publicgoods.infra import jwt as jwt_helper
from publicgoods.infra.auth import Authenticated
from publicgoods.infra.redis import session_owner


@pytest.fixture
def recorded_events():
	seen = []
	unsubscribe = auth_events.subscribe(lambda change: seen.append(change))
	try:
		yield seen
	finally:
		unsubscribe()


@pytest.mark.asyncio
async def test_signup_opens_a_live_session(recorded_events):
	result = await service.signup(
		schemas.SignupRequest(email="Ada@Example.org", password="secret1", wallet_address=" 0xabc ")
	)
	assert result.user.email == "ada@example.org"
	assert result.user.wallet_address == "0xabc"
	claims = jwt_helper.read_session_token(result.session.access_token)
	assert claims.user_id == str(result.user.id)
	assert claims.session_id == str(result.session.session_id)
	assert claims.email == "ada@example.org"
	assert await session_owner(str(result.session.session_id)) == str(result.user.id)
	assert [change.event for change in recorded_events] == [SIGNED_IN]


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected():
	await service.signup(schemas.SignupRequest(email="bob@example.org", password="secret1"))
	with pytest.raises(service.EmailTaken) as excinfo:
		await service.signup(schemas.SignupRequest(email="BOB@example.org", password="other12"))
	assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_short_password_is_rejected():
	with pytest.raises(service.PasswordTooWeak):
		await service.signup(schemas.SignupRequest(email="c@example.org", password="12345"))


@pytest.mark.asyncio
async def test_login_checks_password():
	await service.signup(schemas.SignupRequest(email="dan@example.org", password="correct-horse"))
	result = await service.login(schemas.LoginRequest(email="DAN@example.org", password="correct-horse"))
	assert result.user.email == "dan@example.org"

	with pytest.raises(service.LoginFailed) as excinfo:
		await service.login(schemas.LoginRequest(email="dan@example.org", password="wrong"))
	assert excinfo.value.status_code == 401
	with pytest.raises(service.LoginFailed):
		await service.login(schemas.LoginRequest(email="nobody@example.org", password="whatever"))


@pytest.mark.asyncio
async def test_logout_revokes_session(recorded_events):
	result = await service.signup(schemas.SignupRequest(email="eve@example.org", password="secret1"))
	sid = str(result.session.session_id)
	await service.logout(Authenticated(user_id=str(result.user.id), session_id=sid))
	assert await session_owner(sid) is None
	assert recorded_events[-1].event == SIGNED_OUT
	assert recorded_events[-1].session_id == sid

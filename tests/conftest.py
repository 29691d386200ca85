import itertools

import pytest
from httpx import ASGITransport, AsyncClient

from palmpay.core.config import DatabaseSettings, SecuritySettings, Settings
from palmpay.core.security import create_access_token
from palmpay.infrastructure.database.session import session_scope
from palmpay.main import create_app
from palmpay.modules.accounts import AccountCreateInput, AccountService

DEFAULT_PASSWORD = "Secret123"

_cnic_numbers = itertools.count(3520200000001)


def next_cnic() -> str:
    return str(next(_cnic_numbers))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'palmpay.db'}"),
        security=SecuritySettings(secret_key="test-secret-key"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def container(app):
    container = app.state.container
    await container.init_infrastructure()
    yield container
    await container.dispose()


@pytest.fixture
async def client(app, container):
    """HTTP client bound to the app; the schema is created by ``container``."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def make_account(container):
    async def _make(email, full_name="Test User", balance_cents=0, cnic=None, password=DEFAULT_PASSWORD):
        async with session_scope(container.session_factory) as session:
            service = AccountService.with_session(session, container.settings.security)
            registration = await service.register(
                AccountCreateInput(
                    email=email,
                    password=password,
                    full_name=full_name,
                    father_name="Father Name",
                    cnic=cnic or next_cnic(),
                    opening_balance_cents=balance_cents,
                )
            )
        return registration.account

    return _make


@pytest.fixture
def balance_of(container):
    async def _balance(account_id):
        async with session_scope(container.session_factory) as session:
            account = await AccountService.with_session(session, container.settings.security).get_by_id(account_id)
        return account.balance_cents

    return _balance


@pytest.fixture
def auth_headers(container):
    def _headers(account):
        token = create_access_token(container.settings.security, account.id, account.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers

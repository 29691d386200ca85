"""
Seed demo accounts with opening balances.

Usage: python scripts/init_accounts.py
"""
import asyncio

from palmpay.core.config import get_settings
from palmpay.core.container import build_container
from palmpay.infrastructure.database.session import session_scope
from palmpay.modules.accounts import AccountCreateInput, AccountService

DEMO_ACCOUNTS = [
    AccountCreateInput(
        email="ali@palmpay.test",
        password="Pass1234",
        full_name="Ali Raza",
        father_name="Raza Ahmed",
        cnic="35202-1234567-1",
        opening_balance_cents=1_000_000,
    ),
    AccountCreateInput(
        email="sara@palmpay.test",
        password="Pass1234",
        full_name="Sara Khan",
        father_name="Imran Khan",
        cnic="42101-7654321-2",
        opening_balance_cents=500_000,
    ),
]


async def create_demo_accounts() -> None:
    settings = get_settings()
    container = build_container(settings)
    await container.init_infrastructure()

    try:
        async with session_scope(container.session_factory) as session:
            service = AccountService.with_session(session, settings.security)
            for payload in DEMO_ACCOUNTS:
                if await service.get_by_email(payload.email):
                    print(f"Account already exists: {payload.email}")
                    continue
                registration = await service.register(payload)
                print(f"Created {payload.email} / {payload.password} (id {registration.account.id})")
    finally:
        await container.dispose()


if __name__ == "__main__":
    asyncio.run(create_demo_accounts())

"""User persistence, including the atomic create-or-update used by provisioning."""

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from fooder.models.base import utcnow
from fooder.models.user import User, UserRole

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# Columns refreshed when the user already exists
_MUTABLE_COLUMNS = ("email_hash", "encrypted_email", "encrypted_display_name", "role", "updated_at")


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tenant_id: str, user_id: str) -> User | None:
        stmt = select(User).where(
            User.tenant_id == tenant_id,
            User.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        tenant_id: str,
        user_id: str,
        email_hash: str,
        encrypted_email: str,
        encrypted_display_name: str,
        role: UserRole,
    ) -> User:
        """Insert the user, or update its mutable fields if it already exists.

        A single ``INSERT ... ON CONFLICT DO UPDATE`` so concurrent
        provisioning of the same subject resolves to exactly one row.
        """
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"User upsert is not supported on {dialect!r}")

        now = utcnow()
        stmt = insert(User.__table__).values(
            tenant_id=tenant_id,
            user_id=user_id,
            email_hash=email_hash,
            encrypted_email=encrypted_email,
            encrypted_display_name=encrypted_display_name,
            role=role,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["tenant_id", "user_id"],
            set_={col: stmt.excluded[col] for col in _MUTABLE_COLUMNS},
        )
        await self._session.execute(stmt)
        await self._session.commit()

        result = await self._session.execute(
            select(User)
            .where(User.tenant_id == tenant_id, User.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

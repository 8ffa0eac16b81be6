"""Row factories for service and route tests."""

from datetime import datetime, timezone
from itertools import count

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from groupdesk.config import get_settings
from groupdesk.infrastructure.passwords import hash_password
from groupdesk.infrastructure.session_cookie import SessionPayload, encode_session
from groupdesk.models import (
    Approval, ChatThread, FiscalYearClose, Group, InviteCode, Ledger, Member,
    TodoItem,
)

_seq = count(1)


class Seeder:
    """Inserts committed rows through short-lived sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._factory = session_factory

    async def _save(self, row):
        async with self._factory() as db:
            db.add(row)
            await db.commit()
            await db.refresh(row)
        return row

    async def group(self, name: str | None = None) -> Group:
        return await self._save(Group(name=name or f"Test Group {next(_seq)}"))

    async def member(
        self,
        group: Group,
        role: str = "member",
        email: str | None = None,
        password: str | None = None,
    ) -> Member:
        return await self._save(Member(
            group_id=group.id, display_name=f"Member {next(_seq)}", role=role,
            email=email,
            password_hash=hash_password(password) if password is not None else None,
        ))

    async def invite(
        self,
        group: Group,
        code: str = "ABCD1234",
        role: str | None = "member",
        expires_at: datetime | None = None,
        used_at: datetime | None = None,
    ) -> InviteCode:
        return await self._save(InviteCode(
            group_id=group.id, code=code, role=role,
            expires_at=expires_at, used_at=used_at,
        ))

    async def thread(self, group: Group, status: str = "OPEN") -> ChatThread:
        return await self._save(ChatThread(
            group_id=group.id, title=f"Thread {next(_seq)}", status=status,
        ))

    async def todo(self, group: Group, creator: Member, status: str = "TODO") -> TodoItem:
        return await self._save(TodoItem(
            group_id=group.id, created_by_member_id=creator.id,
            title=f"Todo {next(_seq)}", status=status,
        ))

    async def ledger(self, group: Group, creator: Member, amount: int = 1000) -> Ledger:
        return await self._save(Ledger(
            group_id=group.id, created_by_member_id=creator.id,
            title=f"Ledger {next(_seq)}", amount=amount,
        ))

    async def approval(self, ledger: Ledger, actor: Member, action: str = "APPROVED") -> Approval:
        return await self._save(Approval(
            ledger_id=ledger.id, acted_by_member_id=actor.id, action=action,
        ))

    async def fiscal_year_close(self, group: Group, fiscal_year: int = 2025) -> FiscalYearClose:
        return await self._save(FiscalYearClose(group_id=group.id, fiscal_year=fiscal_year))


def session_headers(member: Member) -> dict[str, str]:
    """Cookie header carrying a valid session for the member."""
    settings = get_settings()
    token = encode_session(
        SessionPayload(member_id=member.id, group_id=member.group_id),
        settings.session_secret,
        max_age_seconds=3600,
    )
    return {"Cookie": f"{settings.session_cookie_name}={token}"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

"""PostgreSQL user repository."""

from typing import Optional

from sqlalchemy import exists, func, literal, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import User
from pal.domain.repository import UserRepository
from pal.domain.value import CandidateFilter, UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import row_to_user, user_to_dict
from pal.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _fetch(self, stmt) -> list[User]:
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        users = await self._fetch(select(users_table).where(users_table.c.id == user_id))
        return users[0] if users else None

    @translate_upstream_errors
    async def find_many(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        return await self._fetch(
            select(users_table).where(users_table.c.id.in_(user_ids))
        )

    @translate_upstream_errors
    async def find_browsable(
        self,
        viewer_id: UserId,
        exclude: set[UserId],
        filters: Optional[CandidateFilter] = None,
    ) -> list[User]:
        stmt = select(users_table).where(users_table.c.id != viewer_id)
        if exclude:
            stmt = stmt.where(users_table.c.id.notin_(list(exclude)))

        if filters and filters.gender:
            stmt = stmt.where(users_table.c.gender.overlap(list(filters.gender)))
        if filters and filters.social_style:
            stmt = stmt.where(
                users_table.c.social_style.in_([s.value for s in filters.social_style])
            )
        if filters and filters.interests:
            names = [name.strip().lower() for name in filters.interests]
            interest = (
                func.jsonb_array_elements(users_table.c.interests)
                .table_valued("value")
                .alias("interest")
            )
            stmt = stmt.where(
                exists(
                    select(literal(1))
                    .select_from(interest)
                    .where(func.lower(interest.c.value.op("->>")("name")).in_(names))
                )
            )

        return await self._fetch(
            stmt.order_by(users_table.c.last_active.desc(), users_table.c.id)
        )

    @translate_upstream_errors
    async def find_by_email(self, email: str) -> Optional[User]:
        users = await self._fetch(
            select(users_table).where(
                func.lower(users_table.c.email) == email.strip().lower()
            )
        )
        return users[0] if users else None

    @translate_upstream_errors
    async def save(self, user: User) -> User:
        """Insert the user, or overwrite every column of an existing row."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user

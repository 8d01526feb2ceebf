from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Depends, Request
from fastapi_column_sortable import SortableQuery, sort_strategy
from fastapi_column_sortable.core import order_by_direction
from fastapi_pagination import Page, add_pagination
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy import String, ForeignKey, select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import Mapped, mapped_column, relationship, declarative_base
import uvicorn

from examples.schemas import StatusEnum, UserResponse

# ───── App & DB Setup ───────────────────────────

DATABASE_URL = "sqlite+aiosqlite:///./test.db"

engine = create_async_engine(DATABASE_URL, echo=True)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)
Base = declarative_base()


async def get_db():
    async with SessionLocal() as session:
        yield session


# ───── Models ────────────────────────────────────

class Role(Base):
    __tablename__ = "roles"

    sortable = ["name"]
    sortable_as = ["users_count"]

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)

    users: Mapped[list["User"]] = relationship("User", back_populates="role")


class User(Base):
    __tablename__ = "users"

    sortable = ["name", "email", "age", "created_at"]

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id"))
    age: Mapped[int] = mapped_column(nullable=True)
    status: Mapped[StatusEnum] = mapped_column(default=StatusEnum.ACTIVE, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(timezone.utc))

    role: Mapped["Role"] = relationship("Role", back_populates="users", lazy="selectin")
    profile: Mapped["Profile"] = relationship("Profile", back_populates="user", uselist=False)

    # ?sort=age sorts users without an age last in both directions
    @classmethod
    @sort_strategy("age")
    def sort_age(cls, stmt, direction):
        return stmt.order_by(cls.age.is_(None), order_by_direction(cls.age, direction))


class Profile(Base):
    __tablename__ = "profiles"

    sortable = ["city"]

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True)
    city: Mapped[str] = mapped_column(String)

    user: Mapped["User"] = relationship("User", back_populates="profile")


# ───── Lifespan / Seed Data ─────────────────────

@asynccontextmanager
async def lifespan(_: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        result = await session.execute(select(Role))
        if not result.scalars().first():
            admin = Role(name="admin")
            user = Role(name="user")
            manager = Role(name="manager")
            session.add_all([admin, user, manager])
            await session.commit()

            session.add_all([
                User(name="Alice", email="alice@example.com", role=admin, age=30,
                     status=StatusEnum.ACTIVE, profile=Profile(city="NYC")),
                User(name="Bob", email="bob@example.com", role=user, age=None,
                     status=StatusEnum.INACTIVE, profile=Profile(city="LA")),
                User(name="Carol", email="carol@example.com", role=manager, age=40,
                     status=StatusEnum.SUSPENDED, profile=Profile(city="Chicago")),
                User(name="Dave", email="dave@example.com", role=admin, age=35,
                     status=StatusEnum.ACTIVE, profile=Profile(city="Boston")),
                User(name="Eve", email="eve@example.com", role=user, age=28,
                     status=StatusEnum.ACTIVE, profile=Profile(city="Seattle")),
            ])
            await session.commit()

    yield

# ───── FastAPI App ───────────────────────────────

app = FastAPI(lifespan=lifespan)


@app.get("/users")
async def get_users(
    request: Request,
    query=SortableQuery(User, table_name="users", default={"sort": "name", "direction": "asc"}),
    session: AsyncSession = Depends(get_db),
):
    """
    Examples:

    1. GET /users?sort=email&direction=desc
    2. GET /users?sort=role|name&direction=asc     (belongs-to join)
    3. GET /users?sort=profile|city&direction=desc (has-one join)
    4. GET /users?sort=age&direction=asc           (custom sort strategy)
    5. GET /users?sort=password&direction=asc      (unknown column, left unsorted)
    6. GET /users?sort=name&direction=desc&table=roles (aimed at another listing, ignored)
    """
    result = await session.execute(query)
    return {"sort": request.state.sortable.params, "data": result.scalars().all()}


@app.get("/users/paginated", response_model=Page[UserResponse])
async def get_users_paginated(query=SortableQuery(User, table_name="users"), session: AsyncSession = Depends(get_db)):
    return await paginate(session, query)


@app.get("/roles")
async def get_roles(
    query=SortableQuery(Role, table_name="roles"),
    session: AsyncSession = Depends(get_db),
):
    users_count = func.count(User.id).label("users_count")
    stmt = query.add_columns(users_count).outerjoin(User, User.role_id == Role.id).group_by(Role.id)
    result = await session.execute(stmt)
    return [{"name": role.name, "users_count": count} for role, count in result.all()]


add_pagination(app)

# ───── Run Server ────────────────────────────────

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)

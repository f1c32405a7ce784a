"""Load a catalog snapshot from data/seed/*.json into the database.

Expected files (all optional, each a JSON list of objects whose keys match the
model columns): airlines.json, airports.json, routes.json, flight_legs.json.
"""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sky_atlas_db.models import Airline, Airport, Base, FlightLeg, Route

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SEED_DIR = Path(os.getenv("SEED_DIR", PROJECT_ROOT / "data" / "seed"))

# Load order; legs reference airline and airport codes by value only.
SEED_FILES: tuple[tuple[str, type[Base]], ...] = (
    ("airlines.json", Airline),
    ("airports.json", Airport),
    ("routes.json", Route),
    ("flight_legs.json", FlightLeg),
)


def _row(model: type[Base], item: dict[str, Any]) -> dict[str, Any]:
    columns = {c.key for c in model.__table__.columns}
    row = {k: v for k, v in item.items() if k in columns}
    if isinstance(row.get("departure_time"), str):
        row["departure_time"] = datetime.fromisoformat(row["departure_time"])
    return row


async def load_table(
    session: AsyncSession, filename: str, model: type[Base]
) -> int:
    """Insert every row of ``filename``; skip tables that already hold data."""
    table = model.__tablename__
    existing = (await session.execute(select(func.count()).select_from(model))).scalar()
    if existing:
        print(f"  {table} already loaded ({existing} rows), skipping.")
        return existing

    path = SEED_DIR / filename
    if not path.exists():
        print(f"  {path} not found, skipping.")
        return 0

    with open(path) as f:
        data = json.load(f)

    session.add_all(model(**_row(model, item)) for item in data)
    await session.flush()
    print(f"  Loaded {len(data)} {table}.")
    return len(data)


async def main() -> None:
    database_url = os.getenv(
        "DATABASE_URL",
        "postgresql+asyncpg://localhost:5432/sky_atlas",
    )
    engine = create_async_engine(database_url, echo=False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    print("Seeding database...")
    async with session_factory() as session, session.begin():
        for step, (filename, model) in enumerate(SEED_FILES, 1):
            print(f"[{step}/{len(SEED_FILES)}] {model.__tablename__}...")
            await load_table(session, filename, model)

    await engine.dispose()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())

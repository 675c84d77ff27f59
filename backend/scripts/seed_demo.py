"""Seed script: creates a demo tenant and fills it with synthetic data.

Reuses an existing demo tenant for the industry when one exists (its data is
reset instead of duplicated).
Run: docker exec auvora-backend-1 python scripts/seed_demo.py fitness "Iron Temple Demo"
"""
import argparse
import asyncio
import logging
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from auvora.api.v1.demos import demo_tenant_values
from auvora.db.session import AsyncSessionLocal, dispose_engine
from auvora.importer.store import SqlAlchemyRecordStore
from auvora.models.tenant import Tenant
from auvora.services.demo_seed import normalize_industry, reset_demo_data, seed_demo_data


async def seed(industry: str, name: str) -> None:
    async with AsyncSessionLocal() as db:
        store = SqlAlchemyRecordStore(db)
        result = await db.execute(
            select(Tenant).where(Tenant.is_demo.is_(True), Tenant.demo_industry == industry)
        )
        tenant = result.scalars().first()

        if tenant:
            print(f"  [skip] Demo tenant {tenant.subdomain} exists, resetting its data")
            report = await reset_demo_data(store, tenant.id, industry)
        else:
            row = await store.insert("tenants", demo_tenant_values(name, industry))
            print(f"  [new]  Demo tenant {row['subdomain']}")
            report = await seed_demo_data(store, row["id"], industry)

    for table, counts in report.summary().items():
        print(f"  {table:<8} imported={counts['imported']} failed={counts['failed']}")
    await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset a seeded demo tenant.")
    parser.add_argument("industry", help="fitness | wellness | education")
    parser.add_argument("name", nargs="?", help="Tenant display name")
    args = parser.parse_args()

    industry = normalize_industry(args.industry)
    name = args.name or f"{industry.title()} Demo"

    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed(industry, name))
    print("Seed complete.")


if __name__ == "__main__":
    main()

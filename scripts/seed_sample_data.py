"""Seed the demo kittens into the database, or wipe it.

Usage:
    python scripts/seed_sample_data.py create
    python scripts/seed_sample_data.py clear
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv
load_dotenv()

from app.services.database import DATABASE_URL, Database
from app.services import sample_data_service, summary_service


async def main(action: str) -> None:
    database = Database(DATABASE_URL)
    await database.open()
    try:
        await database.migrate()
        db = database.connection

        if action == "create":
            count = await sample_data_service.create_sample_data(db)
            print(f"✅ Created {count} kittens")
        else:
            count = await sample_data_service.clear_all_data(db)
            print(f"🧹 Removed {count} kittens and their measurements")

        print("\n📊 Kittens:")
        for k in await summary_service.list_kitten_summaries(db):
            latest = f"{k.latest_weight}g" if k.latest_weight is not None else "no weight yet"
            change = ""
            if k.weight_change is not None:
                change = f" ({k.weight_change:+d}g over {k.weight_change_days}d)"
            print(f"  {k.name:<10} {k.status:<12} {latest}{change}")
    finally:
        await database.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("action", choices=["create", "clear"])
    args = parser.parse_args()
    asyncio.run(main(args.action))

#!/usr/bin/env python3
"""
Recompute every route's taken-places counters from the registrations.
Individuals hold 1 place, group leaders hold the group's member_count, members hold none.

Run: python scripts/recount_spots.py [--dry-run]
"""

import argparse
import asyncio
import sys
import os

# Add parent dir to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env
from dotenv import load_dotenv
load_dotenv()

from core.domain.constants import MAX_EVENT_DAYS
from adapters.web.loader import services


async def recount(dry_run: bool) -> int:
    """Returns the number of routes whose counters changed"""
    expected = await services.registration.expected_route_counters()
    routes = await services.routes.list_routes()
    changed = 0

    print(f"🔍 Checking {len(routes)} routes...")
    for route in routes:
        target = expected.get(route.id, {})
        counts = {day: target.get(day, 0) for day in range(1, MAX_EVENT_DAYS + 1)}
        current = {day: route.registered_by_day.get(day, 0) for day in counts}
        if counts == current:
            continue

        changed += 1
        diff = ", ".join(
            f"day {day}: {current[day]} -> {counts[day]}" for day in counts if counts[day] != current[day]
        )
        print(f"  {route.name}: {diff}")
        if not dry_run:
            await services.routes.set_counters(route.id, counts)

    orphans = set(expected) - {r.id for r in routes}
    for route_id in sorted(orphans):
        print(f"⚠️  Registrations point to unknown route {route_id}")

    if not changed:
        print("✅ All counters match the registrations")
    elif dry_run:
        print(f"Dry run: {changed} routes would be updated")
    else:
        print(f"✅ Updated {changed} routes")
    return changed


def main():
    parser = argparse.ArgumentParser(description="Recompute route counters from registrations")
    parser.add_argument("--dry-run", action="store_true", help="Only print the differences")
    args = parser.parse_args()
    asyncio.run(recount(args.dry_run))


if __name__ == "__main__":
    main()

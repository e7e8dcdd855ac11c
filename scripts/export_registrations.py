#!/usr/bin/env python3
"""
Export all registrations to CSV (route names resolved).
Run: python scripts/export_registrations.py [output.csv]
"""

import asyncio
import csv
import sys
import os

# Add parent dir to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env
from dotenv import load_dotenv
load_dotenv()

from adapters.web.loader import services

COLUMNS = [
    "document_type", "document_id", "full_name", "phone", "rh",
    "route_day1", "route_day2", "registration_type", "group_name",
    "leader_full_name", "access_code", "payment_status", "souvenir_status", "created_at",
]


def registration_row(registration, route_names: dict) -> dict:
    row = registration.model_dump(mode="json")
    row["route_day1"] = route_names.get(registration.route_id_day1, "") if registration.route_id_day1 else ""
    row["route_day2"] = route_names.get(registration.route_id_day2, "") if registration.route_id_day2 else ""
    return {column: row.get(column) or "" for column in COLUMNS}


async def export(path: str):
    people = await services.people.search()
    route_names = await services.people.route_names()

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=COLUMNS)
        writer.writeheader()
        for person in people:
            writer.writerow(registration_row(person, route_names))

    print(f"✅ Exported {len(people)} registrations to {path}")


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else "registrations.csv"
    asyncio.run(export(output))

#!/usr/bin/env python3
"""
Local availability check against the dev data files (no HTTP).

Usage:
  python3 scripts/check_availability.py barber-1 emp-1 "Saç Kesimi" 2025-01-06
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from randevu.application.utils.working_hours import weekday_key
from randevu.wiring.dependencies import get_availability_use_case


def main() -> int:
    parser = argparse.ArgumentParser(description="List bookable slots for an employee")
    parser.add_argument("provider_id")
    parser.add_argument("employee_id")
    parser.add_argument("service")
    parser.add_argument("date", type=date.fromisoformat)
    args = parser.parse_args()

    use_case = get_availability_use_case()
    slots = asyncio.run(
        use_case.list_available_slots(args.provider_id, args.employee_id, args.service, args.date)
    )

    print(f"{args.date.isoformat()} ({weekday_key(args.date)}) - {args.employee_id} - {args.service}")
    print("-" * 60)
    if not slots:
        print("No bookable slots.")
        return 1
    for slot in slots:
        print(f"  {slot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

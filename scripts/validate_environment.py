#!/usr/bin/env python3
"""Validate local room booking environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.constraints import validate_booking_rules
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import build_room_catalog
from backend.services.engine import RoomBookingEngine
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_specs:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = get_settings()

    # CHECK 3: Booking rules
    rules = settings.booking_rules()
    try:
        validate_booking_rules(rules)
        ok, line = _print_result(
            "Booking rules",
            True,
            (
                f": {rules.slot_granularity_minutes}-minute grid, "
                f"{rules.min_duration_minutes}-{rules.max_duration_minutes} minutes"
            ),
        )
    except ValueError as exc:
        ok, line = _print_result("Booking rules", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Room catalog
    catalog = None
    try:
        catalog = build_room_catalog(settings)
        if len(catalog) == 0:
            raise RuntimeError("catalog contains no rooms")
        ok, line = _print_result("Room catalog", True, f": {len(catalog)} rooms")
    except Exception as exc:
        ok, line = _print_result("Room catalog", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5: Smoke allocation against a throwaway ledger
    if catalog is not None and ok:
        engine = RoomBookingEngine(catalog=catalog, ledger=BookingLedger(), rules=rules)
        smallest = min(room.capacity for room in catalog.list_all())
        result = engine.allocate("10:00", "10:30", max(smallest, rules.min_people))
        if result.ok:
            ok, line = _print_result("Smoke allocation", True, f": {result.value.message}")
        else:
            ok, line = _print_result("Smoke allocation", False, result.message)
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Room Booking Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

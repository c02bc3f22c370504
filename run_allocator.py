#!/usr/bin/env python3
"""
ORAllocator CLI. Runs requests against a fresh in-memory engine
with the default five operating rooms.

Usage:
  # List rooms and their equipment
  python run_allocator.py rooms

  # Book surgeries (the queue is drained before each request)
  python run_allocator.py request --doctor 2 --surgery BRAIN_SURGERY --count 4

  # Book a batch and write the result to Excel
  python run_allocator.py export --out "OR Bookings.xlsx" \
      --requests HEART_SURGERY BRAIN_SURGERY BRAIN_SURGERY
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from allocator.engine import AllocationEngine
from allocator.models import Queued, Scheduled, SurgeryType
from allocator.validate import validate_rooms
from allocator.write_schedule import write_bookings


def _resolve(p: str) -> Path:
    pp = Path(p)
    if pp.is_absolute():
        return pp
    return Path(__file__).resolve().parent / pp


def _describe(outcome) -> str:
    if isinstance(outcome, Scheduled):
        b = outcome.booking
        return (f"SCHEDULED  room {b.room_id}  {b.start_time:%a %Y-%m-%d %H:%M}-{b.end_time:%H:%M}"
                f"  ({b.surgery_type.value}, id {b.id[:8]})")
    if isinstance(outcome, Queued):
        return f"QUEUED     position {outcome.position}"
    return f"REJECTED   {outcome.reason.value}"


def _run_requests(alloc, requests, doctor):
    for kind in requests:
        drained = alloc.drain_queue()
        for b in drained.scheduled:
            print(f"  queue -> room {b.room_id} {b.start_time:%a %H:%M} for {b.requester_id}")
        outcome = alloc.request_booking(doctor, SurgeryType(kind))
        print(f"  {kind:<14} {_describe(outcome)}")


def cmd_rooms(args):
    """Print the default rooms."""
    alloc = AllocationEngine()
    for room in alloc.list_rooms():
        eq = ", ".join(sorted(e.value for e in room.equipment))
        state = "active" if room.is_active else "inactive"
        print(f"  OR-{room.id}: {eq} ({state})")


def cmd_request(args):
    """Book N surgeries of one type."""
    alloc = AllocationEngine()
    print(f"Requesting {args.count} x {args.surgery} for doctor {args.doctor}")
    _run_requests(alloc, [args.surgery] * args.count, args.doctor)
    print(f"  Waiting queue: {len(alloc.queue_status())}")


def cmd_export(args):
    """Book a batch of surgeries and write the bookings workbook."""
    alloc = AllocationEngine()
    out_path = str(_resolve(args.out))
    _run_requests(alloc, args.requests, args.doctor)

    rooms = alloc.list_rooms()
    ok, violations = validate_rooms(rooms)
    if not ok:
        print(f"  Validation: {len(violations)} issue(s)")
        for v in violations:
            print(f"    {v}")
        sys.exit(1)
    print("  Validation: OK")

    print(f"\nWriting bookings to: {out_path}")
    write_bookings(rooms, out_path)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(
        description="ORAllocator: operating room booking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine decisions")
    sub = parser.add_subparsers(dest="command", help="Command")
    kinds = [k.value for k in SurgeryType]

    sub.add_parser("rooms", help="List operating rooms")

    p_req = sub.add_parser("request", help="Book surgeries of one type")
    p_req.add_argument("--doctor", required=True, help="Requester id")
    p_req.add_argument("--surgery", required=True, choices=kinds)
    p_req.add_argument("--count", type=int, default=1)

    p_exp = sub.add_parser("export", help="Book a batch and export to Excel")
    p_exp.add_argument("--out", default="OR Bookings.xlsx")
    p_exp.add_argument("--doctor", default="cli")
    p_exp.add_argument("--requests", nargs="+", choices=kinds, required=True)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    dispatch = {
        "rooms": cmd_rooms,
        "request": cmd_request,
        "export": cmd_export,
    }
    dispatch[args.command](args)


if __name__ == "__main__":
    main()

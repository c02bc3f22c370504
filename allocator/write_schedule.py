"""
Write room bookings to an Excel workbook.
BOOKINGS sheet: one row per booking, ordered by room then start time.
ROOMS sheet: equipment profile and active flag per room.
"""

from typing import BinaryIO, Iterable, Union

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .models import BookingStatus, OperatingRoom

BOOKING_HEADERS = ["Room", "Booking ID", "Requester", "Surgery", "Start", "End", "Hours", "Status"]
ROOM_HEADERS = ["Room", "Equipment", "Active", "Active bookings"]

# Fill per status (ARGB)
STATUS_COLORS = {
    BookingStatus.SCHEDULED: "FF93C5FD",
    BookingStatus.IN_PROGRESS: "FFFDBA74",
    BookingStatus.COMPLETED: "FF86EFAC",
    BookingStatus.CANCELLED: "FFE2E8F0",
}


def _header_row(ws, headers):
    thin = Side(border_style="thin", color="cbd5e1")
    fill = PatternFill(start_color="F8FAFC", end_color="F8FAFC", fill_type="solid")
    for col, h in enumerate(headers, 1):
        c = ws.cell(1, col, h)
        c.font = Font(bold=True, size=11, name="Arial")
        c.alignment = Alignment(horizontal="center", vertical="center")
        c.fill = fill
        c.border = Border(bottom=thin, right=thin)
    ws.freeze_panes = "A2"


def write_bookings(
    rooms: Iterable[OperatingRoom],
    output: Union[str, BinaryIO],
    include_cancelled: bool = True,
) -> None:
    """Save a BOOKINGS + ROOMS workbook to a path or a binary buffer."""
    rooms = sorted(rooms, key=lambda r: r.id)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "BOOKINGS"
    _header_row(ws, BOOKING_HEADERS)

    row = 2
    for room in rooms:
        for b in sorted(room.bookings, key=lambda b: b.start_time):
            if not include_cancelled and not b.is_active:
                continue
            hours = (b.end_time - b.start_time).total_seconds() / 3600
            values = [room.id, b.id, b.requester_id, b.surgery_type.value,
                      b.start_time.strftime("%Y-%m-%d %H:%M"), b.end_time.strftime("%Y-%m-%d %H:%M"),
                      hours, b.status.value]
            for col, v in enumerate(values, 1):
                ws.cell(row, col, v)
            color = STATUS_COLORS.get(b.status)
            if color:
                ws.cell(row, 8).fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
            row += 1

    widths = [8, 38, 14, 18, 18, 18, 8, 14]
    for i, w in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(i)].width = w

    ws_rooms = wb.create_sheet("ROOMS")
    _header_row(ws_rooms, ROOM_HEADERS)
    for i, room in enumerate(rooms, 2):
        ws_rooms.cell(i, 1, room.id)
        ws_rooms.cell(i, 2, ", ".join(sorted(e.value for e in room.equipment)))
        ws_rooms.cell(i, 3, "Y" if room.is_active else "N")
        ws_rooms.cell(i, 4, len(room.active_bookings()))
    ws_rooms.column_dimensions["B"].width = 20

    wb.save(output)

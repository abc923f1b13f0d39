"""문의 목록 엑셀 내보내기"""
from datetime import datetime
from io import BytesIO

import openpyxl
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

EXCEL_COLUMNS = [
    ("firstName", "First Name", 15),
    ("lastName", "Last Name", 15),
    ("email", "Email", 28),
    ("phone", "Phone", 16),
    ("advertisingState", "State", 16),
    ("city", "City", 16),
    ("topic", "Topic", 18),
    ("media", "Media Type", 18),
    ("advertisingMarket", "Market", 18),
    ("message", "Message", 50),
    ("status", "Status", 10),
    ("isForwarded", "Forwarded", 10),
    ("createdAt", "Received Date", 20),
    ("notes", "Notes", 50),
]

EXCEL_HEADER_FONT = Font(bold=True, size=12, color="FFFFFF")
EXCEL_HEADER_FILL = openpyxl.styles.PatternFill(start_color="1D4ED8", end_color="1D4ED8", fill_type="solid")
EXCEL_CENTER_ALIGN = Alignment(horizontal='center', vertical='center', wrap_text=True)
EXCEL_WRAP_ALIGN = Alignment(wrap_text=True, vertical='top')
EXCEL_BORDER = Border(
    left=Side(style='thin'), right=Side(style='thin'),
    top=Side(style='thin'), bottom=Side(style='thin')
)


def _to_date_text(value):
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _notes_text(notes):
    if not notes:
        return "No notes"
    return "\n".join(f"{n['content']} (on {_to_date_text(n.get('createdAt'))})" for n in notes)


def _cell_value(row, key):
    if key == "isForwarded":
        return "Yes" if row.get(key) else "No"
    if key == "createdAt":
        return _to_date_text(row.get(key))
    if key == "notes":
        return _notes_text(row.get(key))
    return row.get(key) or ""


def build_inquiries_workbook(rows):
    """문의 dict 목록 → xlsx 바이트 스트림"""
    wb = Workbook()
    ws = wb.active
    ws.title = "Contact Inquiries"

    for col_idx, (_, label, width) in enumerate(EXCEL_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=label)
        cell.font = EXCEL_HEADER_FONT
        cell.fill = EXCEL_HEADER_FILL
        cell.alignment = EXCEL_CENTER_ALIGN
        cell.border = EXCEL_BORDER
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    for row_idx, row in enumerate(rows, start=2):
        for col_idx, (key, _, _) in enumerate(EXCEL_COLUMNS, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=_cell_value(row, key))
            cell.alignment = EXCEL_WRAP_ALIGN
            cell.border = EXCEL_BORDER

    ws.freeze_panes = "A2"

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output

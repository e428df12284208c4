"""Spreadsheet export of a depot report."""

from __future__ import annotations

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ...errors import PreconditionError
from ..reporting import display_round
from ..sales import DepotReportView

PRODUCT_SUBHEADERS = ("Cases", "Rate", "Amount")
TOTAL_SUBHEADERS = ("Cases", "Per Case", "Amount")

_thin = Side(style="thin", color="9E9E9E")
_border = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
_center = Alignment(horizontal="center", vertical="center", wrap_text=True)


def workbook_file_name(depot: str) -> str:
    return f"{depot}_data.xlsx"


def build_depot_workbook(view: DepotReportView) -> Workbook:
    """Lay out the report table: two title rows, two header rows, data, depot total."""
    report = view.report
    if not report.rows:
        raise PreconditionError("No data found in the table for this depot.")

    product_count = len(view.product_names)
    total_columns = 2 + product_count * 3 + 3
    last_letter = get_column_letter(total_columns)

    wb = Workbook()
    ws = wb.active
    ws.title = view.depot[:31]

    ws.cell(row=1, column=1, value=view.company_name)
    ws.merge_cells(f"A1:{last_letter}1")
    ws["A1"].font = Font(bold=True, size=20)
    ws["A1"].alignment = _center
    ws["A1"].fill = PatternFill("solid", fgColor="E0E0E0")

    ws.cell(row=2, column=1, value=view.title)
    ws.merge_cells(f"A2:{last_letter}2")
    ws["A2"].font = Font(size=16)
    ws["A2"].alignment = _center
    ws["A2"].fill = PatternFill("solid", fgColor="F0F0F0")

    ws.cell(row=3, column=1, value="Syndicate")
    ws.cell(row=3, column=2, value="Shop IDs")
    column = 3
    for name in list(view.product_names) + ["Row Totals"]:
        ws.cell(row=3, column=column, value=name)
        ws.merge_cells(start_row=3, start_column=column, end_row=3, end_column=column + 2)
        column += 3

    subheaders = ["", ""] + list(PRODUCT_SUBHEADERS) * product_count + list(TOTAL_SUBHEADERS)
    for index, label in enumerate(subheaders, start=1):
        ws.cell(row=4, column=index, value=label or None)

    for header_row in (3, 4):
        for index in range(1, total_columns + 1):
            cell = ws.cell(row=header_row, column=index)
            cell.font = Font(bold=True)
            cell.alignment = _center
            cell.border = _border

    row_index = 5
    for row in report.rows:
        values: list = [row.record.syndicate, ", ".join(row.record.shop_ids)]
        for product in row.record.products[:product_count]:
            values.extend(display_round(v) for v in (product.cases, product.rate, product.amount))
        values.extend(display_round(v) for v in (row.cases, row.per_case, row.amount))
        for index, value in enumerate(values, start=1):
            cell = ws.cell(row=row_index, column=index, value=value)
            cell.border = _border
            if index > total_columns - 3:
                cell.font = Font(bold=True)
        row_index += 1

    footer: list = ["Depot Total", None]
    for product in report.products:
        footer.extend(display_round(v) for v in (product.cases, product.effective_rate, product.amount))
    footer.extend(display_round(v) for v in (report.cases, report.per_case, report.amount))
    for index, value in enumerate(footer, start=1):
        cell = ws.cell(row=row_index, column=index, value=value)
        cell.font = Font(bold=True)
        cell.border = _border

    ws.column_dimensions["A"].width = 24
    ws.column_dimensions["B"].width = 30
    return wb


def workbook_to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()

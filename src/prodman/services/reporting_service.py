from __future__ import annotations

from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from prodman.domain.models import Product

HEADERS = ["ID", "Name", "Type ID", "Type", "Cost", "Price", "Min stock", "Stock", "Created", "Updated"]


def _number(value):
    # Rows edited in the form may still hold the typed text.
    if isinstance(value, str):
        try:
            return float(value) if value.strip() else None
        except ValueError:
            return value
    return value


class ReportingService:
    def export_products_excel(self, path: str, products: Iterable[Product]) -> int:
        wb = Workbook()
        ws = wb.active
        ws.title = "Products"

        ws.append(HEADERS)
        for c in ws[1]:
            c.font = Font(bold=True)

        count = 0
        for p in products:
            ws.append([
                p.id, p.name, _number(p.id_type), p.type.name if p.type else "",
                _number(p.cost_price), _number(p.price),
                _number(p.min_stock), _number(p.stock),
                p.created_at, p.updated_at,
            ])
            count += 1
            r = ws.max_row
            ws[f"E{r}"].number_format = "#,##0.00"
            ws[f"F{r}"].number_format = "#,##0.00"

        ws.freeze_panes = "A2"
        widths = {"A": 16, "B": 34, "C": 9, "D": 18, "E": 12, "F": 12, "G": 11, "H": 9, "I": 26, "J": 26}
        for col, w in widths.items():
            ws.column_dimensions[col].width = w

        if count:
            ref = f"A1:{get_column_letter(len(HEADERS))}{ws.max_row}"
            tab = Table(displayName="Products", ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        wb.save(path)
        return count

"""Excel exports of pavilions and tenants for the superadmin."""
import io

from flask import request, Response
from flask_login import login_required
from openpyxl import Workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from models.category import get_category_map
from models.pavilion import get_all_pavilions, filter_pavilions, is_premium_pavilion
from models.tenant import get_all_tenants
from utils.audit import log_audit
from utils.datetime_helpers import get_today
from utils.decorators import owner_required

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
HEADER_FILL = PatternFill(start_color="1A3A5C", end_color="1A3A5C", fill_type="solid")
ALT_FILL = PatternFill(start_color="F5F5F5", end_color="F5F5F5", fill_type="solid")
THIN_SIDE = Side(style='thin', color="D4D4D4")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)
HEADER_ROW = 4


def register_routes(bp):
    """Register export routes on the superadmin blueprint."""

    @bp.route('/export/pavilions')
    @login_required
    @owner_required
    def export_pavilions():
        """Export pavilions (same filters as the pavilions tab)."""
        pavilions = filter_pavilions(
            get_all_pavilions(public_only=False),
            floor=request.args.get('floor', '').strip(),
            category=request.args.get('category', '').strip(),
            premium=request.args.get('premium', '').strip(),
            search=request.args.get('search', '').strip(),
        )
        log_audit('EXPORT', 'pavilion', after={'count': len(pavilions)})
        return _xlsx_response(build_pavilions_workbook(pavilions), 'pavilions')

    @bp.route('/export/tenants')
    @login_required
    @owner_required
    def export_tenants():
        tenants = get_all_tenants(
            status=request.args.get('status', '').strip() or None,
            search=request.args.get('search', '').strip() or None
        )
        log_audit('EXPORT', 'tenant', after={'count': len(tenants)})
        return _xlsx_response(build_tenants_workbook(tenants), 'tenants')


def build_pavilions_workbook(pavilions: list) -> Workbook:
    """
    Build the pavilions workbook.

    Args:
        pavilions: Pavilion dicts (with tenant_name/tenant_phone)

    Returns:
        Workbook: one sheet, title row, header row and one row per pavilion
    """
    categories = get_category_map()
    headers = [
        "Корпус", "Этаж", "Павильон", "Название", "Категория",
        "Арендатор", "Телефон", "Премиум", "Скидок", "Поделились"
    ]
    rows = []
    for p in pavilions:
        category = categories.get(p.get('category'))
        rows.append([
            p.get('building') or '-',
            p.get('floor') if p.get('floor') is not None else '-',
            p.get('pavilion_number') or '-',
            p.get('shop_name', ''),
            category['name'] if category else (p.get('category') or '-'),
            p.get('tenant_name') or '-',
            p.get('tenant_phone') or '-',
            'Да' if is_premium_pavilion(p) else 'Нет',
            len(p.get('discounts') or []),
            p.get('share_count', 0) or 0,
        ])

    return _build_workbook(
        sheet_title="Павильоны",
        title=f"Павильоны Апраксиного двора (всего: {len(rows)})",
        headers=headers,
        rows=rows,
        centered=[1, 2, 3, 8, 9, 10]
    )


def build_tenants_workbook(tenants: list) -> Workbook:
    """Build the tenants workbook."""
    headers = ["Имя", "Телефон", "Email", "Статус", "Премиум", "Владелец", "Павильонов", "Создан"]
    rows = [
        [
            t.get('name', ''),
            t.get('phone', ''),
            t.get('email') or '-',
            'Одобрен' if t.get('approved') else 'Ожидает',
            'Да' if t.get('is_premium') else 'Нет',
            'Да' if t.get('is_owner') else 'Нет',
            t.get('pavilion_count', 0) or 0,
            t.get('created_at') or '-',
        ]
        for t in tenants
    ]

    return _build_workbook(
        sheet_title="Арендаторы",
        title=f"Арендаторы (всего: {len(rows)})",
        headers=headers,
        rows=rows,
        centered=[4, 5, 6, 7]
    )


def _build_workbook(sheet_title, title, headers, rows, centered=()) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    last_col = ws.cell(row=1, column=len(headers)).column_letter
    ws.merge_cells(f'A1:{last_col}1')
    title_cell = ws.cell(row=1, column=1, value=title)
    title_cell.font = Font(bold=True, size=14, color="1A3A5C")
    title_cell.alignment = Alignment(horizontal="center", vertical="center")

    ws.merge_cells(f'A2:{last_col}2')
    subtitle_cell = ws.cell(row=2, column=1, value=f"Дата выгрузки: {get_today().strftime('%d.%m.%Y')}")
    subtitle_cell.font = Font(size=10, color="666666")
    subtitle_cell.alignment = Alignment(horizontal="center", vertical="center")

    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = THIN_BORDER

    ws.freeze_panes = f'A{HEADER_ROW + 1}'

    data_alignment = Alignment(vertical="center")
    center_alignment = Alignment(horizontal="center", vertical="center")
    for row_idx, values in enumerate(rows, HEADER_ROW + 1):
        is_alt = (row_idx - HEADER_ROW) % 2 == 0
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = THIN_BORDER
            cell.alignment = center_alignment if col in centered else data_alignment
            if is_alt:
                cell.fill = ALT_FILL

    _fit_columns(ws)
    return wb


def _fit_columns(ws, min_width=10, max_width=50):
    for col_cells in ws.columns:
        anchor_cell = next((c for c in col_cells if not isinstance(c, MergedCell)), None)
        if anchor_cell is None:
            continue

        width = min_width
        for cell in col_cells:
            # Title and subtitle span all columns
            if isinstance(cell, MergedCell) or cell.row < HEADER_ROW:
                continue
            width = max(width, len(str(cell.value if cell.value is not None else '')))
        ws.column_dimensions[anchor_cell.column_letter].width = min(width + 3, max_width)


def _xlsx_response(wb: Workbook, name: str) -> Response:
    output = io.BytesIO()
    wb.save(output)
    output.seek(0)

    filename = f"{name}_{get_today().strftime('%Y-%m-%d')}.xlsx"
    return Response(
        output.getvalue(),
        mimetype=XLSX_MIMETYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

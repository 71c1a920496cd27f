from decimal import Decimal

import openpyxl
from django.http import HttpResponse
from django.utils import timezone
from openpyxl.styles import Font

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

HEADERS = [
    'Date', 'Customer', 'Phone', 'Neighborhood', 'Items',
    'Subtotal', 'Delivery Fee', 'Total', 'Payment Method'
]


def build_orders_workbook(business, orders, start_date=None, end_date=None):
    """Order history sheet with a totals row"""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Orders"

    header_font = Font(bold=True, size=12)

    ws['A1'] = f"{business.name} - Orders Report"
    ws['A1'].font = Font(bold=True, size=16)
    if start_date or end_date:
        ws['A2'] = f"Period: {start_date or '...'} to {end_date or '...'}"
    ws.merge_cells('A1:I1')
    ws.merge_cells('A2:I2')

    for col, header in enumerate(HEADERS, 1):
        ws.cell(row=4, column=col, value=header).font = header_font

    row = 5
    total_sales = Decimal('0.00')
    for order in orders:
        items = ", ".join(f"{item['quantity']}x {item['name']}" for item in order.items)
        ws.cell(row=row, column=1, value=timezone.localtime(order.order_date).strftime('%Y-%m-%d %H:%M'))
        ws.cell(row=row, column=2, value=order.customer_name)
        ws.cell(row=row, column=3, value=order.customer_phone)
        ws.cell(row=row, column=4, value=order.customer_neighborhood)
        ws.cell(row=row, column=5, value=items)
        ws.cell(row=row, column=6, value=float(order.subtotal))
        ws.cell(row=row, column=7, value=float(order.delivery_fee))
        ws.cell(row=row, column=8, value=float(order.total))
        ws.cell(row=row, column=9, value=order.payment_method)
        total_sales += order.total
        row += 1

    row += 1
    ws.cell(row=row, column=7, value="TOTAL:").font = header_font
    ws.cell(row=row, column=8, value=float(total_sales)).font = header_font

    for column in ws.iter_cols(min_row=4):
        lengths = [len(str(cell.value)) for cell in column if cell.value is not None]
        ws.column_dimensions[column[0].column_letter].width = min(max(lengths, default=8) + 2, 50)

    return wb


def orders_excel_response(business, orders, start_date=None, end_date=None):
    wb = build_orders_workbook(business, orders, start_date, end_date)
    response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
    stamp = timezone.localdate().isoformat()
    response['Content-Disposition'] = f'attachment; filename="orders_{business.slug}_{stamp}.xlsx"'
    wb.save(response)
    return response

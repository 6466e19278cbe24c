import csv
import io
from typing import Iterable

from app.domain.models import Order

CSV_HEADER = ["ID", "Customer Name", "Phone", "Medicine", "Status", "Created At"]


def orders_to_csv(orders: Iterable[Order]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for order in orders:
        writer.writerow([
            order.id,
            order.customer_name,
            order.phone,
            order.medicine,
            order.status.value,
            order.created_at.isoformat(),
        ])
    return buffer.getvalue()


def export_filename(today) -> str:
    return f"orders-{today.isoformat()}.csv"

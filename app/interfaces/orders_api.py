import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from app.application.export import export_filename, orders_to_csv
from app.application.pagination import parse_positive_int
from app.domain.models import Order
from app.domain.schemas import OrderCreate, OrderPage, OrderUpdate
from app.interfaces.IOrderRepository import IOrderRepository

router = APIRouter(prefix="/api/orders", tags=["orders"])
logger = logging.getLogger(__name__)


def get_order_repo(request: Request) -> IOrderRepository:
    """Repository built once by the composition root and kept on app.state."""
    return request.app.state.order_repo


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _not_found() -> JSONResponse:
    return _message(status.HTTP_404_NOT_FOUND, "Order not found")


@router.get("", response_model=OrderPage)
def list_orders(
    request: Request,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    repo: IOrderRepository = Depends(get_order_repo),
):
    # page/limit arrive as raw strings so that garbage falls back to defaults instead of a 400
    page_number = parse_positive_int(page, 1)
    page_size = parse_positive_int(limit, request.app.state.settings.DEFAULT_PAGE_LIMIT)
    try:
        return repo.list_orders(search=search, page=page_number, limit=page_size)
    except Exception as e:
        logger.error(f"❌ Error fetching orders: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch orders")


@router.get("/export")
def export_orders(search: Optional[str] = None, repo: IOrderRepository = Depends(get_order_repo)):
    try:
        orders = repo.search_orders(search=search)
    except Exception as e:
        logger.error(f"❌ Error exporting orders: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to export orders")

    return Response(
        content=orders_to_csv(orders),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(date.today())}"'},
    )


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, repo: IOrderRepository = Depends(get_order_repo)):
    try:
        order = repo.get_order(order_id)
    except Exception as e:
        logger.error(f"❌ Error fetching order {order_id}: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch order")

    if order is None:
        return _not_found()
    return order


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, repo: IOrderRepository = Depends(get_order_repo)):
    try:
        return repo.create_order(payload)
    except Exception as e:
        logger.error(f"❌ Error creating order: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create order")


@router.patch("/{order_id}", response_model=Order)
def update_order(order_id: str, payload: OrderUpdate, repo: IOrderRepository = Depends(get_order_repo)):
    try:
        order = repo.update_order(order_id, payload)
    except Exception as e:
        logger.error(f"❌ Error updating order {order_id}: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update order")

    if order is None:
        return _not_found()
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, repo: IOrderRepository = Depends(get_order_repo)):
    try:
        deleted = repo.delete_order(order_id)
    except Exception as e:
        logger.error(f"❌ Error deleting order {order_id}: {e}", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete order")

    if not deleted:
        return _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

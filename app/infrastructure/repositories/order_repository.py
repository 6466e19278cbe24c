import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import String, asc, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

from app.application.pagination import normalize_search, page_bounds
from app.core.errors import StorageError
from app.domain.models import Order, OrderStatus, utcnow
from app.domain.schemas import OrderCreate, OrderPage, OrderUpdate
from app.infrastructure.orm_models import OrderRecord
from app.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


def to_domain(record: OrderRecord) -> Order:
    created_at = record.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; everything is stored in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Order(
        id=record.id,
        customer_name=record.customer_name,
        phone=record.phone,
        medicine=record.medicine,
        status=OrderStatus(record.status),
        created_at=created_at,
    )


class SqlOrderRepository(IOrderRepository):
    """
    Relational order store. One session per call; SQLAlchemy errors are rolled back
    and re-raised as StorageError.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._id_factory = id_factory

    def _filtered(self, session: Session, search: Optional[str]) -> Query:
        query = session.query(OrderRecord)
        term = normalize_search(search)
        if term is not None:
            needle = term.lower()
            query = query.filter(
                or_(
                    func.lower(OrderRecord.customer_name, type_=String).contains(needle, autoescape=True),
                    func.lower(OrderRecord.medicine, type_=String).contains(needle, autoescape=True),
                    OrderRecord.phone.contains(needle, autoescape=True),
                )
            )
        return query

    @staticmethod
    def _newest_first(query: Query) -> Query:
        return query.order_by(desc(OrderRecord.created_at), asc(OrderRecord.pk))

    def _find(self, session: Session, order_id: str) -> Optional[OrderRecord]:
        return session.query(OrderRecord).filter(OrderRecord.id == order_id).first()

    def list_orders(self, search: Optional[str] = None, page: int = 1, limit: int = 10) -> OrderPage:
        offset, _ = page_bounds(page, limit)
        session = self._session_factory()
        try:
            query = self._filtered(session, search)
            total = query.count()
            # Page numbers are unbounded; keep OFFSET/LIMIT within what the database can bind
            if offset >= total:
                return OrderPage(orders=[], total=total)
            records = self._newest_first(query).offset(offset).limit(min(limit, total)).all()
            return OrderPage(orders=[to_domain(r) for r in records], total=total)
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error: {e}")
            raise StorageError("Failed to list orders") from e
        finally:
            session.close()

    def search_orders(self, search: Optional[str] = None) -> List[Order]:
        session = self._session_factory()
        try:
            records = self._newest_first(self._filtered(session, search)).all()
            return [to_domain(r) for r in records]
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error: {e}")
            raise StorageError("Failed to search orders") from e
        finally:
            session.close()

    def get_order(self, order_id: str) -> Optional[Order]:
        session = self._session_factory()
        try:
            record = self._find(session, order_id)
            return to_domain(record) if record else None
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error: {e}")
            raise StorageError("Failed to read order") from e
        finally:
            session.close()

    def create_order(self, data: OrderCreate) -> Order:
        session = self._session_factory()
        try:
            record = OrderRecord(
                id=self._id_factory(),
                customer_name=data.customer_name,
                phone=data.phone,
                medicine=data.medicine,
                status=OrderStatus.PENDING.value,
                created_at=self._clock(),
            )
            session.add(record)
            session.commit()
            logger.info(f"🆕 Order {record.id} created")
            return to_domain(record)
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error: {e}")
            session.rollback()
            raise StorageError("Failed to create order") from e
        finally:
            session.close()

    def update_order(self, order_id: str, data: OrderUpdate) -> Optional[Order]:
        session = self._session_factory()
        try:
            record = self._find(session, order_id)
            if record is None:
                return None
            for field, value in data.changes().items():
                if isinstance(value, OrderStatus):
                    value = value.value
                setattr(record, field, value)
            session.commit()
            logger.info(f"✏️ Order {order_id} updated: {sorted(data.changes())}")
            return to_domain(record)
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error: {e}")
            session.rollback()
            raise StorageError("Failed to update order") from e
        finally:
            session.close()

    def delete_order(self, order_id: str) -> bool:
        session = self._session_factory()
        try:
            removed = session.query(OrderRecord).filter(OrderRecord.id == order_id).delete()
            session.commit()
            if removed:
                logger.info(f"🗑️ Order {order_id} deleted")
            return removed > 0
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error: {e}")
            session.rollback()
            raise StorageError("Failed to delete order") from e
        finally:
            session.close()

import logging

from sqlalchemy import select, update

from db import get_db_session, session_commit, session_execute
from enums.order_status import OrderStatus
from models.order import OrderDocument, OrderDTO

logger = logging.getLogger(__name__)


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO) -> str:
        async with get_db_session() as session:
            values = order_dto.model_dump(exclude_none=True)
            order = OrderDocument(**values)
            session.add(order)
            await session_commit(session)
            return order.id

    @staticmethod
    async def get_by_id(collection: str, order_id: str) -> OrderDTO | None:
        stmt = select(OrderDocument).where(
            OrderDocument.collection == collection,
            OrderDocument.id == order_id
        )
        async with get_db_session() as session:
            order = await session_execute(stmt, session)
            order = order.scalar()
            if order is not None:
                return OrderDTO.model_validate(order, from_attributes=True)
            else:
                return None

    @staticmethod
    async def update_fields(collection: str, order_id: str, **values) -> bool:
        """
        Blind overwrite of the given columns.

        Returns False when no document matched, so writers can tell a
        missing order apart from a successful update.
        """
        stmt = update(OrderDocument).where(
            OrderDocument.collection == collection,
            OrderDocument.id == order_id
        ).values(**values)
        async with get_db_session() as session:
            result = await session_execute(stmt, session)
            await session_commit(session)
            return result.rowcount > 0

    @staticmethod
    async def update_status(collection: str, order_id: str, status: OrderStatus) -> bool:
        return await OrderRepository.update_fields(collection, order_id, status=status.value)

    @staticmethod
    async def mark_cancelled(collection: str, order_id: str) -> bool:
        return await OrderRepository.update_fields(
            collection, order_id,
            status=OrderStatus.FAILED.value,
            payment_received=False
        )

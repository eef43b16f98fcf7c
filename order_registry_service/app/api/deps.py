"""
FastAPI dependency injection for Order Registry Service

The database manager is created by the application factory and kept on
``app.state``; every request gets its own session from it.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import OrderRegistryDatabaseManager
from ..services.order_service import OrderService

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


def get_database_manager(request: Request) -> OrderRegistryDatabaseManager:
    """Provide the application's shared database manager"""
    return request.app.state.database_manager


async def get_async_session(
    database_manager: OrderRegistryDatabaseManager = Depends(get_database_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in database_manager.get_async_session():
        yield session


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_order_service(
    session: AsyncSession = Depends(get_async_session),
) -> OrderService:
    """Provide OrderService instance bound to the request session"""
    return OrderService(session)


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

DatabaseManagerDep = Depends(get_database_manager)
OrderServiceDep = Depends(get_order_service)

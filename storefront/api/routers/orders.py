# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import get_current_user
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError, PersistenceError
from storefront.domain.schemas import (
    CheckoutIn,
    CheckoutOut,
    OrderDetailResponse,
    OrderStatusIn,
    UserOrdersResponse,
)
from storefront.services.access import Caller
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(tags=["orders"])


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
async def checkout(
    payload: CheckoutIn,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Tworzy zamówienie z koszyka uzytkownika i czysci koszyk.
    Wysyła powiadomienie asynchronicznie.
    """
    svc = CheckoutService(db)
    try:
        result = await svc.checkout(
            caller,
            user_id=payload.user_id,
            shipping_address=payload.shipping_address,
            payment_method=payload.payment_method,
            notes=payload.notes,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, **result}


@router.get("/orders/user/{user_id}", response_model=UserOrdersResponse)
async def get_orders_for_user(
    user_id: int,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = OrderService(db)
    try:
        result = await svc.list_orders(caller, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, **result}


@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: int,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Pobiera szczegóły zamówienia razem z timeline.
    """
    svc = OrderService(db)
    try:
        result = await svc.get_order(caller, order_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, **result}


@router.patch("/orders/{order_id}/status", response_model=OrderDetailResponse)
async def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = OrderService(db)
    try:
        result = await svc.append_status(caller, order_id, payload.status, payload.details)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, **result}

#storefront/api/routers/carts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import get_current_user
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError, PersistenceError
from storefront.domain.schemas import (
    CartAddIn,
    CartClearedResponse,
    CartResponse,
    CartUpdateIn,
)
from storefront.services.access import Caller
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: AsyncSession):
    return CartService(db=db)


@router.post("/add", response_model=CartResponse)
async def add_item(
    payload: CartAddIn,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = await svc.add_item(
            caller,
            model_id=payload.model_id,
            quantity=payload.quantity,
            user_id=payload.user_id,
            notes=payload.notes,
            unit_price=payload.unit_price,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, "message": "Item added to cart.", "cart": cart}


@router.patch("/update", response_model=CartResponse)
async def update_item(
    payload: CartUpdateIn,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = await svc.update_item(
            caller,
            cart_item_id=payload.cart_item_id,
            quantity=payload.quantity,
            user_id=payload.user_id,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, "message": "Cart updated successfully.", "cart": cart}


@router.delete("/remove/{cart_item_id}", response_model=CartResponse)
async def remove_item(
    cart_item_id: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = await svc.remove_item(caller, cart_item_id, user_id=user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, "message": "Item removed from cart.", "cart": cart}


@router.delete("/clear/{user_id}", response_model=CartClearedResponse)
async def clear_cart(
    user_id: int,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = get_service(db)
    try:
        await svc.clear_cart(caller, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, "message": "Cart cleared successfully."}


@router.get("/{user_id}", response_model=CartResponse)
async def get_cart(
    user_id: int,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    svc = get_service(db)
    try:
        cart = await svc.get_cart(caller, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.as_detail())
    return {"success": True, "cart": cart}

# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, Dict, List, Optional, Union
from decimal import Decimal
from datetime import datetime

# kwoty trzymane jako Decimal, w JSON jako liczby
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class CartAddIn(CamelModel):
    """Schema dla dodawania modelu do koszyka."""

    user_id: Optional[int] = Field(None, description="ID uzytkownika, domyslnie z tokenu")
    model_id: int = Field(..., gt=0, description="ID modelu z katalogu (musi byc > 0)")
    quantity: int = Field(1, gt=0, description="Ilosc (musi byc > 0)")
    notes: Optional[str] = None
    # dowolna wartosc, nieliczbowa cena -> 0.00
    unit_price: Optional[Union[Decimal, str]] = None


class CartUpdateIn(CamelModel):
    """Schema dla zmiany ilosci; quantity <= 0 usuwa pozycje."""

    cart_item_id: int = Field(..., gt=0)
    user_id: Optional[int] = None
    quantity: int


class CartItemOut(CamelModel):
    cart_item_id: int
    model_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    preview_url: Optional[str] = None
    quantity: int
    unit_price: Money
    line_total: Money
    notes: Optional[str] = None


class CartTotalsOut(CamelModel):
    item_count: int
    total_quantity: int
    subtotal: Money


class CartOut(CamelModel):
    """Schema dla koszyka (response)."""

    user_id: int
    items: List[CartItemOut]
    totals: CartTotalsOut


class CartResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    cart: CartOut


class CartClearedResponse(CamelModel):
    success: bool = True
    message: str


class CheckoutIn(CamelModel):
    """Schema dla checkoutu."""

    user_id: Optional[int] = None
    shipping_address: Optional[Union[Dict[str, Any], str]] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class CheckoutOut(CamelModel):
    success: bool = True
    order_id: int
    status: str


class OrderItemOut(CamelModel):
    order_item_id: int
    model_id: int
    name: Optional[str] = None
    preview_url: Optional[str] = None
    quantity: int
    unit_price: Money
    line_total: Money


class OrderSummaryOut(CamelModel):
    """Zamowienie bez pozycji (lista zamowien uzytkownika)."""

    id: int
    status: str
    total_amount: Money
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderOut(OrderSummaryOut):
    user_id: int
    notes: Optional[str] = None
    items: List[OrderItemOut]


class TimelineStepOut(CamelModel):
    status: str
    label: str
    timestamp: Optional[str] = None
    details: Optional[str] = None
    completed: bool


class OrderDetailResponse(CamelModel):
    success: bool = True
    order: OrderOut
    timeline: List[TimelineStepOut]


class UserOrdersResponse(CamelModel):
    success: bool = True
    user_id: int
    orders: List[OrderSummaryOut]


class OrderStatusIn(CamelModel):
    """Schema dla zmiany statusu zamowienia (admin)."""

    status: str = Field(..., min_length=1, max_length=32)
    details: Optional[str] = None

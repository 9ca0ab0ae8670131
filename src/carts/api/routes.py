"""FastAPI routes for the Carts domain."""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from protean.utils.globals import current_domain

from carts.api.owner import CartOwner, resolve_owner
from carts.api.schemas import AddItemRequest, CartResponse, UpdateQuantityRequest
from carts.cart.queries import get_cart
from carts.cart.reconciliation import AddItem, ClearCart, RemoveItem, UpdateItemQuantity

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/health", response_class=PlainTextResponse)
async def cart_health() -> str:
    return "Cart Service is running"


@cart_router.get("", response_model=CartResponse)
async def view_cart(owner: CartOwner = Depends(resolve_owner)) -> CartResponse:
    return CartResponse.model_validate(get_cart(owner.tenant_id, owner.user_id))


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_cart_item(body: AddItemRequest, owner: CartOwner = Depends(resolve_owner)) -> CartResponse:
    command = AddItem(
        tenant_id=owner.tenant_id,
        user_id=owner.user_id,
        product_id=body.product_id,
        name=body.name,
        price=float(body.price),
        quantity=body.quantity,
    )
    view = current_domain.process(command, asynchronous=False)
    return CartResponse.model_validate(view)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    product_id: str,
    body: UpdateQuantityRequest,
    owner: CartOwner = Depends(resolve_owner),
) -> CartResponse:
    command = UpdateItemQuantity(
        tenant_id=owner.tenant_id,
        user_id=owner.user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    view = current_domain.process(command, asynchronous=False)
    return CartResponse.model_validate(view)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, owner: CartOwner = Depends(resolve_owner)) -> CartResponse:
    command = RemoveItem(
        tenant_id=owner.tenant_id,
        user_id=owner.user_id,
        product_id=product_id,
    )
    view = current_domain.process(command, asynchronous=False)
    return CartResponse.model_validate(view)


@cart_router.delete("", status_code=204)
async def clear_cart(owner: CartOwner = Depends(resolve_owner)) -> Response:
    current_domain.process(ClearCart(tenant_id=owner.tenant_id, user_id=owner.user_id), asynchronous=False)
    return Response(status_code=204)

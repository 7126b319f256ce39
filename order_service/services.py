from datetime import datetime, timezone

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from order_service.config import Settings
from order_service.errors import EmptyCartError, NotFoundError, ConflictError, PaymentProviderError
from order_service.logging_config import get_logger
from order_service.models import Order, Cart, Product, new_id, as_utc
from order_service.schemas import OrderCreate

log = get_logger(__name__)


def _money(value: float) -> str:
    return f"{value:.2f}"


def build_payment_request(order: OrderCreate, settings: Settings) -> dict:
    return {
        "intent": "sale",
        "payer": {"payment_method": order.payment_method},
        "redirect_urls": {
            "return_url": f"{settings.frontend_url}/shop/payment-return",
            "cancel_url": f"{settings.frontend_url}/shop/payment-cancel",
        },
        "transactions": [
            {
                "item_list": {
                    "items": [
                        {
                            "name": item.title,
                            "sku": item.product_id,
                            "price": _money(item.price),
                            "currency": settings.currency,
                            "quantity": item.quantity,
                        }
                        for item in order.cart_items
                    ]
                },
                "amount": {"currency": settings.currency, "total": _money(order.total_amount)},
                "description": "Your order payment",
            }
        ],
    }


def create_order(db: Session, provider, payload: OrderCreate, settings: Settings):
    """
    Creates the provider payment first and persists the order only once the
    provider has returned an approval link.

    Returns a ``(order, approval_url)`` tuple.
    """
    if not payload.cart_items:
        raise EmptyCartError()

    order_id = new_id()
    log.info("[Order: %s] Sending payment request to provider", order_id)
    result = provider.create_payment(build_payment_request(payload, settings), idempotency_key=order_id)

    if not result.ok:
        log.error("[Order: %s] Provider error: %s", order_id, result.error)
        raise PaymentProviderError("Error while creating payment", error=result.error)

    approval_url = result.approval_url
    if not approval_url:
        log.error("[Order: %s] No approval URL in provider response", order_id)
        raise PaymentProviderError("No approval URL found in payment provider response")

    now = datetime.now(timezone.utc)
    order = Order(
        id=order_id,
        user_id=payload.user_id,
        cart_id=payload.cart_id,
        cart_items=[item.model_dump(by_alias=True) for item in payload.cart_items],
        address_info=payload.address_info.model_dump(by_alias=True) if payload.address_info else None,
        order_status=payload.order_status,
        payment_method=payload.payment_method,
        payment_status=payload.payment_status,
        total_amount=payload.total_amount,
        order_date=as_utc(payload.order_date) if payload.order_date else now,
        order_update_date=as_utc(payload.order_update_date) if payload.order_update_date else now,
        payment_id=payload.payment_id,
        payer_id=payload.payer_id,
    )
    db.add(order)
    db.commit()
    db.refresh(order)

    log.info("[Order: %s] Created for user %s", order.id, order.user_id)
    return order, approval_url


def capture_payment(db: Session, payment_id: str, payer_id: str, order_id: str) -> Order:
    """
    Marks the order paid and confirmed, takes the purchased quantities out of
    stock and removes the cart, all in one transaction. A failure at any step
    rolls every change back.
    """
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found!")
    if order.payment_status == "paid":
        raise ConflictError("Order has already been captured")

    try:
        # compare-and-swap on payment_status; a concurrent capture loses here
        claimed = db.execute(
            update(Order)
            .where(Order.id == order_id, Order.payment_status != "paid")
            .values(
                payment_status="paid",
                order_status="confirmed",
                payment_id=payment_id,
                payer_id=payer_id,
                order_update_date=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        ).rowcount
        if not claimed:
            raise ConflictError("Order has already been captured")

        for item in order.cart_items:
            quantity = item["quantity"]
            product = db.get(Product, item["productId"])
            if product is None:
                raise NotFoundError(f"Product {item['title']} not found")

            decremented = db.execute(
                update(Product)
                .where(Product.id == product.id, Product.total_stock >= quantity)
                .values(total_stock=Product.total_stock - quantity)
                .execution_options(synchronize_session=False)
            ).rowcount
            if not decremented:
                raise ConflictError(f"Not enough stock for product {item['title']}")

        if order.cart_id:
            db.execute(delete(Cart).where(Cart.id == order.cart_id))

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(order)
    log.info("[Order: %s] Payment %s captured", order.id, payment_id)
    return order


def list_orders_by_user(db: Session, user_id: str) -> list:
    orders = db.scalars(
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.order_date.desc(), Order.id)
    ).all()
    if not orders:
        raise NotFoundError("No orders found!")
    return orders


def get_order_details(db: Session, order_id: str) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found!")
    return order

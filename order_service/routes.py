from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from order_service import services
from order_service.auth import verify_token
from order_service.config import Settings, get_settings
from order_service.database import get_db
from order_service.errors import OrderServiceError
from order_service.logging_config import get_logger
from order_service.payments import get_payment_provider
from order_service.schemas import OrderCreate, CapturePaymentRequest, serialize_order

log = get_logger(__name__)

router = APIRouter(prefix="/api/shop/order", dependencies=[Depends(verify_token)])

UNEXPECTED = "An unexpected error occurred!"


@router.post("/create", status_code=201)
def create_order(
    request: OrderCreate,
    db: Session = Depends(get_db),
    provider=Depends(get_payment_provider),
    settings: Settings = Depends(get_settings),
):
    try:
        order, approval_url = services.create_order(db, provider, request, settings)
        return {"success": True, "approvalURL": approval_url, "orderId": order.id}
    except OrderServiceError:
        raise
    except Exception:
        log.exception("Create order failed for user %s", request.user_id)
        raise OrderServiceError(UNEXPECTED)


@router.post("/capture")
def capture_payment(request: CapturePaymentRequest, db: Session = Depends(get_db)):
    try:
        order = services.capture_payment(db, request.payment_id, request.payer_id, request.order_id)
        return {"success": True, "message": "Order confirmed", "data": serialize_order(order)}
    except OrderServiceError:
        raise
    except Exception:
        log.exception("Capture payment failed for order %s", request.order_id)
        raise OrderServiceError(UNEXPECTED)


@router.get("/list/{user_id}")
def list_orders_by_user(user_id: str, db: Session = Depends(get_db)):
    try:
        orders = services.list_orders_by_user(db, user_id)
        return {"success": True, "data": [serialize_order(order) for order in orders]}
    except OrderServiceError:
        raise
    except Exception:
        log.exception("Fetch orders failed for user %s", user_id)
        raise OrderServiceError(UNEXPECTED)


@router.get("/details/{order_id}")
def get_order_details(order_id: str, db: Session = Depends(get_db)):
    try:
        order = services.get_order_details(db, order_id)
        return {"success": True, "data": serialize_order(order)}
    except OrderServiceError:
        raise
    except Exception:
        log.exception("Order details failed for order %s", order_id)
        raise OrderServiceError(UNEXPECTED)

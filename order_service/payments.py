"""
Payment provider integration.

Handlers build a provider-neutral payment request (intent, payer, redirect
urls, transactions) and hand it to a provider object. ``StripeProvider`` maps
that request onto a Stripe Checkout Session; the hosted checkout URL it
returns is the approval link the payer has to visit.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

import stripe

from order_service.config import settings
from order_service.logging_config import get_logger

log = get_logger(__name__)

APPROVAL_REL = "approval_url"


@dataclass
class PaymentResult:
    """Outcome of a create-payment call: either ``error`` or the provider links."""

    payment_id: Optional[str] = None
    links: List[dict] = field(default_factory=list)
    error: Optional[dict] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def approval_url(self) -> Optional[str]:
        for link in self.links:
            if link.get("rel") == APPROVAL_REL:
                return link.get("href")
        return None


def to_minor_units(amount: str) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StripeProvider:
    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key

    def create_payment(self, payment_request: dict, idempotency_key: Optional[str] = None) -> PaymentResult:
        transaction = payment_request["transactions"][0]
        line_items = [
            {
                "price_data": {
                    "currency": item["currency"].lower(),
                    "product_data": {"name": item["name"], "metadata": {"sku": item["sku"]}},
                    "unit_amount": to_minor_units(item["price"]),
                },
                "quantity": item["quantity"],
            }
            for item in transaction["item_list"]["items"]
        ]

        # Stripe charges the sum of the line items; refuse a request whose total disagrees
        items_total = sum(li["price_data"]["unit_amount"] * li["quantity"] for li in line_items)
        requested_total = to_minor_units(transaction["amount"]["total"])
        if items_total != requested_total:
            log.error("Payment total %s does not match item total %s", requested_total, items_total)
            return PaymentResult(error={
                "message": "Transaction amount does not match the sum of the items",
                "code": "amount_mismatch",
                "httpStatus": None,
            })

        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=line_items,
                success_url=payment_request["redirect_urls"]["return_url"] + "?paymentId={CHECKOUT_SESSION_ID}",
                cancel_url=payment_request["redirect_urls"]["cancel_url"],
                client_reference_id=idempotency_key,
                payment_intent_data={"description": transaction.get("description")},
                idempotency_key=idempotency_key,
            )
        except stripe.StripeError as e:
            log.error("Stripe checkout session creation failed: %s", e)
            return PaymentResult(error={
                "message": e.user_message or str(e),
                "code": e.code,
                "httpStatus": e.http_status,
            })

        links = []
        if session.url:
            links.append({"rel": APPROVAL_REL, "href": session.url, "method": "REDIRECT"})
        return PaymentResult(payment_id=session.id, links=links)


def get_payment_provider() -> StripeProvider:
    return StripeProvider(settings.stripe_secret_key)

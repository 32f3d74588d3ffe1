"""
Gateway selection for donations and wallet top-ups.

PAYMENT_GATEWAY picks the provider: `xendit`, `doku` or `mock` (default).
The mock gateway never calls out; it hands back a local invoice so the
rest of the flow (webhook, debug simulation) can be exercised in dev.
"""
import datetime
import logging
import os
import random
from typing import Optional, Dict, Any

from .doku import DokuClient
from .errors import PaymentGatewayError
from .utils import external_ref
from .xendit import XenditClient

logger = logging.getLogger(__name__)

GATEWAYS = ('xendit', 'doku', 'mock')


def gateway_name() -> str:
    name = (os.getenv('PAYMENT_GATEWAY') or 'mock').strip().lower()
    if name not in GATEWAYS:
        raise PaymentGatewayError(f'Unknown PAYMENT_GATEWAY: {name}')
    return name


def _redirect_urls(external_id: str):
    base_url = (os.getenv('BASE_URL') or 'http://localhost:3000').rstrip('/')
    return (f"{base_url}/payment/success?ref={external_id}",
            f"{base_url}/payment/failed?ref={external_id}")


def _mock_invoice(external_id: str, amount: float) -> Dict[str, Any]:
    expires = datetime.datetime.utcnow() + datetime.timedelta(hours=24)
    code = '8888 ' + ' '.join(f"{random.randint(0, 9999):04d}" for _ in range(3))
    return {
        "gateway": "mock",
        "invoice_id": external_ref('INV'),
        "external_id": external_id,
        "invoice_url": None,
        "payment_code": code,
        "amount": amount,
        "expired_at": expires.isoformat() + 'Z',
    }


def create_invoice(external_id: str, amount: float, description: str,
                   payer_email: Optional[str] = None, customer_name: Optional[str] = None,
                   customer_phone: Optional[str] = None) -> Dict[str, Any]:
    """Create a hosted payment page for `external_id`. Raises PaymentGatewayError."""
    name = gateway_name()
    success_url, failure_url = _redirect_urls(external_id)
    logger.info("Creating %s invoice %s for %s", name, external_id, amount)

    if name == 'xendit':
        inv = XenditClient().create_invoice(
            external_id=external_id,
            amount=amount,
            payer_email=payer_email,
            description=description,
            success_redirect_url=success_url,
            failure_redirect_url=failure_url,
            customer_name=customer_name,
            customer_phone=customer_phone,
        )
    elif name == 'doku':
        inv = DokuClient().create_invoice(
            external_id=external_id,
            amount=amount,
            payer_email=payer_email,
            description=description,
            customer_name=customer_name,
            customer_phone=customer_phone,
            success_redirect_url=success_url,
        )
    else:
        return _mock_invoice(external_id, amount)

    return {
        "gateway": name,
        "invoice_id": inv.get("invoice_id"),
        "external_id": inv.get("external_id") or external_id,
        "invoice_url": inv.get("invoice_url"),
        "payment_code": None,
        "amount": amount,
        "expired_at": inv.get("expiry_date"),
    }

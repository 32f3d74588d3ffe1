"""
DOKU Checkout API client and notification signature helpers
https://developers.doku.com

Every request is signed: HMAC-SHA256 over the Client-Id, Request-Id,
Request-Timestamp, Request-Target and the SHA-256 digest of the JSON body.
Inbound HTTP notifications carry the same signature scheme.
"""
import base64
import datetime
import hashlib
import hmac
import json
import logging
import os
import random
import time
import requests
from typing import Optional, Dict, Any, Union
from requests.exceptions import RequestException

from .errors import PaymentGatewayError

logger = logging.getLogger(__name__)

CHECKOUT_PATH = '/checkout/v1/payment'
NOTIFICATION_PATH = '/api/webhook/doku'
PAYMENT_DUE_MINUTES = 24 * 60


def generate_digest(body: Union[str, bytes]) -> str:
    if isinstance(body, str):
        body = body.encode('utf-8')
    return base64.b64encode(hashlib.sha256(body).digest()).decode('ascii')


def generate_signature(client_id: str, request_id: str, request_timestamp: str,
                       request_target: str, digest: str, secret_key: str) -> str:
    component = (
        f"Client-Id:{client_id}\n"
        f"Request-Id:{request_id}\n"
        f"Request-Timestamp:{request_timestamp}\n"
        f"Request-Target:{request_target}\n"
        f"Digest:{digest}"
    )
    mac = hmac.new(secret_key.encode('utf-8'), component.encode('utf-8'), hashlib.sha256)
    return 'HMACSHA256=' + base64.b64encode(mac.digest()).decode('ascii')


def verify_notification_signature(raw_body: bytes, headers, secret_key: str,
                                  request_target: str = NOTIFICATION_PATH) -> bool:
    """Recompute the signature of an inbound notification and compare it with the `Signature` header."""
    received = headers.get('signature')
    if not received:
        return False
    expected = generate_signature(
        headers.get('client-id') or '',
        headers.get('request-id') or '',
        headers.get('request-timestamp') or '',
        request_target,
        generate_digest(raw_body),
        secret_key,
    )
    return hmac.compare_digest(expected, received)


class DokuClient:
    BASE_URL = os.getenv('DOKU_BASE_URL', 'https://api-sandbox.doku.com')
    TIMEOUT = int(os.getenv('DOKU_TIMEOUT', '15'))

    def __init__(self, client_id: Optional[str] = None, secret_key: Optional[str] = None,
                 base_url: Optional[str] = None):
        self.client_id = client_id or os.getenv('DOKU_CLIENT_ID')
        self.secret_key = secret_key or os.getenv('DOKU_SECRET_KEY')
        if not self.client_id or not self.secret_key:
            raise PaymentGatewayError('DOKU credentials not configured')
        self.base_url = base_url or self.BASE_URL
        self.session = requests.Session()

    def _signed_headers(self, json_body: str, request_target: str) -> Dict[str, str]:
        request_id = f"REQ-{int(time.time() * 1000)}-{random.randint(0, 999)}"
        request_timestamp = datetime.datetime.utcnow().strftime('%Y-%m-%dT%H:%M:%SZ')
        signature = generate_signature(self.client_id, request_id, request_timestamp,
                                       request_target, generate_digest(json_body), self.secret_key)
        return {
            'Content-Type': 'application/json',
            'Client-Id': self.client_id,
            'Request-Id': request_id,
            'Request-Timestamp': request_timestamp,
            'Signature': signature,
        }

    def create_invoice(self, external_id: str, amount: float, payer_email: Optional[str] = None,
                       description: Optional[str] = None, customer_name: Optional[str] = None,
                       customer_phone: Optional[str] = None,
                       success_redirect_url: Optional[str] = None) -> Dict[str, Any]:
        amount = int(round(amount))
        body = {
            "order": {
                "amount": amount,
                "invoice_number": external_id,
                "currency": "IDR",
                "callback_url": success_redirect_url,
                "line_items": [
                    {"name": description or 'Donation', "price": amount, "quantity": 1},
                ],
            },
            "payment": {"payment_due_date": PAYMENT_DUE_MINUTES},
            "customer": {
                "name": customer_name or 'Anonymous',
                "email": payer_email or 'no-email@example.com',
                "phone": customer_phone or '081234567890',
            },
        }
        json_body = json.dumps(body)
        headers = self._signed_headers(json_body, CHECKOUT_PATH)
        logger.debug("DOKU checkout request %s for %s", headers['Request-Id'], external_id)
        try:
            resp = self.session.post(f"{self.base_url}{CHECKOUT_PATH}", data=json_body,
                                     headers=headers, timeout=self.TIMEOUT)
        except RequestException as e:
            raise PaymentGatewayError(f'DOKU request failed: {e}') from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.ok:
            error = data.get('error') or {}
            message = error.get('message') if isinstance(error, dict) else str(error)
            logger.error("DOKU checkout failed for %s: %s", external_id, data)
            raise PaymentGatewayError(message or 'Failed to create DOKU invoice',
                                      status_code=resp.status_code, payload=data)

        response = data.get('response') or {}
        payment = response.get('payment') or {}
        order = response.get('order') or {}
        return {
            "invoice_id": payment.get('token_id'),
            "external_id": order.get('invoice_number', external_id),
            "invoice_url": payment.get('url'),
            "amount": amount,
            "expiry_date": payment.get('expired_date'),
        }

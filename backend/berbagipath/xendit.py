"""
Xendit payment gateway client
https://docs.xendit.co

Invoices, virtual accounts, QRIS and e-wallet charges. Configured through
XENDIT_SECRET_KEY / XENDIT_CALLBACK_TOKEN, with a simple retry/backoff on
read timeouts.
"""
import datetime
import hmac
import logging
import os
import time
import requests
from typing import Optional, Dict, Any, List
from requests.exceptions import ReadTimeout, RequestException

from .errors import PaymentGatewayError

logger = logging.getLogger(__name__)

INVOICE_PAYMENT_METHODS = ['QRIS', 'BCA', 'MANDIRI', 'BRI', 'OVO', 'DANA', 'LINKAJA', 'SHOPEEPAY']
INVOICE_DURATION_SECONDS = 24 * 60 * 60


class XenditClient:
    BASE_URL = "https://api.xendit.co"
    TIMEOUT = int(os.getenv('XENDIT_TIMEOUT', '15'))
    RETRIES = int(os.getenv('XENDIT_RETRIES', '2'))
    BACKOFF_FACTOR = float(os.getenv('XENDIT_BACKOFF', '0.5'))

    def __init__(self, secret_key: Optional[str] = None, base_url: Optional[str] = None):
        self.secret_key = secret_key or os.getenv('XENDIT_SECRET_KEY')
        if not self.secret_key:
            raise PaymentGatewayError('Xendit credentials not configured')
        self.base_url = base_url or self.BASE_URL
        self.session = requests.Session()
        # Basic auth: secret key as username, empty password
        self.session.auth = (self.secret_key, '')
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, body: Optional[dict] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        for attempt in range(1, max(1, self.RETRIES) + 1):
            try:
                resp = self.session.request(method, url, json=body, timeout=self.TIMEOUT)
                break
            except ReadTimeout as e:
                if attempt < self.RETRIES:
                    wait = self.BACKOFF_FACTOR * (2 ** (attempt - 1))
                    logger.warning("Xendit %s %s timed out (attempt %s/%s), retrying in %ss",
                                   method, path, attempt, self.RETRIES, wait)
                    time.sleep(wait)
                    continue
                raise PaymentGatewayError(f'Xendit request timed out: {e}') from e
            except RequestException as e:
                raise PaymentGatewayError(f'Xendit request failed: {e}') from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.ok:
            message = data.get('message') or f'Xendit returned HTTP {resp.status_code}'
            logger.error("Xendit %s %s failed: %s", method, path, message)
            raise PaymentGatewayError(message, status_code=resp.status_code, payload=data)
        return data

    def create_invoice(self, external_id: str, amount: float, payer_email: Optional[str] = None,
                       description: Optional[str] = None, success_redirect_url: Optional[str] = None,
                       failure_redirect_url: Optional[str] = None, customer_name: Optional[str] = None,
                       customer_phone: Optional[str] = None,
                       payment_methods: Optional[List[str]] = None) -> Dict[str, Any]:
        """Hosted invoice page supporting several payment methods."""
        body = {
            "external_id": external_id,
            "amount": amount,
            "payer_email": payer_email,
            "description": description,
            "success_redirect_url": success_redirect_url,
            "failure_redirect_url": failure_redirect_url,
            "customer": {
                "given_names": customer_name,
                "mobile_number": customer_phone,
            },
            "currency": "IDR",
            "payment_methods": payment_methods or INVOICE_PAYMENT_METHODS,
            "invoice_duration": INVOICE_DURATION_SECONDS,
        }
        data = self._request('POST', '/v2/invoices', body)
        return {
            "invoice_id": data.get("id"),
            "external_id": data.get("external_id"),
            "invoice_url": data.get("invoice_url"),
            "amount": data.get("amount"),
            "status": data.get("status"),
            "expiry_date": data.get("expiry_date"),
        }

    def create_virtual_account(self, external_id: str, bank_code: str, name: str, amount: float,
                               is_closed: bool = True, is_single_use: bool = True,
                               expiration_date: Optional[str] = None) -> Dict[str, Any]:
        if not expiration_date:
            expires = datetime.datetime.utcnow() + datetime.timedelta(seconds=INVOICE_DURATION_SECONDS)
            expiration_date = expires.isoformat() + 'Z'
        data = self._request('POST', '/callback_virtual_accounts', {
            "external_id": external_id,
            "bank_code": bank_code,
            "name": name,
            "expected_amount": amount,
            "is_closed": is_closed,
            "is_single_use": is_single_use,
            "expiration_date": expiration_date,
        })
        return {
            "va_id": data.get("id"),
            "external_id": data.get("external_id"),
            "account_number": data.get("account_number"),
            "bank_code": data.get("bank_code"),
            "merchant_code": data.get("merchant_code"),
            "name": data.get("name"),
            "amount": data.get("expected_amount"),
            "expiration_date": data.get("expiration_date"),
            "status": data.get("status"),
        }

    def create_qris(self, external_id: str, amount: float, callback_url: str) -> Dict[str, Any]:
        data = self._request('POST', '/qr_codes', {
            "external_id": external_id,
            "type": "DYNAMIC",
            "currency": "IDR",
            "amount": amount,
            "callback_url": callback_url,
        })
        return {
            "qr_id": data.get("id"),
            "external_id": data.get("external_id"),
            "qr_string": data.get("qr_string"),
            "amount": data.get("amount"),
            "status": data.get("status"),
        }

    def create_ewallet_payment(self, external_id: str, amount: float, ewallet_type: str,
                               success_redirect_url: Optional[str] = None,
                               failure_redirect_url: Optional[str] = None,
                               mobile_number: Optional[str] = None) -> Dict[str, Any]:
        """One-time e-wallet charge (OVO, DANA, LINKAJA, SHOPEEPAY)."""
        channel_code = ewallet_type.upper()
        if channel_code.startswith('ID_'):
            channel_code = channel_code[3:]
        channel_properties = {
            "success_redirect_url": success_redirect_url,
            "failure_redirect_url": failure_redirect_url,
        }
        # OVO pushes the charge to the customer's phone
        if channel_code == 'OVO':
            channel_properties["mobile_number"] = mobile_number

        data = self._request('POST', '/ewallets/charges', {
            "reference_id": external_id,
            "currency": "IDR",
            "amount": amount,
            "checkout_method": "ONE_TIME_PAYMENT",
            "channel_code": f"ID_{channel_code}",
            "channel_properties": channel_properties,
        })
        redirect_url = None
        for action in data.get("actions") or []:
            if action.get("url_type") in ('WEB', 'MOBILE'):
                redirect_url = action.get("url")
                break
        return {
            "charge_id": data.get("id"),
            "external_id": data.get("reference_id"),
            "redirect_url": redirect_url,
            "amount": data.get("charge_amount"),
            "status": data.get("status"),
            "channel_code": data.get("channel_code"),
        }

    def get_invoice_status(self, invoice_id: str) -> Dict[str, Any]:
        data = self._request('GET', f'/v2/invoices/{invoice_id}')
        return {
            "invoice_id": data.get("id"),
            "external_id": data.get("external_id"),
            "status": data.get("status"),
            "amount": data.get("amount"),
            "paid_amount": data.get("paid_amount"),
            "paid_at": data.get("paid_at"),
            "payment_method": data.get("payment_method"),
            "payment_channel": data.get("payment_channel"),
        }

    def simulate_va_payment(self, external_id: str, amount: float) -> None:
        """Only available with development (test mode) keys."""
        if 'development' not in self.secret_key:
            raise PaymentGatewayError('Simulation only available in test mode')
        self._request('POST', f'/callback_virtual_accounts/external_id={external_id}/simulate_payment',
                      {"amount": amount})


def verify_webhook_token(callback_token: Optional[str]) -> bool:
    """Compare the x-callback-token header against XENDIT_CALLBACK_TOKEN."""
    expected = os.getenv('XENDIT_CALLBACK_TOKEN')
    if not expected or not callback_token:
        return False
    return hmac.compare_digest(callback_token, expected)

"""
Inbound payment notifications from Xendit and DOKU.

Providers retry anything that is not a 200, so processing outcomes
(unknown invoice, rejected token, internal error) are reported in the
body with HTTP 200. Only an unparseable body gets a 400.
"""
import json
import logging
import os
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional

from . import doku
from .database import get_db
from .reconciliation import apply_payment_status
from .webhook_models import WebhookLog
from .xendit import verify_webhook_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhook", tags=["Webhooks"])


def _enforce_doku_signature() -> bool:
    return (os.getenv('DOKU_ENFORCE_SIGNATURE') or '').lower() in ('1', 'true', 'yes')


def _field(obj, key):
    """obj[key] for JSON objects, None for anything else."""
    return obj.get(key) if isinstance(obj, dict) else None


def _internal_error(db: Session, provider: str) -> dict:
    logger.exception("%s webhook could not be recorded", provider)
    db.rollback()
    return {"success": False, "error": "Internal error while processing webhook"}


def _store_log(db: Session, event_type: str, external_id: Optional[str], raw: str) -> WebhookLog:
    entry = WebhookLog(event_type=event_type, external_id=external_id, payload=raw)
    db.add(entry)
    db.commit()
    return entry


def _process(db: Session, entry: WebhookLog, external_id: str, status: str, **details) -> dict:
    try:
        result = apply_payment_status(db, external_id, status, **details)
        entry.status = f'processed_{(status or "").upper()}'
        db.commit()
    except Exception:
        logger.exception("Webhook processing failed for %s", external_id)
        db.rollback()
        return {"success": False, "error": "Internal error while processing webhook"}
    if not result.success:
        return {"success": False, "error": result.message}
    return {"success": True, "message": result.message}


@router.post("/xendit")
async def xendit_webhook(request: Request, x_callback_token: Optional[str] = Header(None),
                         db: Session = Depends(get_db)):
    if not verify_webhook_token(x_callback_token):
        logger.warning("Xendit webhook rejected: invalid callback token")
        return {"success": False, "error": "Invalid callback token"}

    raw = (await request.body()).decode('utf-8', errors='replace')
    try:
        payload = json.loads(raw)
    except ValueError:
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON body"})
    if not isinstance(payload, dict):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON body"})

    external_id = payload.get('external_id')
    status = payload.get('status')
    logger.info("Xendit webhook: %s %s", external_id, status)
    try:
        entry = _store_log(db, 'XENDIT_INVOICE', external_id, raw)
    except Exception:
        return _internal_error(db, 'Xendit')
    if not external_id:
        return {"success": False, "error": "Missing external_id"}
    return _process(db, entry, external_id, status,
                    payment_method=payload.get('payment_method'),
                    payment_channel=payload.get('payment_channel'),
                    paid_at=payload.get('paid_at'))


@router.get("/doku")
def doku_webhook_info():
    return {"success": True,
            "message": "DOKU Webhook endpoint is active. This endpoint only accepts POST requests from DOKU."}


@router.post("/doku")
async def doku_webhook(request: Request, db: Session = Depends(get_db)):
    raw_bytes = await request.body()
    try:
        payload = json.loads(raw_bytes or b'')
    except ValueError:
        logger.error("DOKU webhook: invalid JSON body (%d bytes)", len(raw_bytes))
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON body"})
    if not isinstance(payload, dict):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON body"})

    external_id = _field(payload.get('order'), 'invoice_number') or payload.get('invoice_number')
    status = _field(payload.get('transaction'), 'status') or payload.get('status')
    payment_channel = _field(payload.get('channel'), 'id') or payload.get('payment_channel') or 'DOKU'
    payment_method = _field(payload.get('service'), 'id') or payload.get('payment_method') or 'DOKU'
    logger.info("DOKU webhook: %s %s via %s/%s", external_id, status, payment_method, payment_channel)

    try:
        entry = _store_log(db, 'DOKU_NOTIFY', external_id, raw_bytes.decode('utf-8', errors='replace'))
        secret_key = os.getenv('DOKU_SECRET_KEY')
        if secret_key and request.headers.get('signature'):
            if not doku.verify_notification_signature(raw_bytes, request.headers, secret_key):
                logger.warning("DOKU webhook signature mismatch for %s", external_id)
                if _enforce_doku_signature():
                    entry.status = 'rejected'
                    db.commit()
                    return {"success": False, "error": "Invalid signature"}
    except Exception:
        return _internal_error(db, 'DOKU')

    if not external_id:
        logger.warning("DOKU webhook without invoice number")
        return {"success": True, "message": "Acknowledged but no invoice number found"}
    return _process(db, entry, external_id, status,
                    payment_method=payment_method, payment_channel=payment_channel)

"""
Development helpers for exercising the payment flow without a real gateway.
Mounted only when ENABLE_DEBUG_ROUTES is true.
"""
import logging
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from . import donation_models, wallet_models
from .database import get_db
from .reconciliation import apply_payment_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/debug", tags=["Debug"])

SIMULATED_CHANNEL = 'VIRTUAL_ACCOUNT_BCA'


@router.post("/simulate-topup-success")
def simulate_topup_success(payload: dict = Body(...), db: Session = Depends(get_db)):
    topup_id = payload.get('topupId') or payload.get('topup_id')
    if not topup_id:
        raise HTTPException(status_code=400, detail='topupId is required')
    Topup = wallet_models.WalletTopup
    topup = db.query(Topup).filter((Topup.id == topup_id) | (Topup.external_id == topup_id)).first()
    if not topup:
        raise HTTPException(status_code=404, detail='Top-up not found')
    result = apply_payment_status(db, topup.external_id, 'PAID', payment_method='SIMULATION',
                                  payment_channel=SIMULATED_CHANNEL)
    logger.warning("Simulated top-up payment for %s", topup.external_id)
    return {"success": result.success, "message": f'Topup {topup.external_id} simulated as PAID',
            "credited": result.credited}


@router.api_route("/simulate-webhook", methods=["GET", "POST"])
def simulate_webhook(invoice: Optional[str] = None, db: Session = Depends(get_db)):
    """Mark `invoice` (default: the newest pending donation) as paid, as a gateway SUCCESS would."""
    if not invoice:
        Donation = donation_models.Donation
        last_pending = db.query(Donation).filter(
            Donation.status == 'pending', Donation.external_id.isnot(None)
        ).order_by(Donation.created_at.desc()).first()
        if not last_pending:
            raise HTTPException(status_code=404, detail='No pending donation found to simulate.')
        invoice = last_pending.external_id
    result = apply_payment_status(db, invoice, 'SUCCESS', payment_method='SIMULATION',
                                  payment_channel=SIMULATED_CHANNEL)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.message)
    logger.warning("Simulated gateway webhook for %s", invoice)
    return {"success": True, "message": f'Simulated webhook for {invoice}', "status": result.status,
            "credited": result.credited}

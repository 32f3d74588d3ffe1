"""
Wallet ("Kantong Donasi") top-ups paid through the payment gateway
"""
import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from . import user_models, wallet_models, wallet_schemas, donation_schemas
from . import payments
from .database import get_db
from .errors import PaymentGatewayError
from .utils import external_ref

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Wallet"])


@router.post("/api/wallet/topup", status_code=201)
def create_topup(payload: wallet_schemas.TopupCreate, db: Session = Depends(get_db)):
    user = db.query(user_models.User).filter(user_models.User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail='User not found')

    topup = wallet_models.WalletTopup(
        user_id=user.id,
        amount=payload.amount,
        status='pending',
        external_id=external_ref('TOPUP'),
    )
    db.add(topup)
    db.commit()
    db.refresh(topup)

    try:
        invoice = payments.create_invoice(
            external_id=topup.external_id,
            amount=topup.amount,
            description='Top Up Kantong Donasi',
            payer_email=payload.email or user.email,
            customer_name=payload.name or user.name,
            customer_phone=payload.phone or user.phone,
        )
    except PaymentGatewayError as e:
        logger.error("Top-up invoice %s failed: %s", topup.external_id, e.message)
        topup.status = 'failed'
        db.commit()
        raise HTTPException(status_code=502, detail=f'Gagal membuat pembayaran: {e.message}')

    topup.invoice_id = invoice.get('invoice_id')
    topup.payment_url = invoice.get('invoice_url')
    db.commit()
    db.refresh(topup)
    logger.info("Top-up %s pending for user %s (%s)", topup.external_id, user.id, topup.amount)
    return {
        "success": True,
        "data": {
            "topup": wallet_schemas.Topup.model_validate(topup),
            "payment": donation_schemas.Payment(**invoice),
        },
    }


@router.get("/api/users/{user_id}/topups")
def list_topups(user_id: str, db: Session = Depends(get_db)):
    Topup = wallet_models.WalletTopup
    items = db.query(Topup).filter(Topup.user_id == user_id).order_by(Topup.created_at.desc()).all()
    return {"success": True, "data": [wallet_schemas.Topup.model_validate(t) for t in items]}

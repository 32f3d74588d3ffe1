"""
API endpoints for donations: gateway checkout, wallet payments and listings
"""
import datetime
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from . import campaign_models, donation_models, donation_schemas, user_models
from . import payments
from .database import get_db
from .errors import PaymentGatewayError
from .notifications import push_notification
from .reconciliation import credit_campaign, CREDITED
from .utils import external_ref, format_rupiah

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/donations", tags=["Donations"])

ANONYMOUS_NAME = 'Hamba Allah'
UNNAMED = 'Anonim'
CLOSED_CAMPAIGN_STATUSES = ('completed', 'rejected')


def _open_campaign_or_404(db: Session, campaign_id: str) -> campaign_models.Campaign:
    campaign = db.query(campaign_models.Campaign).filter(campaign_models.Campaign.id == campaign_id).first()
    if not campaign:
        raise HTTPException(status_code=404, detail='Campaign not found')
    if campaign.status in CLOSED_CAMPAIGN_STATUSES:
        raise HTTPException(status_code=400, detail='Campaign sudah tidak menerima donasi')
    return campaign


def donor_display_name(is_anonymous: bool, name: Optional[str]) -> str:
    if is_anonymous:
        return ANONYMOUS_NAME
    return (name or '').strip() or UNNAMED


@router.post("", status_code=201)
def create_donation(payload: donation_schemas.DonationCreate, db: Session = Depends(get_db)):
    """Record a pending donation and open a gateway invoice for it."""
    campaign = _open_campaign_or_404(db, payload.campaign_id)

    donation = donation_models.Donation(
        campaign_id=campaign.id,
        user_id=payload.user_id,
        amount=payload.amount,
        donor_name=donor_display_name(payload.is_anonymous, payload.name),
        donor_email=payload.email,
        donor_phone=payload.phone,
        message=payload.message,
        is_anonymous=payload.is_anonymous,
        payment_method=payload.payment_method,
        status='pending',
        external_id=external_ref('DON'),
    )
    db.add(donation)
    db.commit()
    db.refresh(donation)

    try:
        invoice = payments.create_invoice(
            external_id=donation.external_id,
            amount=donation.amount,
            description=f'Donasi untuk {campaign.title}',
            payer_email=payload.email,
            customer_name=donation.donor_name,
            customer_phone=payload.phone,
        )
    except PaymentGatewayError as e:
        logger.error("Invoice for %s failed: %s", donation.external_id, e.message)
        donation.status = 'failed'
        db.commit()
        raise HTTPException(status_code=502, detail=f'Gagal membuat pembayaran: {e.message}')

    donation.invoice_id = invoice.get('invoice_id')
    donation.payment_url = invoice.get('invoice_url')
    db.commit()
    db.refresh(donation)
    logger.info("Donation %s pending (%s via %s)", donation.external_id, donation.amount, invoice['gateway'])
    return {
        "success": True,
        "data": {
            "donation": donation_schemas.Donation.model_validate(donation),
            "payment": donation_schemas.Payment(**invoice),
        },
        "message": "Donation created, awaiting payment",
    }


@router.post("/pay-with-wallet", status_code=201)
def pay_with_wallet(payload: donation_schemas.WalletDonationCreate, db: Session = Depends(get_db)):
    """Donate straight from the wallet balance; the donation is paid immediately."""
    user = db.query(user_models.User).filter(user_models.User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail='User not found')
    campaign = _open_campaign_or_404(db, payload.campaign_id)
    if (user.balance or 0) < payload.amount:
        raise HTTPException(status_code=400, detail='Saldo Kantong Donasi tidak mencukupi')

    user.balance = (user.balance or 0) - payload.amount
    donation = donation_models.Donation(
        campaign_id=campaign.id,
        user_id=user.id,
        amount=payload.amount,
        donor_name=donor_display_name(payload.is_anonymous, payload.name or user.name),
        donor_email=payload.email or user.email,
        donor_phone=payload.phone or user.phone,
        message=payload.message,
        is_anonymous=payload.is_anonymous,
        payment_method='wallet',
        payment_channel='KANTONG_DONASI',
        status='paid',
        external_id=external_ref('WAL'),
        paid_at=datetime.datetime.utcnow(),
    )
    db.add(donation)
    credit_campaign(db, campaign.id, payload.amount)
    push_notification(db, user.id, 'Donasi Berhasil',
                      f'Donasi sebesar {format_rupiah(payload.amount)} untuk "{campaign.title}" '
                      f'dibayar dengan Kantong Donasi.', 'donation')
    db.commit()
    db.refresh(donation)
    db.refresh(user)
    logger.info("Wallet donation %s by user %s (%s)", donation.id, user.id, payload.amount)
    return {
        "success": True,
        "data": {
            "donation": donation_schemas.Donation.model_validate(donation),
            "balance": user.balance,
        },
        "message": "Donasi berhasil dibayar dengan Kantong Donasi",
    }


@router.get("")
def list_donations(
    status: Optional[str] = None,
    campaign_id: Optional[str] = Query(None, alias="campaignId"),
    limit: int = Query(100, le=500),
    offset: int = 0,
    db: Session = Depends(get_db)
):
    Donation = donation_models.Donation
    q = db.query(Donation)
    if status:
        q = q.filter(Donation.status == status)
    if campaign_id:
        q = q.filter(Donation.campaign_id == campaign_id)
    items = q.order_by(Donation.created_at.desc()).offset(offset).limit(limit).all()
    return {"success": True, "data": [donation_schemas.Donation.model_validate(d) for d in items]}


@router.get("/campaign/{campaign_id}")
def list_campaign_donations(campaign_id: str, limit: int = Query(50, le=500), db: Session = Depends(get_db)):
    """Public donor wall: completed donations only."""
    Donation = donation_models.Donation
    items = db.query(Donation).filter(
        Donation.campaign_id == campaign_id,
        Donation.status.in_(CREDITED)
    ).order_by(Donation.created_at.desc()).limit(limit).all()
    return {"success": True, "data": [donation_schemas.Donation.model_validate(d) for d in items]}


@router.get("/user/{user_id}")
def list_donations_by_user(user_id: str, db: Session = Depends(get_db)):
    Donation = donation_models.Donation
    items = db.query(Donation).filter(Donation.user_id == user_id).order_by(Donation.created_at.desc()).all()
    return {"success": True, "data": [donation_schemas.Donation.model_validate(d) for d in items]}


@router.get("/{donation_id}")
def get_donation(donation_id: str, db: Session = Depends(get_db)):
    """Look a donation up by id or by its gateway reference (DON-XXXXXXXX)."""
    Donation = donation_models.Donation
    donation = db.query(Donation).filter(Donation.id == donation_id).first()
    if not donation:
        donation = db.query(Donation).filter(Donation.external_id == donation_id).first()
    if not donation:
        raise HTTPException(status_code=404, detail='Donation not found')
    return {"success": True, "data": donation_schemas.Donation.model_validate(donation)}

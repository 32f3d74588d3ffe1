"""
Auto-donate schedules ("Donasi Otomatis") paid from the wallet balance
"""
import calendar
import datetime
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from . import campaign_models, recurring_models, recurring_schemas, user_models
from .database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recurring-donations", tags=["Recurring donations"])


def add_months(dt: datetime.datetime, months: int) -> datetime.datetime:
    """Jan 31 + 1 month -> Feb 28/29."""
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def next_run(frequency: str, now: datetime.datetime) -> datetime.datetime:
    if frequency == 'minute':
        return now + datetime.timedelta(minutes=1)
    if frequency == 'daily':
        return now + datetime.timedelta(days=1)
    if frequency == 'weekly':
        return now + datetime.timedelta(days=7)
    return add_months(now, 1)


def _to_schema(rd, campaign=None) -> recurring_schemas.RecurringDonation:
    out = recurring_schemas.RecurringDonation.model_validate(rd)
    if campaign is not None:
        out.campaign_title = campaign.title
    return out


def _get_or_404(db: Session, recurring_id: str) -> recurring_models.RecurringDonation:
    rd = db.query(recurring_models.RecurringDonation).filter(
        recurring_models.RecurringDonation.id == recurring_id).first()
    if not rd:
        raise HTTPException(status_code=404, detail='Recurring donation not found')
    return rd


def _campaign_or_404(db: Session, campaign_id: str) -> campaign_models.Campaign:
    campaign = db.query(campaign_models.Campaign).filter(campaign_models.Campaign.id == campaign_id).first()
    if not campaign:
        raise HTTPException(status_code=404, detail='Campaign not found')
    return campaign


@router.get("")
def list_recurring(user_id: Optional[str] = Query(None, alias="userId"), db: Session = Depends(get_db)):
    RD = recurring_models.RecurringDonation
    q = db.query(RD, campaign_models.Campaign).outerjoin(
        campaign_models.Campaign, campaign_models.Campaign.id == RD.campaign_id)
    if user_id:
        q = q.filter(RD.user_id == user_id)
    rows = q.order_by(RD.created_at.desc()).all()
    return {"success": True, "data": [_to_schema(rd, c) for rd, c in rows]}


@router.post("", status_code=201)
def create_recurring(payload: recurring_schemas.RecurringDonationCreate, db: Session = Depends(get_db)):
    """The first run is due immediately; the scheduler picks it up on its next pass."""
    if not db.query(user_models.User).filter(user_models.User.id == payload.user_id).first():
        raise HTTPException(status_code=404, detail='User not found')
    campaign = _campaign_or_404(db, payload.campaign_id)

    rd = recurring_models.RecurringDonation(
        user_id=payload.user_id,
        campaign_id=campaign.id,
        amount=payload.amount,
        frequency=payload.frequency,
        is_active=payload.is_active,
        next_execution_at=datetime.datetime.utcnow(),
    )
    db.add(rd)
    db.commit()
    db.refresh(rd)
    logger.info("Recurring donation %s (%s %s) created for user %s", rd.id, rd.frequency, rd.amount, rd.user_id)
    return {"success": True, "data": _to_schema(rd, campaign)}


@router.put("/{recurring_id}")
def update_recurring(recurring_id: str, payload: recurring_schemas.RecurringDonationUpdate,
                     db: Session = Depends(get_db)):
    rd = _get_or_404(db, recurring_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get('campaign_id'):
        _campaign_or_404(db, data['campaign_id'])
    # Re-activating a paused schedule makes it due again.
    if data.get('is_active') and not rd.is_active:
        rd.next_execution_at = datetime.datetime.utcnow()
    for key, value in data.items():
        if value is not None:
            setattr(rd, key, value)
    db.commit()
    db.refresh(rd)
    return {"success": True, "data": _to_schema(rd)}


@router.delete("/{recurring_id}")
def delete_recurring(recurring_id: str, db: Session = Depends(get_db)):
    rd = _get_or_404(db, recurring_id)
    db.delete(rd)
    db.commit()
    return {"success": True, "message": "Recurring donation deleted"}

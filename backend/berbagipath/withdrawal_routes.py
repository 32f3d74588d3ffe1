"""
Organizer payout requests and the admin payout queue
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import case, func
from sqlalchemy.orm import Session
from typing import Optional

from . import campaign_models, user_models, withdrawal_models, withdrawal_schemas
from .database import get_db
from .notifications import push_notification
from .schemas import ActionRequest
from .security import require_admin_key
from .utils import format_rupiah

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/withdrawals", tags=["Withdrawals"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])

# Money already spoken for; rejected requests release their amount.
RESERVED_STATUSES = ('pending', 'approved', 'completed')
ACTIONS = {'approve': 'approved', 'reject': 'rejected', 'complete': 'completed'}


def available_balance(db: Session, campaign: campaign_models.Campaign) -> float:
    Withdrawal = withdrawal_models.Withdrawal
    reserved = db.query(func.coalesce(func.sum(Withdrawal.amount), 0)).filter(
        Withdrawal.campaign_id == campaign.id,
        Withdrawal.status.in_(RESERVED_STATUSES)
    ).scalar()
    return (campaign.current_amount or 0) - float(reserved or 0)


def _to_schema(w, campaign=None, user=None) -> withdrawal_schemas.Withdrawal:
    out = withdrawal_schemas.Withdrawal.model_validate(w)
    if campaign is not None:
        out.campaign_title = campaign.title
    if user is not None:
        out.organizer_name = user.name
        out.organizer_email = user.email
    return out


@router.post("", status_code=201)
def create_withdrawal(payload: withdrawal_schemas.WithdrawalCreate, db: Session = Depends(get_db)):
    campaign = db.query(campaign_models.Campaign).filter(campaign_models.Campaign.id == payload.campaign_id).first()
    if not campaign:
        raise HTTPException(status_code=404, detail='Campaign not found')
    if campaign.organizer_id != payload.user_id:
        raise HTTPException(status_code=403, detail='Anda bukan penggalang dana campaign ini')

    available = available_balance(db, campaign)
    if payload.amount > available:
        raise HTTPException(status_code=400,
                            detail=f'Jumlah melebihi saldo yang dapat dicairkan ({format_rupiah(available)})')

    withdrawal = withdrawal_models.Withdrawal(
        campaign_id=campaign.id,
        user_id=payload.user_id,
        amount=payload.amount,
        bank_name=payload.bank_name,
        account_number=payload.account_number,
        account_holder=payload.account_holder,
        status='pending',
    )
    db.add(withdrawal)
    db.commit()
    db.refresh(withdrawal)
    logger.info("Withdrawal %s requested for campaign %s (%s)", withdrawal.id, campaign.id, payload.amount)
    return {"success": True, "data": _to_schema(withdrawal, campaign),
            "message": "Permintaan pencairan dana berhasil dikirim"}


@router.get("")
def list_withdrawals(
    user_id: Optional[str] = Query(None, alias="userId"),
    campaign_id: Optional[str] = Query(None, alias="campaignId"),
    db: Session = Depends(get_db)
):
    Withdrawal = withdrawal_models.Withdrawal
    q = db.query(Withdrawal, campaign_models.Campaign).outerjoin(
        campaign_models.Campaign, campaign_models.Campaign.id == Withdrawal.campaign_id)
    if user_id:
        q = q.filter(Withdrawal.user_id == user_id)
    if campaign_id:
        q = q.filter(Withdrawal.campaign_id == campaign_id)
    rows = q.order_by(Withdrawal.created_at.desc()).all()
    return {"success": True, "data": [_to_schema(w, c) for w, c in rows]}


@admin_router.get("/withdrawals")
def admin_list_withdrawals(db: Session = Depends(get_db)):
    """Payout queue: pending first, then approved, completed, rejected; oldest first within each."""
    Withdrawal = withdrawal_models.Withdrawal
    status_rank = case(
        (Withdrawal.status == 'pending', 0),
        (Withdrawal.status == 'approved', 1),
        (Withdrawal.status == 'completed', 2),
        (Withdrawal.status == 'rejected', 3),
        else_=4,
    )
    rows = db.query(Withdrawal, campaign_models.Campaign, user_models.User).outerjoin(
        campaign_models.Campaign, campaign_models.Campaign.id == Withdrawal.campaign_id
    ).outerjoin(
        user_models.User, user_models.User.id == Withdrawal.user_id
    ).order_by(status_rank, Withdrawal.created_at.asc()).all()
    return {"success": True, "data": [_to_schema(w, c, u) for w, c, u in rows]}


@admin_router.post("/withdrawals/{withdrawal_id}/action")
def admin_withdrawal_action(withdrawal_id: str, payload: ActionRequest, db: Session = Depends(get_db)):
    new_status = ACTIONS.get(payload.action)
    if not new_status:
        raise HTTPException(status_code=400, detail=f'Invalid action: {payload.action}')
    withdrawal = db.query(withdrawal_models.Withdrawal).filter(
        withdrawal_models.Withdrawal.id == withdrawal_id).first()
    if not withdrawal:
        raise HTTPException(status_code=404, detail='Withdrawal not found')
    if withdrawal.status == new_status:
        raise HTTPException(status_code=400, detail=f'Withdrawal is already {new_status}')

    withdrawal.status = new_status
    note = payload.note or payload.reason
    # each action replaces the previous note
    withdrawal.admin_note = note or None
    titles = {
        'approved': 'Pencairan Disetujui',
        'rejected': 'Pencairan Ditolak',
        'completed': 'Dana Telah Dicairkan',
    }
    message = f'Permintaan pencairan {format_rupiah(withdrawal.amount)} berstatus {new_status}.'
    if note:
        message += f' Catatan: {note}'
    push_notification(db, withdrawal.user_id, titles[new_status], message, 'withdrawal')
    db.commit()
    db.refresh(withdrawal)
    logger.info("Withdrawal %s -> %s", withdrawal.id, new_status)
    return {"success": True, "data": _to_schema(withdrawal)}

"""
Organizer verification (KYC) requests
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from . import user_models, verification_models, verification_schemas
from .database import get_db
from .notifications import push_notification
from .schemas import ActionRequest
from .security import require_admin_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/verification", tags=["Verification"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])

DEFAULT_REJECTION_REASON = 'Data tidak valid'


@router.get("")
def get_latest_verification(user_id: Optional[str] = Query(None, alias="userId"), db: Session = Depends(get_db)):
    if not user_id:
        raise HTTPException(status_code=400, detail='userId is required')
    VR = verification_models.VerificationRequest
    row = db.query(VR).filter(VR.user_id == user_id).order_by(VR.created_at.desc()).first()
    return {"success": True, "data": verification_schemas.Verification.from_row(row) if row else None}


@router.post("", status_code=201)
def submit_verification(payload: verification_schemas.VerificationCreate, db: Session = Depends(get_db)):
    user = db.query(user_models.User).filter(user_models.User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail='User not found')
    VR = verification_models.VerificationRequest
    pending = db.query(VR).filter(VR.user_id == payload.user_id, VR.status == 'pending').first()
    if pending:
        raise HTTPException(status_code=400, detail='Anda sudah memiliki pengajuan verifikasi yang sedang diproses')

    row = VR(
        user_id=payload.user_id,
        ktp_image_url=payload.ktp_url,
        selfie_image_url=payload.selfie_url,
        bank_name=payload.bank_name,
        bank_account_number=payload.account_number,
        bank_account_holder=payload.account_holder,
        status='pending',
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Verification request %s submitted by %s", row.id, user.id)
    return {"success": True, "data": verification_schemas.Verification.from_row(row, user),
            "message": "Pengajuan verifikasi berhasil dikirim"}


@admin_router.get("/verifications")
def admin_list_verifications(db: Session = Depends(get_db)):
    VR = verification_models.VerificationRequest
    rows = db.query(VR, user_models.User).outerjoin(
        user_models.User, user_models.User.id == VR.user_id
    ).filter(VR.status == 'pending').order_by(VR.created_at.asc()).all()
    return {"success": True, "data": [verification_schemas.Verification.from_row(r, u) for r, u in rows]}


@admin_router.post("/verifications/{request_id}/action")
def admin_verification_action(request_id: str, payload: ActionRequest, db: Session = Depends(get_db)):
    if payload.action not in ('approve', 'reject'):
        raise HTTPException(status_code=400, detail=f'Invalid action: {payload.action}')
    VR = verification_models.VerificationRequest
    row = db.query(VR).filter(VR.id == request_id).first()
    if not row:
        raise HTTPException(status_code=404, detail='Verification request not found')
    if row.status != 'pending':
        raise HTTPException(status_code=400, detail=f'Request already {row.status}')

    user = db.query(user_models.User).filter(user_models.User.id == row.user_id).first()
    if payload.action == 'approve':
        row.status = 'approved'
        if user:
            user.is_verified = True
            if user.role not in ('admin', 'staff'):
                user.role = 'organizer'
        push_notification(db, row.user_id, 'Verifikasi Disetujui',
                          'Selamat! Akun Anda telah terverifikasi. Anda sekarang dapat membuat campaign.',
                          'verification')
    else:
        row.status = 'rejected'
        row.rejection_reason = payload.reason or payload.note or DEFAULT_REJECTION_REASON
        push_notification(db, row.user_id, 'Verifikasi Ditolak',
                          f'Pengajuan verifikasi Anda ditolak. Alasan: {row.rejection_reason}',
                          'verification')
    db.commit()
    db.refresh(row)
    logger.info("Verification %s -> %s", row.id, row.status)
    return {"success": True, "data": verification_schemas.Verification.from_row(row, user)}

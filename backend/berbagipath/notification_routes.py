"""
User inbox and the admin task list
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from . import (campaign_models, notification_models, notification_schemas, report_models,
               verification_models, withdrawal_models)
from .database import get_db
from .security import require_admin_key

router = APIRouter(tags=["Notifications"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])


@router.get("/api/users/{user_id}/notifications")
def list_notifications(user_id: str, limit: int = Query(50, le=500), db: Session = Depends(get_db)):
    N = notification_models.Notification
    items = db.query(N).filter(N.user_id == user_id).order_by(N.created_at.desc()).limit(limit).all()
    unread = db.query(N).filter(N.user_id == user_id, N.is_read.is_(False)).count()
    return {"success": True, "data": [notification_schemas.Notification.model_validate(n) for n in items],
            "unreadCount": unread}


@router.put("/api/notifications/{notification_id}/read")
def mark_read(notification_id: str, db: Session = Depends(get_db)):
    n = db.query(notification_models.Notification).filter(
        notification_models.Notification.id == notification_id).first()
    if not n:
        raise HTTPException(status_code=404, detail='Notification not found')
    n.is_read = True
    db.commit()
    db.refresh(n)
    return {"success": True, "data": notification_schemas.Notification.model_validate(n)}


@router.put("/api/users/{user_id}/notifications/read-all")
def mark_all_read(user_id: str, db: Session = Depends(get_db)):
    N = notification_models.Notification
    updated = db.query(N).filter(N.user_id == user_id, N.is_read.is_(False)).update(
        {N.is_read: True}, synchronize_session=False)
    db.commit()
    return {"success": True, "updated": updated}


@admin_router.get("/notifications")
def admin_tasks(db: Session = Depends(get_db)):
    """Counts of back-office items waiting for an admin, one entry per non-empty queue."""
    queues = [
        (db.query(campaign_models.Campaign).filter(campaign_models.Campaign.status == 'pending').count(),
         'warning', 'Campaign Baru', 'campaign menunggu persetujuan', '/admin/campaigns?status=pending'),
        (db.query(verification_models.VerificationRequest).filter(
            verification_models.VerificationRequest.status == 'pending').count(),
         'info', 'Verifikasi Akun', 'pengajuan verifikasi menunggu review', '/admin/verifications'),
        (db.query(withdrawal_models.Withdrawal).filter(withdrawal_models.Withdrawal.status == 'pending').count(),
         'alert', 'Pencairan Dana', 'permintaan pencairan dana menunggu', '/admin/withdrawals'),
        (db.query(report_models.Report).filter(report_models.Report.status == 'pending').count(),
         'alert', 'Laporan Masuk', 'laporan campaign belum ditinjau', '/admin/reports'),
    ]
    tasks = [
        notification_schemas.AdminTask(type=type_, title=title, message=f'{count} {message}', href=href, count=count)
        for count, type_, title, message, href in queues if count
    ]
    return {"success": True, "data": tasks}

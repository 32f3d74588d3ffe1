"""
Campaign abuse reports
"""
import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import case
from sqlalchemy.orm import Session

from . import campaign_models, report_models, report_schemas, user_models
from .database import get_db
from .schemas import ActionRequest
from .security import require_admin_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Reports"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])

ACTIONS = {'resolve': 'resolved', 'dismiss': 'dismissed'}


def _to_schema(report, campaign=None, user=None) -> report_schemas.Report:
    out = report_schemas.Report.model_validate(report)
    if campaign is not None:
        out.campaign_title = campaign.title
    out.reporter_name = user.name if user is not None else 'Anonim'
    return out


@router.post("", status_code=201)
def create_report(payload: report_schemas.ReportCreate, db: Session = Depends(get_db)):
    campaign = db.query(campaign_models.Campaign).filter(campaign_models.Campaign.id == payload.campaign_id).first()
    if not campaign:
        raise HTTPException(status_code=404, detail='Campaign not found')
    report = report_models.Report(
        campaign_id=campaign.id,
        user_id=payload.user_id or 'anonymous',
        reason=payload.reason,
        description=payload.description,
        status='pending',
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Report %s filed against campaign %s", report.id, campaign.id)
    return {"success": True, "data": _to_schema(report, campaign),
            "message": "Laporan berhasil dikirim. Terima kasih atas kepedulian Anda."}


@admin_router.get("/reports")
def admin_list_reports(db: Session = Depends(get_db)):
    Report = report_models.Report
    status_rank = case(
        (Report.status == 'pending', 0),
        (Report.status == 'resolved', 1),
        (Report.status == 'dismissed', 2),
        else_=3,
    )
    rows = db.query(Report, campaign_models.Campaign, user_models.User).outerjoin(
        campaign_models.Campaign, campaign_models.Campaign.id == Report.campaign_id
    ).outerjoin(
        user_models.User, user_models.User.id == Report.user_id
    ).order_by(status_rank, Report.created_at.desc()).all()
    return {"success": True, "data": [_to_schema(r, c, u) for r, c, u in rows]}


@admin_router.post("/reports/{report_id}/action")
def admin_report_action(report_id: str, payload: ActionRequest, db: Session = Depends(get_db)):
    new_status = ACTIONS.get(payload.action)
    if not new_status:
        raise HTTPException(status_code=400, detail=f'Invalid action: {payload.action}')
    report = db.query(report_models.Report).filter(report_models.Report.id == report_id).first()
    if not report:
        raise HTTPException(status_code=404, detail='Report not found')
    report.status = new_status
    db.commit()
    db.refresh(report)
    logger.info("Report %s -> %s", report.id, new_status)
    return {"success": True, "data": _to_schema(report)}

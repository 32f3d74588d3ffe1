"""
Scheduler entry points (hit by an external cron, e.g. every minute/day).

    /api/cron/process-recurring  executes due auto-donate schedules
    /api/cron/daily              closes expired campaigns, then runs the above
"""
import datetime
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from . import campaign_models, donation_models, recurring_models, user_models
from .database import get_db
from .donation_routes import CLOSED_CAMPAIGN_STATUSES
from .notifications import push_notification
from .reconciliation import credit_campaign
from .recurring_routes import next_run
from .security import require_cron_secret
from .utils import external_ref, format_rupiah

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cron", tags=["Cron"], dependencies=[Depends(require_cron_secret)])


def process_due_recurring(db: Session, now: Optional[datetime.datetime] = None) -> list:
    """Charge every active schedule whose next run is due. Each schedule is committed on its own.
    Schedules for completed or rejected campaigns are left alone."""
    now = now or datetime.datetime.utcnow()
    RD = recurring_models.RecurringDonation
    due = db.query(RD, user_models.User, campaign_models.Campaign).join(
        user_models.User, user_models.User.id == RD.user_id
    ).join(
        campaign_models.Campaign, campaign_models.Campaign.id == RD.campaign_id
    ).filter(
        RD.is_active.is_(True),
        campaign_models.Campaign.status.notin_(CLOSED_CAMPAIGN_STATUSES),
        (RD.next_execution_at <= now) | (RD.next_execution_at.is_(None))
    ).all()

    results = []
    for rd, user, campaign in due:
        amount = rd.amount
        if (user.balance or 0) >= amount:
            user.balance = (user.balance or 0) - amount
            db.add(donation_models.Donation(
                campaign_id=campaign.id,
                user_id=user.id,
                amount=amount,
                donor_name=user.name,
                donor_email=user.email,
                payment_method='wallet',
                payment_channel='AUTO_DONATE',
                status='paid',
                external_id=external_ref('AUTO'),
                paid_at=now,
            ))
            credit_campaign(db, campaign.id, amount)
            rd.last_executed_at = now
            rd.next_execution_at = next_run(rd.frequency, now)
            push_notification(db, user.id, 'Donasi Otomatis Berhasil',
                              f'Donasi otomatis {format_rupiah(amount)} untuk "{campaign.title}" '
                              f'telah berhasil dipotong dari saldomu.')
            results.append({"id": rd.id, "status": "success", "campaign": campaign.title})
        else:
            push_notification(db, user.id, 'Gagal Donasi Otomatis',
                              f'Donasi otomatis untuk "{campaign.title}" gagal karena saldo tidak mencukupi '
                              f'({format_rupiah(amount)}). Silakan top up saldo Kantong Donasimu.')
            # retry tomorrow instead of notifying on every pass
            rd.next_execution_at = now + datetime.timedelta(days=1)
            results.append({"id": rd.id, "status": "failed_insufficient_balance", "campaign": campaign.title})
        db.commit()

    logger.info("Processed %d recurring donations", len(results))
    return results


def close_expired_campaigns(db: Session, now: Optional[datetime.datetime] = None) -> list:
    now = now or datetime.datetime.utcnow()
    Campaign = campaign_models.Campaign
    expired = db.query(Campaign).filter(Campaign.status == 'active', Campaign.end_date < now).all()
    for campaign in expired:
        campaign.status = 'completed'
    db.commit()
    if expired:
        logger.info("Closed %d expired campaigns", len(expired))
    return [c.title for c in expired]


@router.api_route("/process-recurring", methods=["GET", "POST"])
def run_recurring(db: Session = Depends(get_db)):
    results = process_due_recurring(db)
    return {"success": True, "processedCount": len(results), "details": results}


@router.api_route("/daily", methods=["GET", "POST"])
def run_daily(db: Session = Depends(get_db)):
    closed = close_expired_campaigns(db)
    logs = [f"Updated {len(closed)} campaigns to completed: {', '.join(closed)}" if closed
            else 'No expired campaigns found.']
    results = process_due_recurring(db)
    logs.append(f"Processed {len(results)} recurring donations.")
    return {"success": True, "logs": logs, "details": results}

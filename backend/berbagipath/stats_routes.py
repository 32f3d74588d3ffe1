from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import campaign_models, donation_models, user_models
from .database import get_db
from .reconciliation import CREDITED

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("")
def get_stats(db: Session = Depends(get_db)):
    """Homepage / admin dashboard counters."""
    Donation = donation_models.Donation
    Campaign = campaign_models.Campaign
    paid = db.query(Donation).filter(Donation.status.in_(CREDITED))
    total_donations = paid.with_entities(func.coalesce(func.sum(Donation.amount), 0)).scalar()
    # guests without an email count once per donation
    donor_key = func.coalesce(Donation.user_id, Donation.donor_email, Donation.id)
    total_donors = paid.with_entities(func.count(func.distinct(donor_key))).scalar()
    return {
        "success": True,
        "data": {
            "totalDonations": float(total_donations or 0),
            "totalDonors": total_donors or 0,
            "totalCampaigns": db.query(Campaign).count(),
            "activeCampaigns": db.query(Campaign).filter(Campaign.status == 'active').count(),
            "pendingCampaigns": db.query(Campaign).filter(Campaign.status == 'pending').count(),
            "totalUsers": db.query(user_models.User).count(),
        },
    }

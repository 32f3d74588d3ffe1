"""
API endpoints for fundraising campaigns
"""
import datetime
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from . import campaign_models, campaign_schemas, category_models, user_models
from .database import get_db
from .utils import unique_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["Campaigns"])

CAMPAIGN_STATUSES = {'pending', 'active', 'completed', 'rejected'}
DEFAULT_CATEGORY = 'social'


def get_campaign_or_404(db: Session, key: str) -> campaign_models.Campaign:
    """Look a campaign up by id, falling back to its slug."""
    Campaign = campaign_models.Campaign
    campaign = db.query(Campaign).filter(Campaign.id == key).first()
    if not campaign:
        campaign = db.query(Campaign).filter(Campaign.slug == key).first()
    if not campaign:
        raise HTTPException(status_code=404, detail='Campaign not found')
    return campaign


def _check_category(db: Session, category_id: Optional[str]):
    if category_id and not db.query(category_models.Category).filter(
            category_models.Category.id == category_id).first():
        raise HTTPException(status_code=400, detail='Kategori tidak ditemukan')


def _check_status(status: Optional[str]):
    if status is not None and status not in CAMPAIGN_STATUSES:
        raise HTTPException(status_code=400, detail=f'Invalid status: {status}')


@router.get("")
def list_campaigns(
    status: Optional[str] = None,
    category: Optional[str] = None,
    organizer_id: Optional[str] = Query(None, alias="organizerId"),
    search: Optional[str] = None,
    limit: int = Query(100, le=500),
    offset: int = 0,
    db: Session = Depends(get_db)
):
    Campaign = campaign_models.Campaign
    q = db.query(Campaign)
    if status:
        q = q.filter(Campaign.status == status)
    if category:
        q = q.filter(Campaign.category_id == category)
    if organizer_id:
        q = q.filter(Campaign.organizer_id == organizer_id)
    if search:
        like = f"%{search}%"
        q = q.filter(or_(Campaign.title.like(like), Campaign.description.like(like)))
    items = q.order_by(Campaign.is_urgent.desc(), Campaign.created_at.desc()).offset(offset).limit(limit).all()
    return {"success": True, "data": [campaign_schemas.Campaign.model_validate(c) for c in items]}


@router.get("/{campaign_id}")
def get_campaign(campaign_id: str, db: Session = Depends(get_db)):
    campaign = get_campaign_or_404(db, campaign_id)
    return {"success": True, "data": campaign_schemas.Campaign.model_validate(campaign)}


@router.post("", status_code=201)
def create_campaign(payload: campaign_schemas.CampaignCreate, db: Session = Depends(get_db)):
    """Organizers must be verified; their campaigns wait for admin approval."""
    _check_status(payload.status)
    category_id = payload.category_id or payload.category
    if category_id:
        _check_category(db, category_id)
    elif db.query(category_models.Category).filter(category_models.Category.id == DEFAULT_CATEGORY).first():
        category_id = DEFAULT_CATEGORY

    if payload.organizer_id:
        organizer = db.query(user_models.User).filter(user_models.User.id == payload.organizer_id).first()
        if not organizer:
            raise HTTPException(status_code=404, detail='Organizer not found')
        if not organizer.is_verified and organizer.role not in ('admin', 'staff'):
            raise HTTPException(status_code=403, detail='Akun belum terverifikasi sebagai penggalang dana')

    now = datetime.datetime.utcnow()
    campaign = campaign_models.Campaign(
        slug=unique_slug(db, campaign_models.Campaign, payload.title),
        title=payload.title,
        description=payload.description,
        story=payload.story,
        category_id=category_id,
        organizer_id=payload.organizer_id,
        image_url=payload.image_url or payload.image,
        target_amount=payload.target_amount,
        current_amount=0,
        donor_count=0,
        start_date=now,
        end_date=now + datetime.timedelta(days=payload.days_to_run),
        is_urgent=payload.is_urgent,
        is_verified=payload.is_verified,
        status=payload.status or 'pending',
    )
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    logger.info("Campaign %s created (%s)", campaign.id, campaign.status)
    return {"success": True, "data": campaign_schemas.Campaign.model_validate(campaign),
            "message": "Campaign created successfully"}


@router.put("/{campaign_id}")
def update_campaign(campaign_id: str, payload: campaign_schemas.CampaignUpdate, db: Session = Depends(get_db)):
    campaign = get_campaign_or_404(db, campaign_id)
    data = payload.model_dump(exclude_unset=True)

    _check_status(data.get('status'))
    category = data.pop('category', None)
    if category and not data.get('category_id'):
        data['category_id'] = category
    if data.get('category_id'):
        _check_category(db, data['category_id'])
    image = data.pop('image', None)
    if image and not data.get('image_url'):
        data['image_url'] = image
    days_to_run = data.pop('days_to_run', None)
    if days_to_run:
        data['end_date'] = (campaign.start_date or datetime.datetime.utcnow()) + datetime.timedelta(days=days_to_run)

    for key, value in data.items():
        if value is not None:
            setattr(campaign, key, value)
    db.commit()
    db.refresh(campaign)
    return {"success": True, "data": campaign_schemas.Campaign.model_validate(campaign)}


@router.delete("/{campaign_id}")
def delete_campaign(campaign_id: str, db: Session = Depends(get_db)):
    campaign = get_campaign_or_404(db, campaign_id)
    db.delete(campaign)
    db.commit()
    logger.info("Campaign %s deleted", campaign_id)
    return {"success": True, "message": "Campaign deleted successfully"}

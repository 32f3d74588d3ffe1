"""
User management: admin user list/editor, profile reads and the
organizer verification toggle.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from . import user_models, user_schemas, donation_models, donation_schemas
from .database import get_db
from .security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def get_user_or_404(db: Session, user_id: str) -> user_models.User:
    user = db.query(user_models.User).filter(user_models.User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail='User not found')
    return user


@router.get("")
def list_users(
    role: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(100, le=500),
    offset: int = 0,
    db: Session = Depends(get_db)
):
    q = db.query(user_models.User)
    if role:
        q = q.filter(user_models.User.role == role)
    if search:
        like = f"%{search}%"
        q = q.filter(or_(user_models.User.name.like(like), user_models.User.email.like(like)))
    items = q.order_by(user_models.User.created_at.desc()).offset(offset).limit(limit).all()
    return {"success": True, "data": [user_schemas.User.model_validate(u) for u in items]}


@router.post("", status_code=201)
def create_user(payload: user_schemas.UserCreate, db: Session = Depends(get_db)):
    email = payload.email.lower()
    if db.query(user_models.User).filter(user_models.User.email == email).first():
        raise HTTPException(status_code=400, detail='Email sudah terdaftar')
    user = user_models.User(
        name=payload.name,
        email=email,
        phone=payload.phone,
        role=payload.role,
        is_verified=payload.is_verified,
        avatar_url=payload.avatar_url,
        password_hash=hash_password(payload.password) if payload.password else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return {"success": True, "data": user_schemas.User.model_validate(user)}


@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    return {"success": True, "data": user_schemas.User.model_validate(user)}


@router.put("/{user_id}")
def update_user(user_id: str, payload: user_schemas.UserUpdate, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    data = payload.model_dump(exclude_unset=True)

    password = data.pop('password', None)
    if password:
        user.password_hash = hash_password(password)
    if data.get('email'):
        email = data['email'].lower()
        clash = db.query(user_models.User).filter(
            user_models.User.email == email,
            user_models.User.id != user.id
        ).first()
        if clash:
            raise HTTPException(status_code=400, detail='Email sudah terdaftar')
        data['email'] = email
    for key, value in data.items():
        if value is not None:
            setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return {"success": True, "data": user_schemas.User.model_validate(user)}


@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s", user_id)
    return {"success": True, "message": "User deleted"}


@router.put("/{user_id}/verify")
def toggle_user_verified(user_id: str, db: Session = Depends(get_db)):
    """Flip the user's verified badge."""
    user = get_user_or_404(db, user_id)
    user.is_verified = not bool(user.is_verified)
    db.commit()
    db.refresh(user)
    return {"success": True, "data": user_schemas.User.model_validate(user)}


@router.get("/{user_id}/donations")
def list_user_donations(user_id: str, db: Session = Depends(get_db)):
    get_user_or_404(db, user_id)
    items = db.query(donation_models.Donation).filter(
        donation_models.Donation.user_id == user_id
    ).order_by(donation_models.Donation.created_at.desc()).all()
    return {"success": True, "data": [donation_schemas.Donation.model_validate(d) for d in items]}

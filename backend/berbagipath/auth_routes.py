import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from . import user_models, user_schemas
from .database import get_db
from .security import hash_password, verify_password, new_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register(payload: user_schemas.RegisterRequest, db: Session = Depends(get_db)):
    email = payload.email.lower()
    existing = db.query(user_models.User).filter(user_models.User.email == email).first()
    if existing:
        raise HTTPException(status_code=400, detail='Email sudah terdaftar')

    user = user_models.User(
        name=payload.name,
        email=email,
        phone=payload.phone,
        password_hash=hash_password(payload.password),
        role='user',
        is_verified=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return {"success": True, "message": "Registrasi berhasil", "data": user_schemas.User.model_validate(user)}


@router.post("/login")
def login(payload: user_schemas.LoginRequest, db: Session = Depends(get_db)):
    user = db.query(user_models.User).filter(user_models.User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail='Email atau password salah')
    # opaque token for client session storage; no server-side session yet
    return {"success": True, "user": user_schemas.User.model_validate(user), "token": new_session_token()}

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from . import category_models, category_schemas, campaign_models
from .database import get_db
from .utils import slugify

router = APIRouter(prefix="/api/categories", tags=["Categories"])


def get_category_or_404(db: Session, category_id: str):
    category = db.query(category_models.Category).filter(category_models.Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail='Category not found')
    return category


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    items = db.query(category_models.Category).order_by(category_models.Category.name).all()
    return {"success": True, "data": [category_schemas.Category.model_validate(c) for c in items]}


@router.post("", status_code=201)
def create_category(payload: category_schemas.CategoryCreate, db: Session = Depends(get_db)):
    category_id = payload.id or slugify(payload.name)
    if not category_id:
        raise HTTPException(status_code=400, detail='Nama kategori wajib diisi')
    if db.query(category_models.Category).filter(category_models.Category.id == category_id).first():
        raise HTTPException(status_code=400, detail='Kategori sudah ada')
    category = category_models.Category(
        id=category_id,
        name=payload.name,
        slug=payload.slug or slugify(payload.name),
        icon=payload.icon,
        color=payload.color,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return {"success": True, "data": category_schemas.Category.model_validate(category)}


@router.put("/{category_id}")
def update_category(category_id: str, payload: category_schemas.CategoryUpdate, db: Session = Depends(get_db)):
    category = get_category_or_404(db, category_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, key, value)
    db.commit()
    db.refresh(category)
    return {"success": True, "data": category_schemas.Category.model_validate(category)}


@router.delete("/{category_id}")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    category = get_category_or_404(db, category_id)
    in_use = db.query(campaign_models.Campaign).filter(campaign_models.Campaign.category_id == category_id).count()
    if in_use:
        raise HTTPException(status_code=400, detail=f'Kategori masih dipakai oleh {in_use} campaign')
    db.delete(category)
    db.commit()
    return {"success": True, "message": "Category deleted"}

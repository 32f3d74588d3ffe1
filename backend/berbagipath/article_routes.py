from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from . import article_models, article_schemas
from .database import get_db
from .utils import unique_slug

router = APIRouter(prefix="/api/articles", tags=["Articles"])

ARTICLE_STATUSES = ('published', 'draft')


def get_article_or_404(db: Session, key: str) -> article_models.Article:
    Article = article_models.Article
    article = db.query(Article).filter(Article.id == key).first()
    if not article:
        article = db.query(Article).filter(Article.slug == key).first()
    if not article:
        raise HTTPException(status_code=404, detail='Article not found')
    return article


def _check_status(status):
    if status is not None and status not in ARTICLE_STATUSES:
        raise HTTPException(status_code=400, detail=f'Invalid status: {status}')


@router.get("")
def list_articles(limit: int = Query(20, le=500), all: bool = False, db: Session = Depends(get_db)):
    """Published articles, newest first; `all=true` includes drafts (admin)."""
    Article = article_models.Article
    q = db.query(Article)
    if not all:
        q = q.filter(Article.status == 'published')
    items = q.order_by(Article.created_at.desc()).limit(limit).all()
    return {"success": True, "data": [article_schemas.Article.model_validate(a) for a in items]}


@router.get("/{article_id}")
def get_article(article_id: str, db: Session = Depends(get_db)):
    article = get_article_or_404(db, article_id)
    return {"success": True, "data": article_schemas.Article.model_validate(article)}


@router.post("", status_code=201)
def create_article(payload: article_schemas.ArticleCreate, db: Session = Depends(get_db)):
    _check_status(payload.status)
    article = article_models.Article(
        slug=unique_slug(db, article_models.Article, payload.slug or payload.title),
        title=payload.title,
        excerpt=payload.excerpt,
        content=payload.content,
        image_url=payload.image_url or payload.image,
        author_id=payload.author_id,
        status=payload.status,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return {"success": True, "data": article_schemas.Article.model_validate(article)}


@router.put("/{article_id}")
def update_article(article_id: str, payload: article_schemas.ArticleUpdate, db: Session = Depends(get_db)):
    article = get_article_or_404(db, article_id)
    data = payload.model_dump(exclude_unset=True)
    _check_status(data.get('status'))
    image = data.pop('image', None)
    if image and not data.get('image_url'):
        data['image_url'] = image
    slug = data.pop('slug', None)
    if slug:
        article.slug = unique_slug(db, article_models.Article, slug, exclude_id=article.id)
    for key, value in data.items():
        if value is not None:
            setattr(article, key, value)
    db.commit()
    db.refresh(article)
    return {"success": True, "data": article_schemas.Article.model_validate(article)}


@router.delete("/{article_id}")
def delete_article(article_id: str, db: Session = Depends(get_db)):
    article = get_article_or_404(db, article_id)
    db.delete(article)
    db.commit()
    return {"success": True, "message": "Article deleted"}

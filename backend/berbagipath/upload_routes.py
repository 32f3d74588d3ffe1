"""
Image uploads (campaign covers, KTP/selfie photos, article images, category icons).
Files are written under UPLOAD_DIR and served by the app at /uploads.
"""
import logging
import os
import re
import uuid
from pathlib import Path
from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from typing import Optional

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Uploads"])

ALLOWED_EXTS = {'.jpg', '.jpeg', '.png', '.webp', '.gif'}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MiB

ICON_TYPES = {'image/jpeg': '.jpg', 'image/jpg': '.jpg', 'image/png': '.png', 'image/webp': '.webp'}
MAX_ICON_BYTES = 2 * 1024 * 1024  # 2 MiB


def upload_dir() -> Path:
    path = Path(os.getenv('UPLOAD_DIR') or Path(__file__).resolve().parents[1] / 'uploads')
    path.mkdir(parents=True, exist_ok=True)
    return path


def _safe_folder(folder: Optional[str]) -> str:
    """'campaigns/../x' -> 'campaigns-x'; keeps uploads inside UPLOAD_DIR."""
    return re.sub(r'[^a-zA-Z0-9_-]+', '-', folder or '').strip('-')


def _guess_ext(content_type: str) -> str:
    if '/jpeg' in content_type or '/jpg' in content_type:
        return '.jpg'
    if '/png' in content_type:
        return '.png'
    if '/webp' in content_type:
        return '.webp'
    if '/gif' in content_type:
        return '.gif'
    raise HTTPException(status_code=400, detail='Unsupported image type')


def _save(data: bytes, ext: str, folder: str = '') -> str:
    target = upload_dir() / folder if folder else upload_dir()
    target.mkdir(parents=True, exist_ok=True)
    fname = f"{uuid.uuid4().hex}{ext}"
    with open(target / fname, 'wb') as f:
        f.write(data)
    url = f"/uploads/{folder}/{fname}" if folder else f"/uploads/{fname}"
    logger.info("Stored upload %s (%d bytes)", url, len(data))
    return url


@router.post("")
async def upload_image(file: UploadFile = File(...), folder: Optional[str] = Form(None)):
    ct = (file.content_type or '').lower()
    if not ct.startswith('image/'):
        raise HTTPException(status_code=400, detail='Only image uploads are allowed')
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail='No file uploaded')
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail='File too large (max 5 MiB)')
    ext = Path(file.filename or '').suffix.lower()
    if ext not in ALLOWED_EXTS:
        ext = _guess_ext(ct)
    return {"success": True, "url": _save(data, ext, _safe_folder(folder))}


@router.post("/icon", status_code=201)
async def upload_icon(file: UploadFile = File(...)):
    """Category icons: JPG, PNG or WEBP up to 2 MiB."""
    ct = (file.content_type or '').lower()
    if ct not in ICON_TYPES:
        raise HTTPException(status_code=400, detail='Format file tidak didukung. Gunakan JPG, PNG, atau WEBP')
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail='No file uploaded')
    if len(data) > MAX_ICON_BYTES:
        raise HTTPException(status_code=400, detail='Ukuran file maksimal 2MB')
    return {"success": True, "url": _save(data, ICON_TYPES[ct], 'icons')}

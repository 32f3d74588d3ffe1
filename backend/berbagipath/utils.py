"""Small string helpers shared by the route modules."""
import re
from typing import Optional
import uuid

_SLUG_STRIP = re.compile(r'[^a-z0-9-]+')


def slugify(text: str, max_length: int = 50) -> str:
    """'Bantu Anak Yatim!' -> 'bantu-anak-yatim'"""
    s = re.sub(r'\s+', '-', (text or '').strip().lower())
    s = _SLUG_STRIP.sub('', s)
    s = re.sub(r'-{2,}', '-', s).strip('-')
    return s[:max_length].rstrip('-')


def unique_slug(db, model, text: str, exclude_id: Optional[str] = None) -> str:
    """Slugify and append -2, -3, ... until no other row of `model` uses it."""
    base = slugify(text) or uuid.uuid4().hex[:8]
    candidate = base
    n = 2
    while True:
        q = db.query(model).filter(model.slug == candidate)
        if exclude_id:
            q = q.filter(model.id != exclude_id)
        if not q.first():
            return candidate
        candidate = f"{base}-{n}"
        n += 1


def external_ref(prefix: str) -> str:
    """Gateway reference such as DON-1A2B3C4D."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def format_rupiah(amount) -> str:
    """Format like id-ID locale: 150000 -> 'Rp 150.000'"""
    return 'Rp ' + f"{int(round(float(amount or 0))):,}".replace(',', '.')

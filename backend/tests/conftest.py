import os
import sys
import tempfile

# The app reads these at import time.
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['UPLOAD_DIR'] = tempfile.mkdtemp(prefix='berbagipath-uploads-')
os.environ['ENABLE_DEBUG_ROUTES'] = 'true'

# ensure backend package is on path for tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from berbagipath.database import Base, get_db
from berbagipath.main import app
from berbagipath.campaign_models import Campaign
from berbagipath.category_models import Category
from berbagipath.user_models import User

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('ADMIN_API_KEY', 'CRON_SECRET', 'PAYMENT_GATEWAY', 'XENDIT_SECRET_KEY',
                 'XENDIT_CALLBACK_TOKEN', 'DOKU_CLIENT_ID', 'DOKU_SECRET_KEY', 'DOKU_ENFORCE_SIGNATURE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(**kw):
        n = db.query(User).count() + 1
        data = {"name": f"User {n}", "email": f"user{n}@example.com", "role": "user",
                "is_verified": False, "balance": 0}
        data.update(kw)
        user = User(**data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_category(db):
    def _make(id='medical', name='Kesehatan'):
        category = Category(id=id, name=name, slug=id)
        db.add(category)
        db.commit()
        return category
    return _make


@pytest.fixture
def make_campaign(db):
    def _make(**kw):
        n = db.query(Campaign).count() + 1
        now = datetime.datetime.utcnow()
        data = {"title": f"Campaign {n}", "slug": f"campaign-{n}", "description": "Bantu sesama",
                "target_amount": 1000000, "current_amount": 0, "donor_count": 0,
                "start_date": now, "end_date": now + datetime.timedelta(days=30), "status": "active"}
        data.update(kw)
        campaign = Campaign(**data)
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign
    return _make

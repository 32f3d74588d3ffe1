"""Initialize database (create tables). Run: python backend/init_db.py"""
import sys
from pathlib import Path

backend_path = Path(__file__).resolve().parent
sys.path.insert(0, str(backend_path))

from berbagipath.database import engine, Base
from berbagipath import (article_models, campaign_models, category_models, donation_models, notification_models,
                         recurring_models, report_models, user_models, verification_models, wallet_models,
                         webhook_models, withdrawal_models)


def init():
    Base.metadata.create_all(bind=engine)


if __name__ == '__main__':
    print('Initializing DB...')
    init()
    print('DB initialized: ' + ', '.join(sorted(Base.metadata.tables)))

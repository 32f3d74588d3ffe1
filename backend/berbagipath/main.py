"""
BerbagiPath API.

Run from backend/:
    uvicorn berbagipath.main:app --reload --port 8000
"""
import logging
import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .database import Base, engine
from . import (article_models, campaign_models, category_models, donation_models, notification_models,
               recurring_models, report_models, user_models, verification_models, wallet_models,
               webhook_models, withdrawal_models)
from .logging_setup import setup_logging
from . import (article_routes, auth_routes, campaign_routes, category_routes, cron_routes, debug_routes,
               donation_routes, notification_routes, recurring_routes, report_routes, stats_routes,
               upload_routes, user_routes, verification_routes, wallet_routes, webhook_routes,
               withdrawal_routes)

setup_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="BerbagiPath API")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail},
                        headers=getattr(exc, 'headers', None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 -> 400 with 'field: message' pairs."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get('loc', ()) if p not in ('body', 'query', 'path', 'header')]
        parts.append(f"{'.'.join(loc)}: {err.get('msg')}" if loc else str(err.get('msg')))
    return JSONResponse(status_code=400, content={"success": False, "error": '; '.join(parts) or 'Invalid request'})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


origins = [o.strip() for o in (os.getenv('CORS_ORIGINS') or '*').split(',') if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials='*' not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount('/uploads', StaticFiles(directory=str(upload_routes.upload_dir())), name='uploads')


@app.get('/api/health')
def health():
    return {"success": True, "status": "ok"}


app.include_router(auth_routes.router)
app.include_router(user_routes.router)
app.include_router(category_routes.router)
app.include_router(campaign_routes.router)
app.include_router(donation_routes.router)
app.include_router(wallet_routes.router)
app.include_router(webhook_routes.router)
app.include_router(withdrawal_routes.router)
app.include_router(withdrawal_routes.admin_router)
app.include_router(verification_routes.router)
app.include_router(verification_routes.admin_router)
app.include_router(report_routes.router)
app.include_router(report_routes.admin_router)
app.include_router(recurring_routes.router)
app.include_router(cron_routes.router)
app.include_router(notification_routes.router)
app.include_router(notification_routes.admin_router)
app.include_router(article_routes.router)
app.include_router(stats_routes.router)
app.include_router(upload_routes.router)

if (os.getenv('ENABLE_DEBUG_ROUTES') or '').lower() in ('1', 'true', 'yes'):
    logger.warning("Debug routes enabled under /api/debug")
    app.include_router(debug_routes.router)

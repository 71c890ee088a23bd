"""
Portfolio : FastAPI app
Démarrer : uvicorn portfolio.api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Portfolio", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.exception_handler(StarletteHTTPException)
async def http_error_as_json(request: Request, exc: StarletteHTTPException):
    """Toutes les erreurs HTTP sortent au format {"error": ...}."""
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.on_event("startup")
def startup():
    from ..database import init_db, db_path
    try:
        init_db()
        log.info("DB initialisée (SQLite %s)", db_path())
    except Exception as e:
        # GET /api/profile retombe sur le profil par défaut
        log.warning("DB non initialisée : %s", e)
    from ..auth import default_credentials
    unset = default_credentials()
    if unset:
        log.warning("Auth admin sur valeurs par défaut (%s) : à définir hors développement", ", ".join(unset))


@app.get("/health")
def health():
    return {"status": "ok", "service": "portfolio", "version": "1.0.0"}


@app.get("/", response_class=HTMLResponse)
def root():
    from pydantic import ValidationError
    from ..default_profile import default_profile
    from ..models import Profile
    from ..renderer import render_page
    from .routes.profile import load_profile
    try:
        profile = Profile.model_validate(load_profile())
    except ValidationError as e:
        log.error("Profil stocké invalide, rendu du défaut : %s", e)
        profile = Profile.model_validate(default_profile())
    return HTMLResponse(render_page(profile))


# ── Routes ──
from .routes import profile, upload, login

app.include_router(profile.router)
app.include_router(upload.router)
app.include_router(login.router)

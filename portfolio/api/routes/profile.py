"""
Profil : document JSON unique.
GET  /api/profile → public ; crée le défaut au premier accès ; défaut si la DB tombe
POST /api/profile → admin (Bearer) ; remplacement complet, dernier écrivain gagne
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import db_create_profile, db_get_profile, db_save_profile, get_db, init_db, new_session
from ...default_profile import default_profile

log = logging.getLogger(__name__)

router = APIRouter(tags=["Profile"])


def load_profile() -> dict:
    """Document courant ; jamais d'exception (fallback défaut)."""
    try:
        init_db()
        with new_session() as db:
            row = db_get_profile(db)
            if row is None:
                log.info("No profile found, creating default...")
                db_create_profile(db, default_profile())
                return default_profile()
            log.info("Profile loaded successfully")
            return row.data
    except Exception as e:
        log.error("Failed to load profile: %s", e)
        return default_profile()


@router.get("/api/profile")
def get_profile():
    return JSONResponse(load_profile())


@router.post("/api/profile")
async def save_profile(request: Request, db: Session = Depends(get_db)):
    require_admin(request)

    try:
        profile = await request.json()
    except ValueError:
        profile = None
    if not isinstance(profile, dict):
        return JSONResponse({"error": "Invalid profile document"}, status_code=400)

    try:
        row = db_get_profile(db)
        log.info("Inserting new profile..." if row is None else "Updating existing profile...")
        db_save_profile(db, profile)
    except Exception as e:
        db.rollback()
        log.error("Failed to save profile: %s", e)
        return JSONResponse({"error": "Failed to save profile"}, status_code=500)

    log.info("Profile saved successfully!")
    return {"success": True, "message": "Profile saved successfully"}

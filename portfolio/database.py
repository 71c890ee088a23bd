"""SQLite : init + session + CRUD helpers du document profil"""
import os
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, PortfolioDB

DATA_DIR = Path(__file__).parent.parent / "data"

# Un engine par chemin DB (les tests changent DB_PATH entre deux fixtures)
_ENGINES: Dict[str, Engine] = {}


def db_path() -> str:
    return os.getenv("DB_PATH", str(DATA_DIR / "portfolio.db"))


def get_engine() -> Engine:
    path = db_path()
    if path not in _ENGINES:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        _ENGINES[path] = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})
    return _ENGINES[path]


def SessionLocal() -> Session:
    return sessionmaker(autoflush=False, bind=get_engine())()


def init_db():
    Base.metadata.create_all(bind=get_engine())


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def new_session() -> Session:
    """Session indépendante (hors injection FastAPI)."""
    return SessionLocal()


# ── Profile ──
def db_get_profile(db: Session) -> Optional[PortfolioDB]:
    return db.query(PortfolioDB).order_by(PortfolioDB.id.desc()).first()

def db_create_profile(db: Session, data: dict) -> PortfolioDB:
    row = PortfolioDB(data=data)
    db.add(row); db.commit(); db.refresh(row); return row

def db_update_profile(db: Session, row: PortfolioDB, data: dict) -> PortfolioDB:
    row.data = data
    db.commit(); db.refresh(row); return row

def db_save_profile(db: Session, data: dict) -> PortfolioDB:
    """Remplacement complet : insert si vide, sinon update de la dernière ligne."""
    row = db_get_profile(db)
    if row is None:
        return db_create_profile(db, data)
    return db_update_profile(db, row, data)

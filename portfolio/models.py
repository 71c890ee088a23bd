"""
Data models : document profil, sections, blocs de contenu
SQLAlchemy (SQLite) + Pydantic v2 + Enums
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

import sqlalchemy as sa
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ── ENUMS ──────────────────────────────────────────────────────────────

class BlockType(str, Enum):
    TITLE   = "title"
    CONTEXT = "context"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class PortfolioDB(Base):
    """Une seule ligne utile : le document JSON complet du profil."""
    __tablename__ = "portfolio"
    id:         Mapped[int]      = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    data:       Mapped[dict]     = mapped_column(sa.JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class ContentBlock(BaseModel):
    """
    Bloc de contenu (titre ou texte) avec carrousel optionnel.
    Les anciens documents stockent les tableaux sous `image` / `imageLink` :
    les deux orthographes sont acceptées en entrée, `images` / `imageLinks` en sortie.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type:                BlockType           = BlockType.TITLE
    content:             str                 = ""
    duration:            Optional[str]       = None
    images:              Optional[List[str]] = Field(default=None, validation_alias=AliasChoices("images", "image"))
    image_links:         Optional[List[str]] = Field(default=None,
                                                     validation_alias=AliasChoices("imageLinks", "imageLink", "image_links"),
                                                     serialization_alias="imageLinks")
    enable_glass_effect: Optional[bool]      = Field(default=None,
                                                     validation_alias=AliasChoices("enableGlassEffect", "enable_glass_effect"),
                                                     serialization_alias="enableGlassEffect")

    def has_payload(self) -> bool:
        return bool(self.content.strip()) or bool(self.images)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id:                  Optional[str]      = None
    title:               str                = ""
    enable_glass_effect: bool               = Field(default=False,
                                                    validation_alias=AliasChoices("enableGlassEffect", "enable_glass_effect"),
                                                    serialization_alias="enableGlassEffect")
    blocks:              List[ContentBlock] = Field(default_factory=list)


class Profile(BaseModel):
    """Document profil complet. Les clés inconnues sont conservées."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name:     str              = ""
    headline: str              = ""
    avatar:   Optional[str]    = None
    about:    Optional[str]    = None
    sections: List[Section]    = Field(default_factory=list)


class UploadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success:   bool = True
    image_url: str  = Field(serialization_alias="imageUrl")
    file_name: str  = Field(serialization_alias="fileName")
    file_size: int  = Field(serialization_alias="fileSize")

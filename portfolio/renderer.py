"""
Renderer HTML : page profil publique générée depuis le document JSON.
Profil → Sections → Blocs (texte + carrousel). Les overlays montés sur le
document (lightbox) sont rendus en fin de <body>, hors du flux des sections.
"""
import html
from typing import Optional

from .carousel import Carousel
from .models import BlockType, ContentBlock, Profile, Section
from .view import Document

GLASS_CLASS = "glass"

_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Segoe UI',sans-serif;background:#0f0f1a;color:#e8e8f0;padding:40px 20px}
.container{max-width:760px;margin:0 auto}
header{margin-bottom:40px}
header h1{font-size:2.2rem;color:#fff}
header p{color:#9ca3af;margin-top:6px}
.avatar{width:96px;height:96px;border-radius:50%;object-fit:cover;margin-bottom:16px}
section{margin-bottom:36px}
section>h2{font-size:.85rem;text-transform:uppercase;letter-spacing:.1em;color:#6b7280;margin-bottom:14px}
.block{margin-bottom:12px}
.block.glass{backdrop-filter:blur(12px);background:rgba(0,0,0,.5);padding:16px;border-radius:8px}
.block-title{font-size:1.5rem;font-weight:bold;color:#fff;margin-bottom:8px}
.block-context{font-size:1.1rem;color:#d1d5db}
.duration{color:#9ca3af;margin-left:8px;font-size:.9em}
.carousel{margin-top:12px}
.carousel-frame{position:relative;aspect-ratio:16/9;background:#111827;border-radius:8px;overflow:hidden;cursor:pointer}
.carousel-image{width:100%;height:100%;object-fit:cover}
.carousel-prev,.carousel-next{position:absolute;top:50%;transform:translateY(-50%);background:rgba(0,0,0,.7);color:#fff;border:none;border-radius:50%;width:40px;height:40px;cursor:pointer}
.carousel-prev{left:8px}.carousel-next{right:8px}
.carousel-counter{position:absolute;bottom:8px;right:8px;background:rgba(0,0,0,.7);font-size:12px;padding:4px 10px;border-radius:999px}
.carousel-dots{display:flex;justify-content:center;gap:8px;margin-top:8px}
.carousel-dot{width:8px;height:8px;border-radius:999px;border:none;background:#6b7280;cursor:pointer}
.carousel-dot.active{width:24px;background:#3b82f6}
.lightbox-backdrop{position:fixed;inset:0;background:rgba(0,0,0,.95);z-index:99999;display:flex;align-items:center;justify-content:center;flex-direction:column}
.lightbox-image{max-width:90vw;max-height:75vh;object-fit:contain}
.lightbox-thumbs{display:flex;gap:8px;margin-top:16px}
.lightbox-thumb img{width:64px;height:48px;object-fit:cover}
"""


def render_text(block: ContentBlock) -> str:
    if not block.content:
        return ""
    content = html.escape(block.content)
    duration = html.escape(block.duration) if block.duration else ""
    if block.type == BlockType.TITLE:
        suffix = f'<span class="duration">({duration})</span>' if duration else ""
        return f'<h2 class="block-title">{content}{suffix}</h2>'
    suffix = f'<span class="duration">• {duration}</span>' if duration else ""
    return f'<p class="block-context">{content}{suffix}</p>'


def render_block(block: ContentBlock, section_glass: bool = False, document: Optional[Document] = None) -> str:
    if not block.has_payload():
        return ""
    glass = block.enable_glass_effect if block.enable_glass_effect is not None else section_glass
    css = f"block {GLASS_CLASS}" if glass else "block"
    carousel = ""
    if block.images:
        carousel = Carousel(block.images, block.image_links, alt=block.content, document=document).render()
    return f'<div class="{css}">{render_text(block)}{carousel}</div>'


def render_section(section: Section, document: Optional[Document] = None) -> str:
    section_id = f' id="{html.escape(section.id)}"' if section.id else ""
    title = f"<h2>{html.escape(section.title)}</h2>" if section.title else ""
    blocks = "\n".join(render_block(b, section.enable_glass_effect, document) for b in section.blocks)
    return f"<section{section_id}>{title}\n{blocks}\n</section>"


def render_page(profile: Profile, document: Optional[Document] = None) -> str:
    """Génère le HTML complet de la page profil."""
    document = document or Document()
    avatar = f'<img class="avatar" src="{html.escape(profile.avatar)}" alt="">' if profile.avatar else ""
    headline = f"<p>{html.escape(profile.headline)}</p>" if profile.headline else ""
    about = f'<p class="about">{html.escape(profile.about)}</p>' if profile.about else ""
    sections = "\n".join(render_section(s, document) for s in profile.sections)
    body_style = f' style="overflow:{document.body_overflow}"' if document.body_overflow else ""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(profile.name)}</title>
  <style>{_CSS}</style>
</head>
<body{body_style}>
<div class="container">
<header>{avatar}<h1>{html.escape(profile.name)}</h1>{headline}{about}</header>
{sections}
</div>
{document.render_portal()}
</body>
</html>"""

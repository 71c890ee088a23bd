"""
Carrousel : une image visible à la fois sur une séquence ordonnée.

L'état est une valeur explicite (CarouselViewState) et les transitions sont
des fonctions pures : testables sans rendu.
"""
import html
from dataclasses import dataclass, replace
from typing import List, Optional

from .view import Document, PointerEvent


@dataclass(frozen=True)
class CarouselViewState:
    active_index: int = 0
    total:        int = 0


def next_index(state: CarouselViewState) -> CarouselViewState:
    if state.total <= 1:
        return state
    return replace(state, active_index=(state.active_index + 1) % state.total)


def previous_index(state: CarouselViewState) -> CarouselViewState:
    if state.total <= 1:
        return state
    return replace(state, active_index=(state.active_index - 1 + state.total) % state.total)


def go_to(state: CarouselViewState, index: int) -> CarouselViewState:
    if not 0 <= index < state.total:
        raise IndexError(f"index {index} hors de [0, {state.total})")
    return replace(state, active_index=index)


def _swallow(event: Optional[PointerEvent]):
    # Le bloc peut être dans un lien ou une carte cliquable
    if event:
        event.prevent_default()
        event.stop_propagation()


class Carousel:
    def __init__(
        self,
        images: List[str],
        image_links: Optional[List[str]] = None,
        alt: str = "",
        document: Optional[Document] = None,
    ):
        self.alt = alt
        self.document = document or Document()
        self.images: List[str] = []
        self.image_links: List[str] = []
        self.state = CarouselViewState()
        self.lightbox = None
        self.set_images(images, image_links)

    def set_images(self, images: List[str], image_links: Optional[List[str]] = None):
        """
        Nouvelle séquence (identité différente) → retour à l'index 0.
        Même liste modifiée sur place → total recalculé, index borné.
        """
        if images is not self.images:
            self.state = CarouselViewState(active_index=0, total=len(images))
            if self.lightbox is not None:
                self.lightbox.unmount()
                self.lightbox = None
        else:
            last = max(len(images) - 1, 0)
            self.state = CarouselViewState(active_index=min(self.state.active_index, last), total=len(images))
        self.images = images
        self.image_links = image_links or []
        if self.lightbox is not None:
            self.lightbox.set_images(self.images, self.image_links)

    @property
    def active_index(self) -> int:
        return self.state.active_index

    @property
    def total(self) -> int:
        return self.state.total

    @property
    def has_controls(self) -> bool:
        return self.total > 1

    @property
    def counter(self) -> str:
        return f"{self.active_index + 1} / {self.total}" if self.has_controls else ""

    @property
    def current_image(self) -> Optional[str]:
        return self.images[self.active_index] if self.images else None

    @property
    def current_link(self) -> str:
        i = self.active_index
        return self.image_links[i] if i < len(self.image_links) and self.image_links[i] else ""

    # ── Interactions ──

    def click_next(self, event: Optional[PointerEvent] = None):
        _swallow(event)
        self.state = next_index(self.state)

    def click_previous(self, event: Optional[PointerEvent] = None):
        _swallow(event)
        self.state = previous_index(self.state)

    def click_dot(self, index: int, event: Optional[PointerEvent] = None):
        _swallow(event)
        self.state = go_to(self.state, index)

    def click_image(self, event: Optional[PointerEvent] = None):
        """Ouvre la lightbox sur l'index actif. Ne modifie pas l'état du carrousel."""
        _swallow(event)
        if not self.images:
            return None
        if self.lightbox is None:
            from .lightbox import Lightbox
            self.lightbox = Lightbox(self.images, self.image_links, document=self.document)
        self.lightbox.open(self.active_index)
        return self.lightbox

    # ── Rendu ──

    def render(self) -> str:
        if not self.images:
            return ""
        i = self.active_index
        alt = html.escape(self.alt or f"Image {i + 1}")
        controls = ""
        dots = ""
        if self.has_controls:
            controls = ('<button class="carousel-prev" aria-label="Previous image">&lsaquo;</button>'
                        '<button class="carousel-next" aria-label="Next image">&rsaquo;</button>'
                        f'<div class="carousel-counter">{self.counter}</div>')
            dots = '<div class="carousel-dots">' + "".join(
                f'<button class="carousel-dot{" active" if n == i else ""}" data-index="{n}" '
                f'aria-label="Go to image {n + 1}"></button>'
                for n in range(self.total)
            ) + "</div>"
        return (f'<div class="carousel" data-active="{i}" data-total="{self.total}">'
                f'<div class="carousel-frame">'
                f'<img class="carousel-image" src="{html.escape(self.images[i])}" alt="{alt}">'
                f'{controls}</div>{dots}</div>')

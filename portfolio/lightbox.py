"""
Lightbox : overlay plein écran sur la même séquence d'images que le carrousel.

Cycle : Fermée → Ouverte → Fermée. À chaque ouverture l'index courant est
ré-initialisé depuis l'index demandé, puis navigue indépendamment du carrousel.
Pendant l'ouverture : scroll de page bloqué, écouteur clavier sur le document
(Escape / ArrowLeft / ArrowRight). Le tout est défait à la fermeture.
"""
import html
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .carousel import CarouselViewState, go_to, next_index, previous_index
from .view import Document, KeyEvent, PointerEvent

log = logging.getLogger(__name__)

BACKDROP = "lightbox-backdrop"


@dataclass
class LightboxViewState:
    is_open:            bool = False
    current_index:      int  = 0
    mounted_for_portal: bool = False


class Lightbox:
    def __init__(
        self,
        images: List[str],
        image_links: Optional[List[str]] = None,
        document: Optional[Document] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.images = images
        self.image_links = image_links or []
        self.document = document or Document()
        self.on_close = on_close
        self.state = LightboxViewState()

    # ── Cycle de vie ──

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def total(self) -> int:
        return len(self.images)

    def set_images(self, images: List[str], image_links: Optional[List[str]] = None):
        self.images = images
        self.image_links = image_links or []
        if self.state.current_index >= len(images):
            self.state.current_index = max(len(images) - 1, 0)

    def open(self, initial_index: int = 0):
        if self.state.is_open:
            self.state.current_index = initial_index
            return
        self.state = LightboxViewState(is_open=True, current_index=initial_index, mounted_for_portal=True)
        self.document.mount(self)
        self.document.lock_scroll()
        self.document.add_key_listener(self._on_key)
        log.debug("Lightbox ouverte à l'index %d/%d", initial_index, self.total)

    def close(self):
        was_open = self.state.is_open
        self.unmount()
        if was_open and self.on_close:
            self.on_close()

    def unmount(self):
        """Nettoyage inconditionnel : écouteur retiré, scroll restauré, portal démonté."""
        self.document.remove_key_listener(self._on_key)
        if self.state.is_open:
            self.document.unlock_scroll()
        self.document.unmount(self)
        self.state.is_open = False
        self.state.mounted_for_portal = False

    # ── Navigation ──

    def _view(self) -> CarouselViewState:
        return CarouselViewState(active_index=self.state.current_index, total=self.total)

    def next(self):
        self.state.current_index = next_index(self._view()).active_index

    def previous(self):
        self.state.current_index = previous_index(self._view()).active_index

    def go_to(self, index: int):
        self.state.current_index = go_to(self._view(), index).active_index

    def _on_key(self, event: KeyEvent):
        if not self.state.is_open:
            return
        if event.key == "Escape":
            self.close()
        elif event.key == "ArrowLeft" and self.total > 1:
            self.previous()
        elif event.key == "ArrowRight" and self.total > 1:
            self.next()

    # ── Pointeur ──

    def click_backdrop(self, event: PointerEvent):
        # Seul un clic sur le fond lui-même ferme ; image et contrôles non
        if event.target == BACKDROP and not event.propagation_stopped:
            self.close()

    def click_control(self, event: PointerEvent, action: Callable[[], None]):
        event.stop_propagation()
        action()

    def click_thumbnail(self, index: int, event: Optional[PointerEvent] = None):
        if event:
            event.stop_propagation()
        self.go_to(index)

    @property
    def current_link(self) -> str:
        i = self.state.current_index
        return self.image_links[i] if 0 <= i < len(self.image_links) and self.image_links[i] else ""

    def open_link(self, event: Optional[PointerEvent] = None):
        if event:
            event.stop_propagation()
        if self.current_link:
            self.document.open_window(self.current_link)

    # ── Rendu ──

    def render(self) -> str:
        if not (self.state.is_open and self.state.mounted_for_portal) or not self.images:
            return ""
        i = self.state.current_index
        multi = self.total > 1
        counter = f'<div class="lightbox-counter">{i + 1} / {self.total}</div>' if multi else ""
        link = ""
        if self.current_link:
            link = (f'<a class="lightbox-link" href="{html.escape(self.current_link)}" '
                    f'target="_blank" rel="noopener noreferrer">Open link</a>')
        arrows = ""
        thumbs = ""
        if multi:
            arrows = ('<button class="lightbox-prev" aria-label="Previous image">&lsaquo;</button>'
                      '<button class="lightbox-next" aria-label="Next image">&rsaquo;</button>')
            thumbs = '<div class="lightbox-thumbs">' + "".join(
                f'<button class="lightbox-thumb{" active" if n == i else ""}" data-index="{n}">'
                f'<img src="{html.escape(src)}" alt="Thumbnail {n + 1}"></button>'
                for n, src in enumerate(self.images)
            ) + "</div>"
        return (f'<div class="{BACKDROP}" role="dialog" aria-modal="true">'
                f'<button class="lightbox-close" aria-label="Close">&times;</button>'
                f'{counter}{link}{arrows}'
                f'<img class="lightbox-image" src="{html.escape(self.images[i])}" alt="Image {i + 1}">'
                f'{thumbs}</div>')

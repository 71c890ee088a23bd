"""
Éditeur de bloc de contenu : création ou édition d'un ContentBlock.

L'éditeur travaille sur des copies : le bloc source n'est jamais muté,
seul `on_save` reçoit le bloc finalisé.
Le toggle images est une projection : le désactiver masque les images du
bloc émis sans les effacer de l'état de l'éditeur.
"""
import logging
from typing import Callable, List, Mapping, Optional, Sequence

from .models import BlockType, ContentBlock
from .upload_pipeline import SelectedFile, UploadPipeline
from .view import Notifier

log = logging.getLogger(__name__)

EMPTY_BLOCK_MSG = "Please add either text or at least one image"
DELETE_CONFIRM_MSG = "Are you sure you want to delete this block?"


class ContentBlockEditor:
    def __init__(
        self,
        on_save: Callable[[ContentBlock], None],
        on_close: Optional[Callable[[], None]] = None,
        on_delete: Optional[Callable[[], None]] = None,
        notifier: Optional[Notifier] = None,
        pipeline: Optional[UploadPipeline] = None,
    ):
        self.on_save = on_save
        self.on_close = on_close
        self.on_delete = on_delete
        self.notifier = notifier or Notifier()
        self.pipeline = pipeline or UploadPipeline(notifier=self.notifier)
        self.is_open = False
        self.initial: Optional[ContentBlock] = None
        self.is_uploading = False
        self._reset()

    def _reset(self):
        self.type = BlockType.TITLE
        self.content = ""
        self.has_duration = False
        self.duration = ""
        self.has_images = False
        self.images: List[str] = []
        self.image_links: List[str] = []
        self.preview_index = 0

    @property
    def is_editing(self) -> bool:
        return self.initial is not None

    @property
    def title(self) -> str:
        return "Edit Content Block" if self.is_editing else "Add Content Block"

    def open(self, initial: Optional[ContentBlock] = None):
        self.initial = initial
        self._reset()
        if initial is not None:
            self.type = initial.type
            self.content = initial.content
            self.has_duration = bool(initial.duration)
            self.duration = initial.duration or ""
            self.images = list(initial.images or [])
            self.has_images = bool(self.images)
            links = list(initial.image_links or [])
            # Liens plus courts que les images : compléter avec "" pour garder l'alignement
            self.image_links = links + [""] * (len(self.images) - len(links))
        self.is_open = True

    # ── Sauvegarde / fermeture ──

    def build_block(self) -> ContentBlock:
        emit_images = self.has_images and len(self.images) > 0
        block = ContentBlock(
            type=self.type,
            content=self.content,
            duration=self.duration if self.has_duration and self.duration.strip() else None,
            images=list(self.images) if emit_images else None,
            image_links=list(self.image_links) if emit_images and self.image_links else None,
        )
        if self.initial is not None and self.initial.enable_glass_effect is not None:
            block.enable_glass_effect = self.initial.enable_glass_effect
        return block

    def save(self) -> Optional[ContentBlock]:
        # Valide le bloc tel qu'il sera émis : images masquées par le toggle ne comptent pas
        block = self.build_block()
        if not block.has_payload():
            self.notifier.alert(EMPTY_BLOCK_MSG)
            return None
        self.on_save(block)
        self.close()
        return block

    def close(self):
        if not self.is_editing:
            self._reset()
        self.is_open = False
        if self.on_close:
            self.on_close()

    def delete(self) -> bool:
        if not (self.is_editing and self.on_delete):
            return False
        if not self.notifier.confirm(DELETE_CONFIRM_MSG):
            return False
        self.on_delete()
        self.close()
        return True

    # ── Images ──

    def upload(self, files: Sequence[SelectedFile], cookies: Mapping[str, str]) -> List[str]:
        """Ajoute en fin de séquence les images acceptées + autant de liens vides."""
        if self.is_uploading or not files:
            return []
        self.is_uploading = True
        try:
            report = self.pipeline.run(files, cookies)
        finally:
            self.is_uploading = False
        self.images.extend(report.accepted)
        self.image_links.extend([""] * len(report.accepted))
        return report.accepted

    def remove_image(self, index: int):
        last = len(self.images) - 1
        del self.images[index]
        if index < len(self.image_links):
            del self.image_links[index]
        if self.preview_index >= last:
            self.preview_index = max(0, len(self.images) - 1)

    def update_link(self, link: str):
        """Modifie uniquement le lien de l'image affichée en aperçu."""
        i = self.preview_index
        if i >= len(self.image_links):
            self.image_links.extend([""] * (i + 1 - len(self.image_links)))
        self.image_links[i] = link

    @property
    def preview_link(self) -> str:
        i = self.preview_index
        return self.image_links[i] if i < len(self.image_links) else ""

    def preview_next(self):
        if len(self.images) > 1:
            self.preview_index = (self.preview_index + 1) % len(self.images)

    def preview_previous(self):
        if len(self.images) > 1:
            self.preview_index = (self.preview_index - 1 + len(self.images)) % len(self.images)

    def preview_go_to(self, index: int):
        if 0 <= index < len(self.images):
            self.preview_index = index

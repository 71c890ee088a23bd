"""
Surface racine de rendu : l'équivalent du document/body côté navigateur.

Les overlays (lightbox) s'y montent directement (« portal ») au lieu d'être
rendus inline dans le composant qui les déclenche : un carrousel peut vivre
dans un conteneur clippé ou transformé.
"""
import logging
from typing import Callable, List, Optional, Tuple

log = logging.getLogger(__name__)


class PointerEvent:
    """Clic. `target` = élément cliqué, `current_target` = élément qui écoute."""

    def __init__(self, target: str = "", current_target: Optional[str] = None):
        self.target = target
        self.current_target = current_target if current_target is not None else target
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self):
        self.default_prevented = True

    def stop_propagation(self):
        self.propagation_stopped = True


class KeyEvent:
    def __init__(self, key: str):
        self.key = key


KeyListener = Callable[[KeyEvent], None]


class Notifier:
    """Notifications modales : alert bloquante + confirmation oui/non."""

    def alert(self, message: str):
        log.warning("ALERT: %s", message)

    def confirm(self, message: str) -> bool:
        log.info("CONFIRM (refusé par défaut): %s", message)
        return False


class Document:
    def __init__(self):
        self.body_overflow = ""
        self.portal_root: List[object] = []
        self.opened_windows: List[Tuple[str, str, str]] = []
        self._key_listeners: List[KeyListener] = []
        self._scroll_locks = 0
        self._saved_overflow = ""

    # ── Clavier ──

    def add_key_listener(self, listener: KeyListener):
        if listener not in self._key_listeners:
            self._key_listeners.append(listener)

    def remove_key_listener(self, listener: KeyListener):
        if listener in self._key_listeners:
            self._key_listeners.remove(listener)

    @property
    def key_listener_count(self) -> int:
        return len(self._key_listeners)

    def dispatch_key(self, key: str) -> KeyEvent:
        event = KeyEvent(key)
        # Copie : un listener peut se désinscrire pendant le dispatch (Escape)
        for listener in list(self._key_listeners):
            listener(event)
        return event

    # ── Scroll ──

    def lock_scroll(self):
        """Compté : plusieurs overlays ouverts, le dernier fermé restaure la valeur d'origine."""
        if self._scroll_locks == 0:
            self._saved_overflow = self.body_overflow
            self.body_overflow = "hidden"
        self._scroll_locks += 1

    def unlock_scroll(self):
        if self._scroll_locks == 0:
            return
        self._scroll_locks -= 1
        if self._scroll_locks == 0:
            self.body_overflow = self._saved_overflow

    # ── Portal ──

    def mount(self, overlay):
        if overlay not in self.portal_root:
            self.portal_root.append(overlay)

    def unmount(self, overlay):
        if overlay in self.portal_root:
            self.portal_root.remove(overlay)

    def render_portal(self) -> str:
        return "\n".join(o.render() for o in self.portal_root)

    # ── Navigation externe ──

    def open_window(self, url: str, target: str = "_blank", features: str = "noopener,noreferrer"):
        log.info("Ouverture externe %s (%s)", url, target)
        self.opened_windows.append((url, target, features))

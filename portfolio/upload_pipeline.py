"""
Pipeline d'upload côté client : deux phases distinctes :

  1. pré-contrôle synchrone du lot (type + taille) : tout ou rien,
     aucun appel réseau si un seul fichier est refusé ;
  2. upload séquentiel fichier par fichier : un échec serveur sur le
     fichier N est signalé puis ignoré, N+1..fin continuent.

Le token bearer vient du cookie `auth_token` ; absent → abandon immédiat.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

import requests

from .auth import COOKIE_NAME
from .images import size_kb, validation_error
from .view import Notifier

log = logging.getLogger(__name__)

UPLOAD_ENDPOINT = "/api/upload"
UPLOAD_FIELD    = "image"


@dataclass
class SelectedFile:
    name:         str
    content_type: str
    data:         bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class UploadReport:
    accepted: List[str]             = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    aborted:  bool                  = False


class UploadError(Exception):
    """Échec d'upload d'un seul fichier (réponse non 2xx)."""


def precheck_batch(files: Sequence[SelectedFile]) -> Optional[str]:
    """Phase 1 : premier fichier refusé → message, sinon None."""
    for f in files:
        err = validation_error(f.content_type, f.size)
        if err:
            return f"{f.name}: {err}"
    return None


def _error_text(text: str) -> str:
    if "{" in text:
        try:
            return json.loads(text).get("error", text)
        except (ValueError, AttributeError):
            return text
    return text


class UploadPipeline:
    """
    `http` : tout objet avec un `post` compatible requests
    (requests.Session, fastapi TestClient…).
    """

    def __init__(self, http=None, base_url: Optional[str] = None,
                 notifier: Optional[Notifier] = None, timeout: int = 30):
        self.http = http if http is not None else requests.Session()
        self.base_url = base_url if base_url is not None else os.getenv("BASE_URL", "http://localhost:8001")
        self.notifier = notifier or Notifier()
        self.timeout = timeout

    def run(self, files: Sequence[SelectedFile], cookies: Mapping[str, str]) -> UploadReport:
        report = UploadReport()
        if not files:
            return report

        err = precheck_batch(files)
        if err:
            self.notifier.alert(err)
            report.aborted = True
            return report

        token = cookies.get(COOKIE_NAME)
        if not token:
            self.notifier.alert("Please log in again")
            report.aborted = True
            return report

        try:
            for f in files:
                try:
                    url = self._upload_one(f, token)
                except UploadError as e:
                    self.notifier.alert(f"Failed to upload {f.name}: {e}")
                    report.failures.append((f.name, str(e)))
                    continue
                report.accepted.append(url)
                log.info("Uploaded: %s (%s)", f.name, size_kb(f.size))
        except (requests.RequestException, ValueError, KeyError):
            # Transport coupé ou réponse 2xx illisible (pas de JSON, pas d'imageUrl)
            log.exception("Upload interrompu")
            self.notifier.alert("Failed to upload. Check console.")
            report.accepted = []
            report.aborted = True
        return report

    def _upload_one(self, f: SelectedFile, token: str) -> str:
        resp = self.http.post(
            f"{self.base_url}{UPLOAD_ENDPOINT}",
            headers={"Authorization": f"Bearer {token}"},
            files={UPLOAD_FIELD: (f.name, f.data, f.content_type)},
            timeout=self.timeout,
        )
        text = resp.text
        if not 200 <= resp.status_code < 300:
            raise UploadError(_error_text(text))
        return json.loads(text)["imageUrl"]

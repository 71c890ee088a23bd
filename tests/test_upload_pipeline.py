"""
Tests pipeline d'upload : pré-contrôle tout-ou-rien, token, upload séquentiel
tolérant aux échecs par fichier, contre la vraie route /api/upload
"""
import sys, os, json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock
import pytest
import requests
from fastapi.testclient import TestClient

from portfolio.images import MAX_SIZE
from portfolio.upload_pipeline import SelectedFile, UploadPipeline, precheck_batch


ADMIN = "owner@example.com"


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path):
    os.environ["DB_PATH"]        = str(tmp_path / "test.db")
    os.environ["SESSION_SECRET"] = "test-secret"
    os.environ["ADMIN_EMAIL"]    = ADMIN
    from portfolio.api.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def cookies():
    from portfolio.auth import issue_token
    os.environ["SESSION_SECRET"] = "test-secret"
    os.environ["ADMIN_EMAIL"]    = ADMIN
    return {"auth_token": issue_token(ADMIN)}


class SpyClient:
    """Délègue au TestClient, enregistre l'ordre des appels ; peut casser l'auth d'un fichier."""

    def __init__(self, client, bad_auth_for=()):
        self.client = client
        self.bad_auth_for = set(bad_auth_for)
        self.calls = []

    def post(self, url, headers=None, files=None, timeout=None):
        name = files["image"][0]
        self.calls.append(name)
        if name in self.bad_auth_for:
            headers = {"Authorization": "Bearer not-a-jwt"}
        return self.client.post(url, headers=headers, files=files)


def png(name, size=16):
    return SelectedFile(name, "image/png", b"\x89PNG" + b"\0" * (size - 4))


# ── Pré-contrôle ──────────────────────────────────────────────────────────

class TestPrecheck:
    def test_all_valid(self):
        assert precheck_batch([png("a.png"), SelectedFile("b.webp", "image/webp", b"x")]) is None

    def test_bad_type_names_file(self):
        err = precheck_batch([png("a.png"), SelectedFile("doc.pdf", "application/pdf", b"x")])
        assert err.startswith("doc.pdf:")
        assert "Invalid file type" in err

    def test_oversized(self):
        err = precheck_batch([png("big.png", size=MAX_SIZE + 1)])
        assert err.startswith("big.png:")
        assert "5MB" in err

    def test_exact_limit_ok(self):
        assert precheck_batch([png("edge.png", size=MAX_SIZE)]) is None


# ── Pipeline ──────────────────────────────────────────────────────────────

class TestPipeline:
    def test_oversized_in_batch_uploads_nothing(self, client, cookies):
        spy = SpyClient(client)
        notifier = MagicMock()
        p = UploadPipeline(http=spy, base_url="", notifier=notifier)
        report = p.run([png("a.png"), png("big.png", size=MAX_SIZE + 1), png("c.png")], cookies)
        assert report.accepted == []
        assert report.aborted
        assert spy.calls == []
        notifier.alert.assert_called_once()

    def test_one_auth_failure_others_succeed(self, client, cookies):
        spy = SpyClient(client, bad_auth_for={"b.png"})
        notifier = MagicMock()
        p = UploadPipeline(http=spy, base_url="", notifier=notifier)
        report = p.run([png("a.png"), png("b.png"), png("c.png")], cookies)
        assert len(report.accepted) == 2
        assert all(u.startswith("data:image/png;base64,") for u in report.accepted)
        assert report.failures == [("b.png", "Unauthorized")]
        # Séquentiel, dans l'ordre, sans abandon après l'échec
        assert spy.calls == ["a.png", "b.png", "c.png"]
        notifier.alert.assert_called_once_with("Failed to upload b.png: Unauthorized")

    def test_missing_token_no_network(self, client):
        spy = SpyClient(client)
        notifier = MagicMock()
        report = UploadPipeline(http=spy, base_url="", notifier=notifier).run([png("a.png")], {})
        assert report.aborted
        assert spy.calls == []
        notifier.alert.assert_called_once_with("Please log in again")

    def test_transport_error_is_generic(self, cookies):
        http = MagicMock()
        http.post.side_effect = requests.ConnectionError("boom")
        notifier = MagicMock()
        report = UploadPipeline(http=http, base_url="", notifier=notifier).run([png("a.png")], cookies)
        assert report.accepted == []
        assert report.aborted
        notifier.alert.assert_called_once_with("Failed to upload. Check console.")

    @pytest.mark.parametrize("body", ["<html>proxy</html>", '{"success": true}'])
    def test_unreadable_success_body_is_generic(self, cookies, body):
        resp = MagicMock()
        resp.status_code = 200
        resp.text = body
        http = MagicMock()
        http.post.return_value = resp
        notifier = MagicMock()
        report = UploadPipeline(http=http, base_url="", notifier=notifier).run([png("a.png"), png("b.png")], cookies)
        assert report.accepted == []
        assert report.aborted
        notifier.alert.assert_called_once_with("Failed to upload. Check console.")

    def test_plain_text_error_body(self, cookies):
        resp = MagicMock()
        resp.status_code = 502
        resp.text = "Bad Gateway"
        http = MagicMock()
        http.post.return_value = resp
        notifier = MagicMock()
        report = UploadPipeline(http=http, base_url="", notifier=notifier).run([png("a.png")], cookies)
        assert report.failures == [("a.png", "Bad Gateway")]

    def test_request_shape(self, cookies):
        resp = MagicMock()
        resp.status_code = 200
        resp.text = json.dumps({"success": True, "imageUrl": "data:image/png;base64,AA"})
        http = MagicMock()
        http.post.return_value = resp
        UploadPipeline(http=http, base_url="http://site").run([png("a.png")], cookies)
        args, kwargs = http.post.call_args
        assert args[0] == "http://site/api/upload"
        assert kwargs["headers"]["Authorization"] == f"Bearer {cookies['auth_token']}"
        assert kwargs["files"]["image"][0] == "a.png"
        assert kwargs["files"]["image"][2] == "image/png"

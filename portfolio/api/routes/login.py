"""
Admin login / logout : email + mot de passe → JWT dans le cookie auth_token.

GET  /admin/login  → page formulaire
POST /admin/login  → valide ADMIN_EMAIL / ADMIN_PASSWORD, pose le cookie, redirige vers /
GET  /admin/logout → efface le cookie, redirige vers /
"""
import hmac
import logging
import os

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...auth import COOKIE_NAME, admin_email, issue_token, ttl_days

log = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "changeme")


_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Segoe UI',sans-serif;background:#0f0f1a;color:#e8e8f0;
  display:flex;align-items:center;justify-content:center;min-height:100vh}
.card{background:#1a1a2e;border:1px solid #2a2a4e;border-radius:12px;
  padding:48px 40px;width:100%;max-width:380px;text-align:center}
.logo{font-size:1.4rem;font-weight:bold;color:#fff;margin-bottom:32px}
label{display:block;text-align:left;color:#9ca3af;font-size:12px;margin:14px 0 6px}
input{width:100%;background:#0f0f1a;border:1px solid #2a2a4e;
  color:#e8e8f0;border-radius:6px;padding:12px 14px;font-size:15px;
  font-family:inherit;outline:none}
input:focus{border-color:#3b82f6}
.btn{display:block;width:100%;margin-top:24px;background:#3b82f6;color:#fff;
  border:none;padding:14px;border-radius:8px;font-size:15px;font-weight:700;
  cursor:pointer;transition:opacity .2s}
.btn:hover{opacity:.88}
.err{color:#ef4444;font-size:13px;margin-top:14px}
"""


@router.get("/admin/login", response_class=HTMLResponse)
def login_page(error: str = ""):
    err_html = '<p class="err">Invalid email or password.</p>' if error else ""
    return HTMLResponse(f"""<!DOCTYPE html><html lang="en"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Admin login</title>
<style>{_CSS}</style>
</head><body>
<div class="card">
  <div class="logo">Portfolio admin</div>
  <form method="POST" action="/admin/login">
    <label>Email</label>
    <input type="email" name="email" autofocus>
    <label>Password</label>
    <input type="password" name="password" placeholder="••••••••">
    <button class="btn" type="submit">Log in →</button>
  </form>
  {err_html}
</div>
</body></html>""")


@router.post("/admin/login")
async def login_submit(request: Request):
    form = await request.form()
    email = str(form.get("email", ""))
    password = str(form.get("password", ""))

    ok = (hmac.compare_digest(email.encode(), admin_email().encode())
          and hmac.compare_digest(password.encode(), _admin_password().encode()))
    if not ok:
        log.warning("Login refusé pour %s", email or "<vide>")
        return RedirectResponse("/admin/login?error=1", status_code=303)

    # Lu par l'éditeur côté client (en-tête Bearer) → pas httponly
    resp = RedirectResponse("/", status_code=303)
    resp.set_cookie(
        key=COOKIE_NAME,
        value=issue_token(email),
        httponly=False,
        samesite="lax",
        max_age=60 * 60 * 24 * ttl_days(),
        secure=False,                 # True en prod HTTPS (reverse proxy)
    )
    log.info("Admin connecté")
    return resp


@router.get("/admin/logout")
def logout():
    resp = RedirectResponse("/", status_code=303)
    resp.delete_cookie(COOKIE_NAME)
    return resp

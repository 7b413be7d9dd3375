# frontend/api_client.py
import os

import requests
import streamlit as st

DEFAULT_API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")


class ApiError(Exception):
    def __init__(self, message: str, status: int | None = None, url: str | None = None,
                 field_errors: dict | None = None):
        self.status = status; self.url = url; self.field_errors = field_errors or {}
        super().__init__(message)


def normalize_token(raw: str) -> str:
    s = str(raw or "").strip().strip('"').strip("'")
    if s.lower().startswith("bearer "):
        s = s.split(" ", 1)[1].strip()
    return s


def get_api_base_and_token():
    api_base = st.session_state.get("api_base") or DEFAULT_API_BASE
    token = normalize_token(st.session_state.get("jwt", ""))
    hdrs = {"Authorization": f"Bearer {token}"} if token else {}
    return api_base.rstrip("/"), token, hdrs


def _friendly_http_message(status: int, url: str, body: dict) -> str:
    if status == 401: return "Not signed in (401): sign in from the Home page."
    if status == 403: return "Access denied (403)."
    if status == 404: return body.get("error") or f"Not found (404): {url}"
    if status == 422: return "Some fields are invalid."
    if status >= 500: return f"Server error ({status}): {body.get('error', '')}"
    return body.get("error") or f"HTTP error {status}"


def _call(method: str, url: str, hdrs: dict, **kw):
    try:
        r = requests.request(method, url, headers=hdrs, timeout=20, **kw)
    except requests.Timeout:
        raise ApiError("Request timed out.")
    except requests.ConnectionError:
        raise ApiError("Could not connect: API is down or the URL is wrong.")
    except requests.RequestException as e:
        raise ApiError(f"Network error: {e}")

    try:
        body = r.json()
    except ValueError:
        body = {}
    if r.status_code >= 400:
        meta = body.get("meta") or {}
        raise ApiError(_friendly_http_message(r.status_code, url, body), r.status_code, url,
                       field_errors=meta.get("fieldErrors"))
    return body


def get_json(url: str, hdrs: dict):
    return _call("GET", url, hdrs)


def post_json(url: str, hdrs: dict, payload: dict):
    return _call("POST", url, {**hdrs, "Content-Type": "application/json"}, json=payload)


def ensure_array(x):
    # ok-envelope or bare list
    if isinstance(x, list):
        return x
    if isinstance(x, dict):
        d = x.get("data", x)
        if isinstance(d, list):
            return d
    return []


def show_api_error(ex: ApiError):
    st.error(str(ex))
    for field, msgs in (ex.field_errors or {}).items():
        st.caption(f"• {field}: {'; '.join(msgs)}")

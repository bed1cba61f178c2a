#!/usr/bin/env python3

"""Utility helpers for building authenticated Subsonic requests."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
import hashlib
import secrets


_REDACTED_PARAMS = {"p", "t", "s"}


def normalize_base_url(url: str) -> str:
    """Return the server url without trailing slashes or a ``/rest`` suffix.

    Users paste either the web UI address or the REST endpoint; both resolve
    to the same base.
    """

    if not url or not url.strip():
        raise ValueError("server url is empty")

    base = url.strip().rstrip("/")
    if base.endswith("/rest"):
        base = base[: -len("/rest")]
    return base


def make_salt(length: int = 12) -> str:
    """Return a random hex salt for token authentication."""

    return secrets.token_hex(length // 2 or 1)


def make_token(password: str, salt: str) -> str:
    """Return ``md5(password + salt)`` as required by the token scheme."""

    return hashlib.md5(f"{password}{salt}".encode("utf-8")).hexdigest()


def build_auth_params(
    username: str,
    password: str,
    client_name: str,
    api_version: str,
    salt: Optional[str] = None,
) -> Dict[str, str]:
    """Return the query parameters every Subsonic call must carry.

    Token authentication (API 1.13.0+) sends ``t = md5(password + salt)``
    together with the salt so the clear-text password never travels.
    """

    salt = salt or make_salt()
    return {
        "u": username,
        "t": make_token(password, salt),
        "s": salt,
        "v": api_version,
        "c": client_name,
        "f": "json",
    }


def redact_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Return a copy of *params* safe to write to logs."""

    if not params:
        return {}

    return {
        str(key): ("***" if key in _REDACTED_PARAMS else str(value))
        for key, value in params.items()
    }

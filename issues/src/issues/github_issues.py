"""Fetch the issue list for a GitHub repository.

A non-200 status is a failed fetch whatever the body says. Transport
errors are reported the same way; nothing is retried.
"""

import json
import sys
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any

from issues.config import Config

ACCEPT = "application/vnd.github+json"


@dataclass
class FetchResult:
    """Decoded response body and whether the request succeeded."""

    ok: bool
    body: Any


def _log(message: str) -> None:
    print(f"[github_issues] {message}", file=sys.stderr)


def issues_url(user: str, project: str, api_url: str) -> str:
    user = urllib.parse.quote(user, safe="")
    project = urllib.parse.quote(project, safe="")
    return f"{api_url.rstrip('/')}/repos/{user}/{project}/issues"


def request_headers(config: Config) -> dict[str, str]:
    headers = {"User-Agent": config.user_agent, "Accept": ACCEPT}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return headers


def error_message(body: Any) -> str:
    """Human-readable message from an error response body."""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "unexpected response"


def handle_response(status_code: int, body: bytes, verbose: bool = False, reason: str = "") -> FetchResult:
    """Decode a response body. Raises ValueError if it is not JSON.

    An error response without a message gets one built from the status
    line, e.g. "HTTP 502 Bad Gateway".
    """
    _log(f"Got response: status code={status_code}")
    if verbose:
        _log(body.decode("utf-8", errors="replace"))

    ok = status_code == 200
    status_line = f"HTTP {status_code} {reason}".rstrip()
    if not ok and not body:
        return FetchResult(ok=False, body={"message": status_line})

    try:
        decoded = json.loads(body)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON in response (status {status_code}): {e}") from e

    if not ok and not (isinstance(decoded, dict) and decoded.get("message")):
        return FetchResult(ok=False, body={"message": status_line})
    return FetchResult(ok=ok, body=decoded)


def fetch(user: str, project: str, config: Config) -> FetchResult:
    """GET the issues for ``user``/``project``.

    Returns a failed FetchResult with {"message": ...} for transport errors
    and unparseable bodies.
    """
    _log(f"Fetching {user}'s project {project}")

    url = issues_url(user, project, config.api_url)
    req = urllib.request.Request(url, headers=request_headers(config))
    try:
        with urllib.request.urlopen(req, timeout=config.timeout) as resp:
            status, body, reason = resp.status, resp.read(), resp.reason
    except urllib.error.HTTPError as e:
        # Error statuses still carry a JSON body with a message
        status, body, reason = e.code, e.read(), e.reason
    except urllib.error.URLError as e:
        _log(f"Request failed: {e.reason}")
        return FetchResult(ok=False, body={"message": str(e.reason)})
    except TimeoutError as e:
        _log(f"Request timed out after {config.timeout}s")
        return FetchResult(ok=False, body={"message": f"timed out: {e}"})

    try:
        return handle_response(status, body, verbose=config.verbose, reason=str(reason or ""))
    except ValueError as e:
        return FetchResult(ok=False, body={"message": str(e)})

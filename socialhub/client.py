"""
HTTP client for the SocialHub API.

The signed-in state lives in an explicit ClientSession that is handed to the
client, rather than in ambient storage. The session can be persisted to a JSON
file between runs with load/save/clear.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx


class ApiError(Exception):
    """A failure envelope returned by the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


@dataclass
class ClientSession:
    """Bearer token and user summary for one signed-in client."""
    path: Optional[Path] = None
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def load(self) -> "ClientSession":
        """Read the session from disk; an unreadable file counts as signed out."""
        self.token, self.user = None, None
        if self.path is None or not self.path.exists():
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return self
        if isinstance(data, dict) and isinstance(data.get("token"), str):
            self.token = data["token"]
            self.user = data.get("user")
        return self

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": self.token, "user": self.user}), encoding="utf-8")

    def start(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.save()

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()


class SocialHubClient:
    """Thin wrapper over the REST endpoints that unwraps the response envelope."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session: Optional[ClientSession] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.session = session if session is not None else ClientSession()
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=10.0)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = self.http.request(method, path, headers=headers, **kwargs)
        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text or "Invalid response")
        if not isinstance(body, dict):
            raise ApiError(response.status_code, "Invalid response")

        if response.status_code == 401 and self.session.token:
            # Expired or rejected token
            self.session.clear()
        if not body.get("success"):
            raise ApiError(response.status_code, body.get("error") or "Request failed")
        return body.get("data")

    # ---- auth ----

    def register(self, email: str, username: str, display_name: str, password: str, bio: Optional[str] = None) -> Dict:
        data = self._request("POST", "/api/auth/register", json={
            "email": email,
            "username": username,
            "displayName": display_name,
            "password": password,
            "bio": bio,
        })
        self.session.start(data["token"], data["user"])
        return data["user"]

    def login(self, email: str, password: str) -> Dict:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.session.start(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        try:
            if self.session.token:
                self._request("POST", "/api/auth/logout")
        finally:
            self.session.clear()

    # ---- posts ----

    def list_posts(self, cursor: Optional[int] = None, limit: int = 10, author_id: Optional[int] = None) -> List[Dict]:
        params = {"limit": limit}
        if cursor is not None:
            params["cursor"] = cursor
        if author_id is not None:
            params["authorId"] = author_id
        return self._request("GET", "/api/posts", params=params)

    def get_post(self, post_id: int) -> Dict:
        return self._request("GET", f"/api/posts/{post_id}")

    def create_post(self, content: str) -> Dict:
        return self._request("POST", "/api/posts", json={"content": content})

    def update_post(self, post_id: int, content: str) -> Dict:
        return self._request("PUT", f"/api/posts/{post_id}", json={"content": content})

    def delete_post(self, post_id: int) -> None:
        self._request("DELETE", f"/api/posts/{post_id}")

    # ---- engagement ----

    def list_comments(self, post_id: int, cursor: Optional[int] = None, limit: int = 20) -> List[Dict]:
        params = {"postId": post_id, "limit": limit}
        if cursor is not None:
            params["cursor"] = cursor
        return self._request("GET", "/api/comments", params=params)

    def add_comment(self, post_id: int, content: str) -> Dict:
        return self._request("POST", "/api/comments", json={"postId": post_id, "content": content})

    def like(self, post_id: int) -> Dict:
        return self._request("POST", "/api/likes", json={"postId": post_id})

    def unlike(self, post_id: int) -> Dict:
        return self._request("DELETE", "/api/likes", json={"postId": post_id})

    # ---- discovery ----

    def search(self, query: str, limit: int = 20) -> List[Dict]:
        return self._request("GET", "/api/search", params={"q": query, "limit": limit})

    def profile(self, username: str) -> Dict:
        return self._request("GET", f"/api/users/{username}")

    def generate_content(self, prompt: str, content_type: str = "post") -> str:
        data = self._request("POST", "/api/ai/generate-content", json={"prompt": prompt, "type": content_type})
        return data["content"]

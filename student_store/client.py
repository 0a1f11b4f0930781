import logging
from typing import Any, Dict, Optional

import requests

from student_store.app import PREFIX

logger = logging.getLogger(__name__)


class StudentStoreError(Exception):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"student store returned {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class StudentStoreClient:
    """Talks to a running student store over HTTP.

    Any object with a ``requests.Session``-style ``request`` method works as
    ``session``; a new session is created when none is given.
    """

    def __init__(self, base_url: str, session=None, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, expected: int, json: Optional[dict] = None):
        resp = self.session.request(method, f"{self.base_url}{path}", json=json, timeout=self.timeout)
        if resp.status_code != expected:
            try:
                payload = resp.json()
            except ValueError:
                payload = resp.text
            detail = payload.get("detail") if isinstance(payload, dict) else payload
            logger.warning("%s %s failed with %d", method, path, resp.status_code)
            raise StudentStoreError(resp.status_code, detail)
        return resp

    def create(self, name: str, branch: str) -> str:
        return self._call("POST", PREFIX, 201, json={"name": name, "branch": branch}).text

    def replace(self, name: str, branch: str) -> str:
        return self._call("PUT", PREFIX, 201, json={"name": name, "branch": branch}).text

    def delete(self, name: str) -> str:
        return self._call("DELETE", PREFIX, 200, json={"name": name}).text

    def list(self) -> Dict[str, str]:
        return self._call("GET", PREFIX, 200).json()

    def health(self) -> Dict[str, Any]:
        return self._call("GET", "/health", 200).json()

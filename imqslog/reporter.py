"""
Remote error reporter

Sends log messages to a Rollbar compatible item endpoint. Submissions are
fire-and-forget: they are queued on a single background worker and any
transport problem is only visible in this module's debug log.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from beartype.typing import Dict, Optional

import requests
from requests.exceptions import RequestException

from imqslog.constants import DEFAULT_REPORTER_TIMEOUT, ROLLBAR_ITEM_URL

logger = logging.getLogger(__name__)


class RemoteReporter:
    """
    Client for the remote error reporting service.

    Example:
        reporter = RemoteReporter()
        reporter.configure("post_server_item_token", "/src/myservice", "1.2.3", "production")
        reporter.submit("warning", "disk at 90%")
        reporter.close()
    """

    USER_AGENT = "imqslog"

    def __init__(
        self,
        token: Optional[str] = None,
        repository_root: str = "",
        code_version: str = "",
        environment: str = "production",
        endpoint: str = ROLLBAR_ITEM_URL,
        timeout: float = DEFAULT_REPORTER_TIMEOUT,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._executor = None
        self._lock = Lock()
        self.configure(token, repository_root, code_version, environment)

    def configure(self, token: Optional[str], repository_root: str, code_version: str, environment: str):
        self.token = token
        self.repository_root = repository_root
        self.code_version = code_version
        self.environment = environment

    @property
    def enabled(self) -> bool:
        return bool(self.token)

    def build_payload(self, severity_name: str, message: str) -> Dict:
        data = {
            "environment": self.environment,
            "level": severity_name,
            "timestamp": int(time.time()),
            "platform": "python",
            "body": {"message": {"body": message}},
        }
        if self.code_version:
            data["code_version"] = self.code_version
        if self.repository_root:
            data["server"] = {"root": self.repository_root}
        return {"access_token": self.token, "data": data}

    def submit(self, severity_name: str, message: str):
        """Queue a message for delivery. Returns immediately."""
        if not self.enabled:
            return
        payload = self.build_payload(severity_name, message)
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="imqslog-reporter")
            self._executor.submit(self._send, payload)

    def _send(self, payload: Dict):
        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                timeout=self.timeout,
                headers={"User-Agent": self.USER_AGENT},
            )
            if response.status_code >= 400:
                logger.debug(f"Remote reporter rejected item: {response.status_code} {response.text}")
        except RequestException as e:
            logger.debug(f"Remote reporter request failed: {e}")

    def flush(self):
        """Wait until everything submitted so far has been sent."""
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    def close(self):
        self.flush()

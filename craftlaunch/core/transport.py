import logging
import requests
from typing import Optional

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Blocking HTTP GET returning the raw body.

    An empty result means failure: network errors, HTTP errors and empty
    bodies are not told apart. No timeout and no retry.
    """

    def __init__(self, session: Optional[requests.Session] = None, user_agent: str = "craftlaunch"):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def fetch(self, url: str) -> bytes:
        try:
            response = self.session.get(url)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            logger.error(f"Failed to retrieve data from {url}: {e}")
            return b""

    def close(self):
        self.session.close()

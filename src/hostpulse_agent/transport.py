"""HTTP reporting of snapshots and heartbeats."""

import json
import logging
from typing import Any, Dict, Mapping, Union

import requests

from . import __version__
from .collectors import collect_heartbeat

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class ServerError(TransportError):
    """Endpoint answered with a status other than 200."""

    def __init__(self, status_code: int, text: str = ""):
        super().__init__(f"Server returned status {status_code}: {text[:200]}")
        self.status_code = status_code


class Reporter:
    """
    Fire-and-forget JSON reporter.

    Every delivery is a single blocking POST. Failures are logged and
    reported through the return value; there is no retry or queueing.
    """

    def __init__(self, timeout: float = 30):
        self.timeout = timeout
        self.headers = {
            "Content-Type": "application/json",
            "User-Agent": f"hostpulse-agent/{__version__}",
        }

    def _serialize(self, record: Union[Mapping[str, Any], Any]) -> bytes:
        data: Dict[str, Any] = record.to_dict() if hasattr(record, "to_dict") else dict(record)
        return json.dumps(data).encode("utf-8")

    def _post(self, url: str, body: bytes) -> None:
        """
        POST a JSON body.

        Raises:
            ServerError: On a non-200 response
            TransportError: On connection failure or timeout
        """
        try:
            response = requests.post(url, data=body, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise TransportError("Request timeout")
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}")

        if response.status_code != 200:
            raise ServerError(response.status_code, response.text)

    def report(self, record: Union[Mapping[str, Any], Any], url: str) -> bool:
        """
        Send a record as JSON.

        Args:
            record: A mapping, or an object with ``to_dict()``
            url: Endpoint URL

        Returns:
            True if the endpoint answered 200, False otherwise
        """
        try:
            body = self._serialize(record)
        except (TypeError, ValueError) as e:
            logger.error("Could not serialize report: %s", e)
            return False

        try:
            self._post(url, body)
        except ServerError as e:
            logger.warning("Report to %s rejected: %s", url, e)
            return False
        except TransportError as e:
            logger.error("Report to %s failed: %s", url, e)
            return False

        logger.info("Reported successfully to %s", url)
        return True

    def heartbeat(self, url: str) -> bool:
        """Send an "online" heartbeat."""
        return self.report(collect_heartbeat(), url)

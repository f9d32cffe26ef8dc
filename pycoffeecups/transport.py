# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Transports carrying IPP message bodies to the server.

IPP rides on HTTP: each request is a POST with Content-Type
application/ipp to the printer's path (e.g. /printers/Office), and the
response body is the IPP response.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests
from requests.auth import HTTPBasicAuth

from .exceptions import AuthenticationError, ConnectionError, ConnectionTimeoutError, HTTPError
from .models import ClientConfig
from .protocol import CONTENT_TYPE

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Sends one encoded IPP request and returns the response body."""

    @abstractmethod
    def send(self, path: str, data: bytes) -> bytes:
        """
        Send an IPP message body.

        Args:
            path: Resource path on the server, e.g. "/printers/Office".
            data: Encoded IPP request.

        Returns:
            The encoded IPP response.

        Raises:
            ConnectionError: If the exchange fails at the transport level.
        """

    def close(self) -> None:
        pass


class HttpTransport(Transport):
    """
    HTTP(S) transport built on a requests Session.

    Example:
        >>> transport = HttpTransport(ClientConfig(host="cups.local"))
        >>> body = transport.send("/printers/Office", request.build())
    """

    def __init__(self, config: ClientConfig, *, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Content-Type": CONTENT_TYPE,
                "Accept": CONTENT_TYPE,
                "User-Agent": config.user_agent,
            }
        )
        if config.username is not None and config.password is not None:
            self._session.auth = HTTPBasicAuth(config.username, config.password)

    def url_for(self, path: str) -> str:
        config = self._config
        if not path.startswith("/"):
            path = "/" + path
        return f"{config.http_scheme}://{config.host}:{config.port}{path}"

    def send(self, path: str, data: bytes) -> bytes:
        host, port = self._config.host, self._config.port
        url = self.url_for(path)
        logger.debug("POST %s (%d bytes)", url, len(data))

        try:
            response = self._session.post(
                url,
                data=data,
                timeout=self._config.timeout,
                verify=self._config.verify_tls,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("IPP request to %s timed out", url)
            raise ConnectionTimeoutError(f"Request to {url} timed out", host, port) from e
        except requests.exceptions.RequestException as e:
            logger.warning("IPP request to %s failed: %s", url, e)
            raise ConnectionError(f"Failed to send request to {url}: {e}", host, port) from e

        if response.status_code == 401:
            logger.warning("IPP request to %s was not authorized", url)
            raise AuthenticationError(host, port)
        if response.status_code != 200:
            logger.warning("IPP request to %s returned HTTP %d", url, response.status_code)
            raise HTTPError(response.status_code, host, port)

        logger.debug("HTTP 200 from %s (%d bytes)", url, len(response.content))
        return response.content

    def close(self) -> None:
        self._session.close()

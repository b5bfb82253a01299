"""Best-effort public IP lookup."""

from typing import Any

import httpx

from ..config import IP_LOOKUP_URL
from ..errors import ExternalServiceFailure
from ..logging import JSONLLogger, get_logger

UNKNOWN_IP = "unknown"


class IPLookup:
    """Resolves the client's public IP through a JSON endpoint.

    The endpoint must answer ``{"ip": "<address>"}``. Any failure maps to
    ``"unknown"``; the lookup never raises.
    """

    def __init__(
        self,
        url: str = IP_LOOKUP_URL,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: JSONLLogger | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._logger = logger

    @property
    def logger(self) -> JSONLLogger:
        return self._logger or get_logger()

    async def _fetch(self) -> str:
        """Fetch the IP. Raises ExternalServiceFailure on any problem."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self._url)
                response.raise_for_status()
                data: Any = response.json()
        except httpx.TimeoutException as e:
            raise ExternalServiceFailure(f"IP lookup timed out after {self._timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ExternalServiceFailure(f"IP lookup failed: {e}") from e
        except ValueError as e:
            raise ExternalServiceFailure(f"IP lookup returned invalid JSON: {e}") from e

        ip = data.get("ip") if isinstance(data, dict) else None
        if not isinstance(ip, str) or not ip:
            raise ExternalServiceFailure("IP lookup response has no 'ip' field")
        return ip

    async def get_ip(self) -> str:
        """Return the public IP, or ``"unknown"`` if it cannot be determined."""
        try:
            return await self._fetch()
        except ExternalServiceFailure as e:
            self.logger.log("ip_lookup_failed", error=str(e), url=self._url)
            return UNKNOWN_IP


class NullIPLookup:
    """Lookup that never touches the network."""

    async def get_ip(self) -> str:
        return UNKNOWN_IP

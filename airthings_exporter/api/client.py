"""
Async client for the Airthings consumer API.

Only the two read endpoints the exporter needs are covered:
the device inventory and the latest samples of one device.
Every call takes the bearer token explicitly; token lifetime is
handled by the token source.
"""

import asyncio
import json
from typing import Any
from urllib.parse import quote

import aiohttp

from ..const import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT
from ..logging import get_logger
from ..models.device import DeviceRecord
from .exceptions import ApiError


logger = get_logger("api.client")

DEVICES_PATH = "/v1/devices"
LATEST_SAMPLES_PATH = "/v1/devices/{serial_number}/latest-samples"


class AirthingsClient:
    """
    Airthings API client on top of a shared aiohttp session.

    No retries are made; every failure surfaces as ApiError.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """
        Initialize API client.

        Args:
            session: aiohttp session used for all requests
            base_url: API root, without trailing path
            timeout: Total timeout per request in seconds
        """
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get_json(self, token: str, path: str) -> dict[str, Any]:
        """
        GET request returning a JSON object.

        Args:
            token: Bearer access token
            path: API path below the base URL

        Returns:
            Decoded JSON object

        Raises:
            ApiError: On transport errors, non-2xx status or a body
                that is not a JSON object
        """
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        logger.debug(f"GET {url}")

        try:
            async with self._session.get(url, headers=headers, timeout=self._timeout) as response:
                if response.status >= 300:
                    body = await response.text(errors="replace")
                    raise ApiError(response.status, _error_message(body) or response.reason or "")

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise ApiError(response.status, f"invalid JSON body: {e}") from e

        except asyncio.TimeoutError as e:
            raise ApiError(0, f"timeout requesting {path}") from e
        except aiohttp.ClientError as e:
            raise ApiError(0, str(e) or e.__class__.__name__) from e

        if not isinstance(data, dict):
            raise ApiError(response.status, f"expected JSON object, got {type(data).__name__}")

        return data

    async def fetch_inventory(self, token: str) -> list[DeviceRecord]:
        """
        List the devices visible to the account.

        Args:
            token: Bearer access token

        Returns:
            Device records in API order
        """
        data = await self._get_json(token, DEVICES_PATH)

        items = data.get("devices") or []
        if not isinstance(items, list):
            raise ApiError(200, "'devices' is not a list")

        records = []
        for item in items:
            if not isinstance(item, dict):
                raise ApiError(200, "device entry is not an object")

            record = DeviceRecord.from_dict(item)
            if not record.id:
                logger.warning("Skipping device entry without id", extra={"op": "devices"})
                continue
            records.append(record)

        return records

    async def fetch_latest_samples(self, token: str, device_id: str) -> dict[str, Any]:
        """
        Get the latest sample values of one device.

        Values are returned undecoded; besides numbers the API reports
        strings such as ``relayDeviceType``.

        Args:
            token: Bearer access token
            device_id: Device serial number

        Returns:
            Mapping of reading key to raw JSON value
        """
        path = LATEST_SAMPLES_PATH.format(serial_number=quote(device_id, safe=""))
        data = await self._get_json(token, path)

        samples = data.get("data")
        if samples is None:
            return {}
        if not isinstance(samples, dict):
            raise ApiError(200, "'data' is not an object")

        return samples


def _error_message(body: str) -> str:
    """Pull a readable message out of an error response body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()[:200]

    if isinstance(payload, dict):
        for key in ("message", "error_description", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return body.strip()[:200]

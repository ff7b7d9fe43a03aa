"""etcd configuration store backed by the etcd v3 JSON gateway.

etcd exposes its key-value API over HTTP at ``/v3/kv/*``, with keys and
values base64-encoded in JSON bodies. This backend talks to that gateway
with httpx, trying each configured endpoint in order until one answers.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from flexconfig.errors import StoreTransportError
from flexconfig.store.base import KeyValue, Store

__all__ = ["EtcdStore", "DEFAULT_ETCD_ENDPOINT", "ETCD_REQUEST_TIMEOUT"]

logger = logging.getLogger(__name__)

DEFAULT_ETCD_ENDPOINT = "http://127.0.0.1:2379"
ETCD_REQUEST_TIMEOUT = 1.0


def _b64(text: str | bytes) -> str:
    raw = text.encode("utf-8") if isinstance(text, str) else text
    return base64.b64encode(raw).decode("ascii")


def _unb64(text: str) -> str:
    return base64.b64decode(text, validate=True).decode("utf-8")


def _prefix_range_end(prefix: bytes) -> bytes:
    """Smallest key greater than every key starting with prefix."""
    end = bytearray(prefix)
    for i in range(len(end) - 1, -1, -1):
        if end[i] < 0xFF:
            end[i] += 1
            return bytes(end[: i + 1])
    # all 0xff: range to the end of the keyspace
    return b"\x00"


class EtcdStore(Store):
    """Store backend for etcd, addressed through its v3 JSON gateway.

    Example: with prefix ``example``, ``set("log.filepath", v)`` writes the
    etcd key ``/example/log/filepath``.
    """

    def __init__(
        self,
        endpoints: list[str] | None = None,
        prefix: str = "",
        timeout: float = ETCD_REQUEST_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            endpoints: Gateway base URLs, tried in order. Defaults to
                the local etcd endpoint.
            prefix: Namespace separating these properties from other
                users of the same etcd cluster.
            timeout: Per-request timeout in seconds.
            client: Optional preconfigured httpx client.
        """
        super().__init__(prefix)
        self._endpoints = [e.rstrip("/") for e in (endpoints or [DEFAULT_ETCD_ENDPOINT])]
        self._timeout = timeout
        self._client = client

    @property
    def endpoints(self) -> list[str]:
        return list(self._endpoints)

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _post(self, api_path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to the gateway, failing over between endpoints on transport errors.

        Raises:
            StoreTransportError: If no endpoint answers or the answer is an error.
        """
        client = self._get_client()
        last_error: Exception | None = None
        for endpoint in self._endpoints:
            try:
                response = client.post(f"{endpoint}{api_path}", json=payload)
                response.raise_for_status()
                data = response.json()
            except httpx.TransportError as e:
                logger.debug("etcd endpoint %s unreachable: %s", endpoint, e)
                last_error = e
                continue
            except httpx.HTTPError as e:
                raise StoreTransportError(f"etcd request {api_path} failed: {e}", cause=e) from e
            except ValueError as e:
                raise StoreTransportError(f"etcd returned invalid JSON for {api_path}", cause=e) from e
            if not isinstance(data, dict):
                raise StoreTransportError(
                    f"etcd returned {type(data).__name__} for {api_path}, expected an object"
                )
            return data
        raise StoreTransportError(
            f"Cannot connect to etcd at {', '.join(self._endpoints)}: {last_error}",
            cause=last_error,
        )

    def _range(self, payload: dict[str, Any]) -> list[tuple[str, str]]:
        """Run a range request and decode the returned (path, value) pairs.

        Raises:
            StoreTransportError: If the request fails or the answer is malformed.
        """
        data = self._post("/v3/kv/range", payload)
        kvs = data.get("kvs") or []
        try:
            return [(_unb64(kv["key"]), _unb64(kv.get("value", ""))) for kv in kvs]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            # binascii.Error and UnicodeDecodeError are ValueErrors
            raise StoreTransportError(f"etcd returned a malformed range response: {e}", cause=e) from e

    def get(self, key: str) -> str | None:
        path = self.store_path(key, "get")
        pairs = self._range({"key": _b64(path)})
        if not pairs:
            return None
        return pairs[0][1]

    def get_all(self) -> list[KeyValue]:
        root = (self.prefix + "/").encode("utf-8")
        pairs = self._range({"key": _b64(root), "range_end": _b64(_prefix_range_end(root))})
        result = [KeyValue(key=self.relative_key(path), value=value) for path, value in pairs]
        return sorted(result, key=lambda kv: kv.key)

    def set(self, key: str, value: str) -> None:
        path = self.store_path(key, "set")
        self._post("/v3/kv/put", {"key": _b64(path), "value": _b64(value)})

    def delete(self, key: str) -> None:
        path = self.store_path(key, "delete")
        subtree = (path + "/").encode("utf-8")
        self._post("/v3/kv/deleterange", {"key": _b64(path)})
        self._post(
            "/v3/kv/deleterange",
            {"key": _b64(subtree), "range_end": _b64(_prefix_range_end(subtree))},
        )

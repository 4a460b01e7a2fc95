"""Cache-first asset fetching for the front-end, usable without network access.

The controller reacts to three triggers:

- ``install``: fetch the fixed asset manifest into the current cache. Any
  failed asset aborts the install and nothing is stored.
- ``activate``: delete every cache whose name is not the current one.
- ``fetch``: answer from the current cache, otherwise from the network.
  Successful same-origin responses are copied into the cache in the
  background; the caller gets the original response straight away.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

import httpx

from mealog.offline.cache_storage import CacheStorage, clone_response
from mealog.utilities.config import OFFLINE_CACHE_DIR, OFFLINE_CACHE_NAME, OFFLINE_MANIFEST
from mealog.utilities.errors import CacheInstallError

logger = logging.getLogger(__name__)

RequestLike = Union[httpx.Request, str]


def _origin(url: httpx.URL):
    return (url.scheme, url.host, url.port)


class CacheController:
    def __init__(
        self,
        base_url: str,
        storage: Optional[CacheStorage] = None,
        cache_name: str = OFFLINE_CACHE_NAME,
        manifest: Iterable[str] = OFFLINE_MANIFEST,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = httpx.URL(base_url)
        self.storage = storage or CacheStorage(Path(OFFLINE_CACHE_DIR))
        self.cache_name = cache_name
        self.manifest = list(manifest)
        self._owns_client = client is None
        self.client = client or httpx.Client()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="offline-cache")
        # Writes still running; each removes itself when done.
        self._pending: Set[Future] = set()
        self._pending_lock = threading.Lock()

    def resolve(self, url: str) -> httpx.URL:
        return self.base_url.join(url)

    def build_request(self, request: RequestLike) -> httpx.Request:
        if isinstance(request, httpx.Request):
            return request
        return self.client.build_request("GET", self.resolve(request))

    def is_basic(self, response: httpx.Response) -> bool:
        """Same-origin response, the only kind worth keeping offline."""
        return _origin(response.request.url) == _origin(self.base_url)

    def install(self) -> List[str]:
        cache = self.storage.open(self.cache_name)
        pairs = []
        for asset in self.manifest:
            request = self.build_request(asset)
            try:
                response = self.client.send(request)
            except httpx.HTTPError as e:
                logger.error("Install of %s failed fetching %s: %s", self.cache_name, request.url, e)
                raise CacheInstallError(f"Could not fetch {request.url}") from e
            if not response.is_success:
                logger.error("Install of %s failed: %s returned %d", self.cache_name, request.url, response.status_code)
                raise CacheInstallError(f"Could not fetch {request.url} (status {response.status_code})")
            pairs.append((request, response))
        cache.put_all(pairs)
        logger.info("Cached %d resources in %s", len(pairs), self.cache_name)
        return [str(request.url) for request, _ in pairs]

    def activate(self) -> List[str]:
        stale = [name for name in self.storage.keys() if name != self.cache_name]
        for name in stale:
            self.storage.delete(name)
            logger.info("Deleted stale cache %s", name)
        return stale

    def fetch(self, request: RequestLike) -> httpx.Response:
        request = self.build_request(request)
        if request.method.upper() != "GET":
            return self.client.send(request)

        cache = self.storage.open(self.cache_name)
        cached = cache.match(request)
        if cached is not None:
            return cached

        response = self.client.send(request)
        if response is None or response.status_code != 200 or not self.is_basic(response):
            return response

        copy = clone_response(response)
        future = self._executor.submit(self._store, request, copy)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return response

    def _store(self, request: httpx.Request, response: httpx.Response) -> None:
        try:
            self.storage.open(self.cache_name).put(request, response)
        except Exception as e:
            # The response already went back to the caller.
            logger.warning("Could not cache %s: %s", request.url, e)

    def _forget(self, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    @property
    def pending_writes(self) -> int:
        with self._pending_lock:
            return len(self._pending)

    def drain(self) -> None:
        """Block until every background cache write has finished."""
        with self._pending_lock:
            pending = list(self._pending)
        for future in pending:
            future.result()

    def close(self) -> None:
        self.drain()
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

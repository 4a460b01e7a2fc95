"""Named, versioned response caches persisted on disk.

Layout::

    <root>/<quoted cache name>/index.json   request key -> {url, status, headers, body}
    <root>/<quoted cache name>/<sha256>.bin response body

A request key is ``"<METHOD> <absolute url without fragment>"``. All
operations on one storage go through a single lock.
"""
from __future__ import annotations

import hashlib
import json
import logging
import shutil
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote, unquote

import httpx

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"

# Bodies are stored decoded, so these no longer describe them.
_DROPPED_HEADERS = {"content-encoding", "content-length", "transfer-encoding", "connection"}


def request_key(request: httpx.Request) -> str:
    url = request.url.copy_with(fragment=None)
    return f"{request.method.upper()} {url}"


def storable_headers(headers: httpx.Headers) -> List[Tuple[str, str]]:
    return [(k, v) for k, v in headers.multi_items() if k.lower() not in _DROPPED_HEADERS]


def clone_response(response: httpx.Response) -> httpx.Response:
    """Independent copy of an already-read response; the original stays readable."""
    return httpx.Response(
        response.status_code,
        headers=storable_headers(response.headers),
        content=response.content,
        request=response.request,
    )


class Cache:
    def __init__(self, storage: "CacheStorage", name: str, path: Path):
        self.storage = storage
        self.name = name
        self.path = path

    def _index_path(self) -> Path:
        return self.path / INDEX_FILE

    def _read_index(self) -> dict:
        try:
            with open(self._index_path(), "r", encoding="utf-8") as f:
                index = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning("Discarding corrupt cache index %s: %s", self._index_path(), e)
            return {}
        return index if isinstance(index, dict) else {}

    def _write_index(self, index: dict) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        with open(self._index_path(), "w", encoding="utf-8") as f:
            json.dump(index, f, indent=2)

    def match(self, request: httpx.Request) -> Optional[httpx.Response]:
        key = request_key(request)
        with self.storage.lock:
            entry = self._read_index().get(key)
            if entry is None:
                return None
            try:
                body = (self.path / entry["body"]).read_bytes()
            except (OSError, KeyError) as e:
                logger.warning("Cache entry %s in %s is unreadable: %s", key, self.name, e)
                return None
        return httpx.Response(
            entry.get("status", 200),
            headers=[tuple(h) for h in entry.get("headers", [])],
            content=body,
            request=request,
        )

    def put(self, request: httpx.Request, response: httpx.Response) -> None:
        self.put_all([(request, response)])

    def put_all(self, pairs: Iterable[Tuple[httpx.Request, httpx.Response]]) -> None:
        """Store every pair or, if a body cannot be written, none of the new index entries."""
        pairs = list(pairs)
        with self.storage.lock:
            self.path.mkdir(parents=True, exist_ok=True)
            index = self._read_index()
            for request, response in pairs:
                key = request_key(request)
                body_name = hashlib.sha256(key.encode("utf-8")).hexdigest() + ".bin"
                (self.path / body_name).write_bytes(response.content)
                index[key] = {
                    "url": str(request.url.copy_with(fragment=None)),
                    "status": response.status_code,
                    "headers": storable_headers(response.headers),
                    "body": body_name,
                }
            self._write_index(index)

    def keys(self) -> List[str]:
        with self.storage.lock:
            return [entry["url"] for entry in self._read_index().values()]


class CacheStorage:
    def __init__(self, root: Path):
        self.root = Path(root)
        self.lock = threading.RLock()

    def _path(self, name: str) -> Path:
        return self.root / quote(name, safe="")

    def open(self, name: str) -> Cache:
        with self.lock:
            path = self._path(name)
            path.mkdir(parents=True, exist_ok=True)
            return Cache(self, name, path)

    def keys(self) -> List[str]:
        with self.lock:
            if not self.root.exists():
                return []
            return sorted(unquote(p.name) for p in self.root.iterdir() if p.is_dir())

    def delete(self, name: str) -> bool:
        with self.lock:
            path = self._path(name)
            if not path.is_dir():
                return False
            shutil.rmtree(path)
            return True

    def match(self, request: httpx.Request) -> Optional[httpx.Response]:
        """Look the request up in every cache, oldest name first."""
        for name in self.keys():
            response = Cache(self, name, self._path(name)).match(request)
            if response is not None:
                return response
        return None

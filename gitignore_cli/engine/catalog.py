"""Resolve the catalog of available templates from the remote repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import structlog

from ..config import GlobalConfig
from ..errors import CatalogError
from ..logging_conf import component_logger
from .fetcher import FetchError, Fetcher

BLOB_NODE_TYPE = "blob"


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only mapping of lowercased template names to canonical names."""

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Catalog":
        # later duplicates (case-insensitive) overwrite earlier ones
        return cls({name.lower(): name for name in names})

    def resolve(self, name: str) -> str | None:
        return self.entries.get(name.lower())

    def names(self) -> list[str]:
        return sorted(self.entries.values(), key=str.lower)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class CatalogFetcher:
    """Two-step lookup: ref -> commit sha -> tree listing."""

    def __init__(
        self,
        config: GlobalConfig,
        fetcher: Fetcher,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.logger = logger or component_logger("catalog")

    def fetch_catalog(self) -> Catalog:
        sha = self._resolve_commit_sha()
        nodes = self._list_tree(sha)
        catalog = Catalog.from_names(self._template_names(nodes))
        self.logger.info("catalog_resolved", sha=sha, templates=len(catalog))
        return catalog

    def _resolve_commit_sha(self) -> str:
        payload = self._get_json(self.config.commit_url)
        sha = payload.get("sha") if isinstance(payload, dict) else None
        if not isinstance(sha, str) or not sha:
            raise CatalogError(f"Commit response has no 'sha' field: {self.config.commit_url}")
        return sha

    def _list_tree(self, sha: str) -> list[dict[str, Any]]:
        url = self.config.tree_url(sha)
        payload = self._get_json(url)
        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise CatalogError(f"Tree response has no 'tree' list: {url}")
        if payload.get("truncated"):
            self.logger.warning("catalog_truncated", sha=sha, nodes=len(tree))
        return tree

    def _template_names(self, nodes: list[dict[str, Any]]) -> Iterator[str]:
        suffix = self.config.template_suffix
        for node in nodes:
            if not isinstance(node, dict):
                raise CatalogError(f"Malformed tree node: {node!r}")
            path = node.get("path")
            if node.get("type") != BLOB_NODE_TYPE or not isinstance(path, str):
                continue
            if path.endswith(suffix) and len(path) > len(suffix):
                yield path[: -len(suffix)]

    def _get_json(self, url: str) -> Any:
        try:
            return self.fetcher.get(url).json()
        except FetchError as exc:
            raise CatalogError(f"Failed to fetch {url}: {exc}") from exc
        except ValueError as exc:
            raise CatalogError(f"Malformed JSON from {url}: {exc}") from exc


__all__ = ["BLOB_NODE_TYPE", "Catalog", "CatalogFetcher"]

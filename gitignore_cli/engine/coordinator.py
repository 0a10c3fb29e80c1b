"""Resolve requested names, download them concurrently and merge the results."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from threading import Lock
from typing import Iterator, Sequence

import structlog

from ..config import GlobalConfig
from ..errors import DownloadError
from ..logging_conf import component_logger
from ..ui import NullReporter, Reporter
from .catalog import Catalog, CatalogFetcher
from .downloader import TemplateDownloader


@dataclass(frozen=True, slots=True)
class DownloadResult:
    """Outcome of one download.

    ``name`` is the canonical name on success and the original argument on
    failure.
    """

    name: str
    content: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MergedOutput:
    """Lock-guarded accumulator of downloaded blocks and the success counter.

    Without ``slots`` blocks are kept in the order ``add`` is called. With
    ``slots`` each block is stored at its request index and rendered in index
    order.
    """

    def __init__(self, slots: int | None = None) -> None:
        self._lock = Lock()
        self._ordered = slots is not None
        self._blocks: list[str | None] = [None] * slots if slots is not None else []
        self._count = 0

    def add(self, content: str, index: int | None = None) -> None:
        block = content + "\n"
        with self._lock:
            if self._ordered:
                if index is None:
                    raise ValueError("index is required for ordered output")
                self._blocks[index] = block
            else:
                self._blocks.append(block)
            self._count += 1

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def render(self) -> str:
        with self._lock:
            return "".join(block for block in self._blocks if block is not None)


@dataclass(slots=True)
class FetchSummary:
    content: str
    success_count: int
    missing: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    results: list[DownloadResult] = field(default_factory=list)

    @property
    def downloaded(self) -> dict[str, str]:
        """Canonical name -> content for every successful download."""

        return {result.name: result.content or "" for result in self.results if result.ok}

    def __iter__(self) -> Iterator[object]:
        # allows ``content, count = coordinator.run(names)``
        yield self.content
        yield self.success_count


class FetchCoordinator:
    """Turn requested template names into one merged blob."""

    def __init__(
        self,
        config: GlobalConfig,
        catalog_fetcher: CatalogFetcher,
        downloader: TemplateDownloader,
        reporter: Reporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.catalog_fetcher = catalog_fetcher
        self.downloader = downloader
        self.reporter = reporter or NullReporter()
        self.logger = logger or component_logger("coordinator")

    def run(self, requested_names: Sequence[str]) -> FetchSummary:
        """Fetch the catalog once, then download and merge every resolved name.

        ``CatalogError`` propagates untouched: without a catalog nothing can be
        resolved.
        """

        catalog = self.catalog_fetcher.fetch_catalog()
        return self.merge(catalog, requested_names)

    def merge(self, catalog: Catalog, requested_names: Sequence[str]) -> FetchSummary:
        resolved: list[tuple[str, str]] = []
        missing: list[str] = []
        for arg in requested_names:
            key = arg.lower()
            canonical = catalog.resolve(key)
            if canonical is None:
                missing.append(key)
                self.reporter.missing(key)
                continue
            resolved.append((arg, canonical))

        output = MergedOutput(len(resolved) if self.config.ordered_output else None)
        failed: list[str] = []
        results: list[DownloadResult] = []
        if resolved:
            workers = len(resolved)
            if self.config.max_workers is not None:
                workers = min(workers, self.config.max_workers)
            self.logger.debug("downloads_started", total=len(resolved), workers=workers)
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gitignore") as executor:
                futures = [
                    executor.submit(self._download, index, arg, canonical, output)
                    for index, (arg, canonical) in enumerate(resolved)
                ]
                for future in as_completed(futures):
                    result = future.result()
                    results.append(result)
                    if not result.ok:
                        failed.append(result.name)

        summary = FetchSummary(
            content=output.render(),
            success_count=output.count,
            missing=missing,
            failed=failed,
            results=results,
        )
        self.logger.info(
            "downloads_finished",
            requested=len(requested_names),
            succeeded=summary.success_count,
            missing=len(missing),
            failed=len(failed),
        )
        return summary

    def _download(self, index: int, arg: str, canonical: str, output: MergedOutput) -> DownloadResult:
        try:
            content = self.downloader.fetch_template(canonical)
        except DownloadError as exc:
            self.reporter.failed(arg)
            return DownloadResult(name=arg, error=exc.reason)
        except Exception as exc:  # noqa: BLE001
            self.logger.warning(
                "template_download_failed", template=canonical, error=repr(exc)
            )
            self.reporter.failed(arg)
            return DownloadResult(name=arg, error=str(exc) or type(exc).__name__)
        output.add(content, index)
        self.reporter.success(canonical)
        return DownloadResult(name=canonical, content=content)


__all__ = ["DownloadResult", "FetchCoordinator", "FetchSummary", "MergedOutput"]

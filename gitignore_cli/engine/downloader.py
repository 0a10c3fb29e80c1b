"""Download the raw content of one template."""

from __future__ import annotations

import structlog

from ..config import GlobalConfig
from ..errors import DownloadError
from ..logging_conf import component_logger
from .fetcher import FetchError, Fetcher

TEMPLATE_ENCODING = "utf-8"


class TemplateDownloader:
    def __init__(
        self,
        config: GlobalConfig,
        fetcher: Fetcher,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.logger = logger or component_logger("downloader")

    def fetch_template(self, canonical_name: str) -> str:
        """Return the template body exactly as served."""

        url = self.config.template_url(canonical_name)
        try:
            response = self.fetcher.get(url)
        except FetchError as exc:
            self.logger.warning("template_download_failed", template=canonical_name, error=str(exc))
            raise DownloadError(canonical_name, str(exc)) from exc
        # undecodable bytes survive as surrogates and are restored by the writer
        content = response.content.decode(TEMPLATE_ENCODING, errors="surrogateescape")
        self.logger.debug("template_downloaded", template=canonical_name, size=len(response.content))
        return content


__all__ = ["TEMPLATE_ENCODING", "TemplateDownloader"]

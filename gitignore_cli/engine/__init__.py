"""Engine components: catalog resolution, template download and merge."""

from .catalog import Catalog, CatalogFetcher
from .coordinator import DownloadResult, FetchCoordinator, FetchSummary, MergedOutput
from .downloader import TemplateDownloader
from .fetcher import FetchError, FetchRequest, FetchResponse, Fetcher

__all__ = [
    "Catalog",
    "CatalogFetcher",
    "DownloadResult",
    "FetchCoordinator",
    "FetchError",
    "FetchRequest",
    "FetchResponse",
    "FetchSummary",
    "Fetcher",
    "MergedOutput",
    "TemplateDownloader",
]

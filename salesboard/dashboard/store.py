# salesboard/dashboard/store.py

import logging
from typing import Iterable, List, Optional, Set, Tuple

import requests

from salesboard.api.schemas.schemas import SalesRecordResponse
from salesboard.core.errors import NetworkFailure
from salesboard.services.filters import filter_by_categories

logger = logging.getLogger(__name__)


class DashboardStore:
    """
    Browser-session state: the last fetched dataset and the filtered view.

    Only two things change it: a finished upload (dataset) and a filter
    change (filtered view).
    """

    def __init__(self, api_url: str, http: Optional[requests.Session] = None, timeout: float = 30):
        self.api_url = api_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

        self.dataset: List[SalesRecordResponse] = []
        self.filtered: List[SalesRecordResponse] = []
        self.selected: Set[str] = set()
        self.loading = False

    def _request(self, method, path, **kwargs):
        try:
            resp = self.http.request(method, f"{self.api_url}{path}", timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise NetworkFailure(f"{method} {path}: {e}") from e
        return resp

    def _fetch_dataset(self) -> List[SalesRecordResponse]:
        resp = self._request("GET", "/sales")
        return [SalesRecordResponse(**row) for row in resp.json()]

    def upload(self, files: Iterable[Tuple[str, bytes]]) -> bool:
        """Send (filename, content) pairs as one batch, then reload the dataset."""
        parts = [("files", (name, content, "text/csv")) for name, content in files]

        self.loading = True
        try:
            self._request("POST", "/upload", files=parts)
            self.dataset = self._fetch_dataset()
            return True
        except NetworkFailure as e:
            logger.error("Upload failed: %s", e)
            return False
        finally:
            self.loading = False

    def refresh(self) -> bool:
        self.loading = True
        try:
            self.dataset = self._fetch_dataset()
            return True
        except NetworkFailure as e:
            logger.error("Could not load sales data: %s", e)
            return False
        finally:
            self.loading = False

    def set_filter(self, categories: Iterable[str]):
        self.selected = set(categories)
        self.filtered = filter_by_categories(self.dataset, self.selected)
        return self.filtered

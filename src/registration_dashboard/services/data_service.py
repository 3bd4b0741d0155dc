"""
View state for the registration dashboard.

``DashboardState`` is the only mutable object in the application: it holds
the normalized sessions, the current tag selection and the load status for
the lifetime of one dashboard session.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from loguru import logger

from registration_dashboard.api import APIError, FormDataAPIClient
from registration_dashboard.core.filters import filter_partitions, tag_counts, toggle_tag
from registration_dashboard.core.normalizer import normalize_payload
from registration_dashboard.models import PartitionedRecords

FETCH_ERROR_PREFIX = "Failed to fetch data. Please try again later. "


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DashboardState:
    """
    Dataset, tag selection and load status of one dashboard view.

    The view starts in ``LOADING`` and moves once to ``READY`` or ``ERROR``.
    Neither terminal state is left again; a reload builds a new state.
    """

    def __init__(self):
        self.partitions = PartitionedRecords()
        self.selected_tags: frozenset = frozenset()
        self.match_all = False
        self.status = LoadStatus.LOADING
        self.error: Optional[str] = None

    def load(self, client: FormDataAPIClient, now: Optional[datetime] = None) -> LoadStatus:
        """
        Fetch and normalize the sessions.

        Args:
            client: Client for the form data endpoint
            now: Fallback creation time for sessions without a timestamp

        Returns:
            LoadStatus: Status after the load attempt
        """
        if self.status is not LoadStatus.LOADING:
            logger.debug(f"Ignoring load request in state {self.status.value}")
            return self.status

        try:
            form_data = client.fetch_form_data()
        except APIError as e:
            logger.error(f"Error fetching form data: {str(e)}")
            self.error = FETCH_ERROR_PREFIX + str(e)
            self.status = LoadStatus.ERROR
            return self.status

        self.partitions = normalize_payload(form_data, now)
        self.status = LoadStatus.READY
        return self.status

    def toggle(self, tag: str) -> frozenset:
        self.selected_tags = toggle_tag(self.selected_tags, tag)
        return self.selected_tags

    def filtered(self) -> PartitionedRecords:
        return filter_partitions(self.partitions, self.selected_tags, self.match_all)

    def overview(self) -> Dict[str, object]:
        """Counts shown above the session tables."""
        filtered = self.filtered()
        return {
            "total_sessions": self.partitions.total,
            "completed": len(filtered.complete),
            "incomplete": len(filtered.incomplete),
            "tag_counts": tag_counts(self.partitions.complete + self.partitions.incomplete),
        }

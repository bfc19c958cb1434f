"""Invalidation signal telling the presentation layer which views went stale."""

from __future__ import annotations

import logging

from fastapi import Response

logger = logging.getLogger(__name__)

INVALIDATION_HEADER = "X-Invalidated-Paths"


def community_list_path() -> str:
    return "/community"


def community_path(community_id: int) -> str:
    return f"/community/{community_id}"


def hobby_path(hobby_id: int) -> str:
    return f"/hobby/{hobby_id}"


def post_path(community_id: int, post_id: int) -> str:
    return f"/community/{community_id}/post/{post_id}"


class ViewInvalidator:
    """Collect the view paths a request made stale.

    Paths are de-duplicated and kept in the order they were first recorded.
    """

    def __init__(self) -> None:
        self._paths: list[str] = []

    def revalidate(self, *paths: str) -> None:
        """Mark one or more view paths as stale."""
        for path in paths:
            if path not in self._paths:
                self._paths.append(path)

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def header_value(self) -> str:
        return ",".join(self._paths)

    def apply(self, response: Response) -> None:
        """Attach the collected paths to an outgoing response."""
        if not self._paths:
            return
        logger.debug("Invalidating views: %s", ", ".join(self._paths))
        response.headers[INVALIDATION_HEADER] = self.header_value()

"""arXiv search ingestion helpers."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import arxiv
import requests

from errors import FetchError
from models import Paper

# Upper bound the arXiv API accepts for a single request.
ARXIV_MAX_RESULTS_CAP = 2000

LOGGER = logging.getLogger(__name__)


def fetch_papers(
    query: str,
    *,
    start: int = 0,
    max_results: int = 10,
    sort_by: str = "submittedDate",
    sort_order: str = "descending",
) -> list[Paper]:
    """Search arXiv and return normalized papers in the service's order.

    Args:
        query: arXiv search query, e.g. ``"cat:cs.CL AND ti:translation"``.
        start: Offset into the result list.
        max_results: Maximum number of papers to return. Clamped to
            ARXIV_MAX_RESULTS_CAP.
        sort_by: ``relevance``, ``lastUpdatedDate`` or ``submittedDate``.
        sort_order: ``ascending`` or ``descending``.

    Raises:
        ValueError: invalid offset, count or sort specification.
        FetchError: the search request or feed parsing failed. No retries.
    """
    if start < 0:
        raise ValueError(f"start must be >= 0, got {start}")
    if max_results < 1:
        raise ValueError(f"max_results must be >= 1, got {max_results}")
    criterion = _sort_criterion(sort_by)
    order = _sort_order(sort_order)

    if max_results > ARXIV_MAX_RESULTS_CAP:
        LOGGER.warning(
            "arXiv fetch: max_results=%s exceeds the API cap, clamping to %s",
            max_results,
            ARXIV_MAX_RESULTS_CAP,
        )
        max_results = ARXIV_MAX_RESULTS_CAP

    # arxiv counts Search.max_results from the first result, not from the offset
    search = arxiv.Search(
        query=query,
        max_results=start + max_results,
        sort_by=criterion,
        sort_order=order,
    )
    client = arxiv.Client(page_size=max_results, num_retries=0)

    try:
        papers = [_to_paper(result) for result in client.results(search, offset=start)]
    except (arxiv.ArxivError, requests.RequestException) as exc:
        raise FetchError(f"arXiv search failed for query={query!r}: {exc}") from exc

    LOGGER.info(
        "arXiv fetch: query=%r start=%s max_results=%s sort=%s/%s returned=%s",
        query,
        start,
        max_results,
        criterion.value,
        order.value,
        len(papers),
    )
    return papers


def _sort_criterion(value: str) -> arxiv.SortCriterion:
    try:
        return arxiv.SortCriterion(value)
    except ValueError as exc:
        allowed = ", ".join(c.value for c in arxiv.SortCriterion)
        raise ValueError(f"Unknown sort field {value!r}; expected one of: {allowed}") from exc


def _sort_order(value: str) -> arxiv.SortOrder:
    try:
        return arxiv.SortOrder(value)
    except ValueError as exc:
        allowed = ", ".join(o.value for o in arxiv.SortOrder)
        raise ValueError(f"Unknown sort order {value!r}; expected one of: {allowed}") from exc


def _to_paper(result: Any) -> Paper:
    """Normalize one ``arxiv.Result``."""
    entry_id = result.entry_id
    pdf_url = result.pdf_url or entry_id.replace("/abs/", "/pdf/")
    return Paper(
        paper_id=entry_id.split("/abs/")[-1],
        title=_clean(result.title),
        summary=_clean(result.summary),
        published_at=_as_utc(result.published),
        pdf_url=pdf_url,
        url=entry_id,
    )


def _clean(text: str | None) -> str:
    # arXiv wraps long titles and abstracts across lines
    return " ".join((text or "").split())


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

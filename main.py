"""CLI entrypoint for the arXiv -> translation -> Slack digest."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import requests
from dotenv import load_dotenv

from arxiv_feed import fetch_papers
from config import FailurePolicy, Settings, load_settings
from errors import ApiError, PipelineError
from models import SlackMessage
from sampler import sample_papers
from slack_client import post_message
from translator import translate_paper


@dataclass(frozen=True, slots=True)
class RunSummary:
    fetched: int
    sampled: int
    posted: int
    failed: int


def run(
    settings: Settings,
    *,
    rng: random.Random | None = None,
    session: requests.Session | None = None,
) -> RunSummary:
    """Run one cycle: fetch, sample, then translate and post each paper in turn.

    A translation failure either skips that paper or re-raises, depending on
    ``settings.failure_policy``. Publish failures are logged and never stop the
    run. A FetchError always propagates.
    """
    papers = fetch_papers(settings.search_query, max_results=settings.max_results)
    logging.info("Fetched %s papers from arXiv", len(papers))

    selected = sample_papers(papers, settings.sample_size, rng=rng)
    logging.info("Selected %s of %s papers", len(selected), len(papers))

    owns_session = session is None
    http = session or requests.Session()
    posted = 0
    failed = 0

    try:
        for paper in selected:
            logging.info("Processing paper_id=%s: %s", paper.paper_id, paper.title)
            try:
                text = translate_paper(
                    paper,
                    settings.openai_key,
                    model=settings.openai_model,
                    session=http,
                )
            except ApiError as exc:
                failed += 1
                logging.error("🛑 Translation failed for paper_id=%s: %s", paper.paper_id, exc)
                if settings.failure_policy is FailurePolicy.ABORT:
                    raise
                continue

            try:
                post_message(
                    SlackMessage(channel=settings.slack_channel, text=text),
                    settings.slack_token,
                    session=http,
                )
            except ApiError as exc:
                failed += 1
                logging.error("🛑 Slack post failed for paper_id=%s: %s", paper.paper_id, exc)
                continue

            posted += 1
            logging.info("🎉 Successfully posted to Slack: paper_id=%s", paper.paper_id)
    finally:
        if owns_session:
            http.close()

    summary = RunSummary(fetched=len(papers), sampled=len(selected), posted=posted, failed=failed)
    logging.info(
        "Run complete. fetched=%s sampled=%s posted=%s failed=%s",
        summary.fetched,
        summary.sampled,
        summary.posted,
        summary.failed,
    )
    return summary


def main() -> None:
    """Initialize config and execute the pipeline."""
    load_dotenv()

    try:
        settings = load_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(message)s",
        )
        run(settings)
    except PipelineError as exc:
        logging.error("Run aborted: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()

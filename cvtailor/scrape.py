"""Fetch a job posting page and reduce it to plain text."""

from __future__ import annotations

import asyncio
import logging
import re

import aiohttp
from bs4 import BeautifulSoup

log = logging.getLogger("scrape")

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Page chrome that never belongs to the posting itself
UNWANTED_TAGS = ["script", "style", "nav", "footer", "header", "iframe", "noscript"]

_WHITESPACE_RE = re.compile(r"\s+")


class JobFetchError(RuntimeError):
    """The posting URL could not be retrieved."""


def html_to_text(html: str) -> str:
    """Visible body text of `html` with whitespace collapsed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(UNWANTED_TAGS):
        tag.decompose()
    root = soup.body or soup
    return _WHITESPACE_RE.sub(" ", root.get_text(" ")).strip()


async def fetch_job_posting(url: str, *, timeout_s: float = 30.0) -> str:
    """Download `url` and return its text content."""
    timeout = aiohttp.ClientTimeout(total=timeout_s)
    headers = {"User-Agent": USER_AGENT}
    log.info(f"Fetching job posting {url}")
    try:
        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
            async with session.get(url) as resp:
                if resp.status >= 400:
                    raise JobFetchError(f"Failed to fetch URL: {resp.status} {resp.reason}")
                html = await resp.text(errors="replace")
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise JobFetchError(f"Failed to fetch URL: {e}") from e

    text = html_to_text(html)
    log.debug(f"Job posting {url}: {len(text)} chars of text")
    return text

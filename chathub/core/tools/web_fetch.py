"""
Web fetch tool.

Downloads a URL and returns readable text: HTML is reduced to title,
description and body text, JSON is pretty-printed, other text is passed
through.

Dependencies: httpx, beautifulsoup4, langchain_core.tools, pydantic
System role: Generic URL reader tool for the chat agent
"""

import json
import logging
import re
from typing import Any

import httpx
from bs4 import BeautifulSoup
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_LENGTH = 10000

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; ChatHub/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

_BLOCK_TAGS = ["p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "tr", "br", "hr"]


def html_to_text(html: str) -> str:
    """Strip scripts, styles and tags, keeping block boundaries as newlines."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "noscript"]):
        element.decompose()
    for element in soup.find_all(_BLOCK_TAGS):
        element.append("\n")
    text = soup.get_text(" ")
    text = re.sub(r"[ \t\r\f\v]+", " ", text)
    text = re.sub(r" ?\n ?", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def extract_metadata(html: str) -> tuple[str | None, str | None]:
    """Return the page title and meta (or og:) description."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else None

    description = None
    meta = soup.find("meta", attrs={"name": "description"}) or soup.find(
        "meta", attrs={"property": "og:description"}
    )
    if meta is not None and meta.get("content"):
        description = meta["content"].strip()
    return title or None, description


async def fetch_url(
    url: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Fetch ``url`` and return its readable content.

    Args:
        url: Absolute http(s) URL
        max_length: Maximum characters of content to return
        client: Optional client (tests inject a mock transport)

    Returns:
        dict: url, title, description, content, truncated, originalLength;
        or ``{"error": ...}``
    """
    owns_client = client is None
    client = client or httpx.AsyncClient(
        timeout=FETCH_TIMEOUT_SECONDS,
        follow_redirects=True,
        headers=REQUEST_HEADERS,
    )
    try:
        response = await client.get(url)
    except httpx.TimeoutException:
        logger.warning("Web fetch timed out", extra={"url": url})
        return {"error": f"Request timed out after {int(FETCH_TIMEOUT_SECONDS)} seconds"}
    except httpx.HTTPError as e:
        logger.warning("Web fetch failed", extra={"url": url, "error": str(e)})
        return {"error": f"Failed to fetch page: {e}"}
    finally:
        if owns_client:
            await client.aclose()

    if response.is_error:
        return {"error": f"Failed to fetch page: {response.status_code} {response.reason_phrase}"}

    content_type = response.headers.get("content-type", "")

    if "text/html" not in content_type and "application/xhtml" not in content_type:
        if "application/json" in content_type:
            try:
                body = json.dumps(response.json(), indent=2)
            except ValueError:
                body = response.text
            return {
                "url": url,
                "contentType": "application/json",
                "content": body[:max_length],
                "truncated": len(body) > max_length,
            }
        if "text/" in content_type:
            body = response.text
            return {
                "url": url,
                "contentType": content_type,
                "content": body[:max_length],
                "truncated": len(body) > max_length,
            }
        return {
            "error": (
                f"Unsupported content type: {content_type}. "
                "This tool only supports HTML and text content."
            )
        }

    html = response.text
    title, description = extract_metadata(html)
    text = html_to_text(html)

    logger.info(
        "Web page fetched",
        extra={"url": url, "content_length": len(text), "has_title": bool(title)},
    )

    result: dict[str, Any] = {
        "url": url,
        "content": text[:max_length],
        "truncated": len(text) > max_length,
        "originalLength": len(text),
    }
    if title:
        result["title"] = title
    if description:
        result["description"] = description
    return result


class WebFetchInput(BaseModel):
    """Input schema for the web_fetch tool."""

    url: str = Field(..., description="The URL of the web page to fetch")
    maxLength: int = Field(
        DEFAULT_MAX_LENGTH,
        gt=0,
        description="Maximum characters of content to return (default: 10000)",
    )


def create_web_fetch_tool() -> BaseTool:
    """
    Create the web_fetch tool.

    Returns:
        BaseTool: Async LangChain tool named "web_fetch"
    """

    @tool("web_fetch", args_schema=WebFetchInput)
    async def web_fetch(url: str, maxLength: int = DEFAULT_MAX_LENGTH) -> dict[str, Any]:
        """Fetch and read the content of a web page. Use this to read articles, documentation, or any web page the user shares. Returns the page title, description, and text content."""
        if not url.startswith(("http://", "https://")):
            return {"error": "Invalid URL. Only http and https URLs are supported."}
        return await fetch_url(url, max_length=maxLength)

    return web_fetch

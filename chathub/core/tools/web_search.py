"""
Web search tool backed by SerpAPI.

Direct answers and knowledge panels are listed before organic results.

Dependencies: httpx, langchain_core.tools, pydantic
System role: Generic web search tool for the chat agent
"""

import logging
from typing import Any

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"
SEARCH_TIMEOUT_SECONDS = 15.0
MAX_RESULTS = 10


def parse_search_results(data: dict[str, Any]) -> list[dict[str, str]]:
    """Flatten a SerpAPI response into title/url/snippet entries."""
    results: list[dict[str, str]] = []

    answer_box = data.get("answer_box")
    if answer_box:
        results.append({
            "title": answer_box.get("title") or "Direct Answer",
            "url": answer_box.get("link") or "",
            "snippet": answer_box.get("answer") or answer_box.get("snippet") or "",
        })

    knowledge_graph = data.get("knowledge_graph") or {}
    if knowledge_graph.get("description"):
        results.append({
            "title": knowledge_graph.get("title") or "Knowledge Panel",
            "url": (knowledge_graph.get("source") or {}).get("link") or "",
            "snippet": knowledge_graph["description"],
        })

    for item in data.get("organic_results") or []:
        results.append({
            "title": item.get("title", ""),
            "url": item.get("link", ""),
            "snippet": item.get("snippet", ""),
        })
    return results


async def search_web(
    query: str,
    api_key: str,
    num_results: int = 5,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Run a Google search through SerpAPI.

    Args:
        query: Search query
        api_key: SerpAPI key
        num_results: Results to return, capped at 10
        client: Optional client (tests inject a mock transport)

    Returns:
        dict: query, count, results; or ``{"error": ...}``
    """
    limit = min(num_results, MAX_RESULTS)
    params = {"q": query, "api_key": api_key, "engine": "google", "num": str(limit)}

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=SEARCH_TIMEOUT_SECONDS)
    try:
        response = await client.get(SERPAPI_URL, params=params)
    except httpx.HTTPError as e:
        logger.warning("Web search failed", extra={"query": query, "error": str(e)})
        return {"error": f"Search failed: {e}"}
    finally:
        if owns_client:
            await client.aclose()

    if response.is_error:
        logger.warning(
            "Web search API error",
            extra={"query": query, "status_code": response.status_code, "body": response.text[:500]},
        )
        return {"error": f"Search failed: {response.status_code} {response.reason_phrase}"}

    try:
        data = response.json()
    except ValueError:
        return {"error": "Search failed: response was not valid JSON"}
    if data.get("error"):
        return {"error": data["error"]}

    results = parse_search_results(data)[:limit]
    logger.info("Web search completed", extra={"query": query, "count": len(results)})
    return {"query": query, "count": len(results), "results": results}


class WebSearchInput(BaseModel):
    """Input schema for the web_search tool."""

    query: str = Field(..., description="The search query")
    numResults: int = Field(
        5,
        gt=0,
        description="Number of results to return (default: 5, max: 10)",
    )


def create_web_search_tool(api_key: str) -> BaseTool:
    """Create the web_search tool bound to a SerpAPI key."""

    @tool("web_search", args_schema=WebSearchInput)
    async def web_search(query: str, numResults: int = 5) -> dict[str, Any]:
        """Search the web for current information. Use this for questions about recent events, documentation, news, or any information that may have changed since training. Returns titles, URLs, and snippets from search results."""
        return await search_web(query, api_key, num_results=numResults)

    return web_search

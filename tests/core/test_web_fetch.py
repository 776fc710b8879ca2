"""Tests for the web_fetch tool using httpx's mock transport."""

import httpx

from chathub.core.tools.web_fetch import create_web_fetch_tool, fetch_url, html_to_text

PAGE = """
<html>
  <head>
    <title>Release Notes</title>
    <meta name="description" content="What shipped this week">
    <script>var tracking = true;</script>
  </head>
  <body><h1>v2.0</h1><p>Faster builds.</p><p>Fewer bugs.</p></body>
</html>
"""


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHtmlToText:
    def test_drops_scripts_and_keeps_blocks(self):
        # Act
        text = html_to_text(PAGE)

        # Assert
        assert "tracking" not in text
        assert "v2.0" in text
        assert "Faster builds.\nFewer bugs." in text


class TestFetchUrl:
    async def test_html_page(self):
        # Arrange
        def handler(request):
            return httpx.Response(200, text=PAGE, headers={"content-type": "text/html; charset=utf-8"})

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://example.com/notes", client=client)

        # Assert
        assert result["title"] == "Release Notes"
        assert result["description"] == "What shipped this week"
        assert result["truncated"] is False
        assert result["originalLength"] == len(result["content"])

    async def test_truncates_long_content(self):
        # Arrange
        def handler(request):
            return httpx.Response(200, text="<p>" + "x" * 500 + "</p>", headers={"content-type": "text/html"})

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://example.com", max_length=100, client=client)

        # Assert
        assert len(result["content"]) == 100
        assert result["truncated"] is True

    async def test_json_is_pretty_printed(self):
        # Arrange
        def handler(request):
            return httpx.Response(200, json={"ok": True})

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://api.example.com", client=client)

        # Assert
        assert result["contentType"] == "application/json"
        assert result["content"] == '{\n  "ok": true\n}'

    async def test_http_error_status(self):
        # Arrange
        def handler(request):
            return httpx.Response(404)

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://example.com/missing", client=client)

        # Assert
        assert result == {"error": "Failed to fetch page: 404 Not Found"}

    async def test_unsupported_content_type(self):
        # Arrange
        def handler(request):
            return httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"})

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://example.com/doc.pdf", client=client)

        # Assert
        assert result["error"].startswith("Unsupported content type: application/pdf")

    async def test_timeout(self):
        # Arrange
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        # Act
        async with client_for(handler) as client:
            result = await fetch_url("https://slow.example.com", client=client)

        # Assert
        assert result == {"error": "Request timed out after 15 seconds"}


class TestWebFetchTool:
    def test_tool_name_and_schema(self):
        # Act
        web_fetch = create_web_fetch_tool()

        # Assert
        assert web_fetch.name == "web_fetch"
        assert set(web_fetch.args) == {"url", "maxLength"}

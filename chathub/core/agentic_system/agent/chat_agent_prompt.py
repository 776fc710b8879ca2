"""
Chat agent system prompt.

Assembles the system prompt from the base guidelines, the user's
context document, custom instructions, the connector catalogue and the
generic tools. Also defines the chat title prompt.

Dependencies: chathub.core.connectors, chathub.core.tools
System role: Prompt construction for the chat agent
"""

from dataclasses import dataclass
from datetime import date

from chathub.core.connectors.metadata import AUTH_METHOD_LABELS
from chathub.core.connectors.registry import get_all_connector_metadata, get_connector_metadata
from chathub.core.tools import GENERIC_TOOL_DESCRIPTIONS, KEY_GATED_TOOLS

BASE_PROMPT = """You are a helpful AI assistant with access to the user's development and work tools. Based on configured connectors, you can help with code repositories, project management, documentation, cloud infrastructure, emails, and calendars.

## Current Date

Today is {today}. Use this date when interpreting relative time references like "last 30 days", "this week", "yesterday", etc. When filtering by date, calculate the actual date range based on today's date.

## Guidelines

1. **Use tools proactively** — When a question could be answered with real data, fetch it rather than speculating.

2. **Provide actionable links** — Always include direct links to relevant pages (Jira tickets, PRs, AWS console, etc.) so the user can take action.

3. **Summarize intelligently** — When fetching large amounts of data, summarize the key points and offer to dive deeper into specifics.

4. **Handle errors gracefully** — If a connector fails, explain what happened and suggest alternatives or manual steps.

5. **For write operations** — You cannot create, update, or delete resources. Instead, provide the user with:
   - A direct link to the appropriate page
   - Step-by-step instructions for what they need to do

6. **Cross-reference when helpful** — If a Jira ticket mentions a PR, or a deployment relates to a GitHub commit, connect the dots.

7. **Be concise but thorough** — Default to concise answers, but be comprehensive when the user asks for details."""

NO_CONNECTORS_NOTE = (
    "IMPORTANT: Only mention the connectors listed above. Do not suggest connectors "
    "that are not in this list (e.g., no GitLab, Linear, Notion, Slack, etc.)."
)

AUTH_METHOD_GUIDANCE = {
    "api_token": (
        "API Token connectors",
        "Users generate a token from the service's settings and enter it directly.",
    ),
    "access_keys": (
        "Access key connectors",
        "Uses IAM access keys (Access Key ID + Secret Access Key).",
    ),
    "oauth": (
        "OAuth connectors",
        "Users register an app in the provider's developer console, enter the Client ID "
        "and Client Secret, save, then complete the authorization flow.",
    ),
}

TITLE_PROMPT = """Generate a short, descriptive title (3-6 words) for a chat that starts with this message. Return ONLY the title, no quotes or extra text.

Message: "{message}\""""


@dataclass(frozen=True)
class EnabledConnector:
    """Connector as listed in the prompt."""

    type: str
    name: str


def format_today(today: date | None = None) -> str:
    today = today or date.today()
    return f"{today:%A}, {today:%B} {today.day}, {today.year}"


def _connectors_section(enabled: list[EnabledConnector]) -> str:
    if enabled:
        lines = []
        for connector in enabled:
            metadata = get_connector_metadata(connector.type)
            description = f" — {metadata.description}" if metadata else ""
            lines.append(f"- **{connector.name}** ({connector.type}){description}")
        return (
            "\n## Available Connectors\n\n"
            f"You have access to {len(enabled)} configured connector(s). "
            "Use these tools to help the user:\n\n" + "\n".join(lines)
        )

    available = "\n".join(
        f"- **{m.name}** — {m.description}" for m in get_all_connector_metadata()
    )
    return (
        "\n## Available Connectors\n\n"
        "No connectors are currently configured. The following connectors can be set up "
        f"in Settings → Connectors:\n\n{available}\n\n{NO_CONNECTORS_NOTE}"
    )


def _setup_reference_section() -> str:
    all_metadata = get_all_connector_metadata()
    summary = "\n".join(
        f"- **{m.name}**: {AUTH_METHOD_LABELS[m.auth_method]}. "
        f"Required fields: {', '.join(f.label for f in m.config_fields)}"
        for m in all_metadata
    )

    groups: dict[str, list[str]] = {}
    for m in all_metadata:
        groups.setdefault(m.auth_method, []).append(m.name)
    guidance = "\n\n".join(
        f"**{AUTH_METHOD_GUIDANCE[method][0]}** ({', '.join(names)}): {AUTH_METHOD_GUIDANCE[method][1]}"
        for method, names in groups.items()
    )

    return (
        "\n## Connector Setup Reference\n\n"
        "When users ask about setting up connectors, use this information:\n\n"
        f"{summary}\n\n{guidance}"
    )


def _general_tools_section(available: list[str]) -> str:
    tools = "\n".join(
        f"- **{name}** — {description}"
        for name, description in GENERIC_TOOL_DESCRIPTIONS.items()
        if name in available
    )
    section = f"\n## General Tools\n\nYou always have access to these utility tools:\n\n{tools}"
    if not all(name in available for name in KEY_GATED_TOOLS):
        section += (
            "\n\n*Note: Additional tools (web_search, weather) can be enabled by adding "
            "API keys in environment variables.*"
        )
    return section


def build_system_prompt(
    user_context: str | None = None,
    additional_instructions: str | None = None,
    enabled_connectors: list[EnabledConnector] | None = None,
    today: date | None = None,
    generic_tools: list[str] | None = None,
) -> str:
    """
    Build the system prompt for a chat turn.

    Args:
        user_context: Markdown the user wrote about themselves
        additional_instructions: Custom system prompt from settings
        enabled_connectors: Connectors whose tools are offered this turn
        today: Date to report as today (defaults to the local date)
        generic_tools: Names of the generic tools offered this turn
            (defaults to those that need no API key)

    Returns:
        str: Complete system prompt
    """
    parts = [BASE_PROMPT.format(today=format_today(today))]
    if user_context:
        parts.append(f"\n## User Context\n\n{user_context}")
    if additional_instructions:
        parts.append(f"\n## Additional Instructions\n\n{additional_instructions}")
    parts.append(_connectors_section(enabled_connectors or []))
    parts.append(_setup_reference_section())
    if generic_tools is None:
        generic_tools = [name for name in GENERIC_TOOL_DESCRIPTIONS if name not in KEY_GATED_TOOLS]
    parts.append(_general_tools_section(generic_tools))
    return "\n".join(parts)


def get_title_prompt(first_message: str) -> str:
    return TITLE_PROMPT.format(message=first_message)

"""
Connector metadata catalogue.

Describes every connector type the hub knows about: display name,
description, configuration form fields and setup instructions. Metadata
exists for all types even when no implementation is registered.

Dependencies: pydantic
System role: Static connector catalogue for settings UI and system prompt
"""

from typing import Literal

from pydantic import BaseModel, Field

ConfigFieldType = Literal["text", "password", "url", "email"]
AuthMethod = Literal["api_token", "access_keys", "oauth"]


class ConfigField(BaseModel):
    """One input of a connector's configuration form."""

    key: str
    label: str
    type: ConfigFieldType
    placeholder: str | None = None
    required: bool = True
    help_text: str | None = None


class ConnectorMetadata(BaseModel):
    """Static description of a connector type."""

    type: str
    name: str
    description: str
    auth_method: AuthMethod
    config_fields: list[ConfigField] = Field(default_factory=list)
    setup_instructions: str = ""


AUTH_METHOD_LABELS: dict[str, str] = {
    "api_token": "API Token/Personal Access Token",
    "access_keys": "IAM access keys",
    "oauth": "OAuth (requires app registration, then user authorization)",
}

CONNECTOR_TYPES = ("aws", "github", "jira", "confluence", "jenkins", "outlook")

CONNECTOR_METADATA: dict[str, ConnectorMetadata] = {
    "github": ConnectorMetadata(
        type="github",
        name="GitHub",
        description="Access pull requests, issues, and workflow runs",
        auth_method="api_token",
        config_fields=[
            ConfigField(
                key="token",
                label="Personal Access Token",
                type="password",
                placeholder="ghp_...",
                help_text="Generate at GitHub Settings > Developer settings > Personal access tokens",
            ),
            ConfigField(
                key="defaultOwner",
                label="Default Owner/Organization",
                type="text",
                placeholder="your-org",
                required=False,
                help_text="Default repository owner for queries",
            ),
        ],
        setup_instructions=(
            "# GitHub Connector Setup\n\n"
            "1. Open GitHub **Settings > Developer settings > Personal access tokens**.\n"
            "2. Generate a classic token with the `repo`, `read:org` and `workflow` scopes.\n"
            "3. Paste the token into **Personal Access Token** and save.\n"
            "4. Click **Test Connection** to verify it works.\n"
        ),
    ),
    "jira": ConnectorMetadata(
        type="jira",
        name="Jira",
        description="Search issues, view sprints, and track work",
        auth_method="api_token",
        config_fields=[
            ConfigField(
                key="host",
                label="Jira Host",
                type="url",
                placeholder="your-company.atlassian.net",
                help_text="Your Jira Cloud domain",
            ),
            ConfigField(
                key="email",
                label="Email",
                type="email",
                placeholder="you@company.com",
                help_text="Email associated with your Jira account",
            ),
            ConfigField(
                key="apiToken",
                label="API Token",
                type="password",
                placeholder="Your API token",
                help_text="Generate at id.atlassian.com > Security > API tokens",
            ),
        ],
        setup_instructions=(
            "# Jira Connector Setup\n\n"
            "1. Go to **id.atlassian.com > Security > API tokens** and create a token.\n"
            "2. Enter your Jira host, account email and the API token.\n"
            "3. Save, then click **Test Connection**.\n"
        ),
    ),
    "confluence": ConnectorMetadata(
        type="confluence",
        name="Confluence",
        description="Search and read documentation pages",
        auth_method="api_token",
        config_fields=[
            ConfigField(
                key="host",
                label="Confluence Host",
                type="url",
                placeholder="your-company.atlassian.net",
                help_text="Your Confluence Cloud domain",
            ),
            ConfigField(key="email", label="Email", type="email", placeholder="you@company.com"),
            ConfigField(key="apiToken", label="API Token", type="password", placeholder="Your API token"),
        ],
        setup_instructions=(
            "# Confluence Connector Setup\n\n"
            "1. Create an API token at **id.atlassian.com > Security > API tokens**.\n"
            "2. Enter your Confluence host, account email and the API token.\n"
            "3. Save, then click **Test Connection**.\n"
        ),
    ),
    "jenkins": ConnectorMetadata(
        type="jenkins",
        name="Jenkins",
        description="View build status and logs",
        auth_method="api_token",
        config_fields=[
            ConfigField(
                key="url",
                label="Jenkins URL",
                type="url",
                placeholder="https://jenkins.your-company.com",
            ),
            ConfigField(key="username", label="Username", type="text", placeholder="your-username"),
            ConfigField(
                key="apiToken",
                label="API Token",
                type="password",
                placeholder="Your API token",
                help_text="Generate in Jenkins > User > Configure > API Token",
            ),
        ],
        setup_instructions=(
            "# Jenkins Connector Setup\n\n"
            "1. In Jenkins open **User > Configure > API Token** and add a new token.\n"
            "2. Enter the Jenkins URL, your username and the token.\n"
            "3. Save, then click **Test Connection**.\n"
        ),
    ),
    "aws": ConnectorMetadata(
        type="aws",
        name="AWS",
        description="Access CloudWatch logs, CodePipeline, and more",
        auth_method="access_keys",
        config_fields=[
            ConfigField(key="accessKeyId", label="Access Key ID", type="text", placeholder="AKIA..."),
            ConfigField(
                key="secretAccessKey",
                label="Secret Access Key",
                type="password",
                placeholder="Your secret key",
            ),
            ConfigField(key="region", label="Region", type="text", placeholder="us-east-1"),
        ],
        setup_instructions=(
            "# AWS Connector Setup\n\n"
            "## Step 1: Create an IAM user\n\n"
            "Create a dedicated IAM user and attach read-only policies such as "
            "`CloudWatchLogsReadOnlyAccess`, `AWSCodePipeline_ReadOnlyAccess`, "
            "`AWSLambda_ReadOnlyAccess` and `AmazonS3ReadOnlyAccess`.\n\n"
            "## Step 2: Generate access keys\n\n"
            "Under **Security credentials**, create an access key for an application "
            "running outside AWS and copy both values.\n\n"
            "## Step 3: Configure the connector\n\n"
            "Enter the Access Key ID, Secret Access Key and Region, save, then click "
            "**Test Connection**.\n\n"
            "Never use root account credentials. Credentials are encrypted before storage.\n"
        ),
    ),
    "outlook": ConnectorMetadata(
        type="outlook",
        name="Outlook",
        description="Search emails and calendar events",
        auth_method="oauth",
        config_fields=[
            ConfigField(
                key="clientId",
                label="Client ID",
                type="text",
                placeholder="Your Azure AD app client ID",
            ),
            ConfigField(
                key="clientSecret",
                label="Client Secret",
                type="password",
                placeholder="Your client secret",
            ),
            ConfigField(
                key="tenantId",
                label="Tenant ID",
                type="text",
                placeholder="Your Azure AD tenant ID",
            ),
        ],
        setup_instructions=(
            "# Outlook Connector Setup\n\n"
            "1. Register an application in the Azure portal (**App registrations**).\n"
            "2. Add a client secret and note the client ID and tenant ID.\n"
            "3. Enter the three values, save, then authorize the connection.\n"
        ),
    ),
}

"""ChatHub: self-hosted AI chat hub with tool-calling connectors."""

from chathub.core.connectors.aws.connector import AWSConnector
from chathub.core.connectors.aws.tools import create_aws_tools

__all__ = ["AWSConnector", "create_aws_tools"]

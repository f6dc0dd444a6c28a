"""
Alias manager for Lambda functions.
Points a named alias at a published function version.
"""
import logging
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class AliasManager:
    """
    Creates or updates Lambda aliases.

    An existing alias is always retargeted; nothing about its current
    target is consulted.
    """

    def __init__(self, lambda_client):
        """
        Initialize the alias manager.

        Args:
            lambda_client: Lambda client, usually built by AWSOptions.create_clients
        """
        self.lambda_client = lambda_client

    def _alias_exists(self, function_name: str, alias_name: str) -> bool:
        """
        Check if an alias exists on a Lambda function.

        Returns:
            True if the alias exists, False if the lookup reports it missing
        """
        try:
            self.lambda_client.get_alias(FunctionName=function_name, Name=alias_name)
            return True
        except ClientError as e:
            if e.response['Error']['Code'] == 'ResourceNotFoundException':
                return False
            logger.error(f"Error looking up alias {alias_name} on {function_name}: {e}")
            raise

    def _alias_params(
        self,
        function_name: str,
        alias_name: str,
        version: str,
        description: Optional[str]
    ) -> Dict[str, Any]:
        params = {
            'FunctionName': function_name,
            'Name': alias_name,
            'FunctionVersion': version,
        }
        if description is not None:
            params['Description'] = description
        return params

    def _create_alias(
        self,
        function_name: str,
        alias_name: str,
        version: str,
        description: Optional[str] = None
    ) -> str:
        try:
            response = self.lambda_client.create_alias(
                **self._alias_params(function_name, alias_name, version, description)
            )
            logger.info(f"Created alias {alias_name} -> {function_name}:{version}")
            return response['AliasArn']
        except ClientError as e:
            logger.error(f"Error creating alias {alias_name} on {function_name}: {e}")
            raise

    def _update_alias(
        self,
        function_name: str,
        alias_name: str,
        version: str,
        description: Optional[str] = None
    ) -> str:
        try:
            response = self.lambda_client.update_alias(
                **self._alias_params(function_name, alias_name, version, description)
            )
            logger.info(f"Updated alias {alias_name} -> {function_name}:{version}")
            return response['AliasArn']
        except ClientError as e:
            logger.error(f"Error updating alias {alias_name} on {function_name}: {e}")
            raise

    def upsert_alias(
        self,
        function_name: str,
        alias_name: str,
        version: str,
        description: Optional[str] = None
    ) -> str:
        """
        Point an alias at a function version, creating the alias if needed.

        Args:
            function_name: Name of the Lambda function
            alias_name: Name of the alias
            version: Published version the alias should point at
            description: Optional alias description

        Returns:
            ARN of the alias
        """
        if self._alias_exists(function_name, alias_name):
            return self._update_alias(function_name, alias_name, version, description)
        return self._create_alias(function_name, alias_name, version, description)

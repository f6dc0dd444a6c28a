"""
Function locator.
Determines whether a Lambda function already exists in the account/region.
"""
import logging

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class FunctionLocator:
    """Looks up Lambda functions by exact name."""

    def __init__(self, lambda_client):
        self.lambda_client = lambda_client

    def function_exists(self, function_name: str) -> bool:
        """
        Check if a Lambda function with exactly this name exists.

        Every page of list_functions is scanned until a match is found.

        Args:
            function_name: Name of the Lambda function (case-sensitive)

        Returns:
            True if the function exists, False otherwise
        """
        try:
            paginator = self.lambda_client.get_paginator('list_functions')
            for page in paginator.paginate():
                for function in page.get('Functions', []):
                    if function.get('FunctionName') == function_name:
                        logger.debug(f"Found Lambda function {function_name}")
                        return True
        except ClientError as e:
            logger.error(f"Error listing Lambda functions: {e}")
            raise

        return False

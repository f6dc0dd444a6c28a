"""
Lambda function deployer module.
Reconciles a Lambda function's code and configuration with a DeploymentSpec.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError, WaiterError

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import DeploymentSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionState:
    """
    Result of reconciling a function.

    Attributes:
        function_arn: ARN of the created or updated function
        version: Published version, or None when publish was not requested
        created: True if the function was created, False if it was updated
    """

    function_arn: str
    version: Optional[str]
    created: bool


def build_code_source(spec: DeploymentSpec, artifact: Artifact) -> Dict[str, Any]:
    """
    Build the code payload for the Lambda API.

    Exactly one source is returned: the staged S3 object when a staging
    location is configured, otherwise the raw zip bytes.
    """
    if spec.staging is not None:
        return {
            'S3Bucket': spec.staging.bucket,
            'S3Key': spec.staging.key,
        }
    return {'ZipFile': artifact.contents}


class LambdaFunctionDeployer:
    """
    Deploys zip packages to AWS Lambda functions.

    This class handles:
    - Creating new Lambda functions with code and configuration in one call
    - Updating configuration and then code of existing Lambda functions
    - Publishing a new version when requested
    """

    def __init__(self, lambda_client):
        """
        Initialize the Lambda function deployer.

        Args:
            lambda_client: Lambda client, usually built by AWSOptions.create_clients
        """
        self.lambda_client = lambda_client

    def _wait(self, waiter_name: str, function_name: str) -> None:
        waiter = self.lambda_client.get_waiter(waiter_name)
        waiter.wait(FunctionName=function_name)

    def _create_function(self, spec: DeploymentSpec, artifact: Artifact) -> Dict[str, Any]:
        """
        Create a new Lambda function.

        Args:
            spec: Desired function state
            artifact: Zip package to deploy

        Returns:
            The create_function response
        """
        try:
            params = spec.configuration_params()
            params['Code'] = build_code_source(spec, artifact)
            params['Publish'] = spec.publish

            response = self.lambda_client.create_function(**params)
            logger.info(f"Created Lambda function: {response['FunctionArn']}")

            # Wait for function to be active
            self._wait('function_active', spec.function_name)

            return response

        except (ClientError, WaiterError) as e:
            logger.error(f"Error creating Lambda function {spec.function_name}: {e}")
            raise

    def _update_function_configuration(self, spec: DeploymentSpec) -> Dict[str, Any]:
        """
        Update Lambda function configuration.

        Optional fields missing from the spec are left untouched remotely.

        Args:
            spec: Desired function state

        Returns:
            The update_function_configuration response
        """
        try:
            response = self.lambda_client.update_function_configuration(
                **spec.configuration_params()
            )
            logger.info(f"Updated Lambda function configuration: {response['FunctionArn']}")

            # The code update below must see the finished configuration
            self._wait('function_updated', spec.function_name)

            return response

        except (ClientError, WaiterError) as e:
            logger.error(f"Error updating Lambda function configuration for {spec.function_name}: {e}")
            raise

    def _update_function_code(self, spec: DeploymentSpec, artifact: Artifact) -> Dict[str, Any]:
        """
        Update an existing Lambda function's code, publishing if requested.

        Args:
            spec: Desired function state
            artifact: Zip package to deploy

        Returns:
            The update_function_code response
        """
        try:
            response = self.lambda_client.update_function_code(
                FunctionName=spec.function_name,
                Publish=spec.publish,
                **build_code_source(spec, artifact)
            )
            logger.info(f"Updated Lambda function code: {response['FunctionArn']}")

            # Wait for function to be updated
            self._wait('function_updated', spec.function_name)

            return response

        except (ClientError, WaiterError) as e:
            logger.error(f"Error updating Lambda function code for {spec.function_name}: {e}")
            raise

    def deploy_function(self, spec: DeploymentSpec, artifact: Artifact, exists: bool) -> FunctionState:
        """
        Deploy a zip package to a Lambda function.

        If the function doesn't exist, it will be created.
        If the function exists, its configuration is updated first and its
        code second, since only the code update publishes a version.

        Args:
            spec: Desired function state
            artifact: Zip package to deploy
            exists: Whether the function already exists

        Returns:
            FunctionState describing the deployed function
        """
        if exists:
            logger.info(f"Lambda function {spec.function_name} exists, updating it")

            self._update_function_configuration(spec)
            response = self._update_function_code(spec, artifact)
        else:
            logger.info(f"Lambda function {spec.function_name} does not exist, creating it")

            response = self._create_function(spec, artifact)

        version = response.get('Version') if spec.publish else None
        if version:
            logger.info(f"Published version {version} of {spec.function_name}")

        return FunctionState(
            function_arn=response['FunctionArn'],
            version=version,
            created=not exists,
        )

"""
Main deployment module for Lambda Zip Deployer.

This module sequences a deployment as an ordered pipeline of stages:
validate, stage the artifact in S3, locate the function, reconcile the
function and reconcile the alias. The first failing stage ends the run and
nothing is rolled back.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import AWSOptions, DeploymentSpec
from lambda_zip_deployer.exceptions import DeploymentError
from lambda_zip_deployer.lambda_func.alias_manager import AliasManager
from lambda_zip_deployer.lambda_func.function_deployer import FunctionState, LambdaFunctionDeployer
from lambda_zip_deployer.lambda_func.function_locator import FunctionLocator
from lambda_zip_deployer.s3.staging_uploader import StagingUploader

T = TypeVar("T")


class Stage(enum.Enum):
    """Deployment pipeline stages, in execution order."""

    VALIDATE = "validate"
    STAGE_ARTIFACT = "stage_artifact"
    LOCATE_FUNCTION = "locate_function"
    RECONCILE_FUNCTION = "reconcile_function"
    RECONCILE_ALIAS = "reconcile_alias"
    DONE = "done"


@dataclass(frozen=True)
class DeploymentResult:
    """
    Outcome of a successful deployment.

    The artifact is passed through unchanged for downstream consumers.
    """

    function_name: str
    function_arn: str
    version: Optional[str]
    created: bool
    staged: bool
    alias_arn: Optional[str]
    artifact: Artifact


class LambdaDeployer:
    """
    Main class for deploying zip packages to AWS Lambda functions.

    This class integrates all components of the Lambda Zip Deployer:
    - S3 staging of the artifact
    - Function lookup
    - Function create/update
    - Alias create/update

    Clients are created once from the AWS options and shared by every
    component. Concurrent deployments of the same function are not
    coordinated.
    """

    def __init__(
        self,
        options: Optional[AWSOptions] = None,
        lambda_client=None,
        s3_client=None
    ):
        """
        Initialize the Lambda Deployer.

        Args:
            options: Explicit AWS client options. Defaults to boto3's resolution chain.
            lambda_client: Pre-configured Lambda client (overrides options)
            s3_client: Pre-configured S3 client (overrides options)
        """
        self.options = options or AWSOptions()
        if lambda_client is None or s3_client is None:
            default_lambda, default_s3 = self.options.create_clients()
            if lambda_client is None:
                lambda_client = default_lambda
            if s3_client is None:
                s3_client = default_s3

        self.staging_uploader = StagingUploader(s3_client=s3_client)
        self.function_locator = FunctionLocator(lambda_client=lambda_client)
        self.function_deployer = LambdaFunctionDeployer(lambda_client=lambda_client)
        self.alias_manager = AliasManager(lambda_client=lambda_client)
        self.stage = Stage.VALIDATE
        self.logger = logging.getLogger(__name__)

    def _run_stage(self, stage: Stage, resource: str, action: Callable[..., T], *args) -> T:
        """
        Run one pipeline stage, wrapping remote failures with stage context.

        Raises:
            DeploymentError: If a remote call made by the stage fails or
                returns a response without an expected field
        """
        self.stage = stage
        self.logger.debug(f"Entering stage {stage.value} for {resource}")
        try:
            return action(*args)
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Stage {stage.value} failed for {resource}: {e}")
            raise DeploymentError(stage.value, resource, str(e)) from e
        except KeyError as e:
            # A response without a field we read, e.g. FunctionArn or AliasArn
            self.logger.error(f"Stage {stage.value} got a malformed response for {resource}: missing {e}")
            raise DeploymentError(stage.value, resource, f"response missing {e}") from e

    def deploy(self, spec: DeploymentSpec, artifact: Artifact) -> DeploymentResult:
        """
        Deploy a zip package to a Lambda function and optionally alias it.

        Args:
            spec: Desired function state
            artifact: Zip package to deploy

        Returns:
            DeploymentResult describing the deployed function

        Raises:
            ValidationError: If the spec or artifact is invalid (no remote call made)
            DeploymentError: If any remote call fails
        """
        self.stage = Stage.VALIDATE
        spec.validate()
        artifact.validate()

        self.logger.info(f"Uploading Lambda function \"{spec.function_name}\"...")

        staged = False
        if spec.staging is not None:
            location = f"s3://{spec.staging.bucket}/{spec.staging.key}"
            staged = self._run_stage(
                Stage.STAGE_ARTIFACT, location,
                self.staging_uploader.upload, spec.staging, artifact
            )

        exists = self._run_stage(
            Stage.LOCATE_FUNCTION, spec.function_name,
            self.function_locator.function_exists, spec.function_name
        )

        state: FunctionState = self._run_stage(
            Stage.RECONCILE_FUNCTION, spec.function_name,
            self.function_deployer.deploy_function, spec, artifact, exists
        )

        alias_arn = None
        if spec.alias:
            resource = f"{spec.function_name}:{spec.alias}"
            if state.version is None:
                self.stage = Stage.RECONCILE_ALIAS
                raise DeploymentError(Stage.RECONCILE_ALIAS.value, resource, "no published version returned")

            alias_arn = self._run_stage(
                Stage.RECONCILE_ALIAS, resource,
                self.alias_manager.upsert_alias,
                spec.function_name, spec.alias, state.version, spec.alias_description
            )

        self.stage = Stage.DONE
        self.logger.info(f"Lambda function \"{spec.function_name}\" successfully uploaded")

        return DeploymentResult(
            function_name=spec.function_name,
            function_arn=state.function_arn,
            version=state.version,
            created=state.created,
            staged=staged,
            alias_arn=alias_arn,
            artifact=artifact,
        )

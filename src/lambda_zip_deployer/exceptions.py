"""
Exceptions raised by the Lambda Zip Deployer.
"""
from typing import Optional


class ValidationError(ValueError):
    """Raised when a deployment spec, artifact or AWS options are invalid.

    Always raised before any remote call is made.
    """


class DeploymentError(Exception):
    """
    Raised when a remote call fails during a deployment stage.

    Attributes:
        stage: Name of the pipeline stage that failed
        resource: Name of the resource the stage was acting on
    """

    def __init__(self, stage: str, resource: str, message: Optional[str] = None):
        self.stage = stage
        self.resource = resource
        detail = f": {message}" if message else ""
        super().__init__(f"Stage {stage} failed for {resource}{detail}")

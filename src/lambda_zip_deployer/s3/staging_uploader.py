"""
S3 staging uploader for Lambda deployments.
Uploads the zip artifact to S3 so Lambda can pull the code from there.
"""
import logging
from typing import Optional

from botocore.exceptions import ClientError

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import StagingLocation

logger = logging.getLogger(__name__)


class StagingUploader:
    """
    Stages deployment artifacts in S3.

    Any existing object at the target bucket/key is overwritten.
    """

    def __init__(self, s3_client):
        """
        Initialize the staging uploader.

        Args:
            s3_client: S3 client, usually built by AWSOptions.create_clients
        """
        self.s3_client = s3_client

    def upload(self, staging: Optional[StagingLocation], artifact: Artifact) -> bool:
        """
        Upload the artifact bytes to the staging location.

        Args:
            staging: Target bucket and key, or None to skip staging
            artifact: Artifact to upload

        Returns:
            True if the artifact was uploaded, False if no staging was configured
        """
        if staging is None:
            return False

        try:
            self.s3_client.put_object(
                Bucket=staging.bucket,
                Key=staging.key,
                Body=artifact.contents
            )
        except ClientError as e:
            logger.error(f"Error staging artifact to s3://{staging.bucket}/{staging.key}: {e}")
            raise

        logger.info(f"Staged {artifact.size} bytes to s3://{staging.bucket}/{staging.key}")
        return True

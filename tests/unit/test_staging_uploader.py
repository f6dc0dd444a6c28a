"""
Unit tests for the S3 staging uploader.
"""
import pytest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from lambda_zip_deployer.config import StagingLocation
from lambda_zip_deployer.s3.staging_uploader import StagingUploader


def test_upload(s3_client, artifact):
    """Test staging an artifact in S3."""
    s3_client.create_bucket(Bucket='deploy-bucket')
    uploader = StagingUploader(s3_client=s3_client)

    assert uploader.upload(StagingLocation(bucket='deploy-bucket', key='releases/function.zip'), artifact)

    body = s3_client.get_object(Bucket='deploy-bucket', Key='releases/function.zip')['Body'].read()
    assert body == artifact.contents


def test_upload_overwrites_existing_object(s3_client, artifact):
    """Test that an existing object at the staging key is replaced."""
    s3_client.create_bucket(Bucket='deploy-bucket')
    s3_client.put_object(Bucket='deploy-bucket', Key='function.zip', Body=b'old')

    StagingUploader(s3_client=s3_client).upload(StagingLocation(bucket='deploy-bucket', key='function.zip'), artifact)

    body = s3_client.get_object(Bucket='deploy-bucket', Key='function.zip')['Body'].read()
    assert body == artifact.contents


def test_upload_missing_bucket(s3_client, artifact):
    """Test that upload errors propagate."""
    uploader = StagingUploader(s3_client=s3_client)

    with pytest.raises(ClientError):
        uploader.upload(StagingLocation(bucket='missing-bucket', key='function.zip'), artifact)


def test_upload_without_staging_is_noop(artifact):
    """Test that nothing is uploaded when no staging location is configured."""
    mock_s3_client = MagicMock()

    assert not StagingUploader(s3_client=mock_s3_client).upload(None, artifact)
    mock_s3_client.put_object.assert_not_called()

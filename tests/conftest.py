"""
Pytest configuration file for Lambda Zip Deployer tests.
"""
import json
import pytest
from unittest.mock import patch

import boto3
import moto

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import DeploymentSpec, StagingLocation


@pytest.fixture
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    with patch.dict('os.environ', {
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SECURITY_TOKEN': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'AWS_DEFAULT_REGION': 'us-east-1',
    }):
        yield


@pytest.fixture
def mocked_aws(aws_credentials):
    """Single moto context shared by every client fixture in a test."""
    with moto.mock_aws():
        yield


@pytest.fixture
def lambda_client(mocked_aws):
    """Lambda client fixture."""
    return boto3.client('lambda')


@pytest.fixture
def s3_client(mocked_aws):
    """S3 client fixture."""
    return boto3.client('s3')


@pytest.fixture
def iam_client(mocked_aws):
    """IAM client fixture."""
    return boto3.client('iam')


@pytest.fixture
def lambda_role(iam_client):
    """Create a Lambda execution role."""
    assume_role_policy = {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": "lambda.amazonaws.com"},
                "Action": "sts:AssumeRole"
            }
        ]
    }

    response = iam_client.create_role(
        RoleName="lambda-test-role",
        AssumeRolePolicyDocument=json.dumps(assume_role_policy)
    )
    return response['Role']['Arn']


@pytest.fixture
def artifact():
    """Zip artifact fixture."""
    return Artifact(contents=b'PK\x03\x04fake-zip-content', path='build/function.zip')


@pytest.fixture
def spec():
    """Minimal deployment spec fixture."""
    return DeploymentSpec(
        function_name='test-function',
        role='arn:aws:iam::123456789012:role/lambda-test-role'
    )


@pytest.fixture
def staged_spec(spec):
    """Deployment spec with an S3 staging location."""
    return spec.merged_with(staging=StagingLocation(bucket='deploy-bucket', key='releases/function.zip'))


"""
Unit tests for the alias manager.
"""
import pytest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from lambda_zip_deployer.lambda_func.alias_manager import AliasManager

ALIAS_ARN = 'arn:aws:lambda:us-east-1:123456789012:function:test-function:live'


def _client_error(code, operation):
    return ClientError({'Error': {'Code': code, 'Message': f'{code} raised'}}, operation)


@pytest.fixture
def mock_lambda_client():
    """Lambda client double."""
    client = MagicMock()
    client.create_alias.return_value = {'AliasArn': ALIAS_ARN}
    client.update_alias.return_value = {'AliasArn': ALIAS_ARN}
    return client


@pytest.fixture
def alias_manager(mock_lambda_client):
    """Alias manager fixture."""
    return AliasManager(lambda_client=mock_lambda_client)


def test_alias_exists(alias_manager, mock_lambda_client):
    """Test that a successful lookup means the alias exists."""
    mock_lambda_client.get_alias.return_value = {'Name': 'live', 'FunctionVersion': '2'}

    assert alias_manager._alias_exists('test-function', 'live')
    mock_lambda_client.get_alias.assert_called_once_with(FunctionName='test-function', Name='live')


def test_alias_does_not_exist(alias_manager, mock_lambda_client):
    """Test that ResourceNotFoundException means the alias is missing."""
    mock_lambda_client.get_alias.side_effect = _client_error('ResourceNotFoundException', 'GetAlias')

    assert not alias_manager._alias_exists('test-function', 'live')


def test_upsert_alias_creates_missing_alias(alias_manager, mock_lambda_client):
    """Test that a missing alias is created and never updated."""
    mock_lambda_client.get_alias.side_effect = _client_error('ResourceNotFoundException', 'GetAlias')

    alias_arn = alias_manager.upsert_alias('test-function', 'live', '3')

    mock_lambda_client.create_alias.assert_called_once_with(
        FunctionName='test-function',
        Name='live',
        FunctionVersion='3'
    )
    mock_lambda_client.update_alias.assert_not_called()
    assert alias_arn == ALIAS_ARN


def test_upsert_alias_updates_existing_alias(alias_manager, mock_lambda_client):
    """Test that an existing alias is retargeted and never recreated."""
    mock_lambda_client.get_alias.return_value = {'Name': 'live', 'FunctionVersion': '2'}

    alias_manager.upsert_alias('test-function', 'live', '3', description='Production traffic')

    mock_lambda_client.update_alias.assert_called_once_with(
        FunctionName='test-function',
        Name='live',
        FunctionVersion='3',
        Description='Production traffic'
    )
    mock_lambda_client.create_alias.assert_not_called()


def test_upsert_alias_lookup_failure(alias_manager, mock_lambda_client):
    """Test that other lookup errors propagate without create or update."""
    mock_lambda_client.get_alias.side_effect = _client_error('AccessDeniedException', 'GetAlias')

    with pytest.raises(ClientError):
        alias_manager.upsert_alias('test-function', 'live', '3')

    mock_lambda_client.create_alias.assert_not_called()
    mock_lambda_client.update_alias.assert_not_called()


def test_upsert_alias_create_failure(alias_manager, mock_lambda_client):
    """Test that create errors propagate."""
    mock_lambda_client.get_alias.side_effect = _client_error('ResourceNotFoundException', 'GetAlias')
    mock_lambda_client.create_alias.side_effect = _client_error('ResourceConflictException', 'CreateAlias')

    with pytest.raises(ClientError):
        alias_manager.upsert_alias('test-function', 'live', '3')

"""
Unit tests for the function locator.
"""
import pytest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from lambda_zip_deployer.lambda_func.function_locator import FunctionLocator


def _paginated_client(pages):
    client = MagicMock()
    client.get_paginator.return_value.paginate.return_value = pages
    return client


def test_function_exists(lambda_client, lambda_role):
    """Test checking if a Lambda function exists against moto."""
    function_name = "test-function"
    locator = FunctionLocator(lambda_client=lambda_client)

    # Function should not exist initially
    assert not locator.function_exists(function_name)

    lambda_client.create_function(
        FunctionName=function_name,
        Runtime='python3.12',
        Role=lambda_role,
        Handler='index.handler',
        Code={'ZipFile': b'def handler(event, context): return "Hello, World!"'},
        Publish=False
    )

    # Function should exist now
    assert locator.function_exists(function_name)
    assert not locator.function_exists("Test-Function")


def test_function_exists_scans_every_page():
    """Test that later pages are consulted when earlier ones do not match."""
    client = _paginated_client([
        {'Functions': [{'FunctionName': 'other-1'}, {'FunctionName': 'other-2'}]},
        {'Functions': []},
        {'Functions': [{'FunctionName': 'test-function'}]},
    ])

    assert FunctionLocator(lambda_client=client).function_exists('test-function')
    client.get_paginator.assert_called_once_with('list_functions')


def test_function_exists_exact_match_only():
    """Test that prefix and case variations do not match."""
    client = _paginated_client([
        {'Functions': [{'FunctionName': 'test-function-v2'}, {'FunctionName': 'TEST-FUNCTION'}]},
    ])

    assert not FunctionLocator(lambda_client=client).function_exists('test-function')


def test_function_exists_listing_failure():
    """Test that listing errors propagate."""
    client = MagicMock()
    client.get_paginator.return_value.paginate.side_effect = ClientError(
        {'Error': {'Code': 'AccessDeniedException', 'Message': 'denied'}},
        'ListFunctions'
    )

    with pytest.raises(ClientError):
        FunctionLocator(lambda_client=client).function_exists('test-function')

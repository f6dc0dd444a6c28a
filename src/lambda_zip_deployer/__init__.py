"""
Lambda Zip Deployer - A system for deploying zip packages to AWS Lambda functions.

This package provides tools for uploading a zip artifact (optionally staged in S3),
creating or updating the target Lambda function, and pointing an alias at the
published version.
"""

__version__ = "0.1.0"

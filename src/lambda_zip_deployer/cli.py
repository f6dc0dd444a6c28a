#!/usr/bin/env python3
"""
Command-line interface for the Lambda Zip Deployer system.
"""
import argparse
import logging
import sys
from typing import List, Optional

from botocore.exceptions import BotoCoreError

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import (
    AWSOptions,
    DeploymentSpec,
    StagingLocation,
    load_spec_file,
)
from lambda_zip_deployer.exceptions import DeploymentError, ValidationError
from lambda_zip_deployer.main import LambdaDeployer


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _split_ids(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Deploy zip packages to AWS Lambda functions with optional S3 staging and aliases"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Deploy command
    deploy_parser = subparsers.add_parser("deploy", help="Deploy a zip package to a Lambda function")
    deploy_parser.add_argument(
        "--zip-file",
        required=True,
        help="Path to the zip package to deploy"
    )
    deploy_parser.add_argument(
        "--config",
        help="JSON file with deployment settings (command line flags take precedence)"
    )
    deploy_parser.add_argument(
        "--function-name",
        help="Name of the Lambda function"
    )
    deploy_parser.add_argument(
        "--role",
        help="ARN of the execution role for the Lambda function"
    )
    deploy_parser.add_argument(
        "--handler",
        help="Function handler (default: index.handler)"
    )
    deploy_parser.add_argument(
        "--runtime",
        help="Function runtime (default: python3.12)"
    )
    deploy_parser.add_argument(
        "--memory-size",
        type=int,
        help="Memory size for the Lambda function in MB (unchanged if omitted)"
    )
    deploy_parser.add_argument(
        "--timeout",
        type=int,
        help="Timeout for the Lambda function in seconds (unchanged if omitted)"
    )
    deploy_parser.add_argument(
        "--description",
        help="Description of the Lambda function"
    )

    # VPC configuration (optional)
    deploy_parser.add_argument(
        "--subnet-ids",
        help="Comma-separated list of subnet IDs for VPC configuration"
    )
    deploy_parser.add_argument(
        "--security-group-ids",
        help="Comma-separated list of security group IDs for VPC configuration"
    )

    # S3 staging (optional)
    deploy_parser.add_argument(
        "--s3-bucket",
        help="S3 bucket to stage the zip package in"
    )
    deploy_parser.add_argument(
        "--s3-key",
        help="S3 key to stage the zip package under"
    )

    # Versioning options
    deploy_parser.add_argument(
        "--publish",
        action="store_true",
        default=None,
        help="Publish a new version of the function"
    )
    deploy_parser.add_argument(
        "--no-publish",
        dest="publish",
        action="store_false",
        default=None,
        help="Do not publish a new version, even if the config file asks for it"
    )
    deploy_parser.add_argument(
        "--alias",
        help="Alias to point at the published version (requires --publish)"
    )
    deploy_parser.add_argument(
        "--alias-description",
        help="Description of the alias"
    )

    # AWS options
    deploy_parser.add_argument(
        "--region",
        help="AWS region to use"
    )
    deploy_parser.add_argument(
        "--profile",
        help="AWS profile to use"
    )

    # General options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(args)


def build_spec(args: argparse.Namespace) -> DeploymentSpec:
    """Combine the config file (if any) with command line flags."""
    if args.config:
        spec = load_spec_file(args.config)
    else:
        spec = DeploymentSpec(function_name="", role="")

    # Flags override the file's staging location one field at a time
    staging = None
    if args.s3_bucket is not None or args.s3_key is not None:
        base = spec.staging
        staging = StagingLocation(
            bucket=args.s3_bucket if args.s3_bucket is not None else (base.bucket if base is not None else ""),
            key=args.s3_key if args.s3_key is not None else (base.key if base is not None else ""),
        )

    return spec.merged_with(
        function_name=args.function_name,
        role=args.role,
        handler=args.handler,
        runtime=args.runtime,
        memory_size=args.memory_size,
        timeout=args.timeout,
        description=args.description,
        subnet_ids=_split_ids(args.subnet_ids),
        security_group_ids=_split_ids(args.security_group_ids),
        staging=staging,
        publish=args.publish,
        alias=args.alias,
        alias_description=args.alias_description,
    )


def deploy_command(args: argparse.Namespace) -> int:
    """Handle the deploy command."""
    logger = logging.getLogger("lambda_zip_deployer.cli")

    try:
        spec = build_spec(args)
        spec.validate()
        artifact = Artifact.from_path(args.zip_file)
        artifact.validate()
    except ValidationError as e:
        logger.error(f"Validation error: {e}")
        return 1

    options = AWSOptions(region_name=args.region, profile_name=args.profile)

    try:
        deployer = LambdaDeployer(options=options)
        result = deployer.deploy(spec, artifact)
    except ValidationError as e:
        logger.error(f"Validation error: {e}")
        return 1
    except DeploymentError as e:
        logger.error(f"Deployment failed: {e}", exc_info=True)
        return 1
    except BotoCoreError as e:
        logger.error(f"AWS configuration error: {e}")
        return 1

    logger.info(f"Successfully deployed Lambda function: {result.function_arn}")
    if result.version:
        logger.info(f"Published version: {result.version}")
    if result.alias_arn:
        logger.info(f"Alias: {result.alias_arn}")

    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parsed_args = parse_args(args)
    setup_logging(parsed_args.verbose)

    if parsed_args.command == "deploy":
        return deploy_command(parsed_args)
    else:
        print("No command specified. Use --help for usage information.")
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Example script for deploying a zip package to AWS Lambda, staged through S3,
and pointing a "live" alias at the published version.
"""
import argparse
import logging
import sys

from lambda_zip_deployer.artifact import Artifact
from lambda_zip_deployer.config import AWSOptions, DeploymentSpec, StagingLocation
from lambda_zip_deployer.main import LambdaDeployer


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Example script for deploying a zip package to AWS Lambda through S3"
    )

    parser.add_argument(
        "--zip-file",
        required=True,
        help="Path to the zip package to deploy"
    )
    parser.add_argument(
        "--function-name",
        required=True,
        help="Name of the Lambda function"
    )
    parser.add_argument(
        "--role",
        required=True,
        help="ARN of the execution role"
    )
    parser.add_argument(
        "--s3-bucket",
        required=True,
        help="S3 bucket to stage the package in"
    )
    parser.add_argument(
        "--region",
        help="AWS region to use"
    )

    # General options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point for the example script."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Starting example deployment")

    try:
        spec = DeploymentSpec(
            function_name=args.function_name,
            role=args.role,
            staging=StagingLocation(bucket=args.s3_bucket, key=f"{args.function_name}/function.zip"),
            publish=True,
            alias="live"
        )

        deployer = LambdaDeployer(options=AWSOptions(region_name=args.region))
        result = deployer.deploy(spec, Artifact.from_path(args.zip_file))

        logger.info(f"Successfully deployed Lambda function: {result.function_arn}")
        logger.info(f"Alias live -> version {result.version}")

        return 0

    except Exception as e:
        logger.error(f"Deployment failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

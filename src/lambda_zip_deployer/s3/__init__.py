"""S3 staging support for Lambda deployments."""

"""
Deployment configuration for Lambda Zip Deployer.

Holds the desired state of the target function (DeploymentSpec), the optional
S3 staging location and the explicit AWS client options used to build boto3
sessions.
"""
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import boto3

from lambda_zip_deployer.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_HANDLER = "index.handler"
DEFAULT_RUNTIME = "python3.12"

# Keys accepted by from_dict that map onto DeploymentSpec fields
_KEY_ALIASES = {
    "name": "function_name",
    "memory": "memory_size",
    "subnets": "subnet_ids",
    "securityGroups": "security_group_ids",
    "security_groups": "security_group_ids",
    "s3": "staging",
    "aliasDescription": "alias_description",
}


def _as_list(value: Union[str, List[str], None]) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    try:
        items = list(value)
    except TypeError:
        raise ValidationError(f"Expected a string or a list of strings, got {value!r}") from None
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(f"Expected a list of strings, got item {item!r}")
    return items


def _check_str(name: str, value: Any, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string, got {value!r}")


def _check_int(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid size or timeout
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{name}' must be an integer, got {value!r}")


@dataclass(frozen=True)
class StagingLocation:
    """S3 bucket and key where the artifact is staged before Lambda pulls it."""

    bucket: str
    key: str

    def validate(self) -> None:
        if not self.bucket:
            raise ValidationError("If uploading via S3, a bucket must be provided")
        if not self.key:
            raise ValidationError("If uploading via S3, a key must be provided")
        _check_str("bucket", self.bucket)
        _check_str("key", self.key)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StagingLocation":
        return cls(bucket=data.get("bucket") or "", key=data.get("key") or "")


@dataclass(frozen=True)
class DeploymentSpec:
    """
    Desired state of a Lambda function for a single deployment.

    Optional configuration fields use None for "not provided", so an update
    never overwrites a remote value the caller did not ask to change.
    """

    function_name: str
    role: str
    handler: str = DEFAULT_HANDLER
    runtime: str = DEFAULT_RUNTIME
    memory_size: Optional[int] = None
    timeout: Optional[int] = None
    description: Optional[str] = None
    subnet_ids: Optional[List[str]] = None
    security_group_ids: Optional[List[str]] = None
    staging: Optional[StagingLocation] = None
    publish: bool = False
    alias: Optional[str] = None
    alias_description: Optional[str] = None

    def __post_init__(self):
        # Frozen dataclass: coerce single strings through object.__setattr__
        object.__setattr__(self, "subnet_ids", _as_list(self.subnet_ids))
        object.__setattr__(self, "security_group_ids", _as_list(self.security_group_ids))

    def validate(self) -> None:
        """
        Check the spec before any remote call is made.

        Raises:
            ValidationError: If a required field is missing, has the wrong type
                or fields conflict
        """
        if not self.function_name:
            raise ValidationError("No Lambda function name provided")
        if not self.role:
            raise ValidationError("No Lambda role provided")
        if not self.handler:
            raise ValidationError("Handler must not be empty")
        if not self.runtime:
            raise ValidationError("Runtime must not be empty")

        _check_str("function_name", self.function_name)
        _check_str("role", self.role)
        _check_str("handler", self.handler)
        _check_str("runtime", self.runtime)
        _check_str("description", self.description, optional=True)
        _check_str("alias", self.alias, optional=True)
        _check_str("alias_description", self.alias_description, optional=True)
        _check_int("memory_size", self.memory_size)
        _check_int("timeout", self.timeout)
        if not isinstance(self.publish, bool):
            raise ValidationError(f"'publish' must be true or false, got {self.publish!r}")

        if self.staging is not None:
            if not isinstance(self.staging, StagingLocation):
                raise ValidationError(f"Staging must be a StagingLocation, got {self.staging!r}")
            self.staging.validate()

        if (self.subnet_ids is None) != (self.security_group_ids is None):
            raise ValidationError(
                "Subnet IDs and security group IDs must be provided together for VPC configuration"
            )

        if self.alias and not self.publish:
            raise ValidationError("An alias was provided but 'publish' was 'false'.")

    @property
    def vpc_config(self) -> Optional[Dict[str, List[str]]]:
        """VpcConfig parameter for the Lambda API, or None if no VPC is declared."""
        if self.subnet_ids is None or self.security_group_ids is None:
            return None
        return {
            "SubnetIds": list(self.subnet_ids),
            "SecurityGroupIds": list(self.security_group_ids),
        }

    def configuration_params(self) -> Dict[str, Any]:
        """
        Build the configuration parameters shared by create and update calls.

        Only fields that were provided are included.
        """
        params: Dict[str, Any] = {
            "FunctionName": self.function_name,
            "Role": self.role,
            "Handler": self.handler,
            "Runtime": self.runtime,
        }

        if self.memory_size is not None:
            params["MemorySize"] = self.memory_size
        if self.description is not None:
            params["Description"] = self.description
        if self.timeout is not None:
            params["Timeout"] = self.timeout

        vpc_config = self.vpc_config
        if vpc_config is not None:
            params["VpcConfig"] = vpc_config

        return params

    def merged_with(self, **overrides: Any) -> "DeploymentSpec":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeploymentSpec":
        """
        Build a spec from a mapping, e.g. a parsed JSON config file.

        Args:
            data: Mapping using DeploymentSpec field names or the short keys
                (name, memory, subnets, securityGroups, s3)

        Returns:
            The DeploymentSpec (not yet validated)
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = _KEY_ALIASES.get(key, key)
            if field_name not in cls.__dataclass_fields__:
                raise ValidationError(f"Unknown deployment setting: {key}")
            kwargs[field_name] = value

        staging = kwargs.get("staging")
        if isinstance(staging, Mapping):
            kwargs["staging"] = StagingLocation.from_dict(staging)
        elif staging is not None and not isinstance(staging, StagingLocation):
            raise ValidationError("S3 staging must be an object with 'bucket' and 'key'")

        kwargs.setdefault("function_name", "")
        kwargs.setdefault("role", "")
        return cls(**kwargs)


def load_spec_file(path: Union[str, Path]) -> DeploymentSpec:
    """
    Load a DeploymentSpec from a JSON file.

    Raises:
        ValidationError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read deployment config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Deployment config {path} must contain a JSON object")

    logger.debug(f"Loaded deployment config from {path}")
    return DeploymentSpec.from_dict(data)


@dataclass(frozen=True)
class AWSOptions:
    """
    Explicit AWS client configuration.

    Region and profile are optional; when absent boto3's default resolution
    chain applies.
    """

    region_name: Optional[str] = None
    profile_name: Optional[str] = None
    client_kwargs: Dict[str, Any] = field(default_factory=dict)

    def create_session(self) -> boto3.Session:
        return boto3.Session(
            profile_name=self.profile_name,
            region_name=self.region_name,
        )

    def create_clients(self):
        """
        Create the Lambda and S3 clients from a single session.

        Returns:
            Tuple of (lambda_client, s3_client)
        """
        session = self.create_session()
        return (
            session.client("lambda", **self.client_kwargs),
            session.client("s3", **self.client_kwargs),
        )

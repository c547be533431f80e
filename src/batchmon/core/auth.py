"""Client construction for AWS Batch.

This module centralizes creation of the boto3 Batch client from optional
static credentials, profile and region. Setup problems (unknown profile,
missing region) are raised as AuthError before any collection starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError


class AuthError(RuntimeError):
    """Raised when the AWS Batch client cannot be configured."""


@dataclass(frozen=True)
class AwsSettings:
    """
    Resolved AWS connection settings.

    Attributes:
        access_key_id: Static access key id. Only used together with
                       secret_access_key.
        secret_access_key: Static secret access key.
        region: AWS region of the Batch queues. None defers to the
                default boto3 resolution (env, shared config).
        profile: Named profile from the shared AWS config files.
    """

    access_key_id: str | None = None
    secret_access_key: str | None = None
    region: str | None = None
    profile: str | None = None

    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)

    def to_session_kwargs(self) -> dict[str, Any]:
        """Build kwargs suitable for boto3.Session()."""
        kwargs: dict[str, Any] = {}
        if self.has_static_credentials():
            kwargs["aws_access_key_id"] = self.access_key_id
            kwargs["aws_secret_access_key"] = self.secret_access_key
        if self.region:
            kwargs["region_name"] = self.region
        if self.profile:
            kwargs["profile_name"] = self.profile
        return kwargs


def _format_auth_error(exc: Exception, settings: AwsSettings) -> str:
    """Return a user-friendly setup error message."""
    message = str(exc)
    if "region" in message.lower() and not settings.region:
        return (
            "AWS Batch client setup failed: no region configured.\n"
            "Pass --region or set AWS_DEFAULT_REGION."
        )
    return f"AWS Batch client setup failed: {message}"


def get_client(settings: AwsSettings | None = None) -> Any:
    """
    Create and return a boto3 Batch client.

    Static credentials are applied only when both the key id and the secret
    are set; otherwise the default boto3 credential chain is used. Raises
    AuthError when no credentials resolve at all.
    """
    settings = settings or AwsSettings()
    try:
        session = boto3.Session(**settings.to_session_kwargs())
        client = session.client("batch")
        credentials = session.get_credentials()
    except BotoCoreError as exc:
        raise AuthError(_format_auth_error(exc, settings)) from exc

    if credentials is None:
        raise AuthError(
            "AWS Batch client setup failed: no credentials found.\n"
            "Pass --access-key-id and --secret-access-key, use --profile, "
            "or configure the default AWS credential chain."
        )
    return client

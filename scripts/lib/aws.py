"""AWS client helpers for boto3 operations."""

import boto3


def get_session(profile: str | None = None) -> boto3.Session:
    """Create boto3 session with optional profile."""
    if profile:
        return boto3.Session(profile_name=profile)
    return boto3.Session()


def get_secret_string(session: boto3.Session, secret_id: str, region: str | None = None) -> str:
    """
    Fetch the string value of a Secrets Manager secret.

    Raises:
        botocore.exceptions.ClientError: If the secret cannot be read.
    """
    sm = session.client("secretsmanager", region_name=region)
    response = sm.get_secret_value(SecretId=secret_id)
    return response["SecretString"]

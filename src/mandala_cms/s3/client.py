"""S3 client construction from settings."""
import logging
import os

import boto3

from mandala_cms.config.settings import Settings

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> "S3Client":
    """Create an S3 client configured for the deployment mode."""
    client_kwargs = {
        'region_name': settings.aws_region
    }

    # Named profile (SSO) only applies to production deployments
    aws_profile = os.environ.get('AWS_PROFILE')
    if aws_profile and settings.deployment_mode == 'aws-prod':
        session = boto3.Session(profile_name=aws_profile)
        logger.debug(f"Creating s3 client using profile: {aws_profile}")
        return session.client('s3', region_name=settings.aws_region)

    if settings.aws_access_key_id:
        client_kwargs['aws_access_key_id'] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        client_kwargs['aws_secret_access_key'] = settings.aws_secret_access_key
    if settings.aws_endpoint_url:
        client_kwargs['endpoint_url'] = settings.aws_endpoint_url

    logger.debug(f"Creating s3 client for region {settings.aws_region}")
    return boto3.client('s3', **client_kwargs)

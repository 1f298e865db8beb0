# cli.py
import asyncio
import logging

import click
import uvicorn

from content_db.collections import ALL_COLLECTIONS
from content_db.store import get_document_store
from mandala_cms.config.logging_config import configure_logging
from mandala_cms.config.settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Mandala CMS API"""
    configure_logging(get_settings().log_level)


@cli.command()
@click.option("--env", "as_env", is_flag=True, help="Print as KEY=value lines for a .env file")
def show_config(as_env):
    """Show current configuration"""
    settings = get_settings()

    if as_env:
        for key, value in settings.get_environment_dict().items():
            print(f"{key}={value}")
        return

    print("Current Configuration:")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  Database Backend: {settings.database_backend}")
    if settings.database_backend == "sqlite":
        print(f"  SQLite Path: {settings.sqlite_path}")
    else:
        print(f"  MongoDB Database: {settings.mongodb_database}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  S3 Bucket: {settings.s3_bucket_name}")
    print(f"  Media Base URL: {settings.media_public_base_url}")
    print(f"  Company Profile ID: {settings.company_profile_id}")


@cli.command()
def init_db():
    """Create the document collections and their indexes"""
    settings = get_settings()
    store = get_document_store(
        backend=settings.database_backend,
        sqlite_path=settings.sqlite_path,
        mongodb_uri=settings.mongodb_uri,
        mongodb_database=settings.mongodb_database,
    )

    async def _init():
        try:
            await store.init_collections()
        finally:
            await store.close()

    asyncio.run(_init())
    print(f"✅ Initialized {len(ALL_COLLECTIONS)} collections on {settings.database_backend}")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    print(f"Starting Mandala CMS API on {host}:{port}...")
    uvicorn.run(
        "mandala_cms.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    cli()

import logging
import logging.config
import os
import sys
from datetime import timedelta
from typing import Optional
from uuid import UUID

import click
from dotenv import find_dotenv, load_dotenv

from tokenmaker.config.provider import EnvConfigProvider
from tokenmaker.logging_config import get_logging_config, setup_logger_file
from tokenmaker.modules.token import TokenError, TokenManager, TokenManagerFactory

logger = logging.getLogger(__name__)

# Tokens go to stdout, logs stay on stderr
LOG_STREAM = "ext://sys.stderr"


def _build_manager(provider: EnvConfigProvider) -> TokenManager:
    try:
        return TokenManagerFactory.build(provider)
    except ValueError as e:
        raise click.UsageError(str(e))


@click.group()
@click.option("--token-type", "token_type", default=None, help="Token backend: jwt or paseto [env: TOKEN_TYPE]")
@click.option("--secret-key", "secret_key", default=None, help="Symmetric key [env: TOKEN_SYMMETRIC_KEY]")
@click.option("--log-level", "log_level", default=None, help="Log level [env: LOG_LEVEL]")
@click.pass_context
def main(ctx: click.Context, token_type: Optional[str], secret_key: Optional[str], log_level: Optional[str]):
    """Generate and validate access tokens."""
    load_dotenv(find_dotenv(usecwd=True))

    overrides = {
        "TOKEN_TYPE": token_type,
        "TOKEN_SYMMETRIC_KEY": secret_key,
        "LOG_LEVEL": log_level,
    }
    environ = {**os.environ, **{k: v for k, v in overrides.items() if v}}
    provider = EnvConfigProvider(environ)

    # Setup logging
    log_config = provider.get_logging_config()
    try:
        if log_config.file_logging_enabled:
            setup_logger_file(log_config.log_file_name, log_config.log_dir, log_config.level, LOG_STREAM)
        else:
            logging.config.dictConfig(get_logging_config(log_config.level, stream=LOG_STREAM))
    except (ValueError, OSError) as e:
        raise click.UsageError(f"invalid logging configuration: {e}")

    ctx.obj = provider


@main.command()
@click.argument("username")
@click.option("--user-id", "user_id", type=click.UUID, default=None, help="Subject UUID to embed")
@click.option("--duration-minutes", "duration_minutes", type=int, default=None,
              help="Token lifetime [env: TOKEN_DURATION_MINUTES, default 15]")
@click.pass_obj
def generate(provider: EnvConfigProvider, username: str, user_id: Optional[UUID], duration_minutes: Optional[int]):
    """Issue a token for USERNAME."""
    manager = _build_manager(provider)

    if duration_minutes is not None:
        duration = timedelta(minutes=duration_minutes)
    else:
        duration = provider.get_token_config().duration

    try:
        token = manager.generate_token(username, duration, user_id)
    except ValueError as e:
        raise click.UsageError(str(e))

    click.echo(token)


@main.command()
@click.argument("token")
@click.pass_obj
def validate(provider: EnvConfigProvider, token: str):
    """Validate TOKEN and print its payload."""
    manager = _build_manager(provider)

    try:
        payload = manager.validate_token(token)
    except TokenError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(payload.model_dump_json(indent=2))


if __name__ == "__main__":
    main()

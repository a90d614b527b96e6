"""
Credential resolution for the object poller.

Credentials are resolved by an ordered sequence of resolver functions:
explicit keys from the configuration, then keys found in the process
environment, then anonymous access. The first resolver returning a value
wins.
"""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..config import FetcherConfig

ACCESS_KEY_VARS = ("AWS_ACCESS_KEY_ID", "AWS_ACCESS_KEY")
SECRET_KEY_VARS = ("AWS_SECRET_ACCESS_KEY", "AWS_SECRET_KEY")
SESSION_TOKEN_VAR = "AWS_SESSION_TOKEN"


@dataclass(frozen=True)
class Credentials:
    """Resolved credentials handle."""

    access_key: str | None = None
    secret_key: str | None = None
    session_token: str | None = None
    source: str = "anonymous"

    @property
    def anonymous(self) -> bool:
        return self.access_key is None

    def __repr__(self) -> str:
        return f"Credentials(source={self.source!r}, anonymous={self.anonymous})"


Resolver = Callable[[FetcherConfig, Mapping[str, str]], Credentials | None]


def explicit_credentials(
    config: FetcherConfig, environ: Mapping[str, str]
) -> Credentials | None:
    """Use the access/secret pair given in the configuration."""
    if config.access_key and config.secret_key:
        return Credentials(
            access_key=config.access_key,
            secret_key=config.secret_key,
            source="explicit",
        )
    return None


def _first_set(environ: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def environment_credentials(
    config: FetcherConfig, environ: Mapping[str, str]
) -> Credentials | None:
    """Use AWS keys from the process environment."""
    access_key = _first_set(environ, ACCESS_KEY_VARS)
    secret_key = _first_set(environ, SECRET_KEY_VARS)
    if access_key and secret_key:
        return Credentials(
            access_key=access_key,
            secret_key=secret_key,
            session_token=environ.get(SESSION_TOKEN_VAR) or None,
            source="environment",
        )
    return None


def anonymous_credentials(
    config: FetcherConfig, environ: Mapping[str, str]
) -> Credentials | None:
    """Fall back to unsigned requests."""
    return Credentials()


DEFAULT_RESOLVERS: tuple[Resolver, ...] = (
    explicit_credentials,
    environment_credentials,
    anonymous_credentials,
)


def resolve_credentials(
    config: FetcherConfig,
    environ: Mapping[str, str] | None = None,
    resolvers: tuple[Resolver, ...] = DEFAULT_RESOLVERS,
) -> Credentials:
    """
    Resolve credentials for a fetcher configuration.

    Args:
        config: Fetcher configuration
        environ: Environment mapping (defaults to ``os.environ``)
        resolvers: Ordered resolver functions

    Returns:
        The first credentials produced by a resolver
    """
    if environ is None:
        environ = os.environ
    for resolver in resolvers:
        credentials = resolver(config, environ)
        if credentials is not None:
            return credentials
    return Credentials()

"""Credential providers for authenticating API requests."""

import os
from abc import ABC, abstractmethod

DEFAULT_TOKEN_ENV_VAR = "VIDEOSHARE_AUTH_TOKEN"


class CredentialProvider(ABC):
    """Supplies the bearer token sent with API requests."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Current token, or None to send requests unauthenticated."""

    def auth_headers(self) -> dict[str, str]:
        token = self.get_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


class StaticCredentialProvider(CredentialProvider):
    """A fixed token, e.g. from a CLI flag."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token


class EnvironmentCredentialProvider(CredentialProvider):
    """Reads the token from an environment variable on every request."""

    def __init__(self, variable: str = DEFAULT_TOKEN_ENV_VAR) -> None:
        self._variable = variable

    def get_token(self) -> str | None:
        return os.environ.get(self._variable) or None

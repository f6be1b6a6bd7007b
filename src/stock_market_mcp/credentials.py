"""Upstream API key lookup."""

from __future__ import annotations

import os
from collections.abc import Mapping

from stock_market_mcp.config import PROVIDER
from stock_market_mcp.errors import MissingCredentialError


class ApiKeyProvider:
    """
    Reads the provider API key from the environment on every call.

    Handlers receive an instance at construction and call get_api_key() per
    invocation, so a key removed or added while the process runs is honoured
    and a missing key fails the invocation rather than startup.
    """

    def __init__(
        self,
        env_var: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            env_var: Variable name. Defaults to config.
            environ: Mapping to read from. Defaults to os.environ.
        """
        self.env_var = env_var or PROVIDER.API_KEY_ENV
        self._environ = os.environ if environ is None else environ

    def get_api_key(self) -> str:
        """
        Return the API key.

        Raises:
            MissingCredentialError: If the variable is unset or blank.
        """
        value = (self._environ.get(self.env_var) or "").strip()
        if not value:
            raise MissingCredentialError(f"Missing {self.env_var} environment variable.")
        return value

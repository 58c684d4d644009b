"""
Credential discovery — locate a GitHub token.

Only the CLI calls this; core services receive the token as a parameter.
"""

from __future__ import annotations

import os
from typing import Mapping

from formulagen.core.errors import CredentialsError

TOKEN_VARS = ("GITHUB_ACCESS_TOKEN", "GITHUB_TOKEN")


def find_token(environ: Mapping[str, str] | None = None) -> str:
    """Return the first non-empty token from ``TOKEN_VARS``.

    Raises:
        CredentialsError: Neither variable is set.
    """
    env = os.environ if environ is None else environ
    for var in TOKEN_VARS:
        token = env.get(var)
        if token:
            return token
    raise CredentialsError(
        "unable to find a token in either GITHUB_ACCESS_TOKEN or GITHUB_TOKEN"
    )

"""Repository fetch.

The clone is the only step that needs the requesting user's access token. The
token is handed to git through ``GIT_CONFIG_*`` environment variables as an
``http.extraheader`` and never appears in the argument vector, so it cannot
leak through process listings or logged command lines.
"""

from __future__ import annotations

import base64

from federalist_build.commands.templates import CommandTemplate
from federalist_build.core.constants import DEFAULT_GIT_HOST


def repository_url(host: str = DEFAULT_GIT_HOST) -> str:
    return f"https://{host}/${{owner}}/${{repository}}.git"


def clone_command(host: str = DEFAULT_GIT_HOST) -> CommandTemplate:
    """Shallow single-branch clone of the requested branch into the source dir."""
    return CommandTemplate.of(
        "git",
        "clone",
        "-b",
        "${branch}",
        "--single-branch",
        "--depth",
        "1",
        repository_url(host),
        "${sourcePath}",
    )


def auth_environment(access_token: str, host: str = DEFAULT_GIT_HOST) -> dict[str, str]:
    env = {"GIT_TERMINAL_PROMPT": "0"}
    if not access_token:
        return env
    basic = base64.b64encode(f"x-access-token:{access_token}".encode()).decode("ascii")
    env.update(
        {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": f"http.https://{host}/.extraheader",
            "GIT_CONFIG_VALUE_0": f"AUTHORIZATION: basic {basic}",
        }
    )
    return env

from __future__ import annotations

import ntpath
import posixpath

import structlog

from federalist_build.core.config import BuildConfig
from federalist_build.core.constants import (
    DESTINATION_DIR,
    EMPTY_BASE_URL,
    PREVIEW_ROOT,
    SITE_ROOT,
    SOURCE_DIR,
    Platform,
)
from federalist_build.core.exceptions import BuildError, CredentialLookupError
from federalist_build.core.types import BuildRequest, TokenSet
from federalist_build.tokens.credentials import CredentialStore

logger = structlog.get_logger(__name__)


def normalize_path(raw: str, platform: Platform) -> str:
    """Normalise *raw* for *platform*, relative to the working directory.

    Either slash style is accepted. A leading separator left over from
    concatenating onto an empty root is stripped, so the result never starts
    with a separator and only uses the platform's own separator.
    """
    flavour = ntpath if platform == Platform.WINDOWS else posixpath
    unified = raw.replace("\\", "/")
    if unified.startswith("/"):
        unified = unified[1:]
    normalized = flavour.normpath(unified)
    return normalized.lstrip("/\\")


def resolve_tokens(
    request: BuildRequest,
    config: BuildConfig,
    access_token: str = "",
) -> TokenSet:
    """Compute the :class:`TokenSet` for *request*. Pure, no I/O."""
    site = request.site
    default_branch = request.is_default_branch
    root = SITE_ROOT if default_branch else PREVIEW_ROOT
    suffix = "" if default_branch else f"/{request.branch}"

    if site.domain and default_branch:
        base_url = EMPTY_BASE_URL
    else:
        base_url = f"/{root}/{site.owner}/{site.repository}{suffix}"

    namespace = f"{site.owner}/{site.repository}/{request.branch}"
    source = f"{config.temp_dir}/{SOURCE_DIR}/{namespace}"
    destination = f"{config.temp_dir}/{DESTINATION_DIR}/{namespace}"
    publish = f"{config.publish_dir}/{root}/{site.owner}/{site.repository}{suffix}"

    return TokenSet(
        branch=request.branch,
        branch_suffix=suffix,
        root_segment=root,
        owner=site.owner,
        repository=site.repository,
        access_token=access_token,
        base_url=base_url,
        source_path=normalize_path(source, config.platform),
        destination_path=normalize_path(destination, config.platform),
        publish_path=normalize_path(publish, config.platform),
        generator_config=site.config,
        path_separator="\\" if config.platform == Platform.WINDOWS else "/",
    )


class TokenResolver:
    """Turns a :class:`BuildRequest` into the tokens for one pipeline run.

    Looks up the requesting user's credential first and stores it on
    ``request.user.credential``. A user without a credential builds with an
    empty access token, which is enough for public repositories.
    """

    def __init__(self, config: BuildConfig, credentials: CredentialStore) -> None:
        self._config = config
        self._credentials = credentials

    async def resolve(self, request: BuildRequest) -> TokenSet:
        """Look up the credential and compute tokens for *request*.

        Raises:
            CredentialLookupError: If the credential store fails.
        """
        try:
            credential = await self._credentials.get_credential(request.user.id)
        except BuildError:
            raise
        except Exception as exc:
            logger.warning(
                "credential_lookup_failed",
                build_id=request.id,
                user_id=request.user.id,
                error=str(exc),
            )
            raise CredentialLookupError(
                f"Credential lookup failed for user {request.user.id!r}: {exc}",
                details={"user_id": request.user.id},
            ) from exc

        request.user.credential = credential
        access_token = credential.access_token if credential is not None else ""
        return resolve_tokens(request, self._config, access_token)

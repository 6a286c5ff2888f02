from __future__ import annotations

from enum import StrEnum


class Engine(StrEnum):
    STATIC = "static"
    JEKYLL = "jekyll"
    HUGO = "hugo"


class StepKind(StrEnum):
    CLEAN = "clean"
    MAKE = "make"
    FETCH = "fetch"
    CONFIGURE = "configure"
    GENERATE = "generate"
    COPY = "copy"


class Platform(StrEnum):
    POSIX = "posix"
    WINDOWS = "windows"


# Path segment for production builds vs. branch previews.
SITE_ROOT = "site"
PREVIEW_ROOT = "preview"

# Written into baseUrl when a custom domain serves the default branch.
EMPTY_BASE_URL = "''"

SOURCE_DIR = "source"
DESTINATION_DIR = "destination"

JEKYLL_BASE_CONFIG = "_config_base.yml"
JEKYLL_OUTPUT_DIR = "_site"
HUGO_OUTPUT_DIR = "public"

DEFAULT_GIT_HOST = "github.com"

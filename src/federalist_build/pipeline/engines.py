"""Step tables for each build engine.

Every engine is a fixed, ordered list of steps operating on the source and
destination directories. Steps only describe work; the pipeline executes
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from federalist_build.commands.git import clone_command
from federalist_build.commands.platform import FilesystemCommands, filesystem_commands
from federalist_build.commands.templates import CommandTemplate
from federalist_build.core.constants import (
    DEFAULT_GIT_HOST,
    HUGO_OUTPUT_DIR,
    JEKYLL_BASE_CONFIG,
    JEKYLL_OUTPUT_DIR,
    Engine,
    Platform,
    StepKind,
)

SOURCE = "${sourcePath}"
DESTINATION = "${destinationPath}"


def _in_source(name: str) -> str:
    return f"{SOURCE}${{sep}}{name}"


@dataclass(frozen=True)
class CommandStep:
    """Run one external command.

    ``authenticated`` steps receive the git credential environment.
    """

    name: str
    kind: StepKind
    command: CommandTemplate
    authenticated: bool = False


@dataclass(frozen=True)
class WriteFileStep:
    """Write a generated text file into the working tree."""

    name: str
    path: str
    content: str
    kind: StepKind = StepKind.CONFIGURE


BuildStep = Union[CommandStep, WriteFileStep]


def _prepare_source(fs: FilesystemCommands, git_host: str) -> list[BuildStep]:
    return [
        CommandStep("clean_source", StepKind.CLEAN, fs.clean(SOURCE)),
        CommandStep("make_source", StepKind.MAKE, fs.make(SOURCE)),
        CommandStep("clone", StepKind.FETCH, clone_command(git_host), authenticated=True),
    ]


def _publish_output(fs: FilesystemCommands, output: str, make_destination: bool) -> list[BuildStep]:
    steps: list[BuildStep] = [
        CommandStep("clean_destination", StepKind.CLEAN, fs.clean(DESTINATION)),
    ]
    if make_destination:
        steps.append(CommandStep("make_destination", StepKind.MAKE, fs.make(DESTINATION)))
    steps.extend(
        [
            CommandStep("copy_output", StepKind.COPY, fs.copy(output, DESTINATION)),
            CommandStep("clean_up_source", StepKind.CLEAN, fs.clean(SOURCE)),
        ]
    )
    return steps


def static_steps(fs: FilesystemCommands, git_host: str = DEFAULT_GIT_HOST) -> list[BuildStep]:
    return [
        *_prepare_source(fs, git_host),
        *_publish_output(fs, SOURCE, make_destination=not fs.copy_creates_destination),
    ]


def jekyll_steps(fs: FilesystemCommands, git_host: str = DEFAULT_GIT_HOST) -> list[BuildStep]:
    base_config = _in_source(JEKYLL_BASE_CONFIG)
    output = _in_source(JEKYLL_OUTPUT_DIR)
    return [
        *_prepare_source(fs, git_host),
        WriteFileStep(
            "write_base_config",
            path=base_config,
            content="baseurl: ${baseUrl}\nbranch: ${branch}\n${generatorConfig}",
        ),
        CommandStep(
            "jekyll_build",
            StepKind.GENERATE,
            CommandTemplate.of(
                "jekyll",
                "build",
                "--safe",
                "--config",
                f"{_in_source('_config.yml')},{base_config}",
                "--source",
                SOURCE,
                "--destination",
                output,
            ),
        ),
        *_publish_output(fs, output, make_destination=True),
    ]


def hugo_steps(fs: FilesystemCommands, git_host: str = DEFAULT_GIT_HOST) -> list[BuildStep]:
    return [
        *_prepare_source(fs, git_host),
        CommandStep(
            "hugo_build",
            StepKind.GENERATE,
            CommandTemplate.of("hugo", "--baseUrl=${baseUrlValue}", f"--source={SOURCE}"),
        ),
        *_publish_output(fs, _in_source(HUGO_OUTPUT_DIR), make_destination=True),
    ]


_ENGINES = {
    Engine.STATIC: static_steps,
    Engine.JEKYLL: jekyll_steps,
    Engine.HUGO: hugo_steps,
}


def engine_steps(
    engine: Engine | str,
    platform: Platform | str = Platform.POSIX,
    git_host: str = DEFAULT_GIT_HOST,
) -> tuple[BuildStep, ...]:
    """Return the ordered steps for *engine* on *platform*.

    Raises:
        ValueError: If *engine* is not a known build engine.
    """
    factory = _ENGINES[Engine(engine)]
    return tuple(factory(filesystem_commands(platform), git_host))

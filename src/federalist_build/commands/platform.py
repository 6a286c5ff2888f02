"""Filesystem commands for each host platform.

Windows commands go through ``cmd /c`` because ``RMDIR`` and ``MKDIR`` are
shell builtins there. ``IF EXIST`` guards keep cleaning an absent directory
from failing the step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from federalist_build.commands.templates import CommandTemplate
from federalist_build.core.constants import Platform


class FilesystemCommands(ABC):
    platform: Platform

    @abstractmethod
    def clean(self, path: str) -> CommandTemplate:
        ...

    @abstractmethod
    def make(self, path: str) -> CommandTemplate:
        ...

    @abstractmethod
    def copy(self, source: str, destination: str) -> CommandTemplate:
        """Recursively copy the contents of *source* into *destination*."""
        ...

    @property
    def copy_creates_destination(self) -> bool:
        return False


class PosixCommands(FilesystemCommands):
    platform = Platform.POSIX

    def clean(self, path: str) -> CommandTemplate:
        return CommandTemplate.of("rm", "-rf", path)

    def make(self, path: str) -> CommandTemplate:
        return CommandTemplate.of("mkdir", "-p", path)

    def copy(self, source: str, destination: str) -> CommandTemplate:
        return CommandTemplate.of("cp", "-R", f"{source}/.", destination)


class WindowsCommands(FilesystemCommands):
    platform = Platform.WINDOWS

    def clean(self, path: str) -> CommandTemplate:
        return CommandTemplate.of("cmd", "/c", "IF", "EXIST", path, "RMDIR", path, "/S", "/Q")

    def make(self, path: str) -> CommandTemplate:
        return CommandTemplate.of("cmd", "/c", "IF", "NOT", "EXIST", path, "MKDIR", path)

    def copy(self, source: str, destination: str) -> CommandTemplate:
        return CommandTemplate.of("XCOPY", source, destination, "/E", "/I", "/Y")

    @property
    def copy_creates_destination(self) -> bool:
        return True


_COMMANDS: dict[Platform, FilesystemCommands] = {
    Platform.POSIX: PosixCommands(),
    Platform.WINDOWS: WindowsCommands(),
}


def filesystem_commands(platform: Platform | str) -> FilesystemCommands:
    return _COMMANDS[Platform(platform)]

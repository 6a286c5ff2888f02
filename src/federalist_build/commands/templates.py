"""``${token}`` expansion for command templates.

Expansion is plain text substitution: values are not shell-escaped. Build
steps are executed as argument vectors, never through a shell, so a token
value always stays within the single argument it was placed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import Template
from typing import Iterable, Mapping

from federalist_build.core.exceptions import TemplateError
from federalist_build.core.types import TokenSet

TokenMapping = Mapping[str, str]


def _as_mapping(tokens: TokenSet | TokenMapping) -> TokenMapping:
    if isinstance(tokens, TokenSet):
        return tokens.as_mapping()
    return tokens


def expand(template: str, tokens: TokenSet | TokenMapping) -> str:
    """Substitute ``${name}`` placeholders in *template*.

    Raises:
        TemplateError: If *template* references a token that does not exist.
    """
    mapping = _as_mapping(tokens)
    try:
        return Template(template).substitute(mapping)
    except KeyError as exc:
        missing = str(exc).strip("'")
        raise TemplateError(
            f"Unknown token {missing!r} in template {template!r}",
            details={"token": missing},
        ) from exc
    except ValueError as exc:
        raise TemplateError(f"Malformed template {template!r}: {exc}") from exc


def expand_all(templates: Iterable[str], tokens: TokenSet | TokenMapping) -> list[str]:
    mapping = _as_mapping(tokens)
    return [expand(template, mapping) for template in templates]


def join_commands(commands: Iterable[str], operator: str = "&&") -> str:
    """Chain *commands* into one command line, for logging or shell callers."""
    return f" {operator} ".join(commands)


@dataclass(frozen=True)
class CommandTemplate:
    """An argument vector whose items may contain ``${token}`` placeholders."""

    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.argv:
            raise TemplateError("CommandTemplate requires at least one argument")

    @classmethod
    def of(cls, *argv: str) -> CommandTemplate:
        return cls(argv=tuple(argv))

    def render(self, tokens: TokenSet | TokenMapping) -> list[str]:
        return expand_all(self.argv, tokens)

    def display(self, tokens: TokenSet | TokenMapping) -> str:
        return " ".join(self.render(tokens))

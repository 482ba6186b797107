"""Blocking interactive prompts built on ``rich.prompt``."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TextIO

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt
from rich.text import TextType

from ..exceptions import PromptError
from ..output import OutputSink

Option = str | tuple[str, Any]


def _read(console: Console, prompt: TextType, password: bool, stream: TextIO | None) -> str:
    try:
        value = console.input(prompt, password=password, stream=stream)
    except EOFError as exc:
        raise PromptError("Input closed while waiting for a response.") from exc
    # readline() returns "" only at end of stream; a blank answer is "\n"
    if stream is not None and value == "":
        raise PromptError("Input closed while waiting for a response.")
    return value


class _TextPrompt(Prompt):
    @classmethod
    def get_input(
        cls,
        console: Console,
        prompt: TextType,
        password: bool,
        stream: TextIO | None = None,
    ) -> str:
        return _read(console, prompt, password, stream)

    def process_response(self, value: str) -> str:
        answer = super().process_response(value)
        if not answer.strip():
            raise InvalidResponse("[prompt.invalid]A response is required")
        return answer


class _ConfirmPrompt(Confirm):
    @classmethod
    def get_input(
        cls,
        console: Console,
        prompt: TextType,
        password: bool,
        stream: TextIO | None = None,
    ) -> str:
        return _read(console, prompt, password, stream)


def _normalize_options(options: Sequence[Option] | Mapping[str, Any]) -> list[tuple[str, Any]]:
    if isinstance(options, Mapping):
        return [(str(label), value) for label, value in options.items()]
    normalized = []
    for option in options:
        if isinstance(option, tuple):
            label, value = option
            normalized.append((str(label), value))
        else:
            normalized.append((str(option), option))
    return normalized


class InteractivePrompts:
    """Ask questions on the output console, reading answers from ``stream``.

    Without a stream, answers come from stdin. Every call requires an
    explicit answer; invalid answers are reported and asked again. A closed
    input stream raises :class:`PromptError`.
    """

    def __init__(self, output: OutputSink | None = None, stream: TextIO | None = None) -> None:
        self.output = output or OutputSink()
        self.stream = stream

    @property
    def console(self) -> Console:
        return self.output.console

    def input(self, prompt: str, *, password: bool = False) -> str:
        answer = _TextPrompt(prompt, console=self.console, password=password)
        return answer(stream=self.stream).strip()

    def confirm(self, prompt: str) -> bool:
        return _ConfirmPrompt(prompt, console=self.console)(stream=self.stream)

    def select(self, prompt: str, options: Sequence[Option] | Mapping[str, Any]) -> Any:
        """Pick one option by its value or its 1-based number; returns the value."""
        normalized = _normalize_options(options)
        if not normalized:
            raise ValueError("select() needs at least one option.")
        by_value = {str(value): value for _, value in normalized}
        by_number = {str(number): value for number, (_, value) in enumerate(normalized, 1)}

        self.output.line(prompt)
        for number, (label, value) in enumerate(normalized, 1):
            suffix = f" ({value})" if str(value) != label else ""
            self.output.line(f"  {number}. {label}{suffix}")

        question = _TextPrompt(
            "Choice",
            console=self.console,
            choices=[*by_value, *by_number],
            show_choices=False,
        )
        answer = question(stream=self.stream).strip()
        if answer in by_value:
            return by_value[answer]
        return by_number[answer]

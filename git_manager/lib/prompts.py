"""
Prompt layer for git-manager workflows.

Workflows describe each question as a small frozen dataclass and hand it to a
Prompter. QuestionaryPrompter asks the user in the terminal; CannedPrompter
answers from a dict keyed by prompt name, which is how tests and
GIT_MANAGER_NON_INTERACTIVE runs drive the workflows.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import questionary

logger = logging.getLogger(__name__)


class PromptError(Exception):
    """An injected answer does not fit the prompt it was given for."""


class PromptCancelled(Exception):
    """The user aborted a prompt (Ctrl-C)."""


@dataclass(frozen=True)
class Choice:
    title: str
    value: Any


@dataclass(frozen=True)
class TextPrompt:
    name: str
    message: str
    default: str | None = None
    required: bool = True


@dataclass(frozen=True)
class SelectPrompt:
    name: str
    message: str
    choices: tuple[Choice, ...]
    default: Any = None  # a choice value


@dataclass(frozen=True)
class CheckboxPrompt:
    name: str
    message: str
    choices: tuple[Choice, ...]


@dataclass(frozen=True)
class ConfirmPrompt:
    name: str
    message: str
    default: bool = False


@dataclass(frozen=True)
class SearchPrompt:
    """Pick one of many names, narrowing the list by typing."""
    name: str
    message: str
    choices: tuple[str, ...]


def filter_choices(choices, term: str | None) -> list[str]:
    """Case-insensitive substring filter. An empty term keeps everything."""
    if not term:
        return list(choices)
    needle = term.lower()
    return [c for c in choices if needle in c.lower()]


def choices_from(values, label=str) -> tuple[Choice, ...]:
    """Build choices whose title is label(value)."""
    return tuple(Choice(title=label(v), value=v) for v in values)


class Prompter(Protocol):
    def text(self, prompt: TextPrompt) -> str: ...

    def select(self, prompt: SelectPrompt) -> Any: ...

    def checkbox(self, prompt: CheckboxPrompt) -> list: ...

    def confirm(self, prompt: ConfirmPrompt) -> bool: ...

    def search(self, prompt: SearchPrompt) -> str: ...


def _required(value: str) -> bool | str:
    return bool(value.strip()) or "This field is required"


class QuestionaryPrompter:
    """Terminal prompts via questionary."""

    @staticmethod
    def _answer(question):
        answer = question.ask()
        if answer is None:
            raise PromptCancelled()
        return answer

    def text(self, prompt: TextPrompt) -> str:
        question = questionary.text(
            prompt.message,
            default=prompt.default or "",
            validate=_required if prompt.required else None,
        )
        return self._answer(question).strip()

    def select(self, prompt: SelectPrompt) -> Any:
        if not prompt.choices:
            raise PromptError(f"{prompt.name}: nothing to choose from")
        choices = [questionary.Choice(title=c.title, value=c.value) for c in prompt.choices]
        return self._answer(questionary.select(prompt.message, choices=choices, default=prompt.default))

    def checkbox(self, prompt: CheckboxPrompt) -> list:
        choices = [questionary.Choice(title=c.title, value=c.value) for c in prompt.choices]
        return self._answer(questionary.checkbox(prompt.message, choices=choices))

    def confirm(self, prompt: ConfirmPrompt) -> bool:
        return self._answer(questionary.confirm(prompt.message, default=prompt.default))

    def search(self, prompt: SearchPrompt) -> str:
        if not prompt.choices:
            raise PromptError(f"{prompt.name}: nothing to choose from")
        question = questionary.select(
            prompt.message,
            choices=list(prompt.choices),
            use_search_filter=True,
            use_jk_keys=False,
        )
        return self._answer(question)


class CannedPrompter:
    """
    Answers prompts from a dict keyed by prompt name.

    Missing answers fall back to the prompt default: a select takes its
    default or first choice, a checkbox selects nothing, a search takes the
    first choice. A search answer is a search term: an exact match wins,
    otherwise the first case-insensitive substring match.

    Every prompt asked is recorded in `asked` (by name) for assertions.
    """

    def __init__(self, answers: dict | None = None):
        self.answers = dict(answers or {})
        self.asked: list[str] = []

    def _lookup(self, name: str):
        self.asked.append(name)
        answer = self.answers.get(name)
        logger.debug(f"Prompt {name}: canned answer {answer!r}")
        return answer

    @staticmethod
    def _match_choice(prompt, answer):
        for choice in prompt.choices:
            if choice.value == answer or choice.title == answer:
                return choice.value
            # Commit choices can be picked by hash
            if getattr(choice.value, "hash", None) == answer:
                return choice.value
        raise PromptError(f"{prompt.name}: {answer!r} is not one of the choices")

    def text(self, prompt: TextPrompt) -> str:
        answer = self._lookup(prompt.name)
        value = str(answer).strip() if answer is not None else (prompt.default or "")
        if prompt.required and not value:
            raise PromptError(f"{prompt.name}: an answer is required")
        return value

    def select(self, prompt: SelectPrompt) -> Any:
        answer = self._lookup(prompt.name)
        if not prompt.choices:
            raise PromptError(f"{prompt.name}: nothing to choose from")
        if answer is None:
            return prompt.default if prompt.default is not None else prompt.choices[0].value
        return self._match_choice(prompt, answer)

    def checkbox(self, prompt: CheckboxPrompt) -> list:
        answer = self._lookup(prompt.name)
        if answer is None:
            return []
        if not isinstance(answer, (list, tuple)):
            answer = [answer]
        return [self._match_choice(prompt, a) for a in answer]

    def confirm(self, prompt: ConfirmPrompt) -> bool:
        answer = self._lookup(prompt.name)
        if answer is None:
            return prompt.default
        if isinstance(answer, str):
            return answer.strip().lower() in ("y", "yes", "true", "1")
        return bool(answer)

    def search(self, prompt: SearchPrompt) -> str:
        answer = self._lookup(prompt.name)
        if not prompt.choices:
            raise PromptError(f"{prompt.name}: nothing to choose from")
        if answer is None:
            return prompt.choices[0]
        if answer in prompt.choices:
            return answer
        matches = filter_choices(prompt.choices, str(answer))
        if not matches:
            raise PromptError(f"{prompt.name}: no choice matches {answer!r}")
        return matches[0]

"""Interactive prompts for the CLI layer.

:class:`QuestionaryPrompter` satisfies the
:class:`~realm_cli.core.protocols.Prompter` protocol with questionary
text and arrow-key select prompts.  Each call blocks until the user
answers; a dismissed prompt (Esc / Ctrl+C, which questionary reports
as ``None``) becomes :class:`~realm_cli.exceptions.PromptCancelledError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from realm_cli.exceptions import EnvironmentError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryPrompter:
    """Terminal-backed :class:`Prompter`."""

    def ask_text(self, message: str) -> str:
        questionary = _import_questionary()
        answer: str | None = questionary.text(f"{message}:").ask()
        if answer is None:
            raise PromptCancelledError(
                f"No answer given for '{message}'.",
                hint="Pass the value as a flag to skip the prompt.",
            )
        return answer

    def select(self, message: str, choices: Sequence[str]) -> str:
        questionary = _import_questionary()
        answer: str | None = questionary.select(
            f"{message}:",
            choices=list(choices),
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()
        if answer is None:
            raise PromptCancelledError(
                f"No option selected for '{message}'.",
                hint="Use arrow keys to pick an option, then press Enter.",
            )
        return answer

"""CommandConsole: reads operator commands from stdin and drives the controller."""

from __future__ import annotations

from typing import Callable

from styletrack.cli.commands import HELP, Command, CommandName, parse_command
from styletrack.model.session import SessionResult
from styletrack.session.controller import SessionController


class CommandConsole:
    """Interactive loop over :func:`parse_command`.

    Each line is dispatched to the controller; the loop ends on ``quit()`` or
    end of input, both of which stop the controller.
    """

    def __init__(
        self,
        controller: SessionController,
        *,
        read: Callable[[str], str] = input,
        echo: Callable[[str], None] = print,
        prompt: str = "styletrack> ",
    ) -> None:
        self.controller = controller
        self._read = read
        self._echo = echo
        self._prompt = prompt

    def run(self) -> None:
        self._echo(HELP)
        while not self.controller.closed:
            line = self._get_input()
            if line is None:
                self.controller.quit()
                break
            self.dispatch(parse_command(line))

    def dispatch(self, command: Command) -> SessionResult | None:
        """Run one parsed command; returns the controller's result, if any."""
        if command.name is CommandName.EMPTY:
            return None
        if command.name is CommandName.UNKNOWN:
            self._echo(f"Unknown command: {command.text}")
            return None
        if command.name is CommandName.QUIT:
            self.controller.quit()
            return None
        if command.name is CommandName.RECORD_DEFAULT:
            return self.controller.record_default()
        if command.name is CommandName.FINISH_DEFAULT:
            return self.controller.finish_default()
        if command.name is CommandName.RECORD_MEDIA:
            return self.controller.record_media()
        return self.controller.finish_media(command.argument)

    def _get_input(self) -> str | None:
        """Read one line. Returns None at end of input."""
        try:
            return self._read(self._prompt)
        except (EOFError, KeyboardInterrupt):
            return None

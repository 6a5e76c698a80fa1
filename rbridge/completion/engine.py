"""Completion candidates from the remote R session."""

from dataclasses import dataclass
from typing import Callable, List, Optional

from rbridge.exceptions import EvalError, NoConnectionError, ResultShapeError
from rbridge.logger import Logger, session_logger
from rbridge.session import commands
from rbridge.session.connection import SessionConnection


@dataclass(frozen=True)
class CompletionQuery:
    """A buffer and cursor, with the text before the cursor derived from them."""

    buffer: str
    cursor: int

    @property
    def before(self) -> str:
        # The character just before the cursor is not part of the prefix
        return self.buffer[0 : max(self.cursor - 1, 0)]

    @property
    def after_whitespace(self) -> bool:
        return self.before.endswith("\n") or self.before.endswith(" ")

    @property
    def last_word(self) -> str:
        return self.before.replace("\n", " ").split(" ")[-1]


class CompletionEngine:
    """Matches the token before the cursor against R variables and functions.

    Function names come from the helper the bootstrapper registers; when it
    is not registered only variables are offered.
    """

    def __init__(
        self,
        connection: SessionConnection,
        helper_available: Callable[[], bool] = lambda: True,
        logger: Optional[Logger] = None,
    ):
        self.connection = connection
        self.helper_available = helper_available
        self.logger = logger or session_logger

    def complete(self, buffer: str, cursor: int) -> List[str]:
        query = CompletionQuery(buffer=buffer, cursor=cursor)

        if not self.connection.is_alive():
            return []

        try:
            variables = self.connection.evaluate(commands.list_variables())
            functions: List[str] = []
            if self.helper_available():
                functions = self.connection.evaluate(commands.list_functions())
        except (EvalError, ResultShapeError, NoConnectionError) as e:
            self.logger.warning("Completion lookup failed", error=e.message, **e.details)
            return []

        if commands.FUNCTION_NAMES_HELPER in variables:
            variables.remove(commands.FUNCTION_NAMES_HELPER)

        return self.candidates(query, variables, functions)

    @staticmethod
    def candidates(query: CompletionQuery, variables: List[str], functions: List[str]) -> List[str]:
        """Variables first, then functions, each filtered by the last word."""
        if query.after_whitespace:
            return list(variables)

        prefix = query.last_word
        matches = [name for name in variables if name.startswith(prefix)]
        matches.extend(name for name in functions if name.startswith(prefix))
        return matches

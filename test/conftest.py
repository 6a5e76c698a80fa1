"""Pytest configuration and fixtures

Provides a fake pyRserve connection that behaves like an Rserve session with
rmarkdown installed: it keeps a namespace of variables and functions, and on
``render('<path>.Rmd')`` writes ``<path>.html`` with the chunk's code inside
the body, the way rmarkdown lays out its output.
"""

import re
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from pyRserve.rexceptions import REvalError

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rbridge.logger import ConsoleLogger
from rbridge.session import SessionConnection

RENDER_CALL = re.compile(r"^render\('(?P<path>.*)'\)$", re.DOTALL)

HTML_PAGE = """<!DOCTYPE html>
<html>
<head>
<title>forRmarkdown</title>
</head>
<body>
<div class="container-fluid main-container">
<pre><code>{output}</code></pre>
</div>
</body>
</html>
"""


def _unescape_r_string(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: {"n": "\n", "r": "\r", "t": "\t"}.get(m.group(1), m.group(1)), text)


def chunk_code(rmd: str) -> str:
    """Return the code of the single R chunk in an R Markdown document."""
    lines = rmd.split("\n")
    start = next(i for i, line in enumerate(lines) if line.startswith("```{r"))
    end = len(lines) - 1 - next(i for i, line in enumerate(reversed(lines)) if line == "```")
    return "\n".join(lines[start + 1 : end])


class FakeRserve:
    """Stand-in for ``pyRserve.rconn.RConnection``."""

    def __init__(
        self,
        variables: Optional[List[str]] = None,
        functions: Optional[List[str]] = None,
    ):
        self.variables = list(variables or [])
        self.functions = list(functions or [])
        self.failures: Dict[str, str] = {}
        self.evaluated: List[str] = []
        self.rendered: List[str] = []
        self.helper_defined = False
        self.write_artifact = True
        self.isClosed = False
        self.shutdown_calls = 0
        self.shutdown_error: Optional[Exception] = None
        self.close_calls = 0

    def fail_on(self, fragment: str, message: str = "Error: remote failure") -> None:
        """Raise REvalError for every expression containing ``fragment``."""
        self.failures[fragment] = message

    def _check(self, expression: str) -> None:
        self.evaluated.append(expression)
        for fragment, message in self.failures.items():
            if fragment in expression:
                raise REvalError(message)

    def voidEval(self, expression: str) -> None:
        self._check(expression)
        if expression.startswith("getFunctionNames <- function()"):
            self.helper_defined = True
            return
        match = RENDER_CALL.match(expression)
        if match:
            self._render(_unescape_r_string(match.group("path")))

    def eval(self, expression: str):
        self._check(expression)
        if expression == "ls()":
            names = list(self.variables)
            if self.helper_defined:
                names.append("getFunctionNames")
            return sorted(names)
        if expression == "getFunctionNames()":
            if not self.helper_defined:
                raise REvalError('Error: could not find function "getFunctionNames"')
            return sorted(self.functions)
        if expression.startswith("library("):
            return [expression[len("library('") : -2], "stats", "graphics", "base"]
        return None

    def shutdown(self) -> None:
        self.shutdown_calls += 1
        if self.shutdown_error is not None:
            raise self.shutdown_error
        self.isClosed = True

    def close(self) -> None:
        self.close_calls += 1
        self.isClosed = True

    def _render(self, source: str) -> None:
        self.rendered.append(source)
        if not self.write_artifact:
            return
        code = chunk_code(Path(source).read_text(encoding="utf-8"))
        Path(source).with_suffix(".html").write_text(HTML_PAGE.format(output=code), encoding="utf-8")


@pytest.fixture
def console_logger():
    """Create a real ConsoleLogger instance."""
    return ConsoleLogger()


@pytest.fixture
def fake_rserve():
    return FakeRserve(variables=["x", "y"], functions=["paste", "print"])


@pytest.fixture
def connector(fake_rserve):
    """Connector returning the fake session, recording the address it was given."""
    calls = []

    def connect(host, port):
        calls.append((host, port))
        return fake_rserve

    connect.calls = calls
    return connect


@pytest.fixture
def connection(connector, console_logger):
    """An open SessionConnection to the fake session."""
    conn = SessionConnection(logger=console_logger, connector=connector)
    conn.connect()
    return conn


@pytest.fixture
def render_dir(tmp_path):
    path = tmp_path / "render"
    path.mkdir()
    return path

"""Remote R command construction.

Every string sent to Rserve is produced by ``build_command`` from a Jinja2
template in ``templates/``. Values reach the R source only through the
``rstring`` filter (quoted, escaped string literal) or the ``ridentifier``
filter (validated bare name), never by plain interpolation.
"""

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Names the bootstrap creates in the remote session
FUNCTION_NAMES_HELPER = "getFunctionNames"
SPARK_CONTEXT = "sc"
SQL_CONTEXT = "sqlContext"

RMARKDOWN_PACKAGE = "rmarkdown"
SPARKR_PACKAGE = "SparkR"

_IDENTIFIER = re.compile(r"^(?:[A-Za-z]|\.(?![0-9]))[A-Za-z0-9._]*$")

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def r_string_literal(value: Any) -> str:
    """Quote ``value`` as a single-quoted R string literal."""
    text = str(value)
    if "\x00" in text:
        raise ValueError("R strings cannot contain NUL characters")
    return "'" + "".join(_ESCAPES.get(ch, ch) for ch in text) + "'"


def r_identifier(value: Any) -> str:
    """Return ``value`` unchanged if it is a syntactically valid R name."""
    text = str(value)
    if not _IDENTIFIER.match(text):
        raise ValueError(f"Not a valid R identifier: {text!r}")
    return text


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["rstring"] = r_string_literal
    env.filters["ridentifier"] = r_identifier
    return env


_env = _build_env()


def build_command(name: str, **params: Any) -> str:
    """Render the remote command template ``<name>.R.jinja2``.

    Args:
        name: Template name without extension (e.g. ``"render"``)
        **params: Template parameters

    Returns:
        R source text ready for evaluation

    Raises:
        jinja2.TemplateNotFound: If no such command template exists
        jinja2.UndefinedError: If a template parameter is missing
        ValueError: If a parameter cannot be encoded safely
    """
    return _env.get_template(f"{name}.R.jinja2").render(**params)


def load_library(package: str) -> str:
    return build_command("load_library", package=package)


def register_function_names_helper() -> str:
    return build_command("function_names_helper", helper=FUNCTION_NAMES_HELPER)


def list_variables() -> str:
    return build_command("list_variables")


def list_functions() -> str:
    return build_command("call_helper", helper=FUNCTION_NAMES_HELPER)


def spark_lib_path(home_env: str) -> str:
    return build_command("spark_lib_path", home_env=home_env)


def spark_context(master: str) -> str:
    return build_command("spark_context", context=SPARK_CONTEXT, master=master)


def sql_context() -> str:
    return build_command("sql_context", context=SPARK_CONTEXT, sql_context=SQL_CONTEXT)


def render_document(path: str) -> str:
    return build_command("render", path=path)

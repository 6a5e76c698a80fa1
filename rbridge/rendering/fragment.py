"""Extraction and cleanup of the HTML fragment produced by rmarkdown.

The cleanup is an ordered list of pure ``str -> str`` steps. Order matters:
blank lines are dropped before single newlines become ``<br>``, and the
``<br>`` tags are removed again only after ``<pre>`` blocks are demoted.
Behaviour for malformed renderer output (missing, nested or repeated body
tags) is undefined beyond raising when a marker is missing.
"""

from typing import Callable, Tuple

from rbridge.exceptions import FragmentExtractionError

BODY_OPEN = "<body>"
BODY_CLOSE = "</body>"

TextStep = Callable[[str], str]


def extract_body(html: str) -> str:
    """Return the text between ``<body>`` and ``</body>``.

    One character after the opening tag and one before the closing tag
    (the newlines the renderer puts there) are dropped as well.

    Raises:
        FragmentExtractionError: If either marker is missing
    """
    start = html.find(BODY_OPEN)
    if start < 0:
        raise FragmentExtractionError(BODY_OPEN)
    end = html.find(BODY_CLOSE)
    if end < 0:
        raise FragmentExtractionError(BODY_CLOSE)
    return html[start + len(BODY_OPEN) + 1 : end - 1]


def replace(old: str, new: str = "") -> TextStep:
    def step(text: str) -> str:
        return text.replace(old, new)

    step.__name__ = f"replace({old!r}, {new!r})"
    return step


CLEANUP_STEPS: Tuple[TextStep, ...] = (
    replace("<code>"),
    replace("</code>"),
    replace("\n\n"),
    replace("\n", "<br>"),
    replace("<pre>", "<p class='text'>"),
    replace("</pre>", "</p>"),
    replace("<br>"),
    replace("main-container"),
)


def clean(fragment: str, steps: Tuple[TextStep, ...] = CLEANUP_STEPS) -> str:
    for step in steps:
        fragment = step(fragment)
    return fragment


def extract_fragment(html: str) -> str:
    """Body extraction followed by the cleanup steps."""
    return clean(extract_body(html))

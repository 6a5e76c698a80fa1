"""Render pipeline: R snippet -> R Markdown document -> HTML -> fragment."""

import os
import re
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from rbridge.exceptions import (
    EvalError,
    FragmentExtractionError,
    NoConnectionError,
    RenderIOError,
)
from rbridge.logger import Logger, session_logger
from rbridge.models import InterpreterResult
from rbridge.rendering.fragment import extract_fragment
from rbridge.session import commands
from rbridge.session.connection import SessionConnection

TEMPLATES_DIR = Path(__file__).parent / "templates"

SOURCE_PREFIX = "forRmarkdown-"
SOURCE_SUFFIX = ".Rmd"
ARTIFACT_SUFFIX = ".html"

NO_CONNECTION_MESSAGE = "No connection to Rserve"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9._-]")

_document_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    undefined=StrictUndefined,
)


def build_document(code: str) -> str:
    """Wrap ``code`` in a single R chunk with echo off and comments kept."""
    return _document_env.get_template("document.Rmd.jinja2").render(code=code)


def artifact_path_for(source_path: str) -> str:
    return str(Path(source_path).with_suffix(ARTIFACT_SUFFIX))


class RenderStage(str, Enum):
    IDLE = "IDLE"
    CONNECTED_CHECK = "CONNECTED_CHECK"
    DOCUMENT_WRITTEN = "DOCUMENT_WRITTEN"
    REMOTE_RENDERED = "REMOTE_RENDERED"
    ARTIFACT_READ = "ARTIFACT_READ"
    FRAGMENT_EXTRACTED = "FRAGMENT_EXTRACTED"
    FAILED = "FAILED"


@dataclass
class RenderJob:
    """State of one interpret() call."""

    job_id: str
    code: str
    source_path: Optional[str] = None
    artifact_path: Optional[str] = None
    fragment: Optional[str] = None
    error: Optional[str] = None
    stage: RenderStage = RenderStage.IDLE
    history: List[RenderStage] = field(default_factory=lambda: [RenderStage.IDLE])

    def advance(self, stage: RenderStage) -> None:
        self.stage = stage
        self.history.append(stage)

    def fail(self, message: str) -> "RenderJob":
        self.error = message
        self.advance(RenderStage.FAILED)
        return self

    @property
    def succeeded(self) -> bool:
        return self.stage == RenderStage.FRAGMENT_EXTRACTED


class RenderPipeline:
    """Renders R snippets through rmarkdown in the remote session.

    Each job gets its own ``forRmarkdown-<job id>-*.Rmd`` file from
    ``tempfile.mkstemp`` and the matching ``.html`` artifact; both are
    removed when the job ends, whatever its outcome.
    """

    def __init__(
        self,
        connection: SessionConnection,
        tmp_dir: Optional[str] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the render pipeline.

        Args:
            connection: Session used for the remote render call
            tmp_dir: Directory for job files (platform temp dir if None).
                Rserve must be able to read and write the same path.
            logger: Logger instance
        """
        self.connection = connection
        self.tmp_dir = tmp_dir
        self.logger = logger or session_logger

    def render(self, code: str, job_id: str) -> InterpreterResult:
        job = self.run(code, job_id)
        if job.succeeded:
            return InterpreterResult.html(job.fragment or "")
        return InterpreterResult.error(job.error or "Render failed")

    def run(self, code: str, job_id: str) -> RenderJob:
        """Execute a render job end to end and return its final state."""
        job = RenderJob(job_id=job_id, code=code)

        job.advance(RenderStage.CONNECTED_CHECK)
        if not self.connection.is_alive():
            return job.fail(NO_CONNECTION_MESSAGE)

        self.logger.info("Run R command", job_id=job_id, code=code)
        try:
            self._write_document(job)
            job.advance(RenderStage.DOCUMENT_WRITTEN)

            self.connection.evaluate_void(commands.render_document(job.source_path))
            job.advance(RenderStage.REMOTE_RENDERED)

            html = self._read_artifact(job)
            job.advance(RenderStage.ARTIFACT_READ)

            job.fragment = extract_fragment(html)
            job.advance(RenderStage.FRAGMENT_EXTRACTED)
        except EvalError as e:
            self.logger.error("Rserve render failed", job_id=job_id, error=e.message)
            job.fail(e.message)
        except NoConnectionError as e:
            job.fail(e.message)
        except (RenderIOError, FragmentExtractionError) as e:
            self.logger.error("Render job failed", job_id=job_id, error=e.message, **e.details)
            job.fail(e.message)
        finally:
            self._cleanup(job)

        return job

    def _write_document(self, job: RenderJob) -> None:
        prefix = f"{SOURCE_PREFIX}{_UNSAFE_ID_CHARS.sub('_', job.job_id)}-"
        try:
            fd, path = tempfile.mkstemp(prefix=prefix, suffix=SOURCE_SUFFIX, dir=self.tmp_dir)
        except OSError as e:
            raise RenderIOError(self.tmp_dir or tempfile.gettempdir(), str(e)) from e

        job.source_path = os.path.abspath(path)
        job.artifact_path = artifact_path_for(job.source_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as writer:
                writer.write(build_document(job.code))
        except (OSError, UnicodeError) as e:
            raise RenderIOError(job.source_path, str(e)) from e

    def _read_artifact(self, job: RenderJob) -> str:
        path = job.artifact_path or ""
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise RenderIOError(path, str(e)) from e

    def _cleanup(self, job: RenderJob) -> None:
        for path in (job.source_path, job.artifact_path):
            if not path:
                continue
            try:
                Path(path).unlink(missing_ok=True)
            except OSError as e:
                self.logger.warning("Could not remove render file", job_id=job.job_id, path=path, error=str(e))

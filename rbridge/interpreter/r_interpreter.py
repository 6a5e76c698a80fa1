"""R interpreter backed by a remote Rserve session and rmarkdown."""

from typing import Any, List, Mapping, Optional

from rbridge.config import RInterpreterSettings, get_config_summary
from rbridge.completion import CompletionEngine
from rbridge.exceptions import SessionConnectionError
from rbridge.interpreter.base import Interpreter
from rbridge.logger import Logger, session_logger
from rbridge.models import FormType, InterpreterContext, InterpreterResult
from rbridge.rendering import RenderPipeline
from rbridge.session import BootstrapStatus, SessionBootstrapper, SessionConnection
from rbridge.session.connection import Connector


class RInterpreter(Interpreter):
    """Runs paragraphs as R Markdown chunks and completes against the live session.

    If Rserve is unreachable ``open()`` logs the failure and returns; the
    interpreter then answers every call with an error result (or an empty
    completion list) until it is opened again.
    """

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        logger: Optional[Logger] = None,
        connector: Optional[Connector] = None,
    ):
        """
        Initialize the interpreter. No connection is made until ``open()``.

        Args:
            properties: Host interpreter properties (see ``rbridge.config.PROPERTY_KEYS``)
            logger: Logger instance
            connector: Replacement for ``pyRserve.connect``
        """
        super().__init__(properties)
        self.settings = RInterpreterSettings.from_properties(self.properties)
        self.logger = logger or session_logger
        self.bootstrap_status = BootstrapStatus()

        self.connection = SessionConnection(
            host=self.settings.host,
            port=self.settings.port,
            logger=self.logger,
            connector=connector,
        )
        self.pipeline = RenderPipeline(self.connection, tmp_dir=self.settings.tmp_dir, logger=self.logger)
        self.completion_engine = CompletionEngine(
            self.connection,
            helper_available=lambda: self.bootstrap_status.helper_registered,
            logger=self.logger,
        )

    def open(self) -> None:
        self.logger.debug("Environment configuration", **get_config_summary())
        if self.connection.is_alive():
            self.logger.debug("R interpreter already open")
            return

        try:
            self.connection.connect()
        except SessionConnectionError:
            # Logged by the connection; calls fail fast until the next open()
            return

        bootstrapper = SessionBootstrapper(
            self.connection,
            logger=self.logger,
            spark_enabled=self.settings.spark_enabled,
            spark_master=self.settings.spark_master,
            spark_home_env=self.settings.spark_home_env,
        )
        self.bootstrap_status = bootstrapper.run()

    def close(self) -> None:
        self.connection.shutdown()
        self.bootstrap_status = BootstrapStatus()
        self.shutdown_scheduler()

    def interpret(self, code: str, context: InterpreterContext) -> InterpreterResult:
        return self.pipeline.render(code, context.paragraph_id)

    def completion(self, buffer: str, cursor: int) -> List[str]:
        return self.completion_engine.complete(buffer, cursor)

    def get_form_type(self) -> FormType:
        return FormType.NONE


def create_r_interpreter(properties: Optional[Mapping[str, Any]] = None) -> RInterpreter:
    return RInterpreter(properties)

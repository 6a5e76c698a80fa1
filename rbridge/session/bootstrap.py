"""One-time capability loading for a freshly opened Rserve session."""

from dataclasses import dataclass
from typing import Optional

from rbridge.exceptions import EvalError, NoConnectionError, ResultShapeError
from rbridge.logger import Logger, session_logger
from rbridge.session import commands
from rbridge.session.connection import SessionConnection


@dataclass
class BootstrapStatus:
    """Which optional capabilities ended up available in the session."""

    rmarkdown_loaded: bool = False
    helper_registered: bool = False
    spark_loaded: bool = False


class SessionBootstrapper:
    """Loads rmarkdown, registers the completion helper, then loads SparkR.

    Each step fails independently: a failure is logged and recorded in the
    returned ``BootstrapStatus`` and the next step still runs.
    """

    def __init__(
        self,
        connection: SessionConnection,
        logger: Optional[Logger] = None,
        spark_enabled: bool = True,
        spark_master: str = "local",
        spark_home_env: str = "SPARK_HOME",
    ):
        self.connection = connection
        self.logger = logger or session_logger
        self.spark_enabled = spark_enabled
        self.spark_master = spark_master
        self.spark_home_env = spark_home_env

    def run(self) -> BootstrapStatus:
        status = BootstrapStatus()

        status.rmarkdown_loaded = self.load_rmarkdown()
        if status.rmarkdown_loaded:
            self.logger.info("Rmarkdown loaded successfully")
        else:
            self.logger.info("Rmarkdown loading was unsuccessful")

        status.helper_registered = self.register_function_names_helper()

        if self.spark_enabled:
            status.spark_loaded = self.load_sparkr()
            if status.spark_loaded:
                self.logger.info("SparkR loaded successfully", master=self.spark_master)
            else:
                self.logger.info("SparkR loading was unsuccessful")
        else:
            self.logger.debug("SparkR loading disabled")

        return status

    def load_rmarkdown(self) -> bool:
        """Attach rmarkdown; True when it is the first package on the search list."""
        expression = commands.load_library(commands.RMARKDOWN_PACKAGE)
        try:
            attached = self.connection.evaluate(expression)
        except (EvalError, ResultShapeError, NoConnectionError) as e:
            self.logger.error("Error while loading rmarkdown", error=str(e))
            return False
        return bool(attached) and attached[0] == commands.RMARKDOWN_PACKAGE

    def register_function_names_helper(self) -> bool:
        try:
            self.connection.evaluate_void(commands.register_function_names_helper())
        except (EvalError, NoConnectionError) as e:
            self.logger.error(
                "Could not register completion helper, completion will list variables only",
                helper=commands.FUNCTION_NAMES_HELPER,
                error=str(e),
            )
            return False
        return True

    def load_sparkr(self) -> bool:
        """Put the Spark R library on the search path, attach SparkR and create the contexts."""
        steps = [
            commands.spark_lib_path(self.spark_home_env),
            commands.load_library(commands.SPARKR_PACKAGE),
            commands.spark_context(self.spark_master),
            commands.sql_context(),
        ]
        try:
            for expression in steps:
                self.connection.evaluate_void(expression)
        except (EvalError, NoConnectionError) as e:
            self.logger.warning("Error while loading SparkR", spark_home_env=self.spark_home_env, error=str(e))
            return False
        return True

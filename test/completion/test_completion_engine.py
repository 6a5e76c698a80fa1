"""Tests for CompletionEngine prefix matching over the live namespace."""

import pytest

from rbridge.completion import CompletionEngine, CompletionQuery
from rbridge.session import SessionBootstrapper, SessionConnection


@pytest.fixture
def engine(connection, console_logger):
    """Engine over a fake session with the helper registered."""
    SessionBootstrapper(connection, logger=console_logger, spark_enabled=False).run()
    return CompletionEngine(connection, logger=console_logger)


class TestCompletionQuery:
    def test_before_excludes_last_character(self):
        query = CompletionQuery("x <- 1\nprin", 11)
        assert query.before == "x <- 1\npri"
        assert query.last_word == "pri"

    def test_newlines_split_tokens(self):
        assert CompletionQuery("a\nbc\nde", 7).last_word == "d"

    def test_after_whitespace(self):
        assert CompletionQuery("x <-  ", 6).after_whitespace is True
        assert CompletionQuery("x\n\n", 3).after_whitespace is True
        assert CompletionQuery("x <- yz", 7).after_whitespace is False

    def test_cursor_at_start(self):
        query = CompletionQuery("abc", 0)
        assert query.before == ""
        assert query.last_word == ""


class TestComplete:
    def test_prefix_matches_function(self, engine):
        assert engine.complete("x <- 1\nprin", len("x <- 1\nprin")) == ["print"]

    def test_variables_before_functions(self, connection, fake_rserve, console_logger):
        fake_rserve.variables = ["pr", "prx", "y"]
        fake_rserve.functions = ["print", "prod", "paste"]
        SessionBootstrapper(connection, logger=console_logger, spark_enabled=False).run()
        engine = CompletionEngine(connection, logger=console_logger)

        assert engine.complete("prz", 3) == ["pr", "prx", "print", "prod"]

    def test_no_dedup_across_groups(self, connection, fake_rserve, console_logger):
        fake_rserve.variables = ["print"]
        fake_rserve.functions = ["print"]
        SessionBootstrapper(connection, logger=console_logger, spark_enabled=False).run()
        engine = CompletionEngine(connection, logger=console_logger)

        assert engine.complete("prin", 4) == ["print", "print"]

    @pytest.mark.parametrize("buffer", ["summary(x) ", "summary(x)\n", "pri  "])
    def test_whitespace_returns_all_variables(self, engine, buffer):
        assert engine.complete(buffer + "z", len(buffer) + 1) == ["x", "y"]

    def test_helper_is_hidden_from_variables(self, engine, fake_rserve):
        assert fake_rserve.helper_defined
        assert "getFunctionNames" not in engine.complete("g", 2)
        assert "getFunctionNames" not in engine.complete(" z", 2)

    def test_no_match_is_empty(self, engine):
        assert engine.complete("qqq", 4) == []

    def test_query_does_not_modify_namespace(self, engine, fake_rserve):
        engine.complete("pri", 4)
        assert fake_rserve.evaluated[-2:] == ["ls()", "getFunctionNames()"]

    def test_remote_error_returns_empty(self, engine, fake_rserve):
        fake_rserve.fail_on("ls()")
        assert engine.complete("pri", 4) == []

    def test_not_connected_returns_empty(self, console_logger):
        conn = SessionConnection(logger=console_logger, connector=lambda host, port: None)
        engine = CompletionEngine(conn, logger=console_logger)
        assert engine.complete("pri", 4) == []

    def test_without_helper_only_variables(self, connection, fake_rserve, console_logger):
        fake_rserve.variables = ["prices"]
        engine = CompletionEngine(connection, helper_available=lambda: False, logger=console_logger)

        assert engine.complete("pri", 4) == ["prices"]
        assert "getFunctionNames()" not in fake_rserve.evaluated

    def test_functions_after_rmarkdown_failure(self, connection, fake_rserve, console_logger):
        fake_rserve.fail_on("rmarkdown")
        status = SessionBootstrapper(connection, logger=console_logger, spark_enabled=False).run()
        engine = CompletionEngine(connection, helper_available=lambda: status.helper_registered, logger=console_logger)

        assert status.rmarkdown_loaded is False
        assert engine.complete("x <- 1\nprin", 11) == ["print"]

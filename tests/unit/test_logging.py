"""Tests for logging configuration."""

from loguru import logger

from stackconf.logging import _get_verbosity_from_env, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def teardown_method(self):
        """Reset logger after each test."""
        logger.remove()

    def test_setup_logging_default(self):
        setup_logging()
        # Should not raise
        logger.info("test message")

    def test_setup_logging_quiet(self):
        setup_logging(verbosity="quiet")
        logger.warning("warning message")

    def test_setup_logging_verbose(self):
        setup_logging(verbosity="verbose")
        logger.debug("debug message")

    def test_log_file_receives_debug_messages(self, tmp_path):
        log_file = tmp_path / "stackconf.log"
        setup_logging(verbosity="quiet", log_file=str(log_file))
        logger.debug("written to file only")
        logger.remove()
        assert "written to file only" in log_file.read_text()


class TestVerbosityFromEnv:
    """Tests for STACKCONF_VERBOSITY handling."""

    def test_default_is_normal(self):
        assert _get_verbosity_from_env() == "normal"

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("STACKCONF_VERBOSITY", "VERBOSE")
        assert _get_verbosity_from_env() == "verbose"

    def test_unknown_value_falls_back_to_normal(self, monkeypatch):
        monkeypatch.setenv("STACKCONF_VERBOSITY", "loud")
        assert _get_verbosity_from_env() == "normal"

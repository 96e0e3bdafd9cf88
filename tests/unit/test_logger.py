"""
Logger setup tests.
"""

import io
import logging

from compose_azure.logger import format_stack_trace, setup_logger


class TestSetupLogger:
    def test_logs_to_given_stream_not_stdout(self, capsys):
        stream = io.StringIO()
        logger = setup_logger(stream=stream)

        logging.getLogger("compose_azure.workflow").info("Provisioning srv1")

        assert "Provisioning srv1" in stream.getvalue()
        assert capsys.readouterr().out == ""
        assert logger.propagate is False

    def test_debug_mode(self):
        stream = io.StringIO()
        setup_logger(debug_mode=True, stream=stream)

        logging.getLogger("compose_azure.providers").debug("Firewall rule AllowAll")

        assert "Firewall rule AllowAll" in stream.getvalue()

    def test_info_mode_hides_debug(self):
        stream = io.StringIO()
        setup_logger(stream=stream)

        logging.getLogger("compose_azure").debug("hidden")

        assert stream.getvalue() == ""

    def test_repeated_setup_keeps_one_handler(self):
        setup_logger()
        logger = setup_logger(debug_mode=True)

        assert len(logger.handlers) == 1


class TestFormatStackTrace:
    def test_includes_type_and_cause(self):
        try:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise RuntimeError("outer") from e
        except RuntimeError as e:
            trace = format_stack_trace(e)

        assert "KeyError" in trace
        assert "RuntimeError: outer" in trace
        assert not trace.endswith("\n")

from lifx_app.logs import setup_logging, setup_logging_theme

from rainbow_logging_handler import RainbowLoggingHandler
import logging
import pytest
import io


@pytest.fixture()
def handler():
    out = io.StringIO()
    handler = setup_logging(level=logging.DEBUG, handler_file=out, only_message=True)
    try:
        yield handler, out
    finally:
        logging.getLogger("").removeHandler(handler)


class TestSetupLogging:
    def test_it_puts_a_rainbow_handler_on_the_root_logger(self, handler):
        handler, out = handler
        assert isinstance(handler, RainbowLoggingHandler)
        assert handler in logging.getLogger("").handlers

        logging.getLogger("lifx_tests").info("hello there")
        assert "hello there" in out.getvalue()

    def test_it_can_change_the_theme(self, handler):
        handler, _ = handler
        setup_logging_theme(handler, colors="dark")
        assert handler._column_color["%(message)s"][logging.INFO] == ("blue", None, False)

        setup_logging_theme(handler, colors="light")
        assert handler._column_color["%(message)s"][logging.INFO] == ("cyan", None, False)

    def test_it_ignores_themes_it_doesnt_know(self, handler):
        handler, _ = handler
        setup_logging_theme(handler, colors="dark")
        setup_logging_theme(handler, colors="purple")
        assert handler._column_color["%(message)s"][logging.INFO] == ("blue", None, False)

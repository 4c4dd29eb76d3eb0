import logging

from relay.logging import HumanReadableFormatter, setup_logging


def make_record(level, msg="User 1 connected"):
    return logging.LogRecord(
        name="relay.websocket",
        level=level,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
        func="register",
    )


def test_info_format_is_terse():
    line = HumanReadableFormatter().format(make_record(logging.INFO))

    assert line.endswith("INFO: User 1 connected")
    assert "register" not in line


def test_warning_format_is_located():
    line = HumanReadableFormatter().format(make_record(logging.WARNING))

    assert "WARNING: test_logging.register:42 - User 1 connected" in line


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        setup_logging("warning")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, HumanReadableFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

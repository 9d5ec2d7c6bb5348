import io
import re

import pytest

from chatgateway.logger import AsyncLogger

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (.*)$")


def _messages(output):
    lines = output.splitlines()
    messages = []
    for line in lines:
        match = LINE.match(line)
        assert match is not None, line
        messages.append(match.group(1))
    return messages


def test_line_is_timestamped():
    stream = io.StringIO()
    with AsyncLogger(stream) as logger:
        logger.write("hello\n")
    assert LINE.match(stream.getvalue().rstrip("\n")) is not None
    assert stream.getvalue().endswith("] hello\n")


def test_pieces_are_joined_into_one_line():
    stream = io.StringIO()
    with AsyncLogger(stream) as logger:
        logger.write("Listening on port ").write(8080).write("\n")
    assert _messages(stream.getvalue()) == ["Listening on port 8080"]


def test_text_without_newline_is_not_written():
    stream = io.StringIO()
    with AsyncLogger(stream) as logger:
        logger.write("pending")
    assert stream.getvalue() == ""


def test_order_is_kept():
    stream = io.StringIO()
    with AsyncLogger(stream) as logger:
        for number in range(20):
            logger.write(f"line {number}\n")
    assert _messages(stream.getvalue()) == [f"line {number}" for number in range(20)]


def test_write_after_close_raises():
    logger = AsyncLogger(io.StringIO())
    logger.close()
    with pytest.raises(RuntimeError):
        logger.write("late\n")


def test_close_twice_keeps_output():
    stream = io.StringIO()
    logger = AsyncLogger(stream)
    logger.write("once\n")
    logger.close()
    first = stream.getvalue()
    logger.close()
    assert stream.getvalue() == first
    assert _messages(first) == ["once"]


def test_write_returns_logger():
    stream = io.StringIO()
    with AsyncLogger(stream) as logger:
        assert logger.write("x") is logger
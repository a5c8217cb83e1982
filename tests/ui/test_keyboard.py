import os

import pytest

from quiz_master.ui.keyboard import TerminalKeyboard

pytestmark = pytest.mark.skipif(os.name == "nt", reason="pipe-backed input needs select() on a file descriptor")


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "r")
    yield reader, write_fd
    reader.close()
    try:
        os.close(write_fd)
    except OSError:
        pass


class TestTerminalKeyboard:
    def test_read_key_when_byte_waiting_then_returned_one_at_a_time(self, pipe):
        reader, write_fd = pipe
        os.write(write_fd, b"2L")
        keyboard = TerminalKeyboard(reader)

        assert keyboard.read_key(0.5) == "2"
        assert keyboard.read_key(0.5) == "L"

    def test_read_key_when_nothing_typed_then_none(self, pipe):
        reader, _ = pipe

        assert TerminalKeyboard(reader).read_key(0.01) is None

    def test_read_key_when_input_closed_then_idle(self, pipe):
        reader, write_fd = pipe
        os.close(write_fd)

        assert TerminalKeyboard(reader).read_key(0.01) is None

    def test_capture_when_not_a_terminal_then_no_mode_change(self, pipe):
        reader, _ = pipe
        keyboard = TerminalKeyboard(reader)

        with keyboard.capture() as captured:
            with keyboard.released():
                pass

        assert captured is keyboard

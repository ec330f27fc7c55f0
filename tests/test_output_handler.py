"""
Tests for the clipboard output handler and the console status surface.
"""

from unittest.mock import patch

import pyperclip
import pytest

from vos.exceptions import OutputError
from vos.output_handler import OutputHandler, get_clipboard_content
from vos.status import ConsoleStatus, StatusState, StatusSurface


class TestOutputHandler:

    @patch("vos.output_handler.pyperclip.copy")
    def test_deliver_copies_text(self, mock_copy):
        OutputHandler().deliver("hello")
        mock_copy.assert_called_once_with("hello")

    @patch("vos.output_handler.pyperclip.copy")
    def test_deliver_preserves_unicode_and_whitespace(self, mock_copy):
        text = "  Héllo, wörld! 你好\n"
        OutputHandler().deliver(text)
        mock_copy.assert_called_once_with(text)

    @patch("vos.output_handler.pyperclip.copy",
           side_effect=pyperclip.PyperclipException("no clipboard mechanism"))
    def test_clipboard_failure_raises_output_error(self, mock_copy):
        with pytest.raises(OutputError, match="no clipboard mechanism"):
            OutputHandler().deliver("hello")

    @patch("vos.output_handler.pyperclip.paste", return_value="clipboard text")
    def test_get_clipboard_content(self, mock_paste):
        assert get_clipboard_content() == "clipboard text"

    @patch("vos.output_handler.pyperclip.paste",
           side_effect=pyperclip.PyperclipException("no clipboard mechanism"))
    def test_get_clipboard_content_failure(self, mock_paste):
        with pytest.raises(OutputError):
            get_clipboard_content()


class TestConsoleStatus:

    def test_is_status_surface(self):
        assert isinstance(ConsoleStatus(), StatusSurface)

    @pytest.mark.parametrize("state,tag", [
        (StatusState.RECORDING, "[Recording]"),
        (StatusState.TRANSCRIBING, "[Transcribing]"),
        (StatusState.SUCCESS, "[Output]"),
        (StatusState.ERROR, "[Error]"),
    ])
    def test_show_prints_tagged_message(self, capsys, state, tag):
        ConsoleStatus().show("message", state)
        assert capsys.readouterr().out == f"{tag} message\n"

    def test_show_and_hide_visibility(self):
        status = ConsoleStatus()
        assert not status.is_visible
        status.show("Recording...", StatusState.RECORDING)
        assert status.is_visible
        status.hide()
        assert not status.is_visible

    def test_status_surface_is_abstract(self):
        with pytest.raises(TypeError):
            StatusSurface()

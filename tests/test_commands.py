"""Test key dispatch: editing, quitting and saving through the editor."""

import pytest
from unittest.mock import MagicMock

from linemark.editor import Editor
from linemark.keyboard import KeyEvent, KeyType, parse_byte
from linemark.settings import EditorSettings


def make_editor(lines=(), line_index=0, column=0, quit_times=3):
    terminal = MagicMock()
    terminal.width = 80
    terminal.height = 24
    editor = Editor(terminal=terminal, settings=EditorSettings(quit_times=quit_times))
    editor.document.load_lines([line.encode() for line in lines])
    editor.session.cursor.line_index = line_index
    editor.session.cursor.column = column
    return editor


def special(value):
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=b"")


def ctrl(letter):
    return parse_byte(ord(letter) - ord('a') + 1)


def type_text(editor, text):
    for byte in text.encode():
        editor.process_key(parse_byte(byte))


def contents(editor):
    return [line.decode() for line in editor.document.contents()]


def position(editor):
    return (editor.session.cursor.line_index, editor.session.cursor.column)


def test_typing_into_empty_document_creates_line():
    editor = make_editor()
    type_text(editor, "hi")
    assert contents(editor) == ["hi"]
    assert position(editor) == (0, 2)
    assert editor.document.dirty


def test_type_enter_type():
    editor = make_editor()
    type_text(editor, "hi")
    editor.process_key(special('enter'))
    type_text(editor, "x")
    assert contents(editor) == ["hi", "x"]
    assert position(editor) == (1, 1)


def test_enter_in_middle_splits_line():
    editor = make_editor(["hello"], column=2)
    editor.process_key(special('enter'))
    assert contents(editor) == ["he", "llo"]
    assert position(editor) == (1, 0)


def test_enter_at_column_zero_inserts_line_above():
    editor = make_editor(["hello"])
    editor.process_key(special('enter'))
    assert contents(editor) == ["", "hello"]
    assert position(editor) == (1, 0)


def test_tab_is_inserted():
    editor = make_editor(["ab"], column=1)
    editor.process_key(parse_byte(0x09))
    assert contents(editor) == ["a\tb"]


def test_unbound_control_bytes_are_not_inserted():
    editor = make_editor(["ab"])
    editor.process_key(ctrl('a'))
    editor.process_key(parse_byte(0))
    assert contents(editor) == ["ab"]
    assert not editor.document.dirty


def test_typing_on_virtual_line_appends_new_line():
    editor = make_editor(["abc"], line_index=1)
    type_text(editor, "z")
    assert contents(editor) == ["abc", "z"]
    assert position(editor) == (1, 1)


def test_backspace_deletes_previous_byte():
    editor = make_editor(["abc"], column=2)
    editor.process_key(special('backspace'))
    assert contents(editor) == ["ac"]
    assert position(editor) == (0, 1)


def test_backspace_at_line_start_joins_lines():
    editor = make_editor(["ab", "cd"], line_index=1)
    editor.process_key(special('backspace'))
    assert contents(editor) == ["abcd"]
    assert position(editor) == (0, 2)


def test_ctrl_h_is_backspace():
    editor = make_editor(["ab", "cd"], line_index=1)
    editor.process_key(ctrl('h'))
    assert contents(editor) == ["abcd"]


def test_backspace_at_document_start_is_noop():
    editor = make_editor(["ab"])
    editor.process_key(special('backspace'))
    assert contents(editor) == ["ab"]
    assert position(editor) == (0, 0)
    assert not editor.document.dirty


def test_backspace_on_virtual_line_is_noop():
    editor = make_editor(["ab"], line_index=1)
    editor.process_key(special('backspace'))
    assert contents(editor) == ["ab"]


def test_delete_removes_byte_under_cursor():
    editor = make_editor(["abc"], column=1)
    editor.process_key(special('delete'))
    assert contents(editor) == ["ac"]
    assert position(editor) == (0, 1)


def test_delete_at_line_end_joins_next_line():
    editor = make_editor(["ab", "cd"], column=2)
    editor.process_key(special('delete'))
    assert contents(editor) == ["abcd"]
    assert position(editor) == (0, 2)


def test_arrow_keys_dispatch_to_movement():
    editor = make_editor(["abc", "de"])
    editor.process_key(special('right'))
    editor.process_key(special('down'))
    assert position(editor) == (1, 1)
    editor.process_key(special('end'))
    assert position(editor) == (1, 2)
    editor.process_key(special('home'))
    assert position(editor) == (1, 0)
    editor.process_key(special('left'))
    assert position(editor) == (0, 3)


def test_escape_and_ctrl_l_do_nothing():
    editor = make_editor(["abc"], column=1)
    editor.process_key(special('escape'))
    editor.process_key(ctrl('l'))
    assert contents(editor) == ["abc"]
    assert position(editor) == (0, 1)


def test_quit_when_clean_exits_immediately():
    editor = make_editor(["abc"])
    editor.running = True
    editor.process_key(ctrl('q'))
    assert editor.running is False


def test_quit_with_unsaved_changes_needs_repeated_presses():
    editor = make_editor(["abc"], quit_times=3)
    type_text(editor, "x")
    editor.running = True
    for remaining in (3, 2, 1):
        editor.process_key(ctrl('q'))
        assert editor.running is True
        assert f"Press Ctrl-Q {remaining} more times" in editor.session.status_message
    editor.process_key(ctrl('q'))
    assert editor.running is False


def test_other_key_resets_quit_countdown():
    editor = make_editor(["abc"], quit_times=3)
    type_text(editor, "x")
    editor.running = True
    editor.process_key(ctrl('q'))
    editor.process_key(ctrl('q'))
    editor.process_key(special('left'))
    for _ in range(3):
        editor.process_key(ctrl('q'))
        assert editor.running is True
    editor.process_key(ctrl('q'))
    assert editor.running is False


def test_unbound_key_also_resets_quit_countdown():
    editor = make_editor(["abc"], quit_times=1)
    type_text(editor, "x")
    editor.running = True
    editor.process_key(ctrl('q'))
    editor.process_key(ctrl('a'))
    editor.process_key(ctrl('q'))
    assert editor.running is True


def test_zero_quit_times_quits_dirty_document_at_once():
    editor = make_editor(["abc"], quit_times=0)
    type_text(editor, "x")
    editor.running = True
    editor.process_key(ctrl('q'))
    assert editor.running is False


def test_ctrl_s_saves_named_document(tmp_path):
    path = tmp_path / "out.txt"
    editor = make_editor(["abc"])
    editor.session.filename = str(path)
    type_text(editor, "x")
    editor.process_key(ctrl('s'))
    assert path.read_bytes() == b"xabc\n"
    assert not editor.document.dirty
    assert editor.session.status_message == "5 bytes written to disk"


def test_ctrl_q_inside_save_as_prompt_is_ignored():
    editor = make_editor(quit_times=3)
    type_text(editor, "x")
    editor.running = True
    editor.process_key(ctrl('q'))
    editor.process_key(ctrl('s'))
    editor.process_key(ctrl('q'))
    editor.process_key(ctrl('q'))
    assert editor.running is True
    assert editor.prompt_mode == 'save_as'
    assert editor.quit_times == 3
    editor.process_key(special('escape'))
    for _ in range(3):
        editor.process_key(ctrl('q'))
        assert editor.running is True
    editor.process_key(ctrl('q'))
    assert editor.running is False

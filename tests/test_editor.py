from jimmybsc.cache import load_autotrade_cache
from jimmybsc.editor import FieldEditor


def _editor(tmp_path, field="max_positions"):
    editor = FieldEditor(base_dir=tmp_path)
    editor.focus(field)
    return editor


def _type(editor, text, store):
    for ch in text:
        editor.handle_key(ch, store)


def test_enter_commits_value_and_saves_cache(tmp_path):
    store = {"max_positions": "3", "dexes": "v2,v3,fm"}
    editor = _editor(tmp_path)
    _type(editor, "12", store)
    result = editor.handle_key("Enter", store)
    assert result == ("max_positions", "12")
    assert store["max_positions"] == "12"
    assert load_autotrade_cache(tmp_path) == store
    assert editor.active is False
    assert editor.buffer == ""


def test_only_digits_and_dot_are_accepted(tmp_path):
    store = {}
    editor = _editor(tmp_path, "max_gwei")
    _type(editor, "0a.5x-", store)
    assert editor.buffer == "0.5"
    assert store == {}


def test_backspace_removes_last_character(tmp_path):
    store = {}
    editor = _editor(tmp_path)
    _type(editor, "45", store)
    editor.handle_key("Backspace", store)
    assert editor.buffer == "4"
    editor.handle_key("Backspace", store)
    editor.handle_key("Backspace", store)
    assert editor.buffer == ""
    assert editor.active is True


def test_escape_discards_edit(tmp_path):
    store = {"max_positions": "3"}
    editor = _editor(tmp_path)
    _type(editor, "9", store)
    assert editor.handle_key("Esc", store) is None
    assert store == {"max_positions": "3"}
    assert editor.active is False
    assert editor.focused_field is None


def test_enter_with_empty_buffer_keeps_store(tmp_path):
    store = {"max_positions": "3"}
    editor = _editor(tmp_path)
    assert editor.handle_key("Enter", store) is None
    assert store == {"max_positions": "3"}
    assert editor.active is False
    assert not (tmp_path / ".cache" / "autotrade.json").exists()


def test_keys_ignored_when_not_focused(tmp_path):
    store = {"max_positions": "3"}
    editor = FieldEditor(base_dir=tmp_path)
    assert editor.handle_key("7", store) is None
    assert editor.handle_key("Enter", store) is None
    assert editor.buffer == ""
    assert store == {"max_positions": "3"}


def test_other_named_keys_do_nothing_while_editing(tmp_path):
    store = {}
    editor = _editor(tmp_path)
    _type(editor, "1", store)
    assert editor.handle_key("Left", store) is None
    assert editor.buffer == "1"
    assert editor.active is True


def test_display_store_shows_buffer_without_mutating(tmp_path):
    store = {"max_positions": "3", "max_gwei": "1"}
    editor = _editor(tmp_path)
    _type(editor, "8", store)
    shown = editor.display_store(store)
    assert shown == {"max_positions": "8", "max_gwei": "1"}
    assert store == {"max_positions": "3", "max_gwei": "1"}


def test_display_store_when_idle_is_a_copy(tmp_path):
    store = {"max_gwei": "1"}
    editor = FieldEditor(base_dir=tmp_path)
    shown = editor.display_store(store)
    assert shown == store
    shown["max_gwei"] = "2"
    assert store["max_gwei"] == "1"


def test_focus_resets_buffer(tmp_path):
    store = {}
    editor = _editor(tmp_path)
    _type(editor, "55", store)
    editor.focus("max_hold_secs")
    assert editor.focused_field == "max_hold_secs"
    assert editor.buffer == ""
    editor.focus(None)
    assert editor.active is False
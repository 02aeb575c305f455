from __future__ import annotations

import pytest

from line_input.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    WhenClause,
    default_bindings,
    load_default_keymaps,
)
from line_input.runtime.config import EngineConfig


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    key: str = "ctrl+k",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def test_keystroke_normalizes_aliases_and_modifier_order() -> None:
    stroke = KeyStroke.parse("Shift+Control+Esc")

    assert stroke.key == "escape"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.token == "ctrl+shift+escape"
    assert stroke.blocks_text


def test_keystroke_keeps_character_case_and_parses_plus() -> None:
    assert KeyStroke.parse("A").token == "A"
    assert KeyStroke.parse("+").key == "+"
    assert KeyStroke.parse("ctrl++").token == "ctrl++"
    assert not KeyStroke.parse("shift+left").blocks_text


def test_keystroke_rejects_empty_token() -> None:
    with pytest.raises(ValueError):
        KeyStroke.parse("  ")


def test_binding_parses_string_stroke_and_when_clauses() -> None:
    binding = Binding(
        id="custom",
        stroke="ctrl+k",  # type: ignore[arg-type]
        action_id="core.test",
        when=("focused", "!empty"),  # type: ignore[arg-type]
        tags=("a", " a ", "b"),
    )

    assert binding.key_signature == "ctrl+k"
    assert dict(binding.when_map) == {"focused": True, "empty": False}
    assert binding.tags == ("a", "b")
    assert binding.allows({"focused": True})
    assert not binding.allows({"focused": True, "empty": True})


def test_register_binding_requires_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding("missing"))


def test_register_action_rejects_duplicates_unless_replacing() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)

    assert registry.stats().action_count == 1


def test_conflicting_bindings_raise() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding("second"))

    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_opposite_when_clauses_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("focused", when=(WhenClause("focused"),)))
    registry.register_binding(
        make_binding("blurred", when=(WhenClause("focused", expected=False),))
    )

    assert [b.id for b in registry.iter_bindings("ctrl+k")] == ["blurred", "focused"]


def test_gated_binding_coexists_with_ungated_fallback() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("fallback"))
    registry.register_binding(make_binding("gated", when=(WhenClause("focused"),)))

    assert registry.stats().binding_count == 2


def test_replace_evicts_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("first"))

    registry.register_binding(make_binding("second"), replace=True)

    with pytest.raises(KeyError):
        registry.get_binding("first")
    assert registry.get_binding("second").key_signature == "ctrl+k"


def test_update_and_unregister_binding_track_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("first"))
    revision = registry.revision()

    updated = registry.update_binding("first", stroke=KeyStroke.parse("ctrl+j"))
    assert updated.key_signature == "ctrl+j"
    assert registry.stats().signatures == ("ctrl+j",)

    removed = registry.unregister_binding("first")
    assert removed is not None
    assert registry.unregister_binding("first") is None
    assert registry.revision() == revision + 2
    assert registry.stats().signatures == ()


def test_update_binding_rejects_unknown_action() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("first"))

    with pytest.raises(KeyError):
        registry.update_binding("first", action_id="core.missing")
    with pytest.raises(KeyError):
        registry.update_binding("nope", priority=1)


def test_default_keymaps_cover_the_key_table() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    signatures = set(registry.stats().signatures)

    expected = {
        "right",
        "left",
        "shift+right",
        "shift+left",
        "home",
        "end",
        "shift+home",
        "shift+end",
        "backspace",
        "delete",
        "insert",
        "ctrl+c",
        "ctrl+x",
        "ctrl+v",
        "ctrl+a",
        "tab",
        "enter",
        "escape",
    }
    assert expected <= signatures


def test_default_bindings_follow_config() -> None:
    config = EngineConfig(tab_inserts=False, blur_keys_enabled=False)

    tokens = {binding.key_signature for binding in default_bindings(config)}

    assert "tab" not in tokens
    assert "enter" not in tokens
    assert "escape" not in tokens
    assert "ctrl+v" in tokens


def test_loading_defaults_twice_is_idempotent() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    before = registry.stats()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == before.binding_count
    assert registry.stats().action_count == before.action_count

from __future__ import annotations

from line_input.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    key: str = "ctrl+k",
    action_id: str = "core.test",
    argument: str | None = None,
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        argument=argument,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_stroke() -> None:
    binding = make_binding("custom.kill")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("ctrl+k")

    assert result.status == "match"
    assert result.token == "ctrl+k"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_reports_miss_for_unbound_stroke() -> None:
    resolver = KeymapResolver(build_registry([make_binding("custom.kill")]))

    result = resolver.resolve(KeyStroke("k"))

    assert result.status == "miss"
    assert result.match is None


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "focused.kill",
        when=(WhenClause("focused"),),
        action_id="core.focused",
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve("ctrl+k", context={})
    assert miss.status == "miss"

    hit = resolver.resolve("ctrl+k", context={"focused": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == "focused.kill"


def test_resolver_prefers_higher_priority_then_id() -> None:
    low = make_binding("a.low", when=(WhenClause("focused"),), action_id="core.low")
    high = make_binding(
        "b.high",
        when=(WhenClause("empty", expected=False),),
        action_id="core.high",
        priority=5,
    )
    registry = KeymapRegistry()
    registry.register_action(make_action("core.low"))
    registry.register_action(make_action("core.high"))
    registry.register_binding(low)
    registry.register_binding(high)
    resolver = KeymapResolver(registry)

    result = resolver.resolve("ctrl+k", context={"focused": True, "empty": False})

    assert result.match is not None
    assert result.match.binding.id == "b.high"


def test_resolver_exposes_binding_argument() -> None:
    binding = make_binding("tab", key="tab", argument="\t")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("tab")

    assert result.match is not None
    assert result.match.argument == "\t"


def test_default_table_resolves_shifted_arrows() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    resolver = KeymapResolver(registry)

    result = resolver.resolve(KeyStroke("left", ("shift",)))

    assert result.match is not None
    assert result.match.action.id == "select_left"


def test_default_blur_keys_only_fire_while_focused() -> None:
    resolver = KeymapResolver(load_default_keymaps(KeymapRegistry()))

    assert resolver.resolve("enter", context={"focused": False}).status == "miss"
    focused = resolver.resolve("escape", context={"focused": True})
    assert focused.match is not None
    assert focused.match.action.id == "blur"

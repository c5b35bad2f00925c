"""
EmojiRegistry: navigation emojis, function emojis and the rules between them.
"""

import pytest

from pagezilla.errors import ConfigurationError, DuplicateKeyError, ReservedKeyError
from pagezilla.pagination.reactionbuttons import (
    DEFAULT_NAVIGATION_EMOJIS,
    ActionTrigger,
    EmojiRegistry,
    NavigationEmoji,
)

BACK_KEY = "◀"
JUMP_KEY = "↗"
FORWARD_KEY = "▶"
DELETE_KEY = "🗑"


def noop(user, context):
    pass


@pytest.fixture
def registry():
    return EmojiRegistry()


def test_defaults(registry):
    assert registry.enabled_keys() == [BACK_KEY, JUMP_KEY, FORWARD_KEY, DELETE_KEY]
    assert registry.resolve(BACK_KEY) is NavigationEmoji.BACK
    assert registry.resolve(DELETE_KEY) is NavigationEmoji.DELETE
    assert registry.is_enabled("all")


def test_terminate_is_delete():
    assert NavigationEmoji.TERMINATE is NavigationEmoji.DELETE


def test_unknown_key_does_nothing(registry):
    assert registry.resolve("🍕") is None


class TestFunctionEmojis:
    def test_register_and_resolve(self, registry):
        registry.register_action("🅱", noop)
        action = registry.resolve("🅱")
        assert isinstance(action, ActionTrigger)
        assert action.callback is noop
        assert registry.enabled_keys()[-1] == "🅱"

    def test_overwrite(self, registry):
        def other(user, context):
            pass

        registry.register_action("🅱", noop)
        registry.register_action("🅱", other)
        assert registry.resolve("🅱").callback is other
        assert registry.enabled_keys().count("🅱") == 1

    def test_enabled_navigation_key_is_reserved(self, registry):
        with pytest.raises(ReservedKeyError) as info:
            registry.register_action(BACK_KEY, noop)

        assert info.value.trigger is NavigationEmoji.BACK
        assert registry.function_emojis == {}

    def test_disabled_navigation_key_is_free(self, registry):
        registry.set_disabled(["back"])
        registry.register_action(BACK_KEY, noop)
        assert registry.resolve(BACK_KEY).callback is noop

    def test_all_disabled_frees_every_key(self, registry):
        registry.set_disabled(["ALL"])
        registry.register_action(BACK_KEY, noop)

        resolved = registry.resolve(BACK_KEY)
        assert isinstance(resolved, ActionTrigger)
        assert resolved is not NavigationEmoji.BACK
        assert registry.enabled_keys() == [BACK_KEY]

    def test_bulk_registration_is_all_or_nothing(self, registry):
        with pytest.raises(ReservedKeyError):
            registry.register_actions({"🅱": noop, FORWARD_KEY: noop})
        assert registry.function_emojis == {}

    def test_callback_must_be_callable(self, registry):
        with pytest.raises(TypeError):
            registry.register_action("🅱", "not a function")

    def test_deregister(self, registry):
        registry.register_action("🅱", noop)
        registry.deregister_action("🅱")
        registry.deregister_action("never registered")
        assert registry.resolve("🅱") is None


class TestDisabling:
    def test_disable_some(self, registry):
        registry.set_disabled(["delete", NavigationEmoji.JUMP])
        assert registry.enabled_keys() == [BACK_KEY, FORWARD_KEY]
        assert not registry.is_enabled("delete")
        assert registry.is_enabled(NavigationEmoji.BACK)
        assert registry.resolve(DELETE_KEY) is None

    def test_disabling_is_cumulative(self, registry):
        registry.set_disabled(["back", "jump"])
        registry.set_disabled(["jump"])
        assert not registry.is_enabled("back")
        assert not registry.is_enabled("jump")

    def test_all(self, registry):
        registry.set_disabled(["all"])
        assert registry.enabled_keys() == []
        assert not registry.is_enabled("ALL")
        assert all(not registry.is_enabled(trigger) for trigger in DEFAULT_NAVIGATION_EMOJIS)

    def test_unknown_identifier(self, registry):
        with pytest.raises(ConfigurationError):
            registry.set_disabled(["sideways"])


class TestRebinding:
    def test_rebind(self, registry):
        registry.rebind_navigation({"back": "⏪"})
        assert registry.resolve("⏪") is NavigationEmoji.BACK
        assert registry.resolve(BACK_KEY) is None
        assert registry.enabled_keys()[0] == "⏪"

    def test_collision_with_navigation(self, registry):
        with pytest.raises(DuplicateKeyError):
            registry.rebind_navigation({"back": FORWARD_KEY})
        assert registry.resolve(BACK_KEY) is NavigationEmoji.BACK

    def test_collision_with_function_emoji(self, registry):
        registry.register_action("🅱", noop)
        with pytest.raises(DuplicateKeyError):
            registry.rebind_navigation({NavigationEmoji.JUMP: "🅱"})
        assert registry.resolve(JUMP_KEY) is NavigationEmoji.JUMP

    def test_collision_within_mapping(self, registry):
        with pytest.raises(DuplicateKeyError):
            registry.rebind_navigation({"back": "⏺", "forward": "⏺"})
        assert registry.navigation_emojis == DEFAULT_NAVIGATION_EMOJIS

    def test_swap(self, registry):
        registry.rebind_navigation({"back": FORWARD_KEY, "forward": BACK_KEY})
        assert registry.resolve(FORWARD_KEY) is NavigationEmoji.BACK
        assert registry.resolve(BACK_KEY) is NavigationEmoji.FORWARD

    def test_rebinding_reenables(self, registry):
        registry.set_disabled(["all"])
        registry.rebind_navigation({"delete": "❌"})
        assert registry.enabled_keys() == ["❌"]
        assert not registry.is_enabled("back")

    def test_collision_with_disabled_key_is_allowed(self, registry):
        registry.set_disabled(["back"])
        registry.rebind_navigation({"forward": BACK_KEY})
        assert registry.resolve(BACK_KEY) is NavigationEmoji.FORWARD


@pytest.mark.parametrize(
    "mess_up",
    [
        lambda r: r.register_action("🅱", noop),
        lambda r: r.set_disabled(["all"]),
        lambda r: (r.set_disabled(["back"]), r.register_action(BACK_KEY, noop)),
        lambda r: r.rebind_navigation({"jump": "🔢", "delete": "❌"}),
        lambda r: (r.set_disabled(["jump", "forward"]), r.register_actions({"1️⃣": noop, FORWARD_KEY: noop})),
    ],
)
def test_reset_all_restores_defaults(registry, mess_up):
    mess_up(registry)
    registry.reset_all()

    assert registry.function_emojis == {}
    assert registry.navigation_emojis == DEFAULT_NAVIGATION_EMOJIS
    assert registry.disabled == frozenset()
    assert registry.enabled_keys() == [BACK_KEY, JUMP_KEY, FORWARD_KEY, DELETE_KEY]

"""Tests for the action handler entry point."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from action_hud.core.exceptions import ConfigurationError
from action_hud.engine import action_handler as handler_module
from action_hud.engine.action_handler import ActionHandler
from action_hud.models.entities import Actor, Selection, Token
from action_hud.models.enums import BuildMode


class TestCreateContext:
    """Tests for build mode selection."""

    def test_single_actor(self, make_handler, sample_actor: Actor) -> None:
        """Test a valid single actor gives single mode."""
        ctx = make_handler().create_context(Selection(actor=sample_actor))

        assert ctx.mode is BuildMode.SINGLE
        assert ctx.actors == (sample_actor,)

    def test_invalid_actor_type(self, make_handler, make_actor) -> None:
        """Test an actor of an unsupported type gives idle mode."""
        ctx = make_handler().create_context(Selection(actor=make_actor(type="vehicle")))

        assert ctx.mode is BuildMode.IDLE

    def test_multiple_tokens(self, make_handler, make_actor) -> None:
        """Test controlled tokens give multi mode."""
        tokens = [Token(id="t1", actor=make_actor("a")), Token(id="t2", actor=make_actor("b", type="NPC"))]

        ctx = make_handler().create_context(Selection(controlled_tokens=tokens))

        assert ctx.mode is BuildMode.MULTI
        assert [actor.id for actor in ctx.actors] == ["a", "b"]

    def test_mixed_token_types(self, make_handler, make_actor) -> None:
        """Test one unsupported actor among the tokens gives idle mode."""
        tokens = [Token(id="t1", actor=make_actor("a")), Token(id="t2", actor=make_actor("b", type="vehicle"))]

        ctx = make_handler().create_context(Selection(controlled_tokens=tokens))

        assert ctx.mode is BuildMode.IDLE
        assert ctx.actors == ()

    def test_empty_selection(self, make_handler) -> None:
        """Test nothing selected gives idle mode."""
        assert make_handler().create_context(Selection()).mode is BuildMode.IDLE

    def test_settings_read_per_build(self, make_settings, game_config, rules, sample_actor: Actor) -> None:
        """Test the settings provider is called for every build."""
        calls = []

        def provider():
            calls.append(1)
            return make_settings()

        handler = ActionHandler(game_config, rules, settings_provider=provider)
        handler.create_context(Selection(actor=sample_actor))
        handler.create_context(Selection(actor=sample_actor))

        assert len(calls) == 2


class TestBuildSystemActions:
    """Tests for full builds."""

    def test_single_actor_groups(self, make_handler, sample_actor: Actor) -> None:
        """Test every category is built for a single actor."""
        collection = asyncio.run(make_handler().build_system_actions(Selection(actor=sample_actor)))

        for group_id in (
            "abilities",
            "skills",
            "saves",
            "combat",
            "healing",
            "atwillPower",
            "weapon",
            "classFeatsFeature",
            "conditions",
            "temporary-effects",
            "passive-effects",
        ):
            assert group_id in collection

    def test_multi_mode_groups(self, make_handler, make_actor) -> None:
        """Test multi mode builds only the shared categories."""
        tokens = [Token(id="t1", actor=make_actor("a")), Token(id="t2", actor=make_actor("b"))]

        collection = asyncio.run(make_handler().build_system_actions(Selection(controlled_tokens=tokens)))

        assert set(collection.group_ids) == {"abilities", "skills", "saves", "combat", "healing", "conditions"}

    def test_idle_builds_nothing(self, make_handler) -> None:
        """Test an idle build is empty."""
        collection = asyncio.run(make_handler().build_system_actions(Selection()))

        assert len(collection) == 0

    def test_failing_category_is_isolated(self, make_handler, rules, sample_actor: Actor) -> None:
        """Test a failing category leaves the others intact."""
        rules.groupings = "broken"

        collection = asyncio.run(make_handler().build_system_actions(Selection(actor=sample_actor)))

        assert not any(group_id.endswith("Power") for group_id in collection.group_ids)
        assert "weapon" in collection
        assert "conditions" in collection

    def test_failing_sync_category_is_isolated(
        self,
        make_handler,
        sample_actor: Actor,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a failing synchronous builder does not stop the build."""

        def explode(ctx, collection):
            raise RuntimeError("boom")

        monkeypatch.setattr(handler_module, "build_skills", explode)

        collection = asyncio.run(make_handler().build_system_actions(Selection(actor=sample_actor)))

        assert "skills" not in collection
        assert "abilities" in collection
        assert "atwillPower" in collection

    def test_failing_tooltip_keeps_item(self, make_handler, rules, sample_actor: Actor) -> None:
        """Test a tooltip failure still yields the action with an empty tooltip."""
        rules.failing_tooltips.add("sword")

        collection = asyncio.run(make_handler().build_system_actions(Selection(actor=sample_actor)))

        sword = collection.get("weapon")[0]
        assert sword.id == "sword"
        assert sword.tooltip == ""

    def test_unreadable_settings(self, game_config, rules, i18n, sample_actor: Actor) -> None:
        """Test a settings failure is logged and gives an empty collection."""

        def provider():
            raise ConfigurationError("Failed to load application settings")

        handler = ActionHandler(game_config, rules, i18n, settings_provider=provider)

        with capture_logs() as logs:
            collection = asyncio.run(handler.build_system_actions(Selection(actor=sample_actor)))

        assert len(collection) == 0
        assert [entry["event"] for entry in logs] == ["Cannot read HUD settings"]

    def test_invalid_environment_settings(
        self,
        game_config,
        rules,
        sample_actor: Actor,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test an invalid environment value does not escape the build."""
        monkeypatch.setenv("ACTION_HUD_TOOLTIPS", "verbose")
        handler = ActionHandler(game_config, rules)

        collection = asyncio.run(handler.build_system_actions(Selection(actor=sample_actor)))

        assert len(collection) == 0

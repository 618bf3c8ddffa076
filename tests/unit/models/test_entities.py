"""Tests for the game-data snapshot models."""

from __future__ import annotations

from collections.abc import Callable

from action_hud.models.entities import (
    ActiveEffect,
    Actor,
    Combat,
    Combatant,
    GameConfig,
    Item,
    StatusCondition,
)


class TestEntityIdentity:
    """Tests for id and name fallbacks."""

    def test_primary_id(self) -> None:
        """Test the primary id wins."""
        item = Item.model_validate({"id": "new", "_id": "old", "type": "weapon"})
        assert item.entity_id == "new"

    def test_legacy_id_fallback(self) -> None:
        """Test the legacy _id is used when id is missing."""
        item = Item.model_validate({"_id": "old", "type": "weapon"})
        assert item.entity_id == "old"

    def test_no_id(self) -> None:
        """Test an entity without any id."""
        assert Item(type="weapon").entity_id is None

    def test_label_fallback(self) -> None:
        """Test label is used when there is no name."""
        condition = StatusCondition(id="prone", label="EFFECT.StatusProne")
        assert condition.display_name == "EFFECT.StatusProne"


class TestActiveEffect:
    """Tests for status matching on effects."""

    def test_matches_statuses(self) -> None:
        """Test statuses set is matched."""
        assert ActiveEffect(id="e", statuses={"dazed"}).has_status("dazed")

    def test_matches_legacy_status_id(self) -> None:
        """Test the legacy single status id is matched."""
        assert ActiveEffect(id="e", status_id="prone").has_status("prone")

    def test_disabled_never_matches(self) -> None:
        """Test disabled effects do not apply their status."""
        assert not ActiveEffect(id="e", statuses={"dazed"}, disabled=True).has_status("dazed")


class TestActor:
    """Tests for Actor helpers."""

    def test_all_applicable_effects(self, make_actor: Callable[..., Actor]) -> None:
        """Test actor and transferred item effects are chained."""
        actor = make_actor(
            effects=[ActiveEffect(id="own")],
            items=[
                Item(
                    id="cloak",
                    type="equipment",
                    effects=[ActiveEffect(id="carried"), ActiveEffect(id="kept", transfer=False)],
                )
            ],
        )

        assert [effect.id for effect in actor.all_applicable_effects()] == ["own", "carried"]

    def test_has_status(self, make_actor: Callable[..., Actor]) -> None:
        """Test status lookup across the actor's effects."""
        actor = make_actor(effects=[ActiveEffect(id="e", statuses={"prone"})])
        assert actor.has_status("prone")
        assert not actor.has_status("dazed")


class TestCombat:
    """Tests for the combat tracker lookup."""

    def test_initiative_for(self) -> None:
        """Test initiative lookup by token id."""
        combat = Combat(combatants=[Combatant(token_id="t1", initiative=17), Combatant(token_id="t2")])

        assert combat.initiative_for("t1") == 17
        assert combat.initiative_for("t2") is None
        assert combat.initiative_for("t3") is None


class TestHostKeys:
    """Tests for reading the host's camelCase records."""

    def test_item_camel_case(self) -> None:
        """Test camelCase item fields are read."""
        item = Item.model_validate(
            {"_id": "p1", "type": "power", "useType": "recharge", "featureType": "classFeats"}
        )

        assert item.entity_id == "p1"
        assert item.use_type == "recharge"
        assert item.feature_type == "classFeats"

    def test_actor_camel_case(self) -> None:
        """Test camelCase actor and effect fields are read."""
        actor = Actor.model_validate(
            {
                "id": "a1",
                "type": "NPC",
                "actionPoints": 2,
                "secondWindUsed": True,
                "effects": [{"id": "e1", "isTemporary": True, "statusId": "prone"}],
            }
        )

        assert actor.action_points == 2
        assert actor.second_wind_used is True
        assert actor.effects[0].is_temporary is True
        assert actor.has_status("prone")

    def test_config_camel_case(self) -> None:
        """Test camelCase configuration tables are read."""
        config = GameConfig.model_validate(
            {
                "inventoryTypes": {"weapon": {"label": "DND4E.ItemTypeWeapon"}},
                "statusEffects": [{"id": "dazed", "label": "EFFECT.StatusDazed"}],
                "trainingLevels": {"5": "DND4E.Trained"},
            }
        )

        assert list(config.inventory_types) == ["weapon"]
        assert config.status_effects[0].entity_id == "dazed"
        assert config.training_levels == {5: "DND4E.Trained"}

    def test_snake_case_still_accepted(self) -> None:
        """Test field names keep working alongside the aliases."""
        item = Item(id="p1", type="power", use_type="daily")

        assert item.use_type == "daily"

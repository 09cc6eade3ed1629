"""Tests for the command registry."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from dc_toolbox.commands.command import Command, CommandDefinition
from dc_toolbox.commands.command_manager import CommandManager
from dc_toolbox.commands.subcommand_group import SubcommandGroup
from dc_toolbox.managers.cooldown_tracker import CooldownTracker
from dc_toolbox.utils.errors import CommandNotFoundError

OTHER_HEADER = {"name": "─── OTHER ───", "value": "Other commands"}


def _command(name: str, description: str = "") -> Command:
    return Command(CommandDefinition(name, description or f"{name} description"), AsyncMock())


@pytest.fixture()
def manager() -> CommandManager:
    return CommandManager()


class TestRegistry:
    def test_register_and_lookup(self, manager):
        ping = _command("ping")

        assert manager.register(ping) is manager
        assert manager.get("ping") is ping
        assert manager.has("ping")
        assert "ping" in manager
        assert len(manager) == manager.size == 1

    def test_same_name_replaces(self, manager):
        first, second = _command("ping"), _command("ping")

        manager.register_multiple([first, second])

        assert manager.get("ping") is second
        assert manager.size == 1

    def test_unregister_and_clear(self, manager):
        manager.register_multiple([_command("ping"), _command("help")])

        assert manager.unregister("ping")
        assert not manager.unregister("ping")
        assert manager.get_command_names() == ["help"]

        manager.clear()
        assert manager.get_all() == []

    def test_sorted_case_insensitive(self, manager):
        manager.register_multiple([_command("beta"), _command("Alpha"), _command("gamma")])
        assert [c.name for c in manager.get_all_sorted()] == ["Alpha", "beta", "gamma"]

    def test_shares_cooldown_tracker(self, manager):
        ping = _command("ping")
        group = SubcommandGroup("birthday", "", [_command("set")])

        manager.register_multiple([ping, group])

        assert ping.cooldowns is manager.cooldowns
        assert group.get_subcommand("set").cooldowns is manager.cooldowns


class TestLogger:
    def test_reaches_existing_and_later_commands(self, manager, bot_logger):
        existing = _command("ping")
        group = SubcommandGroup("birthday", "", [_command("set")])
        manager.register_multiple([existing, group])

        manager.set_logger(bot_logger)
        later = _command("help")
        manager.register(later)

        assert existing.logger is bot_logger
        assert group.get_subcommand("set").logger is bot_logger
        assert later.logger is bot_logger


class TestDispatch:
    async def test_runs_command(self, manager, make_interaction):
        ping = _command("ping")
        manager.register(ping)
        interaction = make_interaction()

        await manager.dispatch("ping", interaction, "client")

        ping.handler.assert_awaited_once_with(interaction, "client")

    async def test_unknown_command(self, manager, make_interaction):
        with pytest.raises(CommandNotFoundError, match="missing"):
            await manager.dispatch("missing", make_interaction(), None)

    async def test_dispatches_groups(self, manager, make_interaction):
        group = MagicMock(spec=SubcommandGroup)
        group.name = "birthday"
        group.execute = AsyncMock()
        manager.register(group)

        await manager.dispatch("birthday", make_interaction(), None)

        group.execute.assert_awaited_once()


class TestDescriptors:
    def test_descriptor_per_entry(self, manager):
        manager.register_multiple([_command("ping"), SubcommandGroup("birthday", "Birthdays", [_command("set")])])

        names = [descriptor["name"] for descriptor in manager.to_descriptor_list()]

        assert names == ["ping", "birthday"]

    def test_dev_mode_logs_registration(self, caplog):
        manager = CommandManager(dev=True)
        manager.register(_command("ping"))

        with caplog.at_level("INFO", logger="CommandManager"):
            manager.to_descriptor_list()

        assert "Registering: ping" in caplog.text


class TestHelpPages:
    def test_empty(self, manager):
        assert manager.get_help_pages() == []

    def test_group_gets_own_page(self, manager):
        manager.register(SubcommandGroup("birthday", "Birthday reminders", [_command("set", "Set your birthday")]))

        assert manager.get_help_pages() == [[
            {"name": "─── BIRTHDAY ───", "value": "Birthday reminders"},
            {"name": "› set", "value": "Set your birthday"},
        ]]

    def test_group_without_description(self, manager):
        manager.register(SubcommandGroup("birthday"))
        assert manager.get_help_pages()[0][0]["value"] == "No description."

    def test_other_commands_fit_one_page(self, manager):
        manager.register_multiple([_command("b"), _command("a")])

        assert manager.get_help_pages() == [[
            OTHER_HEADER,
            {"name": "› a", "value": "a description"},
            {"name": "› b", "value": "b description"},
        ]]

    def test_other_commands_split_with_headers(self, manager):
        manager.register_multiple([_command(name) for name in "abcde"])
        manager.register(SubcommandGroup("zeta", "Group", [_command("x")]))

        pages = manager.get_help_pages(commands_per_page=3)

        assert len(pages) == 4
        assert pages[0][0]["name"] == "─── ZETA ───"
        assert [entry["name"] for entry in pages[1]] == [OTHER_HEADER["name"], "› a", "› b"]
        assert [entry["name"] for entry in pages[2]] == [OTHER_HEADER["name"], "› c", "› d"]
        assert [entry["name"] for entry in pages[3]] == [OTHER_HEADER["name"], "› e"]
        assert all(len(page) <= 3 for page in pages[1:])


class TestScenarios:
    async def test_ping_runs_once_and_logs(self, manager, make_interaction, bot_logger):
        ping = _command("ping")
        manager.register(ping).set_logger(bot_logger)
        interaction = make_interaction()

        await manager.dispatch("ping", interaction, None)

        ping.handler.assert_awaited_once()
        bot_logger.log.assert_called_once_with("ping command executed", "info", "ping_EXECUTION", False)
        interaction.response.send_message.assert_not_awaited()

    async def test_cooldown_is_per_user(self, make_interaction, clock):
        manager = CommandManager(cooldowns=CooldownTracker(clock=clock))
        slow = Command(CommandDefinition("slow", "Slow command", cooldown_ms=5000), AsyncMock())
        manager.register(slow)

        await manager.dispatch("slow", make_interaction(user_id=1), None)
        other = make_interaction(user_id=2)
        await manager.dispatch("slow", other, None)
        clock.advance(10)
        again = make_interaction(user_id=1)
        await manager.dispatch("slow", again, None)

        assert slow.handler.await_count == 2
        other.response.send_message.assert_not_awaited()
        assert manager.cooldowns.get_remaining_time("slow", 1) == 4990
        assert "wait 4s" in again.response.send_message.await_args.kwargs["content"]

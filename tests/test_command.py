"""Tests for Command validation, execution and descriptors."""

from unittest.mock import AsyncMock

import discord
import pytest

from dc_toolbox.commands.builder import string_option
from dc_toolbox.commands.command import GUILD_ONLY_MESSAGE, Command, CommandDefinition, command
from dc_toolbox.managers.cooldown_tracker import CooldownTracker
from dc_toolbox.utils.interactions import GENERIC_ERROR_MESSAGE
from dc_toolbox.utils.permissions import PermissionLevel
from tests.conftest import http_error


def _command(handler=None, **kwargs) -> Command:
    validator = kwargs.pop("validator", None)
    customize = kwargs.pop("customize", None)
    definition = CommandDefinition("ping", "Check latency", **kwargs)
    return Command(definition, handler or AsyncMock(), customize=customize, validator=validator)


class TestValidation:
    async def test_guild_only_in_dm(self, make_interaction):
        cmd = _command(guild_only=True)
        interaction = make_interaction(guild_id=None)

        await cmd.execute(interaction, None)

        cmd.handler.assert_not_awaited()
        interaction.response.send_message.assert_awaited_once_with(
            content=GUILD_ONLY_MESSAGE, ephemeral=True
        )

    async def test_guild_only_in_guild(self, make_interaction):
        cmd = _command(guild_only=True)
        interaction = make_interaction(guild_id=10)

        await cmd.execute(interaction, "client")

        cmd.handler.assert_awaited_once_with(interaction, "client")

    async def test_cooldown(self, make_interaction, clock):
        cmd = _command(cooldown_ms=5000)
        cmd.set_cooldown_tracker(CooldownTracker(clock=clock))

        await cmd.execute(make_interaction(), None)
        second = make_interaction()
        await cmd.execute(second, None)

        assert cmd.handler.await_count == 1
        second.response.send_message.assert_awaited_once_with(
            content="You need to wait 5s before using this command again.", ephemeral=True
        )

    async def test_cooldown_is_per_user(self, make_interaction, clock):
        cmd = _command(cooldown_ms=5000)
        cmd.set_cooldown_tracker(CooldownTracker(clock=clock))

        await cmd.execute(make_interaction(user_id=1), None)
        await cmd.execute(make_interaction(user_id=2), None)

        assert cmd.handler.await_count == 2

    async def test_validator_rejects(self, make_interaction):
        cmd = _command(validator=lambda interaction: "Not today.")
        interaction = make_interaction()

        await cmd.execute(interaction, None)

        cmd.handler.assert_not_awaited()
        interaction.response.send_message.assert_awaited_once_with(content="Not today.", ephemeral=True)

    def test_guild_check_runs_before_cooldown(self, make_interaction, clock):
        cmd = _command(guild_only=True, cooldown_ms=5000)
        cmd.set_cooldown_tracker(CooldownTracker(clock=clock))

        assert cmd.validate(make_interaction(guild_id=None)) == GUILD_ONLY_MESSAGE
        assert not cmd.cooldowns.is_on_cooldown("ping", 1)


class TestExecution:
    async def test_success_is_logged(self, make_interaction, bot_logger):
        cmd = _command()
        cmd.set_logger(bot_logger)

        await cmd.execute(make_interaction(), None)

        bot_logger.log.assert_called_once_with("ping command executed", "info", "ping_EXECUTION", False)

    async def test_success_with_subcommand_is_logged(self, make_interaction, bot_logger):
        cmd = _command()
        cmd.set_logger(bot_logger)
        data = {"name": "ping", "options": [{"type": 1, "name": "fast", "options": []}]}

        await cmd.execute(make_interaction(data=data), None)

        bot_logger.log.assert_called_once_with("ping (fast) command executed", "info", "ping_EXECUTION", False)

    async def test_handler_error_gets_generic_reply(self, make_interaction, bot_logger):
        cmd = _command(AsyncMock(side_effect=RuntimeError("boom")))
        cmd.set_logger(bot_logger)
        interaction = make_interaction()

        await cmd.execute(interaction, None)

        interaction.response.send_message.assert_awaited_once_with(content=GENERIC_ERROR_MESSAGE)
        bot_logger.log.assert_called_once_with("An Error occurred: boom", "error", "ping_EXECUTION", True)

    async def test_failed_error_reply_is_logged(self, make_interaction, bot_logger):
        cmd = _command(AsyncMock(side_effect=RuntimeError("boom")))
        cmd.set_logger(bot_logger)
        interaction = make_interaction()
        interaction.response.send_message.side_effect = http_error()

        await cmd.execute(interaction, None)

        levels = [call.args[1] for call in bot_logger.log.call_args_list]
        assert levels == ["error", "warn"]

    async def test_without_logger_uses_module_logger(self, make_interaction, caplog):
        cmd = _command()

        with caplog.at_level("INFO", logger="dc_toolbox"):
            await cmd.execute(make_interaction(), None)

        assert "ping command executed" in caplog.text

    async def test_reports_whether_handler_ran(self, make_interaction):
        assert await _command().execute(make_interaction(), None) is True
        assert await _command(guild_only=True).execute(make_interaction(guild_id=None), None) is False
        failing = _command(AsyncMock(side_effect=RuntimeError("boom")))
        assert await failing.execute(make_interaction(), None) is False


class TestDescriptor:
    def test_plain_command(self):
        data = _command().to_dict()

        assert data == {
            "type": discord.AppCommandType.chat_input.value,
            "name": "ping",
            "description": "Check latency",
            "options": [],
        }

    def test_admin_command(self):
        data = _command(permission_level=PermissionLevel.ADMIN).to_dict()
        assert data["default_member_permissions"] == str(discord.Permissions.administrator.flag)

    def test_owner_command_is_hidden(self):
        data = _command(permission_level=PermissionLevel.OWNER).to_dict()
        assert data["default_member_permissions"] == "0"

    def test_customize_adds_options(self):
        cmd = _command(customize=lambda builder: builder.add_option(string_option("text", "Text")))

        options = cmd.to_dict()["options"]

        assert options == [{"type": 3, "name": "text", "description": "Text", "required": True}]

    def test_subcommand_build_has_no_permissions(self):
        data = _command(permission_level=PermissionLevel.ADMIN).build(subcommand=True).to_dict()
        assert data["type"] == 1
        assert "default_member_permissions" not in data


class TestDecorator:
    def test_name_and_description_from_function(self):
        @command(cooldown_ms=1000)
        async def echo(interaction, client):
            """Repeat a message"""

        assert isinstance(echo, Command)
        assert echo.name == "echo"
        assert echo.description == "Repeat a message"
        assert echo.cooldown_ms == 1000

    def test_explicit_name(self):
        @command(name="say", description="Say something")
        async def handler(interaction, client):
            pass

        assert handler.name == "say"
        assert handler.description == "Say something"

    @pytest.mark.parametrize("guild_only", [True, False])
    def test_guild_only_flag(self, guild_only):
        @command(guild_only=guild_only)
        async def handler(interaction, client):
            pass

        assert handler.guild_only is guild_only

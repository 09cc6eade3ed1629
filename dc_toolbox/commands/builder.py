"""
Slash command descriptor builder and option helpers
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import discord

OptionType = discord.AppCommandOptionType


class CommandBuilder:
    """
    Builds the JSON body Discord expects when registering an application command.

    The same builder is used for top-level commands and for subcommands, so a
    command's ``customize`` hook works in both places.
    """

    def __init__(self, name: str, description: str, subcommand: bool = False):
        self.name = name
        self.description = description
        self.subcommand = subcommand
        self.default_member_permissions: Optional[int] = None
        self.options: List[Dict[str, Any]] = []

    def set_default_member_permissions(self, permissions: Optional[int]) -> "CommandBuilder":
        self.default_member_permissions = permissions
        return self

    def add_option(self, option: Dict[str, Any]) -> "CommandBuilder":
        """Add an option built with one of the ``*_option`` helpers."""
        self.options.append(option)
        return self

    def add_options(self, *options: Dict[str, Any]) -> "CommandBuilder":
        for option in options:
            self.add_option(option)
        return self

    def add_subcommand(self, builder: "CommandBuilder") -> "CommandBuilder":
        self.options.append(builder.to_dict())
        return self

    def to_dict(self) -> Dict[str, Any]:
        if self.subcommand:
            return {
                "type": OptionType.subcommand.value,
                "name": self.name,
                "description": self.description,
                "options": list(self.options),
            }

        data: Dict[str, Any] = {
            "type": discord.AppCommandType.chat_input.value,
            "name": self.name,
            "description": self.description,
            "options": list(self.options),
        }
        # Discord sends permission bitfields as strings
        if self.default_member_permissions is not None:
            data["default_member_permissions"] = str(self.default_member_permissions)
        return data


def _option(option_type: OptionType, name: str, description: str, required: bool) -> Dict[str, Any]:
    return {
        "type": option_type.value,
        "name": name,
        "description": description,
        "required": required,
    }


def string_option(name: str, description: str, required: bool = True) -> Dict[str, Any]:
    return _option(OptionType.string, name, description, required)


def integer_option(name: str, description: str, required: bool = True) -> Dict[str, Any]:
    return _option(OptionType.integer, name, description, required)


def boolean_option(name: str, description: str, required: bool = True) -> Dict[str, Any]:
    return _option(OptionType.boolean, name, description, required)


def user_option(name: str, description: str, required: bool = True) -> Dict[str, Any]:
    return _option(OptionType.user, name, description, required)


def role_option(name: str, description: str, required: bool = True) -> Dict[str, Any]:
    return _option(OptionType.role, name, description, required)


def channel_option(
    name: str,
    description: str,
    required: bool = True,
    channel_types: Union[discord.ChannelType, Sequence[discord.ChannelType]] = (discord.ChannelType.text,),
) -> Dict[str, Any]:
    """Channel option limited to the given channel types (text channels by default)."""
    if isinstance(channel_types, discord.ChannelType):
        channel_types = [channel_types]

    option = _option(OptionType.channel, name, description, required)
    option["channel_types"] = [channel_type.value for channel_type in channel_types]
    return option

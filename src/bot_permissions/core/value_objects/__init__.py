"""Value objects module for bot-permissions."""

from .identifiers import GuildId, MemberId, RoleId, Snowflake

__all__ = [
    "GuildId",
    "MemberId",
    "RoleId",
    "Snowflake",
]

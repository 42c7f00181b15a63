# src/chatroom/core/notification.py
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from chatroom import config
from chatroom.core.commands import Command, InviteCommand
from chatroom.core.errors import ServerError
from chatroom.core.parser import IRCParser


class Kind(Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    OK = "ok"
    NAMES = "names"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Who has to be told about a state change, and what.

    Pure data: recipients are nicknames as they stand after the change.
    """

    kind: Kind
    recipients: FrozenSet[str]
    command: Optional[Command] = None
    error: Optional[ServerError] = None
    nickname: Optional[str] = None
    owner: Optional[str] = None
    members: FrozenSet[str] = frozenset()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def connected(cls, nickname):
        return cls(Kind.CONNECTED, frozenset([nickname]), nickname=nickname)

    @classmethod
    def disconnected(cls, nickname, recipients):
        return cls(Kind.DISCONNECTED, frozenset(recipients), nickname=nickname)

    @classmethod
    def okay(cls, command, recipients):
        return cls(Kind.OK, frozenset(recipients), command=command)

    @classmethod
    def names(cls, command, members, owner):
        # 채널 전원이 수신자이자 NAMES 목록
        members = frozenset(members)
        return cls(Kind.NAMES, members, command=command, owner=owner, members=members)

    @classmethod
    def error(cls, command, error):
        return cls(Kind.ERROR, frozenset([command.sender]), command=command, error=error)

    @property
    def is_error(self):
        return self.kind is Kind.ERROR

    # ------------------------------------------------------------------
    # Wire rendering
    # ------------------------------------------------------------------
    def render(self):
        """Lines to send, keyed by recipient nickname (no line endings)."""
        server = f":{config.SERVER_NAME}"

        if self.kind is Kind.CONNECTED:
            nick = self.nickname
            return {nick: [IRCParser.build_msg(server, "001", nick, f"Welcome {nick}")]}

        if self.kind is Kind.DISCONNECTED:
            line = IRCParser.build_msg(f":{self.nickname}", "QUIT", "Connection closed")
            return {nick: [line] for nick in self.recipients}

        if self.kind is Kind.ERROR:
            sender = self.command.sender
            line = IRCParser.build_msg(server, self.error.code, sender, self.command.verb, self.error.message)
            return {sender: [line]}

        line = str(self.command)
        lines = {nick: [line] for nick in self.recipients}
        if self.kind is Kind.NAMES:
            subject = self._names_subject()
            channel = self.command.channel
            listing = " ".join(
                ("@" + nick) if nick == self.owner else nick
                for nick in sorted(self.members)
            )
            lines.setdefault(subject, []).extend([
                IRCParser.build_msg(server, "353", subject, "=", channel, listing, trailing=True),
                IRCParser.build_msg(server, "366", subject, channel, "End of /NAMES list"),
            ])
        return lines

    def _names_subject(self):
        if isinstance(self.command, InviteCommand):
            return self.command.user_to_invite
        return self.command.sender

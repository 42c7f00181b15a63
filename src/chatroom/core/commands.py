# src/chatroom/core/commands.py
"""
클라이언트가 보낸 한 줄을 파싱한 결과입니다.
명령 종류마다 클래스가 하나씩 있으며, str() 은 정규화된 와이어 형식을 돌려줍니다.

    :<sender> NICK <newNick>
    :<sender> CREATE <channel> <0|1>
    :<sender> JOIN <channel>
    :<sender> MESG <channel> :<message>
    :<sender> LEAVE <channel>
    :<sender> INVITE <channel> <user>
    :<sender> KICK <channel> <user>
"""
from dataclasses import dataclass
from typing import ClassVar


@dataclass(eq=False)
class Command:
    sender_id: int
    sender: str

    verb: ClassVar[str] = ""

    def __eq__(self, other):
        # 같은 정규 문자열이면 같은 명령
        if other is self:
            return True
        if not isinstance(other, Command):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))

    def __str__(self):
        return f":{self.sender} {self.verb}"


@dataclass(eq=False)
class NicknameCommand(Command):
    new_nickname: str

    verb: ClassVar[str] = "NICK"

    def __str__(self):
        return f":{self.sender} NICK {self.new_nickname}"


@dataclass(eq=False)
class CreateCommand(Command):
    channel: str
    invite_only: bool = False

    verb: ClassVar[str] = "CREATE"

    def __str__(self):
        flag = 1 if self.invite_only else 0
        return f":{self.sender} CREATE {self.channel} {flag}"


@dataclass(eq=False)
class JoinCommand(Command):
    channel: str

    verb: ClassVar[str] = "JOIN"

    def __str__(self):
        return f":{self.sender} JOIN {self.channel}"


@dataclass(eq=False)
class MessageCommand(Command):
    channel: str
    message: str

    verb: ClassVar[str] = "MESG"

    def __str__(self):
        return f":{self.sender} MESG {self.channel} :{self.message}"


@dataclass(eq=False)
class LeaveCommand(Command):
    channel: str

    verb: ClassVar[str] = "LEAVE"

    def __str__(self):
        return f":{self.sender} LEAVE {self.channel}"


@dataclass(eq=False)
class InviteCommand(Command):
    channel: str
    user_to_invite: str

    verb: ClassVar[str] = "INVITE"

    def __str__(self):
        return f":{self.sender} INVITE {self.channel} {self.user_to_invite}"


@dataclass(eq=False)
class KickCommand(Command):
    channel: str
    user_to_kick: str

    verb: ClassVar[str] = "KICK"

    def __str__(self):
        return f":{self.sender} KICK {self.channel} {self.user_to_kick}"


COMMAND_TYPES = {
    cls.verb: cls
    for cls in (
        NicknameCommand,
        CreateCommand,
        JoinCommand,
        MessageCommand,
        LeaveCommand,
        InviteCommand,
        KickCommand,
    )
}

# src/chatroom/core/parser.py
from chatroom.core.commands import (
    COMMAND_TYPES,
    CreateCommand,
    InviteCommand,
    JoinCommand,
    KickCommand,
    LeaveCommand,
    MessageCommand,
    NicknameCommand,
)
from chatroom.core.errors import ParseError

# verb -> 필요한 파라미터 개수
ARITY = {
    "NICK": 1,
    "CREATE": 2,
    "JOIN": 1,
    "MESG": 2,
    "LEAVE": 1,
    "INVITE": 2,
    "KICK": 2,
}


class IRCParser:
    @staticmethod
    def parse(message: str):
        """
        RFC 1459 스타일의 메시지를 파싱합니다.
        형식: [:PREFIX] COMMAND [PARAMS...] [:TRAILING]
        반환: (prefix, command, params)
        """
        message = message.rstrip("\r\n").lstrip(" ")
        if not message:
            return None, None, []

        prefix = None
        if message.startswith(":"):
            # prefix가 있는 경우 (예: :nick COMMAND ...)
            parts = message.split(" ", 1)
            if len(parts) < 2:
                return None, None, []  # 유효하지 않은 메시지
            prefix = parts[0][1:]
            message = parts[1].lstrip(" ")

        # Trailing Parameter 분리 ( " :" 로 시작하는 부분)
        trailing = None
        if message.startswith(":"):
            message, trailing = "", message[1:]
        elif " :" in message:
            message, trailing = message.split(" :", 1)

        args = message.split()
        if not args:
            return prefix, None, []

        command = args[0].upper()
        params = args[1:]

        if trailing is not None:
            params.append(trailing)

        return prefix, command, params

    @staticmethod
    def build_msg(*parts, trailing=False):
        """
        서버 -> 클라이언트로 보낼 한 줄 (줄바꿈 제외)
        예: build_msg(":server", "001", "User0", "Welcome User0") -> ":server 001 User0 :Welcome User0"
        """
        parts = [str(p) for p in parts]
        if not parts:
            return ""
        last = parts[-1]
        if len(parts) > 1 and (trailing or not last or " " in last or last.startswith(":")):
            parts[-1] = f":{last}"
        return " ".join(parts)


def build_command(sender_id, sender, verb, params, line=""):
    """Turn a parsed verb and parameter list into a Command."""
    if verb not in COMMAND_TYPES:
        raise ParseError(line, verb, ParseError.UNKNOWN_COMMAND, "Unknown command")
    if len(params) < ARITY[verb]:
        raise ParseError(line, verb, ParseError.NEED_MORE_PARAMS, "Not enough parameters")

    # 남는 파라미터는 무시 (IRC 관례)
    if verb == "NICK":
        return NicknameCommand(sender_id, sender, params[0])
    if verb == "CREATE":
        flag = params[1]
        if flag not in ("0", "1"):
            raise ParseError(line, verb, ParseError.NEED_MORE_PARAMS, "Invite-only flag must be 0 or 1")
        return CreateCommand(sender_id, sender, params[0], flag == "1")
    if verb == "JOIN":
        return JoinCommand(sender_id, sender, params[0])
    if verb == "MESG":
        # 공백이 있는 메시지는 trailing 으로 와야 함
        return MessageCommand(sender_id, sender, params[0], " ".join(params[1:]))
    if verb == "LEAVE":
        return LeaveCommand(sender_id, sender, params[0])
    if verb == "INVITE":
        return InviteCommand(sender_id, sender, params[0], params[1])
    return KickCommand(sender_id, sender, params[0], params[1])


def parse_command(line, sender_id, sender):
    """Parse one client line into a Command issued by (sender_id, sender).

    A leading ``:<prefix>`` is accepted but ignored; identity always comes
    from the connection.
    """
    _, verb, params = IRCParser.parse(line)
    if verb is None:
        raise ParseError(line, None, ParseError.UNKNOWN_COMMAND, "Empty command")
    return build_command(sender_id, sender, verb, params, line)

# src/chatroom/core/errors.py
from enum import Enum


class ServerError(Enum):
    """User-facing command failures. Value is (numeric, message)."""

    INVALID_NAME = ("432", "Erroneous name")
    NAME_ALREADY_IN_USE = ("433", "Name is already in use")
    NO_SUCH_CHANNEL = ("403", "No such channel")
    NO_SUCH_USER = ("401", "No such nick")
    USER_NOT_IN_CHANNEL = ("442", "User is not on that channel")
    USER_NOT_OWNER = ("482", "You're not channel owner")
    JOIN_PRIVATE_CHANNEL = ("473", "Cannot join channel (+i)")
    INVITE_TO_PUBLIC_CHANNEL = ("488", "Channel is not invite-only")

    @property
    def code(self):
        return self.value[0]

    @property
    def message(self):
        return self.value[1]


class ChatError(Exception):
    """Base class for chat server exceptions."""


class UnknownConnectionError(ChatError, KeyError):
    def __init__(self, conn_id):
        super().__init__(conn_id)
        self.conn_id = conn_id

    def __str__(self):
        return f"Unknown connection: {self.conn_id!r}"


class DuplicateConnectionError(ChatError):
    def __init__(self, conn_id):
        super().__init__(f"Connection already registered: {conn_id!r}")
        self.conn_id = conn_id


class ParseError(ChatError, ValueError):
    """Raised for a client line that cannot become a Command."""

    # 421 ERR_UNKNOWNCOMMAND, 461 ERR_NEEDMOREPARAMS
    UNKNOWN_COMMAND = "421"
    NEED_MORE_PARAMS = "461"

    def __init__(self, line, verb, code, reason):
        super().__init__(reason)
        self.line = line
        self.verb = verb
        self.code = code
        self.reason = reason

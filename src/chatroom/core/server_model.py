# src/chatroom/core/server_model.py
from chatroom.core.commands import (
    CreateCommand,
    InviteCommand,
    JoinCommand,
    KickCommand,
    LeaveCommand,
    MessageCommand,
    NicknameCommand,
)
from chatroom.core.errors import ServerError
from chatroom.core.models import is_valid_name
from chatroom.core.notification import Notification
from chatroom.core.registry import Registry
from chatroom.utils.logger import get_logger

logger = get_logger("ServerModel")


class ServerModel:
    """Applies commands to a Registry, one at a time.

    connect / disconnect / process each hold the registry lock for their
    whole run. Every check happens before the first mutation, so a failed
    command leaves the registry untouched.
    """

    def __init__(self, registry=None):
        self.registry = registry if registry is not None else Registry()
        self._handlers = {
            NicknameCommand: self._nickname,
            CreateCommand: self._create,
            JoinCommand: self._join,
            MessageCommand: self._message,
            LeaveCommand: self._leave,
            InviteCommand: self._invite,
            KickCommand: self._kick,
        }

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    def connect(self, conn_id):
        with self.registry.lock:
            return self.registry.register_user(conn_id)

    def disconnect(self, conn_id):
        with self.registry.lock:
            nickname = self.registry.get_nickname(conn_id)
            peers = self.registry.deregister_user(conn_id)
            return Notification.disconnected(nickname, peers)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def process(self, command):
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command type: {type(command).__name__}")
        with self.registry.lock:
            result = handler(command)
        if result.is_error:
            logger.info(f"{command} rejected: {result.error.name}")
        else:
            logger.debug(f"{command} -> {sorted(result.recipients)}")
        return result

    def _nickname(self, command):
        reg = self.registry
        new_nick = command.new_nickname
        # 중복 검사가 먼저, 그다음 형식 검사
        if reg.is_registered(new_nick):
            return Notification.error(command, ServerError.NAME_ALREADY_IN_USE)
        if not is_valid_name(new_nick):
            return Notification.error(command, ServerError.INVALID_NAME)

        peers = reg.users_sharing_channel_with(command.sender)
        reg.rename_user(command.sender_id, new_nick)
        return Notification.okay(command, peers | {new_nick})

    def _create(self, command):
        reg = self.registry
        if not is_valid_name(command.channel):
            return Notification.error(command, ServerError.INVALID_NAME)
        if reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NAME_ALREADY_IN_USE)

        reg.create_channel(command.channel, command.sender, command.invite_only)
        return Notification.okay(command, {command.sender})

    def _join(self, command):
        reg = self.registry
        if not reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        if reg.is_invite_only(command.channel):
            return Notification.error(command, ServerError.JOIN_PRIVATE_CHANNEL)

        reg.add_member(command.channel, command.sender)
        return Notification.names(
            command,
            reg.get_users_in_channel(command.channel),
            reg.get_owner(command.channel),
        )

    def _message(self, command):
        reg = self.registry
        if not reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        members = reg.get_users_in_channel(command.channel)
        if command.sender not in members:
            return Notification.error(command, ServerError.USER_NOT_IN_CHANNEL)

        return Notification.okay(command, members)

    def _leave(self, command):
        reg = self.registry
        if not reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        members = reg.get_users_in_channel(command.channel)
        if command.sender not in members:
            return Notification.error(command, ServerError.USER_NOT_IN_CHANNEL)

        reg.remove_member(command.channel, command.sender)
        return Notification.okay(command, members)

    def _invite(self, command):
        reg = self.registry
        if not reg.is_registered(command.user_to_invite):
            return Notification.error(command, ServerError.NO_SUCH_USER)
        if not reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        if not reg.is_invite_only(command.channel):
            return Notification.error(command, ServerError.INVITE_TO_PUBLIC_CHANNEL)
        if reg.get_owner(command.channel) != command.sender:
            return Notification.error(command, ServerError.USER_NOT_OWNER)

        reg.add_member(command.channel, command.user_to_invite)
        return Notification.names(
            command,
            reg.get_users_in_channel(command.channel),
            reg.get_owner(command.channel),
        )

    def _kick(self, command):
        reg = self.registry
        if not reg.is_registered(command.user_to_kick):
            return Notification.error(command, ServerError.NO_SUCH_USER)
        if not reg.has_channel(command.channel):
            return Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        if reg.get_owner(command.channel) != command.sender:
            return Notification.error(command, ServerError.USER_NOT_OWNER)
        members = reg.get_users_in_channel(command.channel)
        if command.user_to_kick not in members:
            return Notification.error(command, ServerError.USER_NOT_IN_CHANNEL)

        # 방장을 내보내면 채널 자체가 사라짐 (remove_member 참고)
        reg.remove_member(command.channel, command.user_to_kick)
        return Notification.okay(command, members)

    # ------------------------------------------------------------------
    # Read-only views (copies)
    # ------------------------------------------------------------------
    def get_user_id(self, nickname):
        return self.registry.get_user_id(nickname)

    def get_nickname(self, conn_id):
        return self.registry.get_nickname(conn_id)

    def get_registered_users(self):
        return self.registry.get_registered_users()

    def get_channels(self):
        return self.registry.get_channels()

    def get_users_in_channel(self, name):
        return self.registry.get_users_in_channel(name)

    def get_owner(self, name):
        return self.registry.get_owner(name)

    def users_sharing_channel_with(self, nickname):
        return self.registry.users_sharing_channel_with(nickname)

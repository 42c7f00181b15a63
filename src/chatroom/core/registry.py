# src/chatroom/core/registry.py
import threading

from chatroom.core.errors import DuplicateConnectionError, UnknownConnectionError
from chatroom.core.models import Channel
from chatroom.utils.logger import get_logger

logger = get_logger("Registry")

DEFAULT_NICK_PREFIX = "User"


class Registry:
    """Users (connection id -> nickname) and channels (name -> Channel).

    Every query returns a copy; changing it never touches the registry.
    The registry does not validate names; callers check before mutating.
    """

    def __init__(self):
        self.users = {}     # conn_id -> nickname
        self.channels = {}  # channel name -> Channel
        # 재진입 가능: ServerModel 이 명령 하나를 처리하는 동안 잡고 있음
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    def register_user(self, conn_id):
        with self.lock:
            if conn_id in self.users:
                raise DuplicateConnectionError(conn_id)
            nickname = self._generate_nickname()
            self.users[conn_id] = nickname
            logger.info(f"Registered {conn_id!r} as {nickname}")
            return nickname

    def _generate_nickname(self):
        taken = set(self.users.values())
        suffix = 0
        while f"{DEFAULT_NICK_PREFIX}{suffix}" in taken:
            suffix += 1
        return f"{DEFAULT_NICK_PREFIX}{suffix}"

    def deregister_user(self, conn_id):
        """Remove a user everywhere and return who shared a channel with them.

        Membership is dropped from every channel first; channels the user
        owned are destroyed afterwards.
        """
        with self.lock:
            if conn_id not in self.users:
                raise UnknownConnectionError(conn_id)
            nickname = self.users.pop(conn_id)
            peers = self.users_sharing_channel_with(nickname)

            owned = []
            for name, channel in self.channels.items():
                channel.remove_member(nickname)
                if channel.owner == nickname:
                    owned.append(name)
            for name in owned:
                del self.channels[name]
                logger.info(f"Channel {name} deleted (owner {nickname} disconnected).")

            logger.info(f"User {nickname} removed from registry.")
            return peers

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_user_id(self, nickname):
        with self.lock:
            for conn_id, nick in self.users.items():
                if nick == nickname:
                    return conn_id
            return None

    def get_nickname(self, conn_id):
        with self.lock:
            return self.users.get(conn_id)

    def is_registered(self, nickname):
        with self.lock:
            return nickname in self.users.values()

    def has_channel(self, name):
        with self.lock:
            return name in self.channels

    def get_registered_users(self):
        with self.lock:
            return set(self.users.values())

    def get_channels(self):
        with self.lock:
            return set(self.channels)

    def get_users_in_channel(self, name):
        with self.lock:
            channel = self.channels.get(name)
            if channel is None:
                return set()
            return set(channel.members)

    def get_owner(self, name):
        with self.lock:
            channel = self.channels.get(name)
            return channel.owner if channel else None

    def is_invite_only(self, name):
        with self.lock:
            channel = self.channels.get(name)
            return channel.invite_only if channel else None

    def users_sharing_channel_with(self, nickname):
        with self.lock:
            peers = set()
            for channel in self.channels.values():
                if nickname in channel.members:
                    peers.update(channel.members)
            peers.discard(nickname)
            return peers

    def snapshot(self):
        """Point-in-time copy of the whole registry."""
        with self.lock:
            return {
                "users": dict(self.users),
                "channels": [self.channels[name].to_summary() for name in sorted(self.channels)],
            }

    # ------------------------------------------------------------------
    # Mutation primitives
    # ------------------------------------------------------------------
    def create_channel(self, name, owner, invite_only=False):
        with self.lock:
            self.channels[name] = Channel(name=name, owner=owner, invite_only=invite_only)
            logger.info(f"Channel {name} created by {owner} (invite_only={invite_only}).")

    def add_member(self, name, nickname):
        with self.lock:
            self.channels[name].add_member(nickname)

    def remove_member(self, name, nickname):
        """Drop a member; removing the owner destroys the channel."""
        with self.lock:
            channel = self.channels.get(name)
            if channel is None:
                return
            if channel.owner == nickname:
                del self.channels[name]
                logger.info(f"Channel {name} deleted (owner {nickname} left).")
                return
            channel.remove_member(nickname)

    def rename_user(self, conn_id, new_nickname):
        with self.lock:
            if conn_id not in self.users:
                raise UnknownConnectionError(conn_id)
            old_nickname = self.users[conn_id]
            self.users[conn_id] = new_nickname
            for channel in self.channels.values():
                channel.rename_member(old_nickname, new_nickname)
            logger.info(f"Nick change: {old_nickname} -> {new_nickname}")
            return old_nickname

"""
Connect / disconnect and nickname changes.

Run with:  python -m pytest tests/test_connection_nicknames.py -v
"""

import pytest

from chatroom.core.commands import CreateCommand, JoinCommand, NicknameCommand
from chatroom.core.errors import ServerError, UnknownConnectionError
from chatroom.core.notification import Kind, Notification


# ============================================================
# Registration
# ============================================================

class TestConnect:

    def test_empty_on_init(self, model):
        assert model.get_registered_users() == set()
        assert model.get_channels() == set()

    def test_register_single_user(self, model):
        assert model.connect(0) == "User0"
        assert model.get_registered_users() == {"User0"}
        assert model.get_user_id("User0") == 0
        assert model.get_nickname(0) == "User0"

    def test_register_multiple_users(self, model):
        assert [model.connect(i) for i in range(3)] == ["User0", "User1", "User2"]
        assert len(model.get_registered_users()) == 3

    def test_freed_default_name_is_reused(self, three_users):
        three_users.disconnect(1)
        assert three_users.connect(7) == "User1"
        assert three_users.get_user_id("User1") == 7

    def test_default_name_skips_taken_nickname(self, model):
        model.connect(0)
        model.process(NicknameCommand(0, "User0", "User1"))
        assert model.connect(1) == "User0"
        assert model.get_registered_users() == {"User0", "User1"}
        assert model.get_user_id("User1") == 0
        assert model.get_user_id("User0") == 1

    def test_nicknames_stay_distinct(self, model):
        for i in range(20):
            model.connect(i)
        for conn_id in (3, 11, 4):
            model.disconnect(conn_id)
        names = [model.connect(i) for i in (30, 31, 32)]
        assert names == ["User3", "User4", "User11"]
        assert len(model.get_registered_users()) == 20


class TestDisconnect:

    def test_deregister_single_user(self, model):
        model.connect(0)
        model.disconnect(0)
        assert model.get_registered_users() == set()
        assert model.get_nickname(0) is None

    def test_deregister_one_of_many(self, model):
        model.connect(0)
        model.connect(1)
        model.disconnect(0)
        assert model.get_registered_users() == {"User1"}

    def test_unknown_connection_raises(self, model):
        with pytest.raises(UnknownConnectionError):
            model.disconnect(42)

    def test_notifies_channel_peers_only(self, model):
        for i in range(4):
            model.connect(i)
        model.process(CreateCommand(0, "User0", "room", False))
        model.process(JoinCommand(1, "User1", "room"))
        model.process(JoinCommand(2, "User2", "room"))

        result = model.disconnect(1)
        assert result == Notification.disconnected("User1", {"User0", "User2"})
        assert model.get_users_in_channel("room") == {"User0", "User2"}

    def test_owner_disconnect_destroys_channel(self, model):
        model.connect(0)
        model.connect(1)
        model.process(CreateCommand(0, "User0", "room", False))
        model.process(JoinCommand(1, "User1", "room"))

        result = model.disconnect(0)
        assert result.recipients == {"User1"}
        assert "room" not in model.get_channels()


# ============================================================
# NICK
# ============================================================

class TestNickname:

    def test_nick_not_in_channels(self, model):
        model.connect(0)
        command = NicknameCommand(0, "User0", "cis120")
        assert model.process(command) == Notification.okay(command, {"cis120"})
        users = model.get_registered_users()
        assert "User0" not in users
        assert "cis120" in users
        assert model.get_user_id("cis120") == 0

    def test_nick_collision(self, model):
        model.connect(0)
        model.connect(1)
        command = NicknameCommand(0, "User0", "User1")
        assert model.process(command) == Notification.error(command, ServerError.NAME_ALREADY_IN_USE)
        assert model.get_registered_users() == {"User0", "User1"}
        assert model.get_nickname(0) == "User0"

    def test_invalid_nickname(self, model):
        model.connect(0)
        command = NicknameCommand(0, "User0", "!nv@l!d!")
        assert model.process(command) == Notification.error(command, ServerError.INVALID_NAME)
        assert model.get_registered_users() == {"User0"}
        assert model.get_nickname(0) == "User0"

    @pytest.mark.parametrize("name", ["", "two words", "tab\there", "dash-ed"])
    def test_rejects_non_alphanumeric(self, model, name):
        model.connect(0)
        result = model.process(NicknameCommand(0, "User0", name))
        assert result.error is ServerError.INVALID_NAME

    def test_renaming_to_own_name_is_in_use(self, model):
        model.connect(0)
        result = model.process(NicknameCommand(0, "User0", "User0"))
        assert result.error is ServerError.NAME_ALREADY_IN_USE

    def test_rename_propagates_into_channels(self, model):
        for i in range(3):
            model.connect(i)
        model.process(CreateCommand(0, "User0", "room", False))
        model.process(JoinCommand(1, "User1", "room"))

        command = NicknameCommand(0, "User0", "alice")
        result = model.process(command)

        assert result.kind is Kind.OK
        assert result.recipients == {"alice", "User1"}
        assert model.get_users_in_channel("room") == {"alice", "User1"}
        assert model.get_owner("room") == "alice"
        assert model.users_sharing_channel_with("User1") == {"alice"}

"""
Notification payloads and their rendering into server lines.
"""

from chatroom.core.commands import InviteCommand, JoinCommand, MessageCommand, NicknameCommand
from chatroom.core.errors import ServerError
from chatroom.core.notification import Kind, Notification


class TestFactories:

    def test_connected(self):
        note = Notification.connected("User0")
        assert note.kind is Kind.CONNECTED
        assert note.recipients == {"User0"}

    def test_error_targets_sender(self):
        command = JoinCommand(2, "User2", "room")
        note = Notification.error(command, ServerError.NO_SUCH_CHANNEL)
        assert note.is_error
        assert note.recipients == {"User2"}
        assert note.command == command

    def test_names_recipients_are_members(self):
        command = JoinCommand(1, "User1", "room")
        note = Notification.names(command, {"User0", "User1"}, "User0")
        assert note.recipients == note.members == {"User0", "User1"}
        assert note.owner == "User0"


class TestRender:

    def test_connected(self):
        assert Notification.connected("User0").render() == {
            "User0": [":server 001 User0 :Welcome User0"],
        }

    def test_disconnected(self):
        lines = Notification.disconnected("User1", {"User0", "User2"}).render()
        assert lines == {
            "User0": [":User1 QUIT :Connection closed"],
            "User2": [":User1 QUIT :Connection closed"],
        }

    def test_okay_sends_canonical_line(self):
        command = MessageCommand(0, "User0", "room", "hi all")
        lines = Notification.okay(command, {"User0", "User1"}).render()
        assert lines == {
            "User0": [":User0 MESG room :hi all"],
            "User1": [":User0 MESG room :hi all"],
        }

    def test_error(self):
        command = NicknameCommand(0, "User0", "User1")
        lines = Notification.error(command, ServerError.NAME_ALREADY_IN_USE).render()
        assert lines == {"User0": [":server 433 User0 NICK :Name is already in use"]}

    def test_join_names_go_to_joiner(self):
        command = JoinCommand(1, "bob", "room")
        lines = Notification.names(command, {"alice", "bob"}, "alice").render()
        assert lines["alice"] == [":bob JOIN room"]
        assert lines["bob"] == [
            ":bob JOIN room",
            ":server 353 bob = room :@alice bob",
            ":server 366 bob room :End of /NAMES list",
        ]

    def test_invite_names_go_to_invitee(self):
        command = InviteCommand(0, "alice", "room", "bob")
        lines = Notification.names(command, {"alice", "bob"}, "alice").render()
        assert lines["alice"] == [":alice INVITE room bob"]
        assert lines["bob"][1] == ":server 353 bob = room :@alice bob"

# src/chatroom/core/models.py
from dataclasses import dataclass, field
from typing import Set


def is_valid_name(name) -> bool:
    """Nicknames and channel names: non-empty, letters and digits only."""
    # 숫자는 10진 숫자만 (½, ² 등은 제외)
    if not isinstance(name, str) or not name:
        return False
    return all(c.isalpha() or c.isdecimal() for c in name)


@dataclass
class Channel:
    name: str
    owner: str
    invite_only: bool = False
    members: Set[str] = field(default_factory=set)

    def __post_init__(self):
        # 방장은 항상 멤버
        self.members.add(self.owner)

    def add_member(self, nickname: str):
        self.members.add(nickname)

    def remove_member(self, nickname: str):
        self.members.discard(nickname)

    def rename_member(self, old: str, new: str):
        if old in self.members:
            self.members.discard(old)
            self.members.add(new)
        if self.owner == old:
            self.owner = new

    def to_summary(self):
        return {
            "name": self.name,
            "owner": self.owner,
            "invite_only": self.invite_only,
            "members": sorted(self.members),
        }

"""Domain classes shared by the sockit tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from sockit import operation

if TYPE_CHECKING:
    from collections.abc import Mapping


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class GithubUser:
    """User built through initializer methods, as from github.com/(...) URLs."""

    username: str = ""
    repo_name: str = ""
    followers: int = 0

    def init_with_username(self, username: str) -> None:
        self.username = username

    @operation("initWithUsername:repoName:")
    def init_with_repo(self, username: str, repo_name: str) -> None:
        self.username = username
        self.repo_name = repo_name

    def follow(self, count: int) -> int:
        self.followers += count
        return self.followers

    def explode(self, reason: str) -> None:
        raise ValueError(reason)


class Account:
    """Annotations name a type that only exists for type checkers."""

    username: str = ""
    balance: int = 0
    metadata: Mapping[str, str] | None = None

    def init_with_username(self, username: str, metadata: Mapping[str, str] | None = None) -> None:
        self.username = username

    def deposit(self, amount: int, metadata: Mapping[str, str] | None = None) -> int:
        self.balance += amount
        return self.balance


class Repo:
    @operation("initWithOwner:name:stars:")
    def __init__(self, owner: str, name: str, stars: int = 0) -> None:
        self.owner = owner
        self.name = name
        self.stars = stars


class Scoreboard:
    def __init__(self) -> None:
        self.totals: dict[str, int] = {}

    def add_points_for_player(self, points: int, player: str) -> int:
        self.totals[player] = self.totals.get(player, 0) + points
        return self.totals[player]

    def set_visibility(self, visibility: Visibility) -> None:
        self.visibility = visibility


@dataclass
class Owner:
    login: str
    followers: int = 0


@dataclass
class Repository:
    owner: Owner
    name: str
    stars: int = 0
    language: str = ""
    tags: list[str] = field(default_factory=list)

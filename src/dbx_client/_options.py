"""Immutable option values for upload and move/copy calls."""

from __future__ import annotations

import dataclasses
from typing import Union

ModeArg = Union[str, dict[str, str]]

_MODE_TAGS = ("add", "overwrite", "update")


@dataclasses.dataclass(frozen=True)
class UploadMode:
    """What to do when the upload target already exists.

    Build with :meth:`add`, :meth:`overwrite` or :meth:`update`.

    :param tag: One of ``"add"``, ``"overwrite"``, ``"update"``.
    :param rev: Revision being superseded; required for ``"update"`` only.
    :raises ValueError: On an unknown tag or a missing/unexpected revision.
    """

    tag: str
    rev: str | None = None

    def __post_init__(self) -> None:
        if self.tag not in _MODE_TAGS:
            raise ValueError(f"Unknown upload mode {self.tag!r}. Expected one of {list(_MODE_TAGS)}")
        if self.tag == "update":
            if not self.rev:
                raise ValueError("Update mode requires a non-empty revision")
        elif self.rev is not None:
            raise ValueError(f"Upload mode {self.tag!r} does not take a revision")

    @classmethod
    def add(cls) -> UploadMode:
        """Never overwrite; a conflicting name is renamed or rejected."""
        return cls("add")

    @classmethod
    def overwrite(cls) -> UploadMode:
        """Always overwrite the existing file."""
        return cls("overwrite")

    @classmethod
    def update(cls, rev: str) -> UploadMode:
        """Overwrite only if the current revision is ``rev``."""
        return cls("update", rev)

    def to_arg(self) -> ModeArg:
        if self.tag == "update":
            return {"tag": "update", "rev": str(self.rev)}
        return self.tag


@dataclasses.dataclass(frozen=True)
class UploadOption:
    """Behavior flags for an upload.

    Every ``allow_*``/``disallow_*``/mode method returns a new value with
    exactly one field changed.

    :param mode: Conflict mode (default: add).
    :param autorename: Let the server rename on conflict (default: ``True``).
    :param mute: Suppress user notifications for this change.
    :param strict_conflict: Treat an identical-content update as a conflict.
    """

    mode: UploadMode = dataclasses.field(default_factory=UploadMode.add)
    autorename: bool = True
    mute: bool = False
    strict_conflict: bool = False

    def add(self) -> UploadOption:
        return dataclasses.replace(self, mode=UploadMode.add())

    def overwrite(self) -> UploadOption:
        return dataclasses.replace(self, mode=UploadMode.overwrite())

    def update(self, rev: str) -> UploadOption:
        return dataclasses.replace(self, mode=UploadMode.update(rev))

    def with_mode(self, mode: UploadMode) -> UploadOption:
        return dataclasses.replace(self, mode=mode)

    def allow_auto_rename(self) -> UploadOption:
        return dataclasses.replace(self, autorename=True)

    def disallow_auto_rename(self) -> UploadOption:
        return dataclasses.replace(self, autorename=False)

    def mute_notification(self) -> UploadOption:
        return dataclasses.replace(self, mute=True)

    def unmute_notification(self) -> UploadOption:
        return dataclasses.replace(self, mute=False)

    def allow_strict_conflict(self) -> UploadOption:
        return dataclasses.replace(self, strict_conflict=True)

    def disallow_strict_conflict(self) -> UploadOption:
        return dataclasses.replace(self, strict_conflict=False)

    def to_arg(self, path: str) -> dict[str, object]:
        """Return the ``Dropbox-API-Arg`` payload for uploading to ``path``."""
        return {
            "path": path,
            "mode": self.mode.to_arg(),
            "autorename": self.autorename,
            "mute": self.mute,
            "strict_conflict": self.strict_conflict,
        }


@dataclasses.dataclass(frozen=True)
class MoveCopyOption:
    """Behavior flags shared by move and copy.

    :param allow_shared_folder: Permit moving/copying shared folders.
    :param autorename: Let the server rename on conflict.
    :param allow_ownership_transfer: Permit a move that changes the content owner.
    """

    allow_shared_folder: bool = False
    autorename: bool = False
    allow_ownership_transfer: bool = False

    def allow_shared(self) -> MoveCopyOption:
        return dataclasses.replace(self, allow_shared_folder=True)

    def disallow_shared(self) -> MoveCopyOption:
        return dataclasses.replace(self, allow_shared_folder=False)

    def allow_auto_rename(self) -> MoveCopyOption:
        return dataclasses.replace(self, autorename=True)

    def disallow_auto_rename(self) -> MoveCopyOption:
        return dataclasses.replace(self, autorename=False)

    def allow_transfer(self) -> MoveCopyOption:
        return dataclasses.replace(self, allow_ownership_transfer=True)

    def disallow_transfer(self) -> MoveCopyOption:
        return dataclasses.replace(self, allow_ownership_transfer=False)

    def to_arg(self, from_path: str, to_path: str) -> dict[str, object]:
        """Return the JSON body for moving/copying ``from_path`` to ``to_path``."""
        return {
            "from_path": from_path,
            "to_path": to_path,
            "allow_shared_folder": self.allow_shared_folder,
            "autorename": self.autorename,
            "allow_ownership_transfer": self.allow_ownership_transfer,
        }

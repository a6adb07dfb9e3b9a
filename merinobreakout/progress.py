"""Player progress: discovered and unlocked secrets, unlocked levels, saving."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .codes import CodeError, decode, encode
from .consts import (
    BARREL_WEIGHTS,
    CODE_LEN,
    NLEVELS,
    SAVE_FILENAME,
    USERNAME_LEN,
    Secret,
)


class CodeRejected(ValueError):
    """Raised when a code is not accepted; the message is shown to the player."""


def make_username(name: str) -> str:
    """Turn a login name into the fixed-length tag used inside codes."""
    return name[:USERNAME_LEN].upper().ljust(USERNAME_LEN, "X")


def default_save_path() -> Path:
    """Location of the save file in the user's home directory."""
    try:
        return Path.home() / SAVE_FILENAME
    except RuntimeError:
        return Path(SAVE_FILENAME)


def _empty_table() -> List[str]:
    return [""] * NLEVELS


@dataclass
class Progress:
    """Codes the player owns, indexed by level / secret number."""

    username: str
    save_path: Optional[Path] = None
    levels_unlocked: List[str] = field(default_factory=_empty_table)
    secrets_unlocked: List[str] = field(default_factory=_empty_table)
    secrets_generated: List[str] = field(default_factory=_empty_table)

    @property
    def path(self) -> Path:
        return Path(self.save_path) if self.save_path is not None else default_save_path()

    def secret_is_discovered(self, secret: int) -> bool:
        return bool(self.secrets_generated[secret])

    def secret_is_unlocked(self, secret: int) -> bool:
        return bool(self.secrets_unlocked[secret]) and bool(self.secrets_generated[secret])

    def level_is_unlocked(self, level: int) -> bool:
        return bool(self.levels_unlocked[level])

    def add_code(self, code: str) -> int:
        """Register ``code`` and return its secret/level index.

        Raises :class:`CodeRejected` if the code is not valid here.
        """
        try:
            secret = decode(code)
        except CodeError:
            secret = ""

        if len(code) == CODE_LEN and len(secret) == CODE_LEN - 1:
            idx = ord(secret[USERNAME_LEN + 1]) - ord("A")
            kind = secret[USERNAME_LEN]
            if 0 <= idx < NLEVELS:
                if secret[: len(self.username)] == self.username:
                    if kind == "X":
                        self.secrets_generated[idx] = code
                        return idx
                    if kind == "L":
                        self.levels_unlocked[idx] = code
                        return idx
                elif kind == "X":
                    if not self.secret_is_discovered(idx):
                        raise CodeRejected("Secret not discovered yet")
                    if self.secret_is_unlocked(idx):
                        raise CodeRejected("Duplicated")
                    self.secrets_unlocked[idx] = code
                    return idx
        raise CodeRejected("Incorrect")

    def generate_code(self, kind: str, idx: int) -> str:
        """Create this player's own code of ``kind`` ('X' or 'L'), record it and save."""
        code = encode(f"{self.username}{kind}{chr(ord('A') + idx)}")
        try:
            self.add_code(code)
        except CodeRejected:
            pass
        self.save()
        return code

    def barrel_weights(self) -> List[int]:
        """Relative chances of each barrel type given the unlocked secrets."""
        weights = list(BARREL_WEIGHTS)
        gun = self.secret_is_unlocked(Secret.GUN)
        magnet = self.secret_is_unlocked(Secret.MAGNET)
        multiball = self.secret_is_unlocked(Secret.MULTIBALL)
        if gun:
            weights[1] = 2
        if magnet:
            weights[3] = 4
        if multiball:
            weights[4] = 4
        if gun and magnet and multiball:
            weights[9] = 2  # Extra time barrel
        return weights

    def save(self) -> None:
        """Write all codes to the save file; a file that cannot be created is skipped."""
        lines = [
            code
            for table in (self.secrets_generated, self.secrets_unlocked, self.levels_unlocked)
            for code in table
            if code
        ]
        try:
            with open(self.path, "w", encoding="utf-8", newline="\n") as handle:
                handle.writelines(f"{code}\n" for code in lines)
        except OSError:
            return

    @classmethod
    def load(cls, username: str, save_path: Optional[Path] = None) -> "Progress":
        """Build progress for ``username`` from the codes in the save file, if any."""
        progress = cls(username=username, save_path=save_path)
        try:
            with open(progress.path, "rb") as handle:
                raw_lines = handle.read().split(b"\n")
        except OSError:
            return progress
        if raw_lines and raw_lines[-1] == b"":
            raw_lines.pop()
        for raw in raw_lines:
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                continue
            if line.endswith("\r"):
                line = line[:-1]
            try:
                progress.add_code(line)
            except CodeRejected:
                continue
        return progress

    def reset(self) -> None:
        """Delete the save file and forget every code."""
        try:
            self.path.unlink()
        except OSError:
            pass
        self.levels_unlocked = _empty_table()
        self.secrets_unlocked = _empty_table()
        self.secrets_generated = _empty_table()
"""The shop screen, where players type codes to unlock secrets."""

from __future__ import annotations

from typing import Optional

from .consts import CODE_LEN, SECRETS
from .progress import CodeRejected, Progress

_EMPTY_LINE = "_" * CODE_LEN
_SEPARATORS = ("    ", "    ", "    ", "\n")


class ShopScreen:
    """Code entry state and the texts shown on the shop screen."""

    def __init__(self, progress: Progress) -> None:
        self.progress = progress
        self.input = ""
        self._code_text = _EMPTY_LINE

    def _refresh(self) -> None:
        self.input = self.input.upper()
        self._code_text = self.input.ljust(CODE_LEN, "_")

    def handle_text(self, text: str) -> bool:
        """Add typed letters to the code; return True if the input changed."""
        modified = False
        for char in text:
            if char.isascii() and char.isalpha() and len(self.input) < CODE_LEN:
                self.input += char
                modified = True
        if modified:
            self._refresh()
        return modified

    def backspace(self) -> None:
        """Remove the last typed letter."""
        self.input = self.input[:-1]
        self._refresh()

    def escape(self) -> None:
        """Discard the typed code before leaving the shop."""
        self.input = ""
        self._code_text = _EMPTY_LINE

    def code_line(self) -> str:
        """The code entry line: typed letters, or the last error message."""
        return self._code_text

    def submit(self) -> Optional[int]:
        """Try the typed code once it is complete; return the index it unlocked."""
        if len(self.input) != CODE_LEN:
            return None
        code, self.input = self.input, ""
        try:
            idx = self.progress.add_code(code)
        except CodeRejected as err:
            self._code_text = str(err)
            return None
        self._code_text = _EMPTY_LINE
        self.progress.save()
        return idx

    def secrets_text(self) -> str:
        """Summary of discovered secrets and the player's own codes."""
        progress = self.progress
        unlocked = ""
        for idx, name in enumerate(SECRETS):
            if progress.secret_is_unlocked(idx):
                unlocked += f"{name} (unlocked!)\n"
            elif progress.secret_is_discovered(idx):
                unlocked += f"{name} (locked)\n"
        unlocked = unlocked or "(None)\n"

        generated = "".join(
            code + _SEPARATORS[idx % len(_SEPARATORS)]
            for idx, code in enumerate(progress.secrets_generated)
            if code
        )
        generated = (generated or "(None)\n").rstrip()

        return (
            "SECRETS DISCOVERED:"
            "\n(Use codes from other players to unlock them)\n\n"
            f"{unlocked}"
            "\nSHARE THESE WITH OTHER PLAYERS:\n\n"
            f"{generated}"
            "\n(Press ESC to return to menu)"
        )
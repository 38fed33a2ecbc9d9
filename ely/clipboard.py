from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from .config import DEFAULT_CLIPBOARD_COMMAND
from .errors import ClipboardUnavailable

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str, command: Sequence[str] = DEFAULT_CLIPBOARD_COMMAND) -> None:
    """
    Pipe `text` into the clipboard command (pbcopy unless configured otherwise).

    Raises ClipboardUnavailable when the command is missing or exits non-zero.
    """
    args = list(command)
    try:
        subprocess.run(args, input=text, encoding="utf-8", errors="replace", capture_output=True, check=True)
    except FileNotFoundError as e:
        raise ClipboardUnavailable(f"{args[0]} not found") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or e.stdout or "").strip()
        raise ClipboardUnavailable(
            f"{' '.join(args)} failed: rc={e.returncode} {detail}".rstrip()
        ) from e
    except OSError as e:
        raise ClipboardUnavailable(str(e)) from e
    logger.debug("Copied %d characters via %s", len(text), args[0])

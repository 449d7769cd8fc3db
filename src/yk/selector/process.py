"""Run the external fuzzy selector (fzf by default).

The catalog is written to the selector's stdin from a separate thread while
the calling thread reads stdout, so a catalog larger than the pipe buffer
cannot deadlock against the selector's own output. stderr is inherited so
the selector can draw its interface. The pipes use ``surrogateescape`` so a
source path that is not valid UTF-8 reaches the selector as its original bytes.
"""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO

from yk.config import YkConfig
from yk.selector.codec import DELIMITER

_PROMPT = "Select a command 🔍: "


class SelectorNotFoundError(RuntimeError):
    """Raised when the selector executable cannot be started."""


@dataclass
class SelectorReply:
    returncode: int
    stdout: str


def selector_args(config: YkConfig) -> list[str]:
    """Return the full selector argv for *config*.

    Fields 1-3 (index+executable, name, labels) are shown and searched;
    the preview greps the source file (field 4) for the command name (field 2).
    """
    return [
        config.selector.executable,
        f"--delimiter={DELIMITER}",
        "--with-nth=1,2,3",
        "--border",
        "--cycle",
        f"--prompt={_PROMPT}",
        f"--preview={config.preview.executable} --color=always -A 20 {{2}} {{4}}",
        "--preview-window=right:45%",
        "--bind=esc:abort,ctrl-c:abort",
    ]


def _feed(stdin: IO[str], lines: Iterable[str]) -> None:
    """Write *lines* then close stdin so the selector sees end of input."""
    try:
        for line in lines:
            stdin.write(line + "\n")
    except OSError:
        # Selector exited before reading everything (selection or abort).
        pass
    finally:
        try:
            stdin.close()
        except OSError:
            pass


def run_selector(lines: Iterable[str], config: YkConfig) -> SelectorReply:
    """Feed *lines* to the selector and return its exit status and output.

    Raises:
        SelectorNotFoundError: if the selector executable cannot be started.
    """
    argv = selector_args(config)
    try:
        proc = subprocess.Popen(
            argv,
            shell=False,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
    except OSError as exc:
        raise SelectorNotFoundError(
            f"Cannot start selector '{config.selector.executable}': {exc}"
        ) from exc

    assert proc.stdin is not None and proc.stdout is not None
    writer = threading.Thread(target=_feed, args=(proc.stdin, lines), daemon=True)
    writer.start()

    with proc:
        stdout = proc.stdout.read()
        writer.join()
        returncode = proc.wait()

    return SelectorReply(returncode=returncode, stdout=stdout)

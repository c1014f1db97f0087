"""Dev server process control — restart the app after regeneration."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger("fileroutes.dev")


class ServerProcess:
    """A dev server subprocess that can be restarted on demand.

    The server runs in its own process group so that workers it spawns are
    stopped with it.

    """

    def __init__(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout_s: float = 5.0,
    ) -> None:
        if not cmd:
            msg = "ServerProcess needs a command to run"
            raise ValueError(msg)
        self._cmd = list(cmd)
        self._cwd = cwd
        self._timeout_s = timeout_s
        self._proc: subprocess.Popen[bytes] | None = None

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    def start(self) -> None:
        if self.running:
            return
        logger.info("Starting %s", " ".join(self._cmd))
        if os.name == "nt":
            self._proc = subprocess.Popen(
                self._cmd,
                cwd=self._cwd,
                creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,  # type: ignore[attr-defined]
            )
        else:
            self._proc = subprocess.Popen(self._cmd, cwd=self._cwd, start_new_session=True)

    def stop(self) -> None:
        """Terminate the server, escalating to a kill after the timeout."""
        proc = self._proc
        self._proc = None
        if proc is None or proc.poll() is not None:
            return
        try:
            if os.name == "nt":
                proc.send_signal(signal.CTRL_BREAK_EVENT)  # type: ignore[attr-defined]
            else:
                os.killpg(proc.pid, signal.SIGTERM)

            deadline = time.monotonic() + self._timeout_s
            while time.monotonic() < deadline and proc.poll() is None:
                time.sleep(0.05)

            if proc.poll() is None:
                if os.name == "nt":
                    proc.kill()
                else:
                    os.killpg(proc.pid, signal.SIGKILL)
                proc.wait()
        except ProcessLookupError:
            pass  # already gone

    def restart(self) -> None:
        logger.info("Restarting dev server")
        self.stop()
        self.start()

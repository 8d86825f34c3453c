"""Signal handling for the code2md CLI.

SIGINT (Ctrl+C) and, where the platform has it, SIGPIPE are recorded instead of
raising, so the writer can stop cleanly and the process can exit with the
conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, Optional

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class SignalHandler:
    """Records SIGINT and SIGPIPE so the CLI can wind down gracefully.

    Each handler fires once: after recording the signal it puts the original handler
    back, so a second Ctrl+C behaves as usual.

    Attributes:
        sigpipe_received: Set when SIGPIPE arrives.
        sigint_received: Set when SIGINT arrives.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._original_handlers: Dict[int, Any] = {}

    @staticmethod
    def _sigpipe() -> Optional[int]:
        # SIGPIPE does not exist on Windows
        return getattr(signal, "SIGPIPE", None)

    def install(self) -> None:
        """Install the recording handlers, remembering the previous ones."""
        self._original_handlers[signal.SIGINT] = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self.handle_sigint)

        sigpipe = self._sigpipe()
        if sigpipe is not None:
            self._original_handlers[sigpipe] = signal.getsignal(sigpipe)
            signal.signal(sigpipe, self.handle_sigpipe)

    def _restore(self, signum: int) -> None:
        original = self._original_handlers.get(signum)
        if original is not None:
            signal.signal(signum, original)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        self._restore(signum)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        self._restore(signum)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit status implied by the signals received, or None if there were none."""
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None

    def reset(self) -> None:
        self.sigpipe_received.clear()
        self.sigint_received.clear()


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Configure signal handlers for SIGPIPE and SIGINT."""
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    This keeps the interpreter from reporting a second broken pipe while flushing
    stdout during shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)

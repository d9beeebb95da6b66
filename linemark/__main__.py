"""Linemark CLI entry point.

Allows running via `python -m linemark` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .version import get_version_string

LOG_ENV_VAR = "LINEMARK_LOG"


def configure_logging() -> None:
    """Send log records to the file named by LINEMARK_LOG, if set.

    The screen belongs to the editor, so records never go to stderr.
    """
    path = os.environ.get(LOG_ENV_VAR)
    if path:
        logging.basicConfig(
            filename=path,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def run_keyboard_test() -> None:
    """Print each decoded key until ESC is pressed."""
    from .keyboard import KeyboardHandler
    from .terminal import TerminalInterface

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    term.write(b"Keyboard test mode - press keys to see decoded events.\r\n"
               b"Quit with ESC.\r\n")

    with term.raw_mode():
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw={ev.raw!r}"]
            if ev.code is not None:
                parts.append(f"code={ev.code}")
            term.write((' '.join(parts) + "\r\n").encode())
            if ev.value == 'escape':
                break


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing to support keyboard test mode, version, and optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    configure_logging()
    logger = logging.getLogger("linemark")

    # Lazy imports so --version does not touch the terminal
    from .editor import Editor
    from .settings import load_settings
    from .terminal import TerminalError

    try:
        if args and args[0] in ('--keytest', '--keyboard-test'):
            run_keyboard_test()
            return 0

        editor = Editor(settings=load_settings())
        if args:
            try:
                editor.load_file(args[0])
            except OSError as e:
                print(f"linemark: cannot open {args[0]}: {e.strerror or e}", file=sys.stderr)
                return 1
        editor.run()
    except TerminalError as e:
        logger.error(f"Fatal terminal error: {e}")
        print(f"linemark: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

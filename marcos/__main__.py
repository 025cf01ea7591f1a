"""Module entrypoint for ``python -m marcos``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and session setup happen in ``marcos.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m projexplorer``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and session setup happen in ``projexplorer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

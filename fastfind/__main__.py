"""Module entrypoint for ``python -m fastfind``.

This keeps module-mode execution behavior identical to the ``ff`` script.
All argument parsing and runtime setup happen in ``fastfind.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

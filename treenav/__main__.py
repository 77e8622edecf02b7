"""Module entrypoint for ``python -m treenav``.

All argument parsing and tree setup happen in ``treenav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m cfikit``.

All argument parsing happens in ``cfikit.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

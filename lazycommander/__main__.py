"""Module entrypoint for ``python -m lazycommander``."""

from .cli import main


if __name__ == "__main__":
    main()

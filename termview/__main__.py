"""Module entrypoint for ``python -m termview``."""

from .cli import main


if __name__ == "__main__":
    main()

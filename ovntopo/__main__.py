"""Module entrypoint for ``python -m ovntopo``."""

from ovntopo.cli import main

if __name__ == "__main__":
    main()

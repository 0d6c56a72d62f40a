"""Entry point for ``python -m calceval``."""

from calceval.cli import main

if __name__ == "__main__":
    main()

"""Allow ``python -m tormag``."""

from tormag.cli import main

if __name__ == "__main__":
    main()

"""Allow ``python -m bootmap``."""

from bootmap.cli.main import main

if __name__ == "__main__":
    main()

"""Allow `python -m dotstyle`."""

from dotstyle.cli.main import main

if __name__ == "__main__":
    main()

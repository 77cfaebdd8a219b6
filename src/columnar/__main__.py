"""Module entry point for `python -m columnar`."""

from columnar.cli.main import main

if __name__ == "__main__":
    main()

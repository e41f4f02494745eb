"""Solve a planning problem described in a YAML file through a command-line interface."""

from backchain.io.planning_cli import cli


def main() -> None:
    """Parse the command line, then search for and display a plan."""
    cli()


if __name__ == "__main__":
    main()

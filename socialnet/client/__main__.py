"""
Entry point for the social network client.
"""
from .cli import app


def main():
    """Launch the command line client.

    Side Effects:
        - Runs the typer app, which exits the process when done
    """
    app(prog_name="socialnet")


if __name__ == "__main__":
    main()

from extcss.cli.main import cli

__all__ = ["cli"]

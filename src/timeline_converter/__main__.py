"""Module entry point: python -m timeline_converter ..."""

from timeline_converter.cli import cli

if __name__ == "__main__":
    cli(prog_name="timeline-converter")

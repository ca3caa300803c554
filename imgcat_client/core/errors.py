"""Errors raised while resolving an input into image bytes.

Each error names the input (path or URL) that produced it. They derive from
click.ClickException so the CLI reports them as ``Error: ...`` on stderr and
exits with status 1.
"""

import click

# Malformed command lines are rejected by click before any I/O happens.
ParseError = click.UsageError


class SourceError(click.ClickException):
    """Base class for failures while reading an input."""

    def __init__(self, source, message):
        super().__init__(message)
        self.source = source


class OpenError(SourceError):
    def __init__(self, path, reason):
        super().__init__(path, f"failed to open file {path}: {reason}")


class ReadError(SourceError):
    def __init__(self, path, reason):
        super().__init__(path, f"failed to read from file {path}: {reason}")


class FetchError(SourceError):
    def __init__(self, url, reason):
        super().__init__(url, f"failed to fetch image data from {url}: {reason}")


class StdinError(SourceError):
    def __init__(self, reason):
        super().__init__(None, f"failed to read stdin: {reason}")

"""Input sources - turn a command line argument into image bytes.

An argument is either a remote URL (http, https or ftp), a local path, or
absent, in which case the image is read from stdin. Classification only looks
at the shape of the string; nothing is checked on disk beforehand.
"""

import enum
import os
import sys
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Optional

import requests

from .errors import FetchError, OpenError, ReadError, StdinError

SUPPORTED_SCHEMES = frozenset({'http', 'https', 'ftp'})

FILE_PREFIX = 'file://'


class SourceKind(enum.Enum):
    REMOTE = 'remote'
    LOCAL = 'local'
    STDIN = 'stdin'


@dataclass(frozen=True)
class ResolvedImage:
    """Image bytes plus what is known about where they came from.

    filename is the short label sent to the terminal; origin is the argument
    exactly as the user typed it. Both are None for stdin.
    """
    data: bytes
    filename: Optional[str] = None
    origin: Optional[str] = None


def classify(source: Optional[str]) -> SourceKind:
    """Decide how an argument should be read.

    Only an exact match on a supported scheme makes a URL. Windows paths
    such as ``C:/a/b`` parse with scheme ``c`` and stay local.
    """
    if source is None:
        return SourceKind.STDIN
    try:
        scheme = urllib.parse.urlsplit(source).scheme
    except ValueError:
        return SourceKind.LOCAL
    if scheme in SUPPORTED_SCHEMES:
        return SourceKind.REMOTE
    return SourceKind.LOCAL


def url_filename(url: str) -> Optional[str]:
    """Last segment of the URL path, ignoring trailing slashes."""
    path = urllib.parse.urlsplit(url).path.rstrip('/')
    name = path.rsplit('/', 1)[-1]
    return name or None


def strip_file_prefix(path: str) -> str:
    if path.startswith(FILE_PREFIX):
        return path[len(FILE_PREFIX):]
    return path


def local_filename(path: str) -> Optional[str]:
    """Last segment of a local path, split on the platform separator."""
    name = strip_file_prefix(path).split(os.sep)[-1]
    return name or None


def read_all(stream, size_hint: Optional[int] = None) -> bytes:
    """Read a binary stream to EOF.

    size_hint sizes the first read when known (e.g. from fstat). It is only
    a hint: reading continues until EOF whether or not it was accurate.
    """
    chunks = []
    if size_hint:
        chunks.append(stream.read(size_hint))
    chunks.append(stream.read())
    return b''.join(chunks)


def _fetch_http(url, timeout):
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(url, e) from e
    return response.content


def _fetch_ftp(url, timeout):
    # requests has no FTP transport.
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            return response.read()
    except (OSError, ValueError) as e:
        raise FetchError(url, e) from e


def fetch(url: str, timeout: Optional[float] = None) -> bytes:
    """Download the body of a remote URL with a single request.

    Raises:
        FetchError: transport failure or non-success response
    """
    scheme = urllib.parse.urlsplit(url).scheme
    if scheme == 'ftp':
        return _fetch_ftp(url, timeout)
    return _fetch_http(url, timeout)


def read_file(path: str) -> bytes:
    """Read a whole local file.

    Raises:
        OpenError: the file cannot be opened
        ReadError: reading failed after the file was opened
    """
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise OpenError(path, e.strerror or e) from e
    except ValueError as e:
        # Embedded NUL bytes.
        raise OpenError(path, e) from e

    with f:
        try:
            # Special files (pipes, /dev/stdin) report size 0.
            size_hint = os.fstat(f.fileno()).st_size
        except OSError:
            size_hint = None
        try:
            return read_all(f, size_hint)
        except OSError as e:
            raise ReadError(path, e.strerror or e) from e


def read_stdin() -> bytes:
    """Read piped image data from stdin until EOF."""
    try:
        return read_all(sys.stdin.buffer)
    except OSError as e:
        raise StdinError(e) from e


def resolve(source: Optional[str], timeout: Optional[float] = None) -> ResolvedImage:
    """Resolve a command line argument into a ResolvedImage.

    Args:
        source: Path or URL; None reads from stdin
        timeout: Network timeout in seconds, None waits forever

    Returns:
        ResolvedImage with the raw bytes, display name and origin

    Raises:
        SourceError: the input could not be read
    """
    kind = classify(source)

    if kind is SourceKind.STDIN:
        return ResolvedImage(read_stdin())

    if kind is SourceKind.REMOTE:
        return ResolvedImage(fetch(source, timeout), url_filename(source), source)

    path = strip_file_prefix(source)
    return ResolvedImage(read_file(path), local_filename(source), source)

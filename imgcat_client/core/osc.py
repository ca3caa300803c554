"""Inline image escape sequence generation (iTerm2 protocol).

Format: ESC ] 1337;File=inline=1;size=<N>[;<key>=<value>...]:<base64_payload> BEL

When running inside screen or tmux, the sequence is wrapped in DCS
passthrough so the multiplexer forwards it to the outer terminal:
  ESC P tmux; ESC ESC ] ... BEL ESC \\
The doubled ESC is un-doubled by the multiplexer, and ESC \\ ends the DCS.
"""

import os
from dataclasses import dataclass
from typing import Optional

from . import codec

OSC_CODE = 1337

OSC_OPEN = '\033]'
OSC_CLOSE = '\007'
TMUX_OSC_OPEN = '\033Ptmux;\033\033]'
TMUX_OSC_CLOSE = '\007\033\\'

MULTIPLEXER_TERMS = ('screen', 'tmux')


@dataclass(frozen=True)
class DisplayOptions:
    """Display hints shared by every image of one invocation.

    width and height are dimension strings ('auto', 'N', 'Npx' or 'N%') and
    are forwarded to the terminal untouched.
    """
    width: Optional[str] = None
    height: Optional[str] = None
    preserve_aspect_ratio: bool = True
    file_type_hint: Optional[str] = None
    show_origin: bool = False


def is_inside_multiplexer(environ=None) -> bool:
    """Check if output goes through screen or tmux, based on TERM."""
    if environ is None:
        environ = os.environ
    term = environ.get('TERM', '')
    return term.startswith(MULTIPLEXER_TERMS)


def opening(multiplexer: bool) -> str:
    """Return the bytes that start the sequence."""
    return TMUX_OSC_OPEN if multiplexer else OSC_OPEN


def closing(multiplexer: bool) -> str:
    """Return the bytes that end the sequence.

    Must be called with the same flag as opening().
    """
    return TMUX_OSC_CLOSE if multiplexer else OSC_CLOSE


def create_arguments(image, opts: DisplayOptions) -> str:
    """Build the ``File=`` argument list.

    Args:
        image: ResolvedImage whose size and name are described
        opts: Display hints

    Returns:
        Arguments joined by ';', without the leading '1337;'
    """
    args = [f"File=inline=1;size={len(image.data)}"]
    if image.filename is not None:
        args.append(f"name={codec.encode_name(image.filename)}")
    if opts.width is not None:
        args.append(f"width={opts.width}")
    if opts.height is not None:
        args.append(f"height={opts.height}")
    args.append(f"preserveAspectRatio={int(opts.preserve_aspect_ratio)}")
    # Forwarded verbatim; the caller must not pass control bytes.
    if opts.file_type_hint is not None:
        args.append(f"type={opts.file_type_hint}")
    return ';'.join(args)


def create_sequence(image, opts: DisplayOptions, multiplexer: bool) -> str:
    """Create the complete escape sequence for one image.

    Args:
        image: ResolvedImage to embed
        opts: Display hints
        multiplexer: Use DCS passthrough framing

    Returns:
        Escape sequence without the trailing newline
    """
    return (
        f"{opening(multiplexer)}{OSC_CODE};{create_arguments(image, opts)}"
        f":{codec.encode_payload(image.data)}{closing(multiplexer)}"
    )


def encode(image, opts: DisplayOptions, multiplexer: Optional[bool] = None) -> bytes:
    """Encode an image into the bytes a terminal must receive.

    The output is the escape sequence, a newline, and when requested the
    image origin on its own line. The origin is printed after the sequence
    so it stays visible as plain text in scrollback.

    Args:
        image: ResolvedImage to embed
        opts: Display hints
        multiplexer: Framing override; detected from TERM when None

    Returns:
        Bytes ready to be written to the terminal
    """
    if multiplexer is None:
        multiplexer = is_inside_multiplexer()

    out = create_sequence(image, opts, multiplexer) + '\n'
    if opts.show_origin and image.origin is not None:
        out += image.origin + '\n'
    return out.encode('utf-8', 'surrogateescape')

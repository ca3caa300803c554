"""imgcat - display images inline in terminals supporting iTerm2's protocol.

Usage:
    imgcat [options] [PATH_OR_URL]...

Examples:
    imgcat -W 250px -H 250px -s avatar.png        # Local file, stretched
    cat graph.png | imgcat -W 100%               # Read from stdin
    imgcat -p https://host.tld/path/image.jpg    # Fetch and print the URL
    imgcat -o logo.osc logo.png                  # Save for a later `cat`
"""

import contextlib

import click

from . import __version__
from .core import osc
from .core.errors import SourceError
from .core.source import resolve


def describe(source):
    """Name an input for messages."""
    return '<stdin>' if source is None else source


@click.command(context_settings=dict(help_option_names=['-h', '--help']))
@click.argument('inputs', nargs=-1)
@click.option('--file-type', '-t', help='Type hint: a mime type, a language name or a file extension')
@click.option('--width', '-W', help='Output width of the image (N, Npx, N% or auto)')
@click.option('--height', '-H', help='Output height of the image (N, Npx, N% or auto)')
@click.option('--stretch', '-s', is_flag=True, help='Do not preserve the aspect ratio')
@click.option('--print-path', '--print-filename', '-p', 'print_path', is_flag=True,
              help='Print the path or URL of each image after it')
@click.option('--keep-going/--fail-fast', '-k', default=False,
              help='Continue with the remaining inputs after a failure (default: stop)')
@click.option('--timeout', type=float, default=None, help='Network timeout in seconds (default: none)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True),
              help='Write escape sequences to a file instead of stdout')
@click.option('--dry-run', '-n', is_flag=True, help='Show what would be done')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.version_option(__version__, prog_name='imgcat')
@click.pass_context
def cli(ctx, inputs, file_type, width, height, stretch, print_path, keep_going, timeout,
        output, dry_run, verbose):
    """Display images inline in terminals supporting iTerm2's Inline Images Protocol.

    Each INPUT is a local path or an http, https or ftp URL. Without INPUT
    the image is read from stdin.

    If you don't specify width or height an appropriate value will be chosen
    automatically. They are given as the word 'auto' or a number N followed
    by a unit:

    \b
        N      character cells
        Npx    pixels
        N%     percent of the session's width or height
        auto   the image's inherent size is used

    The file type is a hint to disambiguate. It can be a mime type like
    text/markdown, a language name like Java, or a file extension like .c.
    It is most useful when no filename is available, such as when the input
    comes from a pipe.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['dry_run'] = dry_run

    opts = osc.DisplayOptions(
        width=width,
        height=height,
        preserve_aspect_ratio=not stretch,
        file_type_hint=file_type,
        show_origin=print_path,
    )
    multiplexer = osc.is_inside_multiplexer()
    sources = inputs or (None,)
    failed = []

    if ctx.obj['verbose'] and multiplexer:
        click.echo("Using tmux passthrough", err=True)

    if ctx.obj['dry_run']:
        out_ctx = contextlib.nullcontext()
    else:
        out_ctx = click.open_file(output or '-', 'wb')

    with out_ctx as out:
        for source in sources:
            try:
                image = resolve(source, timeout=timeout)
            except SourceError as e:
                if not keep_going:
                    raise
                e.show()
                failed.append(describe(source))
                continue

            data = osc.encode(image, opts, multiplexer)

            if ctx.obj['dry_run']:
                click.echo(f"Would output {len(data)} bytes for {describe(source)}")
                continue

            # Flush per image so multi-input runs render progressively.
            out.write(data)
            out.flush()

            if ctx.obj['verbose']:
                click.echo(f"Sent {describe(source)}: {len(image.data)} bytes of image data, "
                           f"{len(data)} bytes written", err=True)

    if failed:
        raise click.ClickException(f"{len(failed)} of {len(sources)} inputs failed: {', '.join(failed)}")


def main():
    """Entry point."""
    cli(obj={}, auto_envvar_prefix='IMGCAT')


if __name__ == '__main__':
    main()

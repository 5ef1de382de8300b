import sys
import traceback
from pathlib import Path

import click

from belterlink import __version__
from belterlink.core.args import parse_args
from belterlink.core.config import ConfigService, DEFAULT_CONFIG_PATH, EXAMPLE_CONFIG
from belterlink.core.errors import BelterlinkError
from belterlink.core.rsync_config import RunOptions
from belterlink.core.sync import SyncService
from belterlink.utils.logger import get_logger

log = get_logger(__name__)

HELP_TEXT = """\
Examples:
  belterlink Notes push
  belterlink --delete Notes push
  belterlink --dry-run Piano pull

Direction:
  push  : local -> remote
  pull  : remote -> local

Config setup:
  1) belterlink --init-config   (writes the example below to ~/.belterlink/config.yaml)
  2) Fill in ssh + categories.
  3) Make sure key-based SSH works between the machines.
  4) belterlink Notes push   (or pull)

Notes:
  push and pull are one-way by design. If both sides were edited, the newer
  side wins because rsync runs with --update (and optionally --checksum).
  Keep both machines' clocks in sync (NTP) to avoid timestamp confusion.
  For iCloud paths on macOS, make sure files are downloaded (no .icloud placeholders).

Config YAML example:

""" + EXAMPLE_CONFIG


def _raw_paragraphs(text: str) -> str:
    # click 按空行分段重排，每段都需要 \b 才能保持原样
    return "\n\n".join("\b\n" + block for block in text.strip("\n").split("\n\n"))


EPILOG = _raw_paragraphs(HELP_TEXT)

CONTEXT_SETTINGS = {
    # 第一个位置参数之后的内容全部视为位置参数，交给 parse_args 报告放错位置的 flag
    "allow_interspersed_args": False,
    "help_option_names": ["-h", "--help"],
}


@click.command(context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option("--config", "config_path", default=str(DEFAULT_CONFIG_PATH), type=click.Path(dir_okay=False),
              show_default=True, help="Path to YAML config")
@click.option("--dry-run", is_flag=True, help="Show what would change (no writes)")
@click.option("--delete", is_flag=True, help="Mirror deletions (can be defaulted in config)")
@click.option("--checksum", is_flag=True, help="Compare by checksums instead of size+mtime (slower; can be defaulted)")
@click.option("--no-verbose", is_flag=True, help="Disable verbose rsync output")
@click.option("--init-config", is_flag=True, help="Write an example config to --config if it does not exist, then exit")
@click.version_option(__version__, "--version", prog_name="belterlink", message="%(prog)s %(version)s")
@click.argument("args", nargs=-1, metavar="<CategoryName> <push|pull>")
@click.pass_context
def cli(ctx, config_path, dry_run, delete, checksum, no_verbose, init_config, args):
    """BelterLink: simple, config-driven rsync wrapper (one-way by choice)."""
    service = ConfigService(Path(config_path))
    if init_config:
        if service.write_example():
            click.echo(f"Example config written: {service.config_path}")
        else:
            click.echo(f"Config already exists: {service.config_path}")
        return
    if not args:
        click.echo(ctx.get_help())
        return

    category_name, direction = parse_args(args)
    config = service.load()
    opts = RunOptions(
        direction=direction,
        dry_run=dry_run,
        delete=delete,
        checksum=checksum,
        no_verbose=no_verbose,
    )
    SyncService(config).run(category_name, opts)


def main(argv=None):
    try:
        cli.main(args=argv, prog_name="belterlink")
    except BelterlinkError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(e.exit_code)
    except Exception as e:
        click.echo(f"error: {e}", err=True)
        log.error("unexpected failure: %s", e)
        if sys.stderr.isatty():
            # 交互式终端显示详细错误
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

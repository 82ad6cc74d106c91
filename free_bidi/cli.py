"""Command-line interface for free-bidi."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from rich.console import Console

from .core.observers import DiagnosticObserver, NullDiagnosticObserver
from .core.profiles import EncodingProfile
from .core.resolver import decode_with_candidates, resolve_candidates
from .core.transcoder import find_script_runs, forward_transform, reverse_transform
from .settings import FreeBidiSettings, load_settings
from .storage.shadow import (
    is_shadow_path,
    is_supported_file,
    original_path_for,
    read_shadow,
    remove_shadow,
    shadow_path_for,
    write_original,
    write_shadow,
)
from .utils.errors import ShadowPathError, UnmappableCodePointError
from .utils.text import terminal_display


console = Console()
err_console = Console(stderr=True)


class ConsoleDiagnosticObserver(DiagnosticObserver):
    """Prints engine diagnostics as dim lines on stderr."""

    def on_encoding_fallback(self, configured_name, profile):
        err_console.print(
            f"[dim]Invalid RTL encoding value '{configured_name}', falling back to {profile.name}[/dim]"
        )

    def on_decode_failure(self, document, profile, failure):
        err_console.print(
            f"[dim]Decoding failed for {document} using {profile.name}: {failure.describe()}[/dim]"
        )

    def on_undefined_bytes(self, document, profile, count):
        err_console.print(
            f"[dim]{count} byte(s) undefined in {profile.name} were replaced in {document}[/dim]"
        )

    def on_encode_failure(self, document, profile, error):
        err_console.print(f"[dim]Encoding failed for {document} using {profile.name}[/dim]")


def _parser(command: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"free-bidi {command}", description=description)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine activity"
    )
    return parser


def _add_encoding_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--encoding",
        default=None,
        help="Legacy RTL encoding (overrides FREEBIDI_RTL_ENCODING, e.g. 'windows-1255')"
    )


def _setup(args: argparse.Namespace) -> FreeBidiSettings:
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return load_settings()


def _candidates(
    settings: FreeBidiSettings,
    args: argparse.Namespace,
    diagnostics: DiagnosticObserver,
) -> List[EncodingProfile]:
    return resolve_candidates(settings.candidate_names(args.encoding), diagnostics=diagnostics)


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")


def run_convert_command(argv: List[str]) -> int:
    parser = _parser("convert", "Write the UTF-8, direction-marked shadow copy of a legacy RTL file")
    parser.add_argument("path", help="Source file in a legacy single-byte encoding")
    _add_encoding_option(parser)
    parser.add_argument("--force", action="store_true", help="Overwrite an existing shadow file")
    parser.add_argument("--any-extension", action="store_true", help="Do not filter by file extension")
    args = parser.parse_args(argv)
    settings = _setup(args)

    path = Path(args.path)
    _require_file(path)
    if is_shadow_path(path, settings.shadow_dir_name):
        console.print(f"[yellow]{path} is already a shadow file[/yellow]")
        return 0
    if not args.any_extension and not is_supported_file(path, settings.extensions):
        console.print(f"Skipping unsupported file: {path}")
        return 0

    shadow = shadow_path_for(path, settings.shadow_dir_name)
    if shadow.exists() and not args.force:
        console.print(f"Found existing shadow: {shadow}")
        return 0

    diagnostics = ConsoleDiagnosticObserver()
    result = forward_transform(
        path.read_bytes(),
        _candidates(settings, args, diagnostics),
        document=str(path),
        diagnostics=diagnostics,
    )
    if not result.ok:
        console.print(f"[yellow]No RTL text found in {path}; left unchanged[/yellow]")
        return 0

    out_path = write_shadow(path, result.text, settings.shadow_dir_name)
    console.print(f"[green]Converted[/green] {path} ({result.profile.name}) -> {out_path}")
    return 0


def _profile_for_original(original: Path, candidates: Sequence[EncodingProfile]) -> EncodingProfile:
    """Re-detect the encoding the original was converted with, defaulting to the first candidate."""
    if original.is_file():
        result = decode_with_candidates(
            original.read_bytes(), candidates, diagnostics=NullDiagnosticObserver()
        )
        if result.ok:
            return result.profile
    return candidates[0]


def run_save_command(argv: List[str]) -> int:
    parser = _parser("save", "Write a shadow file back over its original in the legacy encoding")
    parser.add_argument("shadow", help="Shadow file inside a .freebidi directory")
    _add_encoding_option(parser)
    args = parser.parse_args(argv)
    settings = _setup(args)

    shadow = Path(args.shadow)
    _require_file(shadow)
    try:
        original = original_path_for(shadow, settings.shadow_dir_name)
    except ShadowPathError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    diagnostics = ConsoleDiagnosticObserver()
    profile = _profile_for_original(original, _candidates(settings, args, diagnostics))
    try:
        data = reverse_transform(
            read_shadow(shadow), profile, document=str(original), diagnostics=diagnostics
        )
    except UnmappableCodePointError as e:
        console.print(f"[red]Failed to save {original.name}: {e}[/red]")
        return 1

    write_original(shadow, data, settings.shadow_dir_name)
    console.print(f"[green]Saved[/green] {original} (encoding: {profile.name})")
    return 0


def run_clean_command(argv: List[str]) -> int:
    parser = _parser("clean", "Delete a shadow file")
    parser.add_argument("shadow", help="Shadow file inside a .freebidi directory")
    args = parser.parse_args(argv)
    settings = _setup(args)

    try:
        removed = remove_shadow(args.shadow, settings.shadow_dir_name)
    except ShadowPathError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    if removed:
        console.print(f"Deleted temporary file: {args.shadow}")
    else:
        console.print(f"File already deleted: {args.shadow}")
    return 0


def run_check_command(argv: List[str]) -> int:
    parser = _parser("check", "Report the detected encoding and RTL runs of a file without writing anything")
    parser.add_argument("path", help="Source file in a legacy single-byte encoding")
    _add_encoding_option(parser)
    args = parser.parse_args(argv)
    settings = _setup(args)

    path = Path(args.path)
    _require_file(path)
    diagnostics = ConsoleDiagnosticObserver()
    result = decode_with_candidates(
        path.read_bytes(),
        _candidates(settings, args, diagnostics),
        document=str(path),
        diagnostics=diagnostics,
    )
    if not result.ok:
        console.print(f"{path}: [yellow]{result.failure.describe()}[/yellow] ({result.profile.name})")
        return 1

    runs = find_script_runs(result.text, result.profile)
    console.print(f"{path}: [bold]{result.profile.name}[/bold], {len(runs)} RTL run(s)")
    if result.replaced_bytes:
        console.print(f"[yellow]{result.replaced_bytes} undefined byte(s) would not survive a save[/yellow]")
    return 0


def run_preview_command(argv: List[str]) -> int:
    parser = _parser("preview", "Print a legacy RTL file in visual order")
    parser.add_argument("path", help="Source file in a legacy single-byte encoding")
    _add_encoding_option(parser)
    args = parser.parse_args(argv)
    settings = _setup(args)

    path = Path(args.path)
    _require_file(path)
    diagnostics = ConsoleDiagnosticObserver()
    result = decode_with_candidates(
        path.read_bytes(),
        _candidates(settings, args, diagnostics),
        document=str(path),
        diagnostics=diagnostics,
    )
    if not result.ok:
        console.print(f"[yellow]No RTL text found in {path}[/yellow]")
        return 1

    for number, line in enumerate(result.text.splitlines(), start=1):
        console.print(f"{number:>5}  {terminal_display(line)}", markup=False, highlight=False)
    return 0


COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "convert": run_convert_command,
    "save": run_save_command,
    "clean": run_clean_command,
    "check": run_check_command,
    "preview": run_preview_command,
}

USAGE = """usage: free-bidi <command> [options]

Commands:
  convert PATH     write the marked UTF-8 shadow of a legacy RTL file
  save SHADOW      write a shadow back over its original
  clean SHADOW     delete a shadow file
  check PATH       report encoding and RTL runs
  preview PATH     print a file in visual order
"""


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv or argv[0] in ("-h", "--help"):
        console.print(USAGE, markup=False, highlight=False)
        return 0 if argv else 2

    command = COMMANDS.get(argv[0])
    if command is None:
        console.print(f"[red]Unknown command '{argv[0]}'[/red]")
        console.print(USAGE, markup=False, highlight=False)
        return 2

    try:
        return command(argv[1:])
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 1


if __name__ == "__main__":
    sys.exit(main())

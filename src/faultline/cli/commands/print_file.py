"""Print-file demonstration command for faultline.

Purpose:
    Print a file to standard output, attaching the file name and the
    operating-system error number to any failure on the way, and map failures
    to exit codes at the top level using plain ``except`` clauses plus the
    retrieval combinator.
External Dependencies:
    Uses `typer` for argument parsing and `rich` for error output. Reads the
    requested file from the local filesystem.
Fallback Semantics:
    Failures outside the known hierarchy are reported with a diagnostic dump
    of every attached payload and exit code 6.
Timeout Strategy:
    Not applicable; a single local file is read synchronously.

Exit codes:
    0 success, 1 bad command line, 2 file could not be opened, 3 other I/O
    failure, 6 unknown failure.
"""

import errno
import logging
import os
import sys
from typing import Annotated, BinaryIO, List, Optional, TextIO

import typer
from rich.console import Console

from faultline import (
    Attempt,
    Errno,
    FileName,
    current_exception_diagnostic_information,
    on_error,
    raise_error,
    retrieve,
    unwrap,
)

logger = logging.getLogger(__name__)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

demo_app = typer.Typer(name="demo", help="Demonstration programs built on faultline.")


# Failure hierarchy of the demo.
class PrintFileError(Exception):
    pass


class CommandLineError(PrintFileError):
    pass


class BadCommandLine(CommandLineError):
    pass


class InputOutputError(PrintFileError):
    pass


class FileError(InputOutputError):
    pass


class FopenError(FileError):
    pass


class FreadError(FileError):
    pass


class FtellError(FileError):
    pass


class FseekError(FileError):
    pass


def file_open(file_name: str) -> BinaryIO:
    try:
        return open(file_name, "rb")
    except OSError as e:
        raise_error(FopenError(str(e)), FileName(file_name), Errno.current)


def file_size(f: BinaryIO) -> int:
    with on_error(Errno.current):
        try:
            f.seek(0, os.SEEK_END)
        except OSError as e:
            raise FseekError(str(e)) from e
        try:
            size = f.tell()
        except OSError as e:
            raise FtellError(str(e)) from e
        try:
            f.seek(0, os.SEEK_SET)
        except OSError as e:
            raise FseekError(str(e)) from e
        return size


def file_read(f: BinaryIO, size: int) -> bytes:
    try:
        data = f.read(size)
    except OSError as e:
        raise_error(FreadError(str(e)), Errno.current)
    if len(data) != size:
        raise FreadError(f"expected {size} bytes, read {len(data)}")
    return data


def print_file(file_name: str, out: TextIO) -> None:
    with on_error(FileName(file_name)):
        with file_open(file_name) as f:
            data = file_read(f, file_size(f))
        out.write(data.decode("utf-8", errors="replace"))


def parse_command_line(args: List[str]) -> str:
    if len(args) != 1:
        raise BadCommandLine(f"expected exactly one file name, got {len(args)} argument(s)")
    return args[0]


def _report_open_failure(file_name: FileName, errn: Errno) -> None:
    if errn.value == errno.ENOENT:
        err_console.print(f"File not found: {file_name}", markup=False)
    else:
        err_console.print(f"Failed to open {file_name}, errno={errn.value}", markup=False)


def run_print_file(args: List[str], out: TextIO) -> int:
    """Run the demonstration and return its exit code."""

    # Declared before the risky call so it is in scope in the except clauses.
    with retrieve(FileName, Errno) as info:
        try:
            print_file(parse_command_line(args), out)
        except BadCommandLine:
            err_console.print("Bad command line argument", markup=False)
            return 1
        except FopenError:
            unwrap(info.match(Attempt((FileName, Errno), _report_open_failure)))
            return 2
        except InputOutputError:
            unwrap(info.match(
                Attempt(
                    (FileName, Errno),
                    lambda fn, errn: err_console.print(f"Failed to access {fn}, errno={errn.value}", markup=False),
                ),
                Attempt((Errno,), lambda errn: err_console.print(f"I/O error, errno={errn.value}", markup=False)),
                Attempt((), lambda: err_console.print("I/O error", markup=False)),
            ))
            return 3
        except Exception:
            logger.debug("Unrecognised failure in print-file", exc_info=True)
            err_console.print("Unknown error, cryptic information follows.", markup=False)
            err_console.print(current_exception_diagnostic_information(), markup=False, end="")
            return 6
    return 0


@demo_app.command("print-file")
def print_file_command(
    args: Annotated[Optional[List[str]], typer.Argument(help="Exactly one file to print.")] = None,
) -> None:
    """
    Print a file, reporting failures with the payloads attached on the way up.
    """
    code = run_print_file(list(args or []), sys.stdout)
    if code:
        raise typer.Exit(code=code)


__all__ = [
    "BadCommandLine",
    "CommandLineError",
    "FileError",
    "FopenError",
    "FreadError",
    "FseekError",
    "FtellError",
    "InputOutputError",
    "PrintFileError",
    "demo_app",
    "print_file",
    "run_print_file",
]

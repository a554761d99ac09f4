"""A minimal interactive shell that runs pipelines of commands."""

from __future__ import annotations

import subprocess
import sys

PROMPT = "Shell> "
_EXIT_COMMANDS = ("exit", "q")


def is_exit_command(cmd: str) -> bool:
    """Tell whether the whole line asks the shell to exit."""
    return cmd in _EXIT_COMMANDS


def parse_args(command: str) -> list:
    """Split a command into arguments on spaces; a leading double quote groups words."""
    args = []
    pos = 0
    length = len(command)
    while pos < length:
        while pos < length and command[pos] == " ":
            pos += 1
        if pos >= length:
            break
        if command[pos] == '"':
            end = command.find('"', pos + 1)
            if end == -1:
                args.append(command[pos + 1:])
                pos = length
            else:
                args.append(command[pos + 1:end])
                pos = end + 1
        else:
            end = command.find(" ", pos)
            if end == -1:
                end = length
            args.append(command[pos:end])
            pos = end
    return args


def split_pipeline(line: str) -> list:
    """Split a line on '|', dropping empty segments."""
    return [segment for segment in line.split("|") if segment]


def _close(stream) -> None:
    if stream not in (None, subprocess.DEVNULL):
        stream.close()


def run_pipeline(line: str) -> list:
    """Run every command of the pipeline connected by pipes; return their exit codes."""
    segments = split_pipeline(line)
    sys.stdout.flush()
    sys.stderr.flush()

    launched = []
    upstream = None
    for position, segment in enumerate(segments):
        is_last = position == len(segments) - 1
        args = parse_args(segment)
        try:
            if not args:
                raise OSError("empty command")
            proc = subprocess.Popen(
                args,
                stdin=upstream,
                stdout=None if is_last else subprocess.PIPE,
            )
        except OSError as exc:
            reason = exc.strerror or str(exc)
            sys.stderr.write(f"execvp: {reason}\n")
            sys.stderr.flush()
            launched.append(None)
            _close(upstream)
            upstream = subprocess.DEVNULL
            continue
        _close(upstream)
        upstream = proc.stdout
        launched.append(proc)
    _close(upstream)

    return [1 if proc is None else proc.wait() for proc in launched]


def main(argv=None) -> int:
    while True:
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            break
        line = line.removesuffix("\n")
        if is_exit_command(line):
            break
        run_pipeline(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
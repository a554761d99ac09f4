"""Pass a counter around a ring of processes connected by pipes."""

from __future__ import annotations

import multiprocessing
import queue
import re
import sys

_USAGE = "Uso: anillo <n> <c> <s>\n"
_LOG_TIMEOUT = 60.0
_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _increment(x: int) -> int:
    """Add one with the wrap-around of a 32-bit signed integer."""
    x = (x + 1) & 0xFFFFFFFF
    return x - (1 << 32) if x >= 1 << 31 else x


def _member(index, n, start, value, inbox, outbox, log) -> None:
    """Body of one ring member: receive, report, increment, forward."""
    hop = (index - start) % n
    if index == start:
        x = value
        log.put((hop, f"Proceso {index} recibió {x}\n", x))
        outbox.send(_increment(x))
        x = inbox.recv()
        log.put((n, f"Resultado final recibido por el proceso {index}: {x}\n", x))
    else:
        x = inbox.recv()
        log.put((hop, f"Proceso {index} recibió {x}\n", x))
        outbox.send(_increment(x))
    inbox.close()
    outbox.close()


def _validate(n: int, value: int, start: int) -> None:
    if n <= 0:
        raise ValueError("Error: la cantidad de procesos debe ser mayor a 0.")
    if value < 0:
        raise ValueError("Error: el valor inicial debe ser no negativo.")
    if start < 0 or start >= n:
        raise ValueError(f"Error: el proceso inicial debe estar entre 0 y {n - 1}.")


def run_ring(n: int, value: int, start: int, out=None) -> int:
    """Run a ring of n processes starting at process start; return the final value."""
    out = sys.stdout if out is None else out
    _validate(n, value, start)

    pipes = [multiprocessing.Pipe(duplex=False) for _ in range(n)]
    log = multiprocessing.Queue()
    members = [
        multiprocessing.Process(
            target=_member,
            args=(i, n, start, value, pipes[i][0], pipes[(i + 1) % n][1], log),
        )
        for i in range(n)
    ]
    for member in members:
        member.start()

    try:
        messages = [log.get(timeout=_LOG_TIMEOUT) for _ in range(n + 1)]
    except queue.Empty as exc:
        for member in members:
            member.terminate()
        raise RuntimeError("the ring stopped before the value came back") from exc
    finally:
        for member in members:
            member.join()
        for reader, writer in pipes:
            reader.close()
            writer.close()
        log.close()

    messages.sort(key=lambda message: message[0])
    for _, text, _ in messages:
        out.write(text)
    out.flush()
    return messages[-1][2]


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        sys.stderr.write(_USAGE)
        return 1
    n, value, start = (_atoi(arg) for arg in args)
    try:
        run_ring(n, value, start, sys.stdout)
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Interactive shell around the instruction-level simulator."""

from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass, field

from .memory import MEM_TEXT_START, Memory

ARM_REGS = 32
_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF

HELP_TEXT = (
    "----------------ARM ISIM Help-----------------------\n"
    "go               -  run program to completion         \n"
    "run n            -  execute program for n instructions\n"
    "mdump low high   -  dump memory from low to high      \n"
    "rdump            -  dump the register & bus values    \n"
    "input reg_no reg_value - set GPR reg_no to reg_value  \n"
    "?                -  display this help menu            \n"
    "quit             -  exit the program                  \n\n"
)


class ProgramError(Exception):
    """Raised when a program file cannot be loaded."""


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _parse_c_int(text: str) -> int:
    """Parse an integer the way scanf's %i does (decimal, 0x hex or 0 octal)."""
    sign = 1
    body = text
    if body[:1] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body[:2].lower() == "0x":
        value = int(body[2:], 16)
    elif len(body) > 1 and body[0] == "0":
        value = int(body[1:], 8)
    else:
        value = int(body, 10)
    return _signed(sign * value, 32)


def _parse_hex64(text: str) -> int:
    return _signed(int(text, 16), 64)


@dataclass
class CPUState:
    """Architectural state: program counter, register file and flags."""

    pc: int = 0
    regs: list = field(default_factory=lambda: [0] * ARM_REGS)
    flag_n: int = 0
    flag_z: int = 0

    def copy(self) -> "CPUState":
        return CPUState(self.pc, list(self.regs), self.flag_n, self.flag_z)


class _Tokens:
    """Whitespace-separated tokens drawn lazily from lines, with push-back."""

    def __init__(self, lines):
        self._lines = iter(lines)
        self._pending = deque()

    def next(self):
        while not self._pending:
            line = next(self._lines, None)
            if line is None:
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()

    def push_back(self, token: str) -> None:
        self._pending.appendleft(token)


class Simulator:
    """A simulated machine with memory, current and next CPU state."""

    def __init__(self, out=None, dump_file=None):
        self.out = sys.stdout if out is None else out
        self.dump_file = dump_file
        self.memory = Memory()
        self.current_state = CPUState()
        self.next_state = CPUState()
        self.run_bit = True
        self.instruction_count = 0
        self.last_instruction = None

    def _emit(self, text: str) -> None:
        self.out.write(text)
        if self.dump_file is not None:
            self.dump_file.write(text)

    def load_program(self, path) -> int:
        """Load hexadecimal words into the text segment; return the word count."""
        try:
            with open(path, "r") as handle:
                tokens = handle.read().split()
        except OSError as exc:
            raise ProgramError(f"Error: Can't open program file {path}") from exc
        count = 0
        for token in tokens:
            try:
                word = int(token, 16)
            except ValueError:
                raise ProgramError(f"Error: Malformed program file {path}") from None
            self.memory.write_32(MEM_TEXT_START + 4 * count, word)
            count += 1
        self.current_state.pc = MEM_TEXT_START
        self.next_state = self.current_state.copy()
        self.run_bit = True
        self.out.write(f"Read {count} words from program into memory.\n\n")
        return count

    def process_instruction(self) -> None:
        """Fetch the instruction at the current PC.

        No instruction set is defined here; subclasses decode
        ``last_instruction`` and update ``next_state``.
        """
        self.last_instruction = self.memory.read_32(self.current_state.pc)

    def cycle(self) -> None:
        """Execute one instruction and latch the next state."""
        self.process_instruction()
        self.current_state = self.next_state.copy()
        self.instruction_count += 1

    def run(self, num_cycles: int) -> None:
        if not self.run_bit:
            self.out.write("Can't simulate, Simulator is halted\n\n")
            return
        self.out.write(f"Simulating for {num_cycles} cycles...\n\n")
        for _ in range(num_cycles):
            if not self.run_bit:
                self.out.write("Simulator halted\n\n")
                break
            self.cycle()

    def go(self) -> None:
        if not self.run_bit:
            self.out.write("Can't simulate, Simulator is halted\n\n")
            return
        self.out.write("Simulating...\n\n")
        while self.run_bit:
            self.cycle()
        self.out.write("Simulator halted\n\n")

    def mdump(self, start: int, stop: int) -> None:
        """Dump the words from start to stop inclusive."""
        lines = [
            f"\nMemory content [0x{start & _U32:08x}..0x{stop & _U32:08x}] :\n",
            "-------------------------------------\n",
        ]
        for address in range(start, stop + 1, 4):
            lines.append(
                f"  0x{address & _U32:08x} ({_signed(address, 32)}) : "
                f"0x{self.memory.read_32(address):x}\n"
            )
        lines.append("\n")
        self._emit("".join(lines))

    def rdump(self) -> None:
        """Dump the instruction count, PC, registers and flags."""
        state = self.current_state
        lines = [
            "\nCurrent register/bus values :\n",
            "-------------------------------------\n",
            f"Instruction Count : {self.instruction_count & _U32}\n",
            f"PC                : 0x{state.pc & _U64:x}\n",
            "Registers:\n",
        ]
        lines.extend(f"X{k}: 0x{value & _U64:x}\n" for k, value in enumerate(state.regs))
        lines.append(f"FLAG_N: {state.flag_n}\n")
        lines.append(f"FLAG_Z: {state.flag_z}\n")
        lines.append("\n")
        self._emit("".join(lines))

    def help(self) -> None:
        self.out.write(HELP_TEXT)

    def _set_register(self, tokens: _Tokens) -> None:
        number_text = tokens.next()
        if number_text is None:
            return
        try:
            number = _parse_c_int(number_text)
        except ValueError:
            tokens.push_back(number_text)
            return
        value_text = tokens.next()
        if value_text is None:
            return
        try:
            value = _parse_hex64(value_text)
        except ValueError:
            tokens.push_back(value_text)
            return
        if 0 <= number < ARM_REGS:
            self.current_state.regs[number] = value
            self.next_state.regs[number] = value

    def _dispatch(self, command: str, tokens: _Tokens) -> bool:
        head = command[0].lower()
        if head == "g":
            self.go()
        elif head == "m":
            bounds = []
            for _ in range(2):
                token = tokens.next()
                if token is None:
                    return True
                try:
                    bounds.append(_parse_c_int(token))
                except ValueError:
                    tokens.push_back(token)
                    return True
            self.mdump(*bounds)
        elif head == "?":
            self.help()
        elif head == "q":
            self.out.write("Bye.\n")
            return False
        elif head == "r":
            if command[1:2] in ("d", "D"):
                self.rdump()
            else:
                token = tokens.next()
                if token is None:
                    return True
                try:
                    cycles = int(token, 10)
                except ValueError:
                    tokens.push_back(token)
                    return True
                self.run(cycles)
        elif head == "i":
            self._set_register(tokens)
        else:
            self.out.write("Invalid Command\n")
        return True

    def handle_line(self, line: str) -> bool:
        """Run one command line; return False once the user asks to quit."""
        tokens = _Tokens([line])
        command = tokens.next()
        if command is None:
            return True
        return self._dispatch(command, tokens)

    def repl(self, stream) -> None:
        """Prompt for and run commands read from stream until quit or end of input."""
        tokens = _Tokens(stream)
        while True:
            self.out.write("ARM-SIM> ")
            command = tokens.next()
            if command is None:
                return
            self.out.write("\n")
            if not self._dispatch(command, tokens):
                return


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stdout.write("Error: usage: sim <program_file_1> <program_file_2> ...\n")
        return 1
    sys.stdout.write("ARM Simulator\n\n")
    simulator = Simulator(sys.stdout)
    try:
        for path in args:
            simulator.load_program(path)
    except ProgramError as exc:
        sys.stdout.write(f"{exc}\n")
        return 255
    try:
        dump_file = open("dumpsim", "w")
    except OSError:
        sys.stdout.write("Error: Can't open dumpsim file\n")
        return 255
    with dump_file:
        simulator.dump_file = dump_file
        simulator.repl(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
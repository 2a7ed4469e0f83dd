"""A small register machine with a flat byte memory and fixed-size instructions."""

from __future__ import annotations

import operator
import struct
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, TextIO

MEMORY_SIZE = 1 << 10
INSTRUCTION_SEGMENT_SIZE = 1 << 9
STACK_SIZE = 1 << 8
DATA_SIZE = MEMORY_SIZE - STACK_SIZE - INSTRUCTION_SEGMENT_SIZE

STACK_BASE = MEMORY_SIZE - STACK_SIZE
INSTRUCTION_BASE = STACK_BASE - INSTRUCTION_SEGMENT_SIZE
DATA_BASE = 0

WORD_MASK = 0xFFFF
WORD_SIZE = 2

# Compare results above this are negative when read as signed words.
_SIGNED_LIMIT = 32767

_SEPARATOR = "-" * 40 + "\n"
_LINE_WIDTH = 32
_BLOCK_WIDTH = 8


class Operation(IntEnum):
    """Instruction opcodes."""

    PASS = 0x00
    MOV = 0x01
    MOV_OUT = 0x02
    ADD = 0x03
    SUB = 0x04
    MUL = 0x05
    DIV = 0x06
    MOD = 0x07
    AND = 0x08
    OR = 0x09
    XOR = 0x0A
    NOT = 0x0B
    CMP = 0x0C
    JMP = 0x0D
    JE = 0x0E
    JNE = 0x0F
    JG = 0x10
    JL = 0x11
    JGE = 0x12
    JLE = 0x13
    CALL = 0x14
    RET = 0x15
    OUT = 0x16


class Register(IntEnum):
    """General-purpose registers; SF holds the machine's run flag."""

    AX = 0x00
    BX = 0x01
    CX = 0x02
    DX = 0x03
    SF = 0x04


class Flag(IntEnum):
    """Values of the run flag register."""

    ZF = 0x00
    EXT = 0x01


# The compare result and the return value share AX.
COMPARE_REGISTER = Register.AX
RETURN_REGISTER = Register.AX
FLAG_REGISTER = Register.SF


class InvalidAccessError(Exception):
    """Raised when the machine reads or writes outside its memory."""


_FORMAT = struct.Struct("<IHH")


@dataclass(frozen=True)
class Instruction:
    """One instruction: an opcode and two word arguments."""

    operation: Operation
    arg0: int = 0
    arg1: int = 0

    SIZE = _FORMAT.size

    def __post_init__(self) -> None:
        object.__setattr__(self, "operation", Operation(self.operation))
        for value in (self.arg0, self.arg1):
            if not 0 <= value <= WORD_MASK:
                raise ValueError(f"instruction argument {value} does not fit in a word")

    def encode(self) -> bytes:
        """Return the instruction's in-memory bytes."""
        return _FORMAT.pack(int(self.operation), self.arg0, self.arg1)

    @classmethod
    def decode(cls, data: bytes) -> Instruction:
        """Build an instruction from its in-memory bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(f"an instruction takes {cls.SIZE} bytes, got {len(data)}")
        code, arg0, arg1 = _FORMAT.unpack(data)
        return cls(Operation(code), arg0, arg1)


@dataclass
class _Segment:
    base: int
    size: int
    value: int = 0

    def start(self, address: int) -> None:
        self.base = address
        self.value = address

    def in_range(self, length: int = 0) -> bool:
        end = self.value + length
        return self.base <= end < self.base + self.size


_BINARY: dict[Operation, Callable[[int, int], int]] = {
    Operation.ADD: operator.add,
    Operation.SUB: operator.sub,
    Operation.MUL: operator.mul,
    Operation.DIV: operator.floordiv,
    Operation.MOD: operator.mod,
    Operation.AND: operator.and_,
    Operation.OR: operator.or_,
    Operation.XOR: operator.xor,
}

_JUMPS: dict[Operation, Callable[[int], bool]] = {
    Operation.JMP: lambda result: True,
    Operation.JE: lambda result: result == 0,
    Operation.JNE: lambda result: result != 0,
    Operation.JG: lambda result: result > 0,
    Operation.JL: lambda result: result > _SIGNED_LIMIT,
    Operation.JGE: lambda result: result >= 0,
    Operation.JLE: lambda result: result >= _SIGNED_LIMIT,
}


class VirtualMachine:
    """Loads instructions into memory and runs them until RET."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._memory = bytearray(MEMORY_SIZE)
        self._registers = [0] * len(Register)
        self._sp = _Segment(STACK_BASE, STACK_SIZE)
        self._ip = _Segment(INSTRUCTION_BASE, INSTRUCTION_SEGMENT_SIZE)
        self._ds = _Segment(DATA_BASE, DATA_SIZE)
        self.reset()

    @property
    def registers(self) -> dict[Register, int]:
        """A snapshot of every register's value."""
        return {register: self._registers[register] for register in Register}

    @property
    def exit_code(self) -> int:
        """The value held in the return register."""
        return self._registers[RETURN_REGISTER]

    def reset(self) -> None:
        """Clear memory and registers and move every segment pointer to its base."""
        self._memory[:] = bytes(MEMORY_SIZE)
        self._registers = [0] * len(Register)
        self._sp.start(MEMORY_SIZE - STACK_SIZE)
        self._ip.start(self._sp.base - INSTRUCTION_SEGMENT_SIZE)
        self._ds.start(DATA_BASE)

    def execute(self, instructions: Iterable[Instruction]) -> int:
        """Load the instructions, run them until RET and return the exit code."""
        for instruction in instructions:
            self._write_segment(self._ip, instruction.encode())

        self._out.write(self.dump_memory())

        self._ip.value = self._ip.base
        while self._registers[FLAG_REGISTER] == Flag.ZF:
            self._step()

        self._out.write(f"VM Exit with code: {self.exit_code:x}\n")
        self._out.write("\n")
        self._out.write(self.dump_memory())
        return self.exit_code

    def read_memory(self, address: int, length: int) -> bytes:
        """Return a copy of ``length`` bytes starting at ``address``."""
        if address < 0 or length < 0 or address + length > MEMORY_SIZE:
            raise InvalidAccessError(
                f"Invalid memory access: reading 0x{address:08x}, length {length}"
            )
        return bytes(self._memory[address:address + length])

    def dump_memory(self) -> str:
        """Return a coloured hex dump of every segment and the registers."""
        parts = [
            f"Memory ({MEMORY_SIZE} bytes):\n",
            _SEPARATOR,
            f"Data Segment ({self._ds.size} bytes):\n\033[32m",
            self._dump_segment(self._ds),
            "\033[0m",
            _SEPARATOR,
            f"Instruction Segment ({self._ip.size} bytes):\n\033[36m",
            self._dump_segment(self._ip),
            "\033[0m",
            _SEPARATOR,
            f"Stack Segment ({self._sp.size} bytes):\n\033[34m",
            self._dump_segment(self._sp),
            "\033[0m",
            _SEPARATOR,
            "General Registers:\n",
        ]
        parts.extend(f"  {register.name}: {self._registers[register]:x}\n" for register in Register)
        parts.append(_SEPARATOR)
        return "".join(parts)

    def _dump_segment(self, segment: _Segment) -> str:
        parts = []
        data = self._memory[segment.base:segment.base + segment.size]
        for offset, byte in enumerate(data, start=1):
            if (offset - 1) % _LINE_WIDTH == 0:
                parts.append(f"[{segment.base + offset - 1:08x}]: ")
            parts.append(f"{byte:02x} ")
            if offset % _LINE_WIDTH == 0:
                parts.append("\n")
            elif offset % _BLOCK_WIDTH == 0:
                parts.append("- ")
        return "".join(parts)

    def _write_segment(self, segment: _Segment, data: bytes) -> None:
        if not segment.in_range(len(data)):
            raise InvalidAccessError(
                f"Invalid memory access: writing {len(data)} bytes at 0x{segment.value:08x}"
            )
        self._write(segment.value, data)
        segment.value += len(data)

    def _write(self, address: int, data: bytes) -> None:
        if address < 0 or address >= MEMORY_SIZE or address + len(data) > MEMORY_SIZE:
            raise InvalidAccessError(f"Invalid memory access: writing at 0x{address:08x}")
        self._memory[address:address + len(data)] = data
        end = address + len(data)
        spaced = "".join(f"{byte:02x} " for byte in data)
        self._out.write(
            f"Write [{address & 0xFFFFFFFF:08x} - {end & 0xFFFFFFFF:08x}]: {spaced}\n"
        )

    def _fetch(self) -> bytes:
        size = Instruction.SIZE
        start = self._ip.value
        if start + size > MEMORY_SIZE:
            raise InvalidAccessError(
                f"Invalid memory access: reading 0x{start:08x}, length {size}, "
                f"at 0x{start - size:08x}"
            )
        self._ip.value += size
        return bytes(self._memory[start:start + size])

    def _step(self) -> None:
        try:
            instruction = Instruction.decode(self._fetch())
        except ValueError:
            # Unknown opcodes are skipped.
            return
        self._run(instruction)

    def _run(self, instruction: Instruction) -> None:
        op, arg0, arg1 = instruction.operation, instruction.arg0, instruction.arg1
        regs = self._registers

        if op in _BINARY:
            target, source = Register(arg0), Register(arg1)
            regs[target] = _BINARY[op](regs[target], regs[source]) & WORD_MASK
        elif op in _JUMPS:
            if _JUMPS[op](regs[COMPARE_REGISTER]):
                self._ip.value = self._ip.base + arg0 * Instruction.SIZE
        elif op is Operation.MOV:
            regs[Register(arg0)] = arg1
        elif op is Operation.MOV_OUT:
            value = regs[Register(arg0)]
            self._write(arg1, value.to_bytes(WORD_SIZE, "little"))
        elif op is Operation.NOT:
            register = Register(arg0)
            regs[register] = ~regs[register] & WORD_MASK
        elif op is Operation.CMP:
            first, second = Register(arg0), Register(arg1)
            regs[COMPARE_REGISTER] = (regs[first] - regs[second]) & WORD_MASK
        elif op is Operation.RET:
            regs[RETURN_REGISTER] = arg0
            regs[FLAG_REGISTER] = Flag.EXT
        elif op is Operation.OUT:
            self._out.write(chr(regs[Register(arg0)] & 0xFF))
        # PASS and CALL do nothing.
"""Boolean circuits in the Bristol Fashion format and their plain evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator


class CircuitError(ValueError):
    """Raised for malformed circuit descriptions or invalid evaluation input."""


class GateType(Enum):
    """Gate kinds supported by the format; values are the names used in files."""

    AND = "AND"
    XOR = "XOR"
    NOT = "INV"


@dataclass(frozen=True)
class Gate:
    """A single gate. For NOT gates ``right_input_wire`` is 0 and unused."""

    left_input_wire: int
    right_input_wire: int
    output_wire: int
    gate_type: GateType


def _to_int(field: str) -> int:
    try:
        value = int(field)
    except ValueError:
        raise CircuitError(f"expected a non-negative integer, got {field!r}") from None
    if value < 0:
        raise CircuitError(f"expected a non-negative integer, got {field!r}")
    return value


def _sized_list(fields: list[str], what: str) -> int:
    """Parse ``count size_1 ... size_count`` and return the total size."""
    if not fields:
        raise CircuitError(f"missing {what} description")
    count = _to_int(fields[0])
    sizes = fields[1:]
    if len(sizes) < count:
        raise CircuitError(f"{what} line declares {count} entries but lists {len(sizes)}")
    return sum(_to_int(size) for size in sizes[:count])


def _parse_gate(fields: list[str], num_wires: int) -> Gate:
    if len(fields) < 2:
        raise CircuitError(f"truncated gate line: {' '.join(fields)!r}")
    num_inputs, num_outputs = _to_int(fields[0]), _to_int(fields[1])
    if num_inputs not in (1, 2):
        raise CircuitError(f"gates must have one or two inputs, got {num_inputs}")
    if num_outputs != 1:
        raise CircuitError(f"gates must have exactly one output, got {num_outputs}")
    if len(fields) < 4 + num_inputs:
        raise CircuitError(f"truncated gate line: {' '.join(fields)!r}")
    wires = [_to_int(field) for field in fields[2 : 3 + num_inputs]]
    name = fields[3 + num_inputs]
    try:
        gate_type = GateType(name)
    except ValueError:
        raise CircuitError(f"unknown gate type: {name}") from None
    expected_inputs = 1 if gate_type is GateType.NOT else 2
    if num_inputs != expected_inputs:
        raise CircuitError(f"{name} gate needs {expected_inputs} inputs, got {num_inputs}")
    if any(wire >= num_wires for wire in wires):
        raise CircuitError(f"gate refers to a wire beyond {num_wires - 1}")
    if num_inputs == 2:
        left, right, output = wires
    else:
        (left, output), right = wires, 0
    return Gate(left, right, output, gate_type)


@dataclass(frozen=True)
class BristolCircuit:
    """A parsed circuit: wire counts and the gates in evaluation order."""

    num_wires: int
    num_input_bits: int
    num_output_bits: int
    gates: tuple[Gate, ...]

    @classmethod
    def from_file(cls, path: str | Path) -> "BristolCircuit":
        """Read and parse a circuit file."""
        return cls.parse(Path(path).read_text())

    @classmethod
    def parse(cls, text: str) -> "BristolCircuit":
        """Parse the text of a Bristol Fashion circuit."""
        lines = (line.split() for line in text.splitlines())
        non_empty: Iterator[list[str]] = (fields for fields in lines if fields)

        def next_line(what: str) -> list[str]:
            fields = next(non_empty, None)
            if fields is None:
                raise CircuitError(f"unexpected end of circuit while reading {what}")
            return fields

        header = next_line("the header")
        if len(header) < 2:
            raise CircuitError("header must give the gate and wire counts")
        num_gates, num_wires = _to_int(header[0]), _to_int(header[1])
        num_input_bits = _sized_list(next_line("the inputs"), "input")
        num_output_bits = _sized_list(next_line("the outputs"), "output")
        if num_input_bits > num_wires or num_output_bits > num_wires:
            raise CircuitError("more input or output bits than wires")
        gates = tuple(_parse_gate(next_line("a gate"), num_wires) for _ in range(num_gates))
        return cls(num_wires, num_input_bits, num_output_bits, gates)

    @property
    def and_gate_ids(self) -> list[int]:
        """Positions of the AND gates within ``gates``."""
        return [i for i, gate in enumerate(self.gates) if gate.gate_type is GateType.AND]

    @property
    def and_gate_output_wires(self) -> list[int]:
        """Output wires of the AND gates, in gate order."""
        return [self.gates[i].output_wire for i in self.and_gate_ids]

    @property
    def output_wires(self) -> list[int]:
        """The output wires: the last ``num_output_bits`` wires."""
        return list(range(self.num_wires - self.num_output_bits, self.num_wires))

    def compute_output_bits(self, input_bits: Iterable[int]) -> list[int]:
        """Evaluate the circuit on clear input bits and return the output bits."""
        bits = list(input_bits)
        if len(bits) != self.num_input_bits:
            raise CircuitError(f"expected {self.num_input_bits} input bits, got {len(bits)}")
        if any(bit not in (0, 1) for bit in bits):
            raise CircuitError("input bits must be 0 or 1")

        wires: list[int | None] = [None] * self.num_wires
        wires[: len(bits)] = bits

        def value(wire: int) -> int:
            bit = wires[wire]
            if bit is None:
                raise CircuitError(f"wire {wire} is read before it is assigned")
            return bit

        for gate in self.gates:
            left = value(gate.left_input_wire)
            if gate.gate_type is GateType.NOT:
                result = left ^ 1
            elif gate.gate_type is GateType.AND:
                result = left & value(gate.right_input_wire)
            else:
                result = left ^ value(gate.right_input_wire)
            wires[gate.output_wire] = result

        return [value(wire) for wire in self.output_wires]
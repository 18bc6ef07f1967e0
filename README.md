# pagc

Building blocks for publicly auditable two-party computation with garbled
circuits and VOLE-in-the-head proofs.

Field elements of GF(2^k) are plain Python integers and field addition is
XOR; bits are the integers 0 and 1.

## Modules

- `pagc.circuit`: read circuits in Bristol Fashion format
  (`BristolCircuit.from_file`, `BristolCircuit.parse`) and evaluate them on
  clear bits with `compute_output_bits`. Supported gates are `AND`, `XOR`
  and `INV` (`GateType`). The properties `and_gate_ids`,
  `and_gate_output_wires` and `output_wires` describe the circuit's layout.
  Malformed input raises `CircuitError`.
- `pagc.prg`: an AES-based length-doubling PRG (`OneToTwoPRG`) with
  `generate_double` and heap-ordered GGM tree expansion
  (`generate_ggm_tree`), and `BitAndComGenerator`, which turns a leaf seed
  into a bit vector and a 16-byte commitment. Seeds and keys are 16 bytes.
- `pagc.hashing`: a pure-Python BLAKE3 (`Blake3` with `update`, `digest`
  and `hexdigest`; `blake3` for one-shot hashing) and the helpers
  `hash_all_coms`, `expand_digest` (chained re-hashing of a digest) and
  `commit_pb_secret` (hashes the bit and the randomness; the MAC values are
  not part of the committed data).
- `pagc.vector_commitment`: the all-but-one vector commitment over a GGM
  tree that yields VOLE-in-the-head correlations over GF(2^8)
  (`VCParameters`, `VectorCommitmentProver`, `reconstruct`).
- `pagc.preprocessing`: an insecure, trusted-dealer stand-in for the
  preprocessing functionality: `generate_delta`, `random_field_element`,
  `generate_random_tuples` (authenticated bits), `generate_random_and_tuples`
  and `generate_random_authenticated_and_tuple`.
- `pagc.check_and`: both sides of the AND-check protocol on
  VOLE-in-the-head MACs and keys: `compute_masked_bits_and_macs`,
  `compute_masked_cross_bits_and_macs`, `CheckAndTranscript`, `verify` and
  `verify_vole_correlations`. A failed check raises `VoleCorrelationError`.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Evaluating a circuit (the path is to a Bristol Fashion file of your own):

```python
from pagc.circuit import BristolCircuit

circuit = BristolCircuit.from_file("adder64.txt")
a, b = 5, 7
bits = [(a >> i) & 1 for i in range(64)] + [(b >> i) & 1 for i in range(64)]
out = circuit.compute_output_bits(bits)
assert sum(bit << i for i, bit in enumerate(out)) == 12
```

Committing to a vector and opening everything except one position:

```python
import os
from pagc.prg import OneToTwoPRG
from pagc.vector_commitment import VCParameters, VectorCommitmentProver, reconstruct

params = VCParameters(tau=8, big_n=20, prg=OneToTwoPRG(os.urandom(16)))
prover = VectorCommitmentProver(params)
com_hash, bits, macs = prover.commit(os.urandom(16))
decommitment = prover.open(42)
reconstructed_hash, keys = reconstruct(params, 42, decommitment)

assert reconstructed_hash == com_hash
assert all(key == mac ^ (42 if bit else 0) for bit, mac, key in zip(bits, macs, keys))
```

`tau` must lie in 0..8 and `nabla` in `0 .. 2**tau - 1`.

## What the package does not do

- It ships no circuit files; `BristolCircuit` reads the ones you supply.
- It has no garbling, no networking between parties and no complete
  two-party protocol: it provides the building blocks listed above.
- It has no command-line interface.
- The preprocessing in `pagc.preprocessing` uses a trusted dealer and
  Python's `random` module; it is meant for testing and benchmarking only
  and is not secure.
"""Circuits, PRGs, BLAKE3 hashing, vector commitments and AND checks for garbled-circuit 2PC."""

__version__ = "0.1.0"
"""Aura language toolchain pieces: intermediate representation, constant folding and runtime intrinsics."""

__version__ = "0.2.10"
"""MIPS COFF reading, NOFF and flat conversion, simulated memory and system calls, and small data structures."""

__version__ = "0.1.0"
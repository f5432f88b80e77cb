"""Smart-contract toolkit: checked 256-bit math, an in-memory contract ensemble, contract status and SNIP-20 message types."""

__version__ = "0.1.0"
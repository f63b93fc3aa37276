"""Hash functions: Keccak-256."""

from .keccak import Keccak256, keccak256

__all__: tuple[str, ...] = ("Keccak256", "keccak256")

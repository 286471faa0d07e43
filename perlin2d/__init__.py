from .core import CANONICAL_PERMUTATION, GRADIENTS, fade, lerp
from .noise_2d import NoiseField, evaluate, noise
from .permutation import PermutationTable

__all__ = [
    "CANONICAL_PERMUTATION",
    "GRADIENTS",
    "NoiseField",
    "PermutationTable",
    "evaluate",
    "fade",
    "lerp",
    "noise",
]

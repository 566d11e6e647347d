"""Application layer - use cases and DTOs."""

from .commands import GenerateCrateCommand
from .dtos import CrateInput, CrateOutput, MaterialInput

__all__ = [
    "CrateInput",
    "CrateOutput",
    "GenerateCrateCommand",
    "MaterialInput",
]

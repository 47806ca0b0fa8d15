from dataclasses import dataclass

EXTENT = 4096

# Must stay in (0, 0.5): 0 trips up the simplifier, >= 0.5 merges grid cells
SIMPLIFY_TOLERANCE = 0.1


@dataclass
class MvtParams:
    extent: int = EXTENT
    simplify_tolerance: float = SIMPLIFY_TOLERANCE
    layer_name: str = "layer0"
    version: int = 2

    def __post_init__(self):
        if not isinstance(self.extent, int) or self.extent <= 0:
            raise ValueError(f"extent must be a positive integer, got {self.extent!r}")
        if not 0.0 < self.simplify_tolerance < 0.5:
            raise ValueError(
                f"simplify_tolerance must be in (0, 0.5), got {self.simplify_tolerance!r}"
            )
        if not self.layer_name:
            raise ValueError("layer_name must not be empty")
        if self.version not in (1, 2):
            raise ValueError(f"Unsupported MVT version {self.version!r}")

"""mizlab — local binary pattern histograms of 2-D trajectories.

    from mizlab import compute_histogram, rasterize

    rasterize(0, 0, 3, 3)                          # [(0, 0), (1, 1), (2, 2), (3, 3)]
    compute_histogram([0, 2, 0], [0, 0, 1]).shape  # (512,)
"""

from mizlab.errors import InvalidArgumentError, LengthMismatchError, MizlabError
from mizlab.local_patterns import compute_histogram, filled_cells, local_patterns
from mizlab.utils.patterns import HISTOGRAM_BINS, decode_pattern, encode_pattern, extract_patterns
from mizlab.utils.rasterizer import rasterize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "rasterize",
    "encode_pattern",
    "decode_pattern",
    "extract_patterns",
    "compute_histogram",
    "local_patterns",
    "filled_cells",
    "HISTOGRAM_BINS",
    "MizlabError",
    "InvalidArgumentError",
    "LengthMismatchError",
]

__all__ = [
    "__version__",
    "Aligner",
    "Mode",
    "align",
    "EditAligner",
    "edit_distance",
    "NOT_FOUND",
]

try:
    from ._version import version as __version__
except ImportError:  # pragma: no cover
    # not installed, for example when running from a source checkout
    __version__ = "unknown"

from .align import Aligner, Mode, align
from .editdistance import EditAligner, NOT_FOUND, edit_distance

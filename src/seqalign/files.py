import sys
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

import dnaio
from xopen import xopen

logger = logging.getLogger(__name__)


def read_sequences(path: str) -> List[dnaio.SequenceRecord]:
    """
    Read all records from a FASTA or FASTQ file. The format and the
    compression (.gz, .bz2, .xz, .zst) are detected automatically.
    """
    with dnaio.open(path) as reader:
        records = list(reader)
    logger.debug("Read %d record(s) from '%s'", len(records), path)
    return records


@contextmanager
def open_output(path: Optional[str]) -> Iterator[TextIO]:
    """
    Open a (possibly compressed) text file for writing. If path is None or
    "-", standard output is used and not closed afterwards.
    """
    if path is None or path == "-":
        yield sys.stdout
        return
    with xopen(path, "w") as f:
        logger.debug("Opening '%s' for writing with xopen resulted in %s", path, f)
        yield f

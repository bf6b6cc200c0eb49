#!/usr/bin/env python
#
# Copyright (c) 2026 The seqalign developers
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

"""
seqalign version {version}

Align two sequences or compute their edit distance.

Usage:
    seqalign [options] SEQ1 SEQ2

    seqalign --fasta [options] FILE1 FILE2

By default, SEQ1 and SEQ2 are the sequences themselves. They are split into
characters, words or lines (see --unit). With --fasta, the arguments are
FASTA or FASTQ files (possibly compressed), and the n-th record of FILE1 is
compared to the n-th record of FILE2.

Without -e, an optimal alignment is computed (global, prefix, suffix or
infix; see --mode). With -e, the edit distance is computed instead. If the
distance exceeds --max-distance, "not found" is printed.

Run "seqalign --help" to see all command-line options.
"""
import sys
import time
import shutil
import logging
import platform
from argparse import ArgumentParser, ArgumentTypeError, SUPPRESS, HelpFormatter
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Union

import dnaio

from seqalign import __version__
from seqalign.align import Aligner, Mode
from seqalign.editdistance import EditAligner, NOT_FOUND
from seqalign.files import open_output, read_sequences
from seqalign.log import setup_logging
from seqalign.report import OneLine, dumps as json_dumps, format_alignment
from seqalign.statistics import AlignmentStatistics
from seqalign.tokens import TokenizeError, Unit, tokenize

logger = logging.getLogger()

Number = Union[int, float]


class SeqalignArgumentParser(ArgumentParser):
    """
    This ArgumentParser customizes two things:
    - The usage message is not prefixed with 'usage:'
    - A brief message is shown on errors, not full usage
    """

    class CustomUsageHelpFormatter(HelpFormatter):
        def __init__(self, *args, **kwargs):
            kwargs["width"] = min(24 + 80, shutil.get_terminal_size().columns)
            super().__init__(*args, **kwargs)

        def add_usage(self, usage, actions, groups, prefix=None):
            if usage is not SUPPRESS:  # pragma: no cover
                args = usage, actions, groups, ""
                self._add_item(self._format_usage, args)

    def __init__(self, *args, **kwargs):
        kwargs["formatter_class"] = self.CustomUsageHelpFormatter
        kwargs["usage"] = kwargs["usage"].replace("{version}", __version__)
        super().__init__(*args, **kwargs)

    def error(self, message):
        print('Run "seqalign --help" to see command-line options.', file=sys.stderr)
        self.exit(2, f"\n{self.prog}: error: {message}\n")


class CommandLineError(Exception):
    pass


def parse_number(s: str) -> Number:
    """
    Parse an int if possible, a float otherwise

    >>> parse_number("-2"), parse_number("0.5")
    (-2, 0.5)
    """
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        raise ArgumentTypeError(f"'{s}' is not a number") from None


def parse_max_distance(s: str) -> int:
    try:
        value = int(s)
    except ValueError:
        raise ArgumentTypeError(f"'{s}' is not an integer") from None
    if value < 0:
        raise ArgumentTypeError("the maximum distance cannot be negative")
    return value


# fmt: off
def get_argument_parser() -> ArgumentParser:
    parser = SeqalignArgumentParser(usage=__doc__, add_help=False)
    group = parser.add_argument_group("Options")
    group.add_argument("-h", "--help", action="help", help="Show this help message and exit")
    group.add_argument("--version", action="version", help="Show version number and exit",
        version=__version__)
    group.add_argument("--debug", action="count", default=0,
        help="Print debug log. Use twice to also print DP matrices")
    group.add_argument("--quiet", default=False, action="store_true",
        help="Print only error messages")

    group = parser.add_argument_group("Input")
    group.add_argument("--fasta", action="store_true", default=False,
        help="Arguments are FASTA/FASTQ files instead of sequences")
    group.add_argument("--unit", choices=[u.value for u in Unit], default=Unit.CHARS.value,
        help="Split literal sequences into these elements. Default: %(default)s")

    group = parser.add_argument_group("Alignment",
        description="Options for computing an alignment (the default)")
    group.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.GLOBAL.value,
        help="'prefix' allows to skip the end of SEQ2 at no cost, 'suffix' "
            "its start, 'infix' both. Default: %(default)s")
    group.add_argument("--match", type=parse_number, default=1, metavar="SCORE",
        help="Score for a pair of equal elements. Default: %(default)s")
    group.add_argument("--mismatch", type=parse_number, default=-1, metavar="SCORE",
        help="Score for a pair of different elements. Default: %(default)s")
    group.add_argument("--gap-penalty", "--gap", type=parse_number, default=-1,
        metavar="SCORE", dest="gap_penalty",
        help="Score for a single gap. Default: %(default)s")

    group = parser.add_argument_group("Edit distance")
    group.add_argument("-e", "--edit-distance", action="store_true", default=False,
        help="Compute the edit distance instead of an alignment")
    group.add_argument("-k", "--max-distance", type=parse_max_distance, default=None,
        metavar="K",
        help="Do not compute edit distances greater than K. Default: unbounded")
    group.add_argument("-t", "--transpositions", action="store_true", default=False,
        help="Count exchanging two adjacent elements as one edit")

    group = parser.add_argument_group("Output")
    group.add_argument("-s", "--score-only", action="store_true", default=False,
        help="Print only the score or distance, not the alignment")
    group.add_argument("--gap-char", default="-", metavar="CHAR",
        help="Character that represents gaps in printed alignments. Default: '%(default)s'")
    group.add_argument("-o", "--output", default=None, metavar="FILE",
        help="Write results to FILE (compressed if it ends in .gz, .bz2, .xz). "
            "Default: standard output")
    group.add_argument("--json", metavar="FILE",
        help="Dump report in JSON format to FILE")

    parser.add_argument("seq1", metavar="SEQ1")
    parser.add_argument("seq2", metavar="SEQ2")
    return parser
# fmt: on


class SequencePair(NamedTuple):
    name1: str
    seq1: Sequence
    name2: str
    seq2: Sequence


def load_pairs(args) -> List[SequencePair]:
    if not args.fasta:
        return [
            SequencePair(
                "seq1", tokenize(args.seq1, args.unit), "seq2", tokenize(args.seq2, args.unit)
            )
        ]
    if args.unit != Unit.CHARS.value:
        raise CommandLineError("--unit cannot be used together with --fasta")
    records1 = read_sequences(args.seq1)
    records2 = read_sequences(args.seq2)
    if len(records1) != len(records2):
        raise CommandLineError(
            f"'{args.seq1}' contains {len(records1)} record(s), but "
            f"'{args.seq2}' contains {len(records2)}"
        )
    return [
        SequencePair(r1.name, r1.sequence, r2.name, r2.sequence)
        for r1, r2 in zip(records1, records2)
    ]


def make_similarity(match: Number, mismatch: Number) -> Callable[[Any, Any], Number]:
    def similarity(a, b):
        return match if a == b else mismatch

    return similarity


def check_arguments(args) -> None:
    if args.edit_distance:
        if (args.mode, args.match, args.mismatch, args.gap_penalty) != (
            Mode.GLOBAL.value, 1, -1, -1
        ):
            raise CommandLineError(
                "Alignment options (--mode, --match, --mismatch, --gap-penalty) "
                "cannot be used together with --edit-distance"
            )
    elif args.max_distance is not None or args.transpositions:
        raise CommandLineError(
            "Options --max-distance and --transpositions require --edit-distance"
        )
    if args.quiet and args.debug:
        raise CommandLineError("Options --quiet and --debug cannot be used at the same time")


class Comparer:
    """
    Runs the aligner or the edit distance computation selected on the
    command line on a pair of sequences and formats the result
    """

    def __init__(self, args):
        self.score_only: bool = args.score_only
        self.gap_char: str = args.gap_char
        self.is_edit_distance: bool = args.edit_distance
        self.engine: Union[Aligner, EditAligner]
        if args.edit_distance:
            self.engine = EditAligner(
                max_distance=args.max_distance, transpositions=args.transpositions
            )
        else:
            self.engine = Aligner(
                make_similarity(args.match, args.mismatch),
                gap_penalty=args.gap_penalty,
                mode=args.mode,
            )
        if args.debug > 1:
            self.engine.enable_debug()

    @property
    def score_name(self) -> str:
        return "distance" if self.is_edit_distance else "score"

    def describe(self) -> str:
        if self.is_edit_distance:
            assert isinstance(self.engine, EditAligner)
            bound = self.engine.max_distance
            return "edit distance{} (maximum distance: {})".format(
                " with transpositions" if self.engine.transpositions else "",
                "unbounded" if bound is None else bound,
            )
        assert isinstance(self.engine, Aligner)
        return (
            f"{self.engine.mode.value} alignment "
            f"(gap penalty: {self.engine.gap_penalty})"
        )

    def compare(self, pair: SequencePair) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name1": pair.name1, "name2": pair.name2}
        if self.score_only:
            value = (
                self.engine.distance(pair.seq1, pair.seq2)
                if isinstance(self.engine, EditAligner)
                else self.engine.score(pair.seq1, pair.seq2)
            )
            result[self.score_name] = value
            return result
        aligned = self.engine.align(pair.seq1, pair.seq2)
        if aligned is NOT_FOUND:
            result[self.score_name] = None
            return result
        value, alignment = aligned
        result[self.score_name] = value
        result["alignment"] = alignment
        result["statistics"] = AlignmentStatistics.from_alignment(alignment)
        return result

    def format(self, result: Dict[str, Any], with_names: bool) -> str:
        value = result[self.score_name]
        value_str = "not found" if value is None else str(value)
        if self.score_only:
            if with_names:
                return f"{result['name1']}\t{result['name2']}\t{value_str}\n"
            return value_str + "\n"
        lines = []
        if with_names:
            lines.append(f">{result['name1']} {result['name2']}")
        lines.append(f"{self.score_name}: {value_str}")
        if "alignment" in result:
            lines.append(format_alignment(result["alignment"], gap_char=self.gap_char))
        return "\n".join(lines) + "\n"


def result_as_json(result: Dict[str, Any], score_name: str) -> Dict[str, Any]:
    d = {
        "name1": result["name1"],
        "name2": result["name2"],
        score_name: result[score_name],
    }
    if "alignment" in result:
        d["alignment"] = [tuple(column) for column in result["alignment"]]
        d["statistics"] = OneLine(result["statistics"].as_json())
    return d


def total_statistics(results: List[Dict[str, Any]]) -> Optional[AlignmentStatistics]:
    """Sum of the statistics of all alignments, None if there are none"""
    total = None
    for result in results:
        if "statistics" not in result:
            continue
        if total is None:
            total = AlignmentStatistics()
        total += result["statistics"]
    return total


def log_header(cmdlineargs):
    """Print the "This is seqalign ..." header"""

    implementation = platform.python_implementation()
    opt = " (" + implementation + ")" if implementation != "CPython" else ""
    logger.info(
        "This is seqalign %s with Python %s%s",
        __version__,
        platform.python_version(),
        opt,
    )
    logger.info("Command line parameters: %s", " ".join(cmdlineargs))


def main_cli():  # pragma: no cover
    """Entry point for command-line script"""
    main(sys.argv[1:])
    return 0


def main(cmdlineargs) -> List[Dict[str, Any]]:
    """
    Compare the sequences given on the command line and return a list of
    result dicts, one per sequence pair
    """
    start_time = time.time()
    parser = get_argument_parser()
    args = parser.parse_args(args=cmdlineargs)
    # Setup logging only if there are not already any handlers (can happen when
    # this function is being called externally such as from unit tests)
    if not logging.root.handlers:
        setup_logging(logger, quiet=args.quiet, debug=args.debug)
    log_header(cmdlineargs)

    try:
        check_arguments(args)
        pairs = load_pairs(args)
        comparer = Comparer(args)
        logger.info("Computing %s for %d pair(s) ...", comparer.describe(), len(pairs))
        results = []
        with open_output(args.output) as outfile:
            for pair in pairs:
                result = comparer.compare(pair)
                outfile.write(comparer.format(result, with_names=args.fasta))
                results.append(result)
    except KeyboardInterrupt:
        if args.debug:
            raise
        else:
            print("Interrupted", file=sys.stderr)
            sys.exit(130)
    except BrokenPipeError:
        sys.exit(1)
    except (
        OSError,
        EOFError,
        dnaio.UnknownFileFormat,
        dnaio.FileFormatError,
        CommandLineError,
        TokenizeError,
    ) as e:
        logger.debug("Command line error. Traceback:", exc_info=True)
        logger.error("%s", e)
        exit_code = 2 if isinstance(e, (CommandLineError, TokenizeError)) else 1
        sys.exit(exit_code)

    elapsed = time.time() - start_time
    not_found = sum(1 for r in results if r[comparer.score_name] is None)
    logger.info(
        "Compared %d pair(s) in %.3f s%s",
        len(results),
        elapsed,
        f" ({not_found} above the maximum distance)" if not_found else "",
    )
    if args.json is not None:
        with open(args.json, "w") as f:
            json_dict = json_report(
                results=results,
                score_name=comparer.score_name,
                cmdlineargs=cmdlineargs,
                description=comparer.describe(),
            )
            f.write(json_dumps(json_dict))
            f.write("\n")
    return results


def json_report(
    results: List[Dict[str, Any]],
    score_name: str,
    cmdlineargs: List[str],
    description: str,
) -> Dict:
    total = total_statistics(results)
    return {
        "tag": "seqalign report",
        "schema_version": OneLine([0, 1]),
        "seqalign_version": __version__,
        "python_version": platform.python_version(),
        "command_line_arguments": cmdlineargs,
        "computation": description,
        "results": [result_as_json(r, score_name) for r in results],
        "total_statistics": None if total is None else OneLine(total.as_json()),
    }


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main_cli())

"""Size classification and canonical formatting."""

from specparams.sizing.classifier import SizeKind, classify_size
from specparams.sizing.formatter import format_pipe_dimension, format_size
from specparams.sizing.nominal import NOMINAL_INCH_SIZES, lookup_nominal
from specparams.sizing.numbers import parse_number

__all__ = [
    "NOMINAL_INCH_SIZES",
    "SizeKind",
    "classify_size",
    "format_pipe_dimension",
    "format_size",
    "lookup_nominal",
    "parse_number",
]

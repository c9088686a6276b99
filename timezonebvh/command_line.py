import argparse
from typing import List, Optional

from timezonebvh.configs import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_DIR,
    SIMPLIFICATION_TOLERANCE,
)
from timezonebvh.file_converter import parse_data


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="build the spatial index (BVH) of the timezone polygons"
    )
    parser.add_argument(
        "-inp",
        help="path to the input GeoJSON file (optionally zipped)",
        default=DEFAULT_INPUT_PATH,
    )
    parser.add_argument(
        "-out",
        help="path to the output folder for storing the polygon files and the BVH",
        default=DEFAULT_OUTPUT_DIR,
    )
    parser.add_argument(
        "-tol",
        type=float,
        help="simplification tolerance in degree",
        default=SIMPLIFICATION_TOLERANCE,
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # NOTE: I/O errors are not being caught. the process terminates with a non zero exit code
    parsed_args = get_parser().parse_args(argv)
    parse_data(
        input_path=parsed_args.inp,
        output_path=parsed_args.out,
        tolerance=parsed_args.tol,
    )
    return 0

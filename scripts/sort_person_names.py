"""
Validate and sort a list of person names, one "Family, Given [Middle...]" name per line.

Invalid lines are reported on stderr and skipped; valid names are printed in
family-then-given order, either verbatim or in "Given Family" display form.
"""

import sys
import logging
import argparse

from pname.person_names import PersonNameParser, InvalidFormat, sorted_names


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sort person names by family name, then given name.")
    parser.add_argument("--input_path", type=str, default=None, help="File with one name per line (default: stdin).")
    parser.add_argument("--display", action="store_true", help="Print 'Given Family' instead of the canonical text.")
    parser.add_argument("--reverse", action="store_true", help="Sort in descending order.")
    parser.add_argument("--strict", action="store_true", help="Exit with status 1 if any line is invalid.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if args.input_path:
        with open(args.input_path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    name_parser = PersonNameParser()
    names = []
    invalid = 0
    for line_number, line in enumerate(lines, start=1):
        if not line:
            continue
        try:
            names.append(name_parser.parse(line))
        except InvalidFormat as e:
            invalid += 1
            logging.warning(f"line {line_number}: {e}")

    for name in sorted_names(names, reverse=args.reverse):
        print(name.display() if args.display else name.original)

    logging.info(f"Sorted {len(names)} names, skipped {invalid} invalid lines")

    if args.strict and invalid:
        sys.exit(1)

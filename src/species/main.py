import argparse
import logging
import os
import sys
from species.parser.preprocessor import DEFAULT_MARKER, extract_math_blocks
from species.syntax import MathSyntaxError, parse_math_block


def main(argv=None):
    parser = argparse.ArgumentParser(description="species - grammar productions from LaTeX math blocks")
    parser.add_argument("file", help="The document (.rst) to scan")
    parser.add_argument(
        "--marker",
        default=os.environ.get("SPECIES_MARKER", DEFAULT_MARKER),
        help="Line that starts a math block (default: %(default)r)",
    )
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first block that fails to parse")
    parser.add_argument("--verbose", action="store_true", help="Log every parsed production")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.file, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        print(f"Error: File '{args.file}' not found.", file=sys.stderr)
        return 1

    blocks = extract_math_blocks(content, args.marker)
    print(f"Scanning {args.file}: {len(blocks)} math blocks")

    parsed = 0
    failures = 0
    for i, block in enumerate(blocks):
        try:
            math_block, rest = parse_math_block(block.content)
        except MathSyntaxError as e:
            failures += 1
            line, column = block.locate(e.pos_in_stream)
            print(f"\n[Error] Parsing failed in Block {i+1} (line {line+1}, column {column+1}):")
            print(e)
            print(e.get_context(block.content))
            if args.fail_fast:
                break
            continue

        if rest:
            failures += 1
            line, column = block.locate(len(block.content) - len(rest))
            print(f"\n[Error] Unparsed text after Block {i+1} (line {line+1}, column {column+1}): {rest!r}")
            if args.fail_fast:
                break
            continue

        print(f"\n# Block {i+1} (line {block.start_line+1})")
        print(math_block)
        parsed += 1

    print(f"\nDone. {parsed} parsed, {failures} failed.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

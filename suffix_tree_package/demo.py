'''Text-mode demo of the suffix tree package.

Builds a suffix tree for a text, prints it, and runs every query on it. The
text and patterns are upper-cased, and the sentinel '$' is appended to the
text if it is missing, before anything reaches the tree.

Usage:
    python -m suffix_tree_package.demo [text] [pattern ...]

With no arguments the text and one pattern are read interactively.

Example:
    python -m suffix_tree_package.demo banana ana nan
'''
import sys

from .errors import SuffixTreeError
from .python_backend.alphabet import SENTINEL
from .suffix_tree_wrapper import SuffixTreeWrapper


def normalize_text(raw: str) -> str:
    """Upper-cases `raw` and appends the sentinel unless it is already there."""
    text = raw.strip().upper()
    return text if text.endswith(SENTINEL) else text + SENTINEL


def describe_pattern(tree: SuffixTreeWrapper, pattern: str) -> list[str]:
    """Returns the report lines for one pattern."""
    lines = []
    if tree.search(pattern):
        lines.append(f"The string {pattern} is in the original text.")
    else:
        lines.append(f"The string {pattern} is not in the original text.")

    positions = tree.find_all_matches(pattern)
    if positions:
        lines.append(f"Pattern found at positions: {' '.join(map(str, positions))}")
    else:
        lines.append("Pattern not found in the text.")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    try:
        if args:
            raw_text, patterns = args[0], args[1:]
        else:
            raw_text = input("Enter the text ('$' will be appended): ")
            patterns = [input("Enter a pattern to search for: ")]
    except EOFError: # Input stream closed (e.g., piped empty stdin)
        print("No input received.", file=sys.stderr)
        return 1

    try:
        tree = SuffixTreeWrapper(normalize_text(raw_text))
    except SuffixTreeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print("Suffix tree built.")
    tree.display()

    for pattern in patterns:
        for line in describe_pattern(tree, pattern.strip().upper()):
            print(line)

    lrs = tree.longest_repeated_substring()
    print(f"The longest repeated substring is: {lrs}" if lrs else "There are no repeated substrings.")
    sus = tree.shortest_unique_substring()
    print(f"The shortest unique substring is: {sus}" if sus else "There are no unique substrings.")
    return 0


if __name__ == '__main__':
    sys.exit(main())

import sys

from ..config import get_settings
from ..fuzzy.core.types import FuzzyError
from ..fuzzy.io.fz_parser import FZParseError
from ..observability import configure_logging
from .commands.parser import build_parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    try:
        return args.func(args)
    except (FuzzyError, FZParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

# scripts/split_lines.py
"""
Demo runner:
- Early logging (respects LINEPARSE_LOGLEVEL)
- Config from YAML (--config) + LINEPARSE_* env overrides + CLI flags
- Reads stdin (or --text), prints one group per line, optionally converted
  with --as int|float|decimal|bool in --base
"""
from __future__ import annotations

import argparse
import io
import logging
import os
import sys

from lineparse.config import apply_env_overrides, load_config, validate_config
from lineparse.cursor import LineCursor
from lineparse.errors import NumericParseError

# ---------------- logging config ----------------
logging.basicConfig(
    level=os.environ.get("LINEPARSE_LOGLEVEL", "INFO"),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

_CONVERTERS = {
    "str": lambda cur, base: cur.next(),
    "int": lambda cur, base: cur.next_long(base),
    "float": lambda cur, base: cur.next_float(base),
    "decimal": lambda cur, base: cur.next_decimal(base),
    "bool": lambda cur, base: cur.next_bool(),
}


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Split lines into groups and print them.")
    ap.add_argument("--config", default="configs/default.yaml")
    ap.add_argument("--text", default=None, help="split this text instead of stdin")
    ap.add_argument("-d", "--delimiter", action="append", dest="delimiters", default=None,
                    help="delimiter pattern (repeatable); overrides config")
    ap.add_argument("-n", "--max-groups", type=int, default=None)
    ap.add_argument("--mode", choices=("blend", "complete"), default=None)
    ap.add_argument("--style", choices=("SI", "EU", "EN"), default=None)
    ap.add_argument("--as", dest="as_type", choices=sorted(_CONVERTERS), default="str")
    ap.add_argument("--base", type=int, default=None)
    return ap


def main(argv: list[str] | None = None, stdin=None, stdout=None) -> int:
    args = _build_parser().parse_args(argv)
    out = stdout or sys.stdout

    cfg = load_config(args.config)
    apply_env_overrides(cfg)
    if args.delimiters is not None:
        cfg.tokenizer.delimiters = args.delimiters
    if args.max_groups is not None:
        cfg.tokenizer.max_groups = args.max_groups
    if args.mode is not None:
        cfg.tokenizer.match_mode = args.mode
    if args.style is not None:
        cfg.numeric.format_style = args.style
    if args.base is not None:
        cfg.numeric.default_base = args.base
    validate_config(cfg)
    logging.info(
        "CONFIG delimiters=%r max_groups=%d mode=%s style=%s base=%d",
        cfg.tokenizer.delimiters, cfg.tokenizer.max_groups, cfg.tokenizer.match_mode,
        cfg.numeric.format_style, cfg.numeric.default_base,
    )

    reader = io.StringIO(args.text + "\n") if args.text is not None else (stdin or sys.stdin)
    cursor = LineCursor.from_config(cfg, reader)
    convert = _CONVERTERS[args.as_type]
    status = 0
    while True:
        try:
            value = convert(cursor, cfg.numeric.default_base)
        except EOFError:
            break
        except NumericParseError as e:
            print(f"error: {e}", file=out)
            status = 1
            continue
        print(value, file=out)
    return status


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations
import sys

from lineparse.split.tokenizer import Tokenizer, group_spans

DELIMS = (" ", "\t")


def show(line: str, tok: Tokenizer) -> None:
    res = tok.tokenize(line)
    print("indices:", res.indices.tolist(), " word_count:", res.word_count)
    for i, (a, b) in enumerate(group_spans(res.indices), start=1):
        print(f"{i:>3}  {line[a:b]!r:>20}  [{a},{b})")


def main() -> None:
    tok = Tokenizer(DELIMS)
    if len(sys.argv) == 2:
        show(sys.argv[1], tok)
    else:
        for ln in sys.stdin:
            s = ln.rstrip("\r\n")
            if s:
                print("L:", repr(s))
                show(s, tok)


if __name__ == "__main__":
    main()

import json
import logging
import os
import re
import sys

from .config import load_config
from .lookup import MethodLookup, adaptive_lookup
from .runtime import infer_runtime
from .stackparse import parse_stack


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    stack_file = None
    method = None
    offset = 0
    use_regex = False
    pinned_runtime = None
    for i, a in enumerate(argv):
        if a == "--stack-file" and i + 1 < len(argv):
            stack_file = argv[i + 1]
        elif a == "--method" and i + 1 < len(argv):
            method = argv[i + 1]
        elif a == "--offset" and i + 1 < len(argv):
            try:
                offset = int(argv[i + 1])
            except ValueError:
                print(f"[error] --offset expects an integer, got {argv[i + 1]!r}", file=sys.stderr)
                sys.exit(2)
        elif a == "--runtime" and i + 1 < len(argv):
            pinned_runtime = argv[i + 1]
        elif a == "--regex":
            use_regex = True

    config = load_config()
    logging.basicConfig(level=config.log_level)

    if stack_file:
        if not os.path.exists(stack_file):
            print(f"[error] stack file not found: {stack_file}", file=sys.stderr)
            sys.exit(1)
        with open(stack_file, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    frames = parse_stack(text)
    if not frames:
        print("[warn] no stack frames recognised in input", file=sys.stderr)

    if method is None:
        for frame in frames[: config.max_frames]:
            print(json.dumps(frame.to_dict(), ensure_ascii=False))
        return

    target = method
    if use_regex:
        try:
            target = re.compile(method)
        except re.error as e:
            print(f"[error] --method is not a valid regex: {e}", file=sys.stderr)
            sys.exit(2)

    # STACKSCAN_RUNTIME wins over what the frames suggest
    current = config.runtime or infer_runtime(frames)
    found = adaptive_lookup([MethodLookup(text, target, offset, runtime=pinned_runtime)], runtime=current)
    if found:
        index, frame = found
        print(f"INDEX={index}")
        print(f"FRAME={json.dumps(frame.to_dict(), ensure_ascii=False)}")
    else:
        print("No matching frame.")

if __name__ == "__main__":
    main()

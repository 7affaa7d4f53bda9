#!/usr/bin/env python3
import argparse, sys, yaml, pathlib

from manifest_check.errors import ConfigurationError
from manifest_check.utils import validate_config

def main(argv=None):
    ap = argparse.ArgumentParser(description="Check a manifest-check YAML config against the bundled schema")
    ap.add_argument("--config", required=True)
    args = ap.parse_args(argv)
    cfg_path = pathlib.Path(args.config)
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    try:
        validate_config(cfg)
        print("[OK] Config valid:", cfg_path)
    except ConfigurationError as e:
        print("[ERROR] Config invalid:", e)
        return 2
    return 0

if __name__ == "__main__":
    sys.exit(main())

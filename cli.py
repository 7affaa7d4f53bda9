#!/usr/bin/env python3
import argparse
import sys

from manifest_check.orchestrator import run_once


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate changed Kubernetes manifests and comment on the pull request")
    parser.add_argument("--config", help="Path to optional YAML config")
    parser.add_argument("--repo-root", dest="repo_root", help="Repository checkout to diff and validate (default: .)")
    parser.add_argument("--validator", dest="validator_command", help="Conformance tool executable (default: kubeconform)")
    args = parser.parse_args(argv)

    overrides = {
        "repo_root": args.repo_root,
        "validator_command": args.validator_command,
    }
    try:
        run_once(args.config, overrides=overrides)
    except Exception:
        # run_once has already logged the failure to stderr
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

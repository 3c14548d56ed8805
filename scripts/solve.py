#!/usr/bin/env python3
"""
Command-line front end for the solver API.

Sends a question paper (file or pasted text) to a running server, prints
the generated solutions, and optionally exports them as markdown.

Usage:
    python -m scripts.solve --file paper.pdf
    python -m scripts.solve --text "Q1. What is 2+2?" --out ./solutions
    python -m scripts.solve --health
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from client import (
    ClientInputError,
    ClientPhase,
    SolverAPIClient,
    SolverAPIError,
    SolverSession,
    export_markdown,
)


def _print_state(state) -> None:
    if state.phase is ClientPhase.IN_FLIGHT:
        print(f"… {state.label}", file=sys.stderr)


def main(argv: Optional[List[str]] = None, client: Optional[SolverAPIClient] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate step-by-step solutions for a question paper"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", type=Path, help="PDF, PNG, JPG or TXT file to upload")
    source.add_argument("--text", help="Question text to solve")
    source.add_argument("--health", action="store_true", help="Check API connectivity and exit")
    parser.add_argument(
        "--url",
        default="http://localhost:5000",
        help="Solver API base URL (default: http://localhost:5000)",
    )
    parser.add_argument("--out", type=Path, help="Directory to write the markdown export into")

    args = parser.parse_args(argv)

    client = client or SolverAPIClient(base_url=args.url)
    try:
        if args.health:
            try:
                health = client.health()
            except SolverAPIError as e:
                print(f"✗ Health check failed: {e.message}")
                return 1
            if health.get("serviceConnected"):
                print("✓ AI service connected")
                return 0
            print(f"✗ AI service unavailable: {health.get('apiError', 'unknown error')}")
            return 1

        session = SolverSession(client)
        session.machine.subscribe(_print_state)
        try:
            state = session.submit(text=args.text, file_path=args.file)
        except ClientInputError as e:
            print(f"✗ {e}")
            return 2

        if state.phase is ClientPhase.ERROR:
            print(f"✗ {state.error}")
            return 1

        print(state.result["solutions"])
        if args.out:
            args.out.mkdir(parents=True, exist_ok=True)
            path = export_markdown(state.result, args.out)
            print(f"\n✓ Saved to {path}", file=sys.stderr)
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())

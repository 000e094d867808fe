#!/usr/bin/env python3
"""Entry point for the wdp-client example."""

from __future__ import annotations

from wdpdbg.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

#!/usr/bin/env python3
"""Entry point for running the ECC console locally."""

from ecc_console.main import main

if __name__ == "__main__":
    main()

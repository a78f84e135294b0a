# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Allow ``python -m quipclient``."""

from .cli import main

if __name__ == "__main__":
    main()

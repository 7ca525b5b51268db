# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command line entrypoint."""

from .main import main

__all__ = ["main"]

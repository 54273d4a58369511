# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""Namecraft - native file operations backend for a batch renamer."""

from namecraft.__about__ import __version__

__all__ = ["__version__"]

# -*- coding: utf-8 -*-
# Gamut: Colour transforms for mixed-gamut surface compositing
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for opticsWolf Gamut.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Gamut"
__description__: Final[str] = (
    "Colour-space conversion, transfer-function and YCbCr matrix math "
    "for compositing surfaces of mixed gamut and dynamic range."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }

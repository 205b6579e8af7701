#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

Package initialization and version metadata.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

from .version import __version__

__all__ = ["__version__"]

# SeqFrag v0.1.0
# Any usage is subject to this software's license.

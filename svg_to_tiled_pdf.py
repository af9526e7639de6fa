#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Split an SVG pattern into printable, annotated PDF tiles at 1:1 scale.
"""

# local repo modules
import svg_pattern_tiler.cli


if __name__ == "__main__":
	svg_pattern_tiler.cli.main()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out chart labels from a JSON spec file and render them to PDF.
"""

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.cli


if __name__ == "__main__":
	clg.cli.main()

# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Command line interface for dcmcore"""

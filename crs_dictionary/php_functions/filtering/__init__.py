"""Filtering helpers for PHP function names."""

from .seeds import merge_seeds, read_seed_list

__all__ = ["merge_seeds", "read_seed_list"]

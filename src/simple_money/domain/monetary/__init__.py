"""Monetary domain package.

This package contains the Currency definitions and registry, the rounding
primitive with its overflow ledger, and the Money value type built on integer
minor units.
"""

"""Core logic for strategy signals and consensus.

This package contains pure business logic with no I/O dependencies
(no network, files or shared state). Indicators, the strategy catalog
and the consensus aggregator are all plain functions of a PriceSeries.
"""

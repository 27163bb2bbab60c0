"""Shift attendance engine.

This package is organized by feature modules (attendance, shifts, reports, ...)
with a thin Flask controller layer over service/repository layers. The clock
engine, the auto clock-out sweeper and the aggregator all read the shift
policy from one place.
"""

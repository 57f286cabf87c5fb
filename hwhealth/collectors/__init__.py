"""Metrics providers backed by psutil and sysfs."""

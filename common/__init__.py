"""Logging and console helpers shared by the vdisk tools."""

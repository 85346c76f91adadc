"""Kernel – errors and time primitives shared by every goforit layer."""

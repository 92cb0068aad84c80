# ABOUTME: readershelf syncs e-book folders onto a Sony Reader and shelves them.
# ABOUTME: Books are copied per source sub-directory and registered in the device catalog.

__version__ = "0.1.0"

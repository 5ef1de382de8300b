"""
BelterLink: config-driven rsync wrapper for one-way push/pull of folders over SSH.
"""

__version__ = "0.1.0"

"""
toli-formula — declarative installer for prebuilt toli release archives.
"""

__version__ = "0.1.0"

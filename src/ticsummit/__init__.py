"""Terminal browser and admin client for the TIC Summit website."""

__version__ = "0.1.0"

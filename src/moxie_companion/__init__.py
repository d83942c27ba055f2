"""moxie-companion -- desktop companion for the Moxie robot."""

__version__ = '0.1.0'

"""NordVPN config fetcher: one unique recommended hostname per node, config proxied back."""

__version__ = "0.0.1"

"""Send-screen core for a BitcoinZ wallet: address/amount validation and the
single-in-flight transaction submission workflow."""

__version__ = "0.1.0"

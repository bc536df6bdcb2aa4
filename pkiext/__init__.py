"""Parsing of X.509 certificate and CRL extensions and distribution point names from DER."""

__version__ = "0.1.0"
__all__ = ["x509"]
"""Network collaborators."""

from .ip_lookup import UNKNOWN_IP, IPLookup, NullIPLookup

__all__ = ["IPLookup", "NullIPLookup", "UNKNOWN_IP"]

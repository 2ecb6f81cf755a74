"""
IP address classification.
"""

from .private import IPInput, is_private, to_ip_address

__all__ = ["IPInput", "is_private", "to_ip_address"]

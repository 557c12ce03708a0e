"""
ElfScope Shared Module
======================

Common utilities, models, and configuration management shared across
the ElfScope decoder, renderer and command-line front end.
"""

from shared.config import ScopeConfig, get_config

__all__ = ["ScopeConfig", "get_config"]

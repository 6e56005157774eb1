"""
linkbot - an IRC bot that answers links and commands with details fetched from web services.
"""

__version__ = "0.3.0"
__logo__ = "🔗"

"""Utility functions for linkbot."""

from linkbot.utils.helpers import get_reply_target, is_channel, require_reply_target

__all__ = ["get_reply_target", "is_channel", "require_reply_target"]

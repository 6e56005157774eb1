"""Core dispatch: subscribers, the regex matcher registry and the bot loop."""

from linkbot.bot.loop import Bot
from linkbot.bot.regex_match import Matcher, RegexMatch
from linkbot.bot.result import Result, collate, collate_results
from linkbot.bot.subscriber import Subscriber

__all__ = ["Bot", "Matcher", "RegexMatch", "Result", "Subscriber", "collate", "collate_results"]

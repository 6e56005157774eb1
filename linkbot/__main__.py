"""
Entry point for running linkbot as a module: python -m linkbot
"""

from linkbot.cli.commands import app

if __name__ == "__main__":
    app()

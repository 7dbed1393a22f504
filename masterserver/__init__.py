"""masterserver - central directory for game server listings.

Game servers heartbeat their listings in over HTTP; clients fetch the live
listings and aggregate population stats.
"""

__version__ = "0.1.0"

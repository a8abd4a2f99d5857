"""Sports Scores Agent.

Live scoreboards for NFL, NBA, Premier League and more, normalized from
ESPN's public API and served as priced MCP tools and HTTP entrypoints.
"""

__version__ = "1.0.0"
